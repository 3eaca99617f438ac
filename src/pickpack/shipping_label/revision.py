"""Shipping label editing and deletion."""

import json

import structlog
from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from pickpack.domain import pickpack
from pickpack.shipping_label.shipping_label import ShippingLabel

logger = structlog.get_logger(__name__)


@pickpack.command(part_of="ShippingLabel")
class UpdateShippingLabel:
    """Edit a draft shipping label; fields left out stay as they are."""

    shipping_label_id = Identifier(required=True)
    carrier = String(max_length=10)
    service_type = String(max_length=100)
    tracking_number = String(max_length=255)
    from_address = Text()  # JSON object
    to_address = Text()  # JSON object
    weight = Float()
    dimensions = Text()  # JSON object {length, width, height}
    notes = Text()


@pickpack.command(part_of="ShippingLabel")
class DeleteShippingLabel:
    shipping_label_id = Identifier(required=True)


@pickpack.command_handler(part_of=ShippingLabel)
class ShippingLabelRevisionHandler:
    @handle(UpdateShippingLabel)
    def update_shipping_label(self, command):
        repo = current_domain.repository_for(ShippingLabel)
        label = repo.get(command.shipping_label_id)

        updates = {}
        for field in ("carrier", "service_type", "tracking_number", "weight", "notes"):
            value = getattr(command, field, None)
            if value is not None:
                updates[field] = value
        for field in ("from_address", "to_address", "dimensions"):
            value = getattr(command, field, None)
            if value is not None:
                updates[field] = json.loads(value) if isinstance(value, str) else value

        label.revise(**updates)
        repo.add(label)

    @handle(DeleteShippingLabel)
    def delete_shipping_label(self, command):
        repo = current_domain.repository_for(ShippingLabel)
        label = repo.get(command.shipping_label_id)
        label.assert_removable()
        repo._dao.delete(label)
        logger.info(
            "Shipping label deleted",
            shipping_label_id=str(label.id),
            label_number=label.label_number,
            status=label.status,
        )
