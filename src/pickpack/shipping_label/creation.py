"""Shipping label creation: command and handler."""

import json

import structlog
from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from pickpack.checks import check_pack_slip
from pickpack.domain import pickpack
from pickpack.shipping_label.shipping_label import ShippingLabel

logger = structlog.get_logger(__name__)


def _load(value):
    return json.loads(value) if isinstance(value, str) else value


@pickpack.command(part_of="ShippingLabel")
class CreateShippingLabel:
    """Draft a shipping label for an order, optionally covering one pack slip."""

    order_id = Identifier(required=True)
    pack_slip_id = Identifier()
    carrier = String(required=True, max_length=10)
    service_type = String(max_length=100)
    tracking_number = String(max_length=255)
    from_address = Text(required=True)  # JSON object
    to_address = Text(required=True)  # JSON object
    weight = Float()
    dimensions = Text()  # JSON object {length, width, height}
    notes = Text()


@pickpack.command_handler(part_of=ShippingLabel)
class CreateShippingLabelHandler:
    @handle(CreateShippingLabel)
    def create_shipping_label(self, command):
        if command.pack_slip_id:
            check_pack_slip(command.pack_slip_id, command.order_id)

        label = ShippingLabel.create(
            order_id=command.order_id,
            carrier=command.carrier,
            from_address=_load(command.from_address),
            to_address=_load(command.to_address),
            pack_slip_id=command.pack_slip_id,
            service_type=command.service_type,
            tracking_number=command.tracking_number,
            weight=command.weight,
            dimensions=_load(command.dimensions),
            notes=command.notes,
        )
        current_domain.repository_for(ShippingLabel).add(label)
        logger.info(
            "Shipping label drafted",
            shipping_label_id=str(label.id),
            order_id=str(command.order_id),
            carrier=label.carrier,
        )
        return str(label.id)
