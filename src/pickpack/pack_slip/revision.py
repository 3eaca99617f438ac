"""Pack slip editing and deletion.

Replacement items are held to the same ceilings as at creation: the pick
list the pack slip was built from, or else the order. A pack slip that a
shipping label covers cannot be deleted.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from pickpack.checks import check_against_order, check_against_pick_list
from pickpack.domain import pickpack
from pickpack.pack_slip.pack_slip import PackSlip, PackSlipItem
from pickpack.shipping_label.shipping_label import ShippingLabel

logger = structlog.get_logger(__name__)


def _load(value):
    return json.loads(value) if isinstance(value, str) else value


@pickpack.command(part_of="PackSlip")
class UpdatePackSlip:
    """Edit a draft pack slip; fields left out stay as they are."""

    pack_slip_id = Identifier(required=True)
    warehouse_id = Identifier()
    packed_by = String(max_length=100)
    package_count = Integer()
    weight = Float()
    dimensions = Text()  # JSON object {length, width, height}
    notes = Text()
    items = Text()  # JSON list of item dicts, replaces every item


@pickpack.command(part_of="PackSlip")
class DeletePackSlip:
    pack_slip_id = Identifier(required=True)


@pickpack.command_handler(part_of=PackSlip)
class PackSlipRevisionHandler:
    @handle(UpdatePackSlip)
    def update_pack_slip(self, command):
        repo = current_domain.repository_for(PackSlip)
        pack_slip = repo.get(command.pack_slip_id)

        updates = {}
        for field in ("warehouse_id", "packed_by", "package_count", "weight", "notes"):
            value = getattr(command, field, None)
            if value is not None:
                updates[field] = value
        if command.dimensions is not None:
            updates["dimensions"] = _load(command.dimensions)
        if command.items is not None:
            updates["items_data"] = _load(command.items)

        pack_slip.revise(**updates)
        if "items_data" in updates:
            if pack_slip.pick_list_id:
                check_against_pick_list(pack_slip.pick_list_id, pack_slip.order_id, updates["items_data"])
            else:
                check_against_order(pack_slip.order_id, updates["items_data"])
        repo.add(pack_slip)

    @handle(DeletePackSlip)
    def delete_pack_slip(self, command):
        repo = current_domain.repository_for(PackSlip)
        pack_slip = repo.get(command.pack_slip_id)
        pack_slip.assert_removable()

        labels = (
            current_domain.repository_for(ShippingLabel)._dao.query.filter(pack_slip_id=str(pack_slip.id)).all().items
        )
        if labels:
            raise ValidationError(
                {"pack_slip_id": [f"Pack slip is covered by shipping label {labels[0].label_number}"]}
            )

        item_dao = current_domain.repository_for(PackSlipItem)._dao
        for item in list(pack_slip.items):
            item_dao.delete(item)
        repo._dao.delete(pack_slip)
        logger.info(
            "Pack slip deleted",
            pack_slip_id=str(pack_slip.id),
            pack_slip_number=pack_slip.pack_slip_number,
            status=pack_slip.status,
        )
