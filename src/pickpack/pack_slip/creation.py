"""Pack slip creation: command and handler.

Requested quantities are checked again before saving: against the pick
list when the pack slip is built from one, otherwise against the order's
remaining quantities. A pack slip can never box more than was picked or
is still owed.
"""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from pickpack.checks import check_against_order, check_against_pick_list
from pickpack.domain import pickpack
from pickpack.pack_slip.pack_slip import PackSlip


@pickpack.command(part_of="PackSlip")
class CreatePackSlip:
    """Draft a pack slip for an order, optionally from one of its pick lists."""

    order_id = Identifier(required=True)
    warehouse_id = Identifier(required=True)
    pick_list_id = Identifier()
    packed_by = String(max_length=100)
    package_count = Integer(default=1)
    weight = Float()
    dimensions = Text()  # JSON object {length, width, height}
    notes = Text()
    items = Text(required=True)  # JSON list of item dicts


@pickpack.command_handler(part_of=PackSlip)
class CreatePackSlipHandler:
    @handle(CreatePackSlip)
    def create_pack_slip(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        dimensions = json.loads(command.dimensions) if isinstance(command.dimensions, str) else command.dimensions

        if command.pick_list_id:
            check_against_pick_list(command.pick_list_id, command.order_id, items_data)
        else:
            check_against_order(command.order_id, items_data)

        pack_slip = PackSlip.create(
            order_id=command.order_id,
            warehouse_id=command.warehouse_id,
            items_data=items_data,
            pick_list_id=command.pick_list_id,
            packed_by=command.packed_by,
            package_count=command.package_count,
            weight=command.weight,
            dimensions=dimensions,
            notes=command.notes,
        )
        current_domain.repository_for(PackSlip).add(pack_slip)
        return str(pack_slip.id)
