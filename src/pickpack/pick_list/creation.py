"""Pick list creation: command and handler."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from pickpack.checks import check_against_order
from pickpack.domain import pickpack
from pickpack.pick_list.pick_list import PickList


@pickpack.command(part_of="PickList")
class CreatePickList:
    """Draft a pick list for an order in a warehouse."""

    order_id = Identifier(required=True)
    warehouse_id = Identifier(required=True)
    assigned_to = String(max_length=100)
    notes = Text()
    items = Text(required=True)  # JSON list of item dicts


@pickpack.command_handler(part_of=PickList)
class CreatePickListHandler:
    @handle(CreatePickList)
    def create_pick_list(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        check_against_order(command.order_id, items_data)

        pick_list = PickList.create(
            order_id=command.order_id,
            warehouse_id=command.warehouse_id,
            items_data=items_data,
            assigned_to=command.assigned_to,
            notes=command.notes,
        )
        current_domain.repository_for(PickList).add(pick_list)
        return str(pick_list.id)
