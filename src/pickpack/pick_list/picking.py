"""Pick list progress: status changes and per-item pick results."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from pickpack.domain import pickpack
from pickpack.pick_list.pick_list import PickList


@pickpack.command(part_of="PickList")
class ChangePickListStatus:
    """Move a pick list to its next status, or cancel it."""

    pick_list_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    assigned_to = String(max_length=100)


@pickpack.command(part_of="PickList")
class RecordPickListItemPicked:
    """Record the quantity actually retrieved for one pick list line."""

    pick_list_id = Identifier(required=True)
    item_id = Identifier(required=True)
    picked_quantity = Integer(required=True)
    picked_by = String(max_length=100)


@pickpack.command(part_of="PickList")
class SkipPickListItem:
    """Skip one pick list line."""

    pick_list_id = Identifier(required=True)
    item_id = Identifier(required=True)


@pickpack.command_handler(part_of=PickList)
class PickingHandler:
    @handle(ChangePickListStatus)
    def change_status(self, command):
        repo = current_domain.repository_for(PickList)
        pick_list = repo.get(command.pick_list_id)
        pick_list.change_status(command.status, assigned_to=command.assigned_to)
        repo.add(pick_list)

    @handle(RecordPickListItemPicked)
    def record_item_picked(self, command):
        repo = current_domain.repository_for(PickList)
        pick_list = repo.get(command.pick_list_id)
        pick_list.record_item_picked(command.item_id, command.picked_quantity, picked_by=command.picked_by)
        repo.add(pick_list)

    @handle(SkipPickListItem)
    def skip_item(self, command):
        repo = current_domain.repository_for(PickList)
        pick_list = repo.get(command.pick_list_id)
        pick_list.skip_item(command.item_id)
        repo.add(pick_list)
