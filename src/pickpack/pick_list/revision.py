"""Pick list editing and deletion.

Only a draft can be edited, and replacement items are checked against the
order again. Drafts and cancelled pick lists can be deleted unless a pack
slip was built from them.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from pickpack.checks import check_against_order
from pickpack.domain import pickpack
from pickpack.pack_slip.pack_slip import PackSlip
from pickpack.pick_list.pick_list import PickList, PickListItem

logger = structlog.get_logger(__name__)


@pickpack.command(part_of="PickList")
class UpdatePickList:
    """Edit a draft pick list; fields left out stay as they are."""

    pick_list_id = Identifier(required=True)
    warehouse_id = Identifier()
    assigned_to = String(max_length=100)
    notes = Text()
    items = Text()  # JSON list of item dicts, replaces every item


@pickpack.command(part_of="PickList")
class DeletePickList:
    pick_list_id = Identifier(required=True)


@pickpack.command_handler(part_of=PickList)
class PickListRevisionHandler:
    @handle(UpdatePickList)
    def update_pick_list(self, command):
        repo = current_domain.repository_for(PickList)
        pick_list = repo.get(command.pick_list_id)

        updates = {}
        for field in ("warehouse_id", "assigned_to", "notes"):
            value = getattr(command, field, None)
            if value is not None:
                updates[field] = value
        if command.items is not None:
            updates["items_data"] = json.loads(command.items) if isinstance(command.items, str) else command.items

        pick_list.revise(**updates)
        if "items_data" in updates:
            check_against_order(pick_list.order_id, updates["items_data"])
        repo.add(pick_list)

    @handle(DeletePickList)
    def delete_pick_list(self, command):
        repo = current_domain.repository_for(PickList)
        pick_list = repo.get(command.pick_list_id)
        pick_list.assert_removable()

        pack_slips = (
            current_domain.repository_for(PackSlip)._dao.query.filter(pick_list_id=str(pick_list.id)).all().items
        )
        if pack_slips:
            raise ValidationError(
                {"pick_list_id": [f"Pick list is used by pack slip {pack_slips[0].pack_slip_number}"]}
            )

        item_dao = current_domain.repository_for(PickListItem)._dao
        for item in list(pick_list.items):
            item_dao.delete(item)
        repo._dao.delete(pick_list)
        logger.info(
            "Pick list deleted",
            pick_list_id=str(pick_list.id),
            pick_list_number=pick_list.pick_list_number,
            status=pick_list.status,
        )
