"""Pack slip progress: status changes and per-item packed quantities."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from pickpack.domain import pickpack
from pickpack.pack_slip.pack_slip import PackSlip


@pickpack.command(part_of="PackSlip")
class ChangePackSlipStatus:
    """Move a pack slip to its next status, or cancel it."""

    pack_slip_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    packed_by = String(max_length=100)


@pickpack.command(part_of="PackSlip")
class RecordPackSlipItemPacked:
    """Record how much of one pack slip line was boxed."""

    pack_slip_id = Identifier(required=True)
    item_id = Identifier(required=True)
    packed_quantity = Integer(required=True)
    package_number = Integer()


@pickpack.command_handler(part_of=PackSlip)
class PackingHandler:
    @handle(ChangePackSlipStatus)
    def change_status(self, command):
        repo = current_domain.repository_for(PackSlip)
        pack_slip = repo.get(command.pack_slip_id)
        pack_slip.change_status(command.status, packed_by=command.packed_by)
        repo.add(pack_slip)

    @handle(RecordPackSlipItemPacked)
    def record_item_packed(self, command):
        repo = current_domain.repository_for(PackSlip)
        pack_slip = repo.get(command.pack_slip_id)
        pack_slip.record_item_packed(command.item_id, command.packed_quantity, package_number=command.package_number)
        repo.add(pack_slip)
