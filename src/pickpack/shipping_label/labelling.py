"""Shipping label status changes."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from pickpack.domain import pickpack
from pickpack.shipping_label.shipping_label import ShippingLabel


@pickpack.command(part_of="ShippingLabel")
class ChangeShippingLabelStatus:
    shipping_label_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    tracking_number = String(max_length=255)
    label_url = String(max_length=1000)


@pickpack.command_handler(part_of=ShippingLabel)
class LabellingHandler:
    @handle(ChangeShippingLabelStatus)
    def change_status(self, command):
        repo = current_domain.repository_for(ShippingLabel)
        label = repo.get(command.shipping_label_id)
        label.change_status(
            command.status,
            tracking_number=command.tracking_number,
            label_url=command.label_url,
        )
        repo.add(label)
