"""Forward document creation events to the configured reconciler."""

import json

import structlog
from protean.utils.mixins import handle

from pickpack.domain import pickpack
from pickpack.pack_slip.events import PackSlipCreated
from pickpack.pack_slip.pack_slip import PackSlip
from pickpack.pick_list.events import PickListCreated
from pickpack.pick_list.pick_list import PickList
from pickpack.reconciliation import get_reconciler
from pickpack.shipping_label.events import ShippingLabelCreated
from pickpack.shipping_label.shipping_label import ShippingLabel

logger = structlog.get_logger(__name__)


@pickpack.event_handler(part_of=PickList)
class PickListReconciliationHandler:
    @handle(PickListCreated)
    def on_pick_list_created(self, event: PickListCreated) -> None:
        logger.debug("Forwarding pick list for reconciliation", pick_list_id=str(event.pick_list_id))
        get_reconciler().pick_list_created(
            pick_list_id=str(event.pick_list_id),
            order_id=str(event.order_id),
            items=json.loads(event.items),
        )


@pickpack.event_handler(part_of=PackSlip)
class PackSlipReconciliationHandler:
    @handle(PackSlipCreated)
    def on_pack_slip_created(self, event: PackSlipCreated) -> None:
        logger.debug("Forwarding pack slip for reconciliation", pack_slip_id=str(event.pack_slip_id))
        get_reconciler().pack_slip_created(
            pack_slip_id=str(event.pack_slip_id),
            order_id=str(event.order_id),
            pick_list_id=event.pick_list_id or None,
            items=json.loads(event.items),
        )


@pickpack.event_handler(part_of=ShippingLabel)
class ShippingLabelReconciliationHandler:
    @handle(ShippingLabelCreated)
    def on_shipping_label_created(self, event: ShippingLabelCreated) -> None:
        logger.debug("Forwarding shipping label for reconciliation", shipping_label_id=str(event.shipping_label_id))
        get_reconciler().shipping_label_created(
            shipping_label_id=str(event.shipping_label_id),
            order_id=str(event.order_id),
            pack_slip_id=event.pack_slip_id or None,
        )
