"""Logging reconciler: records that no upstream write-back was performed."""

import structlog

from pickpack.reconciliation.port import ReconciliationPort

logger = structlog.get_logger(__name__)


class LoggingReconciler(ReconciliationPort):
    def pick_list_created(self, pick_list_id, order_id, items):
        logger.info(
            "Order quantities not reconciled",
            pick_list_id=pick_list_id,
            order_id=order_id,
            quantity=sum(item["quantity"] for item in items),
        )

    def pack_slip_created(self, pack_slip_id, order_id, pick_list_id, items):
        logger.info(
            "Pick list quantities not reconciled",
            pack_slip_id=pack_slip_id,
            order_id=order_id,
            pick_list_id=pick_list_id,
            quantity=sum(item["quantity"] for item in items),
        )

    def shipping_label_created(self, shipping_label_id, order_id, pack_slip_id):
        logger.info(
            "Pack slip shipment not reconciled",
            shipping_label_id=shipping_label_id,
            order_id=order_id,
            pack_slip_id=pack_slip_id,
        )
