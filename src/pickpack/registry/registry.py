"""Fulfillment Registry: every pick list, pack slip and shipping label of an order.

Read-only. Documents come from an injected ``DocumentRepository`` so the
registry can run against the Protean repositories or a plain in-memory set.
"""

from dataclasses import dataclass, field

import structlog

from pickpack.pack_slip.pack_slip import PACK_SLIP_LIFECYCLE
from pickpack.pick_list.pick_list import PICK_LIST_LIFECYCLE
from pickpack.registry.repository import DocumentPage, DocumentRepository, DomainDocumentRepository
from pickpack.registry.summary import FulfillmentSummary, summarize
from pickpack.shipping_label.shipping_label import SHIPPING_LABEL_LIFECYCLE

logger = structlog.get_logger(__name__)


@dataclass
class OrderDocuments:
    order_id: str
    pick_lists: list = field(default_factory=list)
    pack_slips: list = field(default_factory=list)
    shipping_labels: list = field(default_factory=list)


def _status_filter(lifecycle, status) -> str | None:
    """The status as stored, or None when it is not a status of this lifecycle."""
    if status is None or not lifecycle.is_legal(status):
        return None
    return lifecycle.parse(status).value


class FulfillmentRegistry:
    def __init__(self, repository: DocumentRepository | None = None):
        self.repository = repository or DomainDocumentRepository()

    def for_order(self, order_id: str) -> OrderDocuments:
        order_id = str(order_id)
        return OrderDocuments(
            order_id=order_id,
            pick_lists=self.repository.pick_lists(order_id=order_id).items,
            pack_slips=self.repository.pack_slips(order_id=order_id).items,
            shipping_labels=self.repository.shipping_labels(order_id=order_id).items,
        )

    def pick_lists(self, order_id=None, warehouse_id=None, status=None, skip=0, take=None) -> DocumentPage:
        if status is not None:
            status = PICK_LIST_LIFECYCLE.parse(status).value
        return self.repository.pick_lists(
            skip=skip, take=take, order_id=order_id, warehouse_id=warehouse_id, status=status
        )

    def pack_slips(self, order_id=None, warehouse_id=None, status=None, skip=0, take=None) -> DocumentPage:
        if status is not None:
            status = PACK_SLIP_LIFECYCLE.parse(status).value
        return self.repository.pack_slips(
            skip=skip, take=take, order_id=order_id, warehouse_id=warehouse_id, status=status
        )

    def shipping_labels(self, order_id=None, status=None, skip=0, take=None) -> DocumentPage:
        if status is not None:
            status = SHIPPING_LABEL_LIFECYCLE.parse(status).value
        return self.repository.shipping_labels(skip=skip, take=take, order_id=order_id, status=status)

    def summary(self, warehouse_id=None, status=None) -> FulfillmentSummary:
        """Counts for the dashboard.

        ``warehouse_id`` narrows pick lists and pack slips; labels carry no
        warehouse. ``status`` narrows each collection for which it is a
        legal status and leaves the others whole.
        """
        result = summarize(
            pick_lists=self.repository.pick_lists(
                warehouse_id=warehouse_id, status=_status_filter(PICK_LIST_LIFECYCLE, status)
            ).items,
            pack_slips=self.repository.pack_slips(
                warehouse_id=warehouse_id, status=_status_filter(PACK_SLIP_LIFECYCLE, status)
            ).items,
            shipping_labels=self.repository.shipping_labels(
                status=_status_filter(SHIPPING_LABEL_LIFECYCLE, status)
            ).items,
        )
        logger.debug(
            "Fulfillment summary computed",
            warehouse_id=warehouse_id,
            status=status,
            pick_lists=result.pick_lists.total,
            pack_slips=result.pack_slips.total,
            shipping_labels=result.shipping_labels.total,
        )
        return result
