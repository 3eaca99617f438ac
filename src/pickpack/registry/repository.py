"""Document repositories the Fulfillment Registry reads from.

``DomainDocumentRepository`` reads the Protean repositories of the three
aggregates. ``InMemoryDocumentRepository`` holds plain objects (aggregates
or response models) and backs registry tests and offline tooling.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from protean.utils.globals import current_domain

from pickpack.pack_slip.pack_slip import PackSlip
from pickpack.pick_list.pick_list import PickList
from pickpack.shipping_label.shipping_label import ShippingLabel


@dataclass
class DocumentPage:
    """One page of documents plus the number of documents matching overall."""

    items: list = field(default_factory=list)
    total: int = 0


class DocumentRepository(ABC):
    """Read access to the documents of every order.

    Each method takes optional equality filters (``order_id``,
    ``warehouse_id``, ``status``) and returns documents newest first,
    skipping ``skip`` and keeping at most ``take`` (``None`` keeps all).
    """

    @abstractmethod
    def pick_lists(self, skip: int = 0, take: int | None = None, **filters) -> DocumentPage: ...

    @abstractmethod
    def pack_slips(self, skip: int = 0, take: int | None = None, **filters) -> DocumentPage: ...

    @abstractmethod
    def shipping_labels(self, skip: int = 0, take: int | None = None, **filters) -> DocumentPage: ...


def _criteria(filters: dict) -> dict:
    return {key: str(value) for key, value in filters.items() if value is not None}


class DomainDocumentRepository(DocumentRepository):
    def _query(self, aggregate_cls, filters: dict, skip: int, take: int | None) -> DocumentPage:
        query = current_domain.repository_for(aggregate_cls)._dao.query
        criteria = _criteria(filters)
        if criteria:
            query = query.filter(**criteria)
        query = query.order_by("-created_at")

        # limit() goes last: every other QuerySet call restores the default limit.
        if take is None:
            result = query.limit(None).all()
            return DocumentPage(items=result.items[skip:], total=result.total)
        result = query.offset(skip).limit(take).all()
        return DocumentPage(items=result.items, total=result.total)

    def pick_lists(self, skip=0, take=None, **filters):
        return self._query(PickList, filters, skip, take)

    def pack_slips(self, skip=0, take=None, **filters):
        return self._query(PackSlip, filters, skip, take)

    def shipping_labels(self, skip=0, take=None, **filters):
        return self._query(ShippingLabel, filters, skip, take)


class InMemoryDocumentRepository(DocumentRepository):
    def __init__(self, pick_lists=None, pack_slips=None, shipping_labels=None):
        self._pick_lists = list(pick_lists or [])
        self._pack_slips = list(pack_slips or [])
        self._shipping_labels = list(shipping_labels or [])

    @staticmethod
    def _select(documents: list, filters: dict, skip: int, take: int | None) -> DocumentPage:
        criteria = _criteria(filters)
        selected = [
            doc for doc in documents if all(str(getattr(doc, key, None)) == value for key, value in criteria.items())
        ]
        # Documents are kept in the order they were added.
        selected.reverse()
        end = None if take is None else skip + take
        return DocumentPage(items=selected[skip:end], total=len(selected))

    def pick_lists(self, skip=0, take=None, **filters):
        return self._select(self._pick_lists, filters, skip, take)

    def pack_slips(self, skip=0, take=None, **filters):
        return self._select(self._pack_slips, filters, skip, take)

    def shipping_labels(self, skip=0, take=None, **filters):
        return self._select(self._shipping_labels, filters, skip, take)
