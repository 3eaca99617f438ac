"""Reconciliation port: what happens upstream once a document exists.

Candidates an adapter may implement: raising an order line's fulfilled
quantity after picking, lowering a pick list's packable quantity after a
pack slip, marking a pack slip shipped once its label ships.
"""

from abc import ABC, abstractmethod


class ReconciliationPort(ABC):
    """Abstract interface for reconciliation adapters."""

    @abstractmethod
    def pick_list_created(self, pick_list_id: str, order_id: str, items: list[dict]) -> None:
        """A pick list now claims ``items`` ({order_line_id, product_id, quantity}) of the order."""
        ...

    @abstractmethod
    def pack_slip_created(self, pack_slip_id: str, order_id: str, pick_list_id: str | None, items: list[dict]) -> None:
        """A pack slip now boxes ``items``, from ``pick_list_id`` when set."""
        ...

    @abstractmethod
    def shipping_label_created(self, shipping_label_id: str, order_id: str, pack_slip_id: str | None) -> None:
        """A shipping label now covers the order, or one pack slip of it."""
        ...
