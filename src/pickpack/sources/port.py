"""Master data port: read-only view of what the builders choose from.

Adapters return wire payload models and raise ``SourceUnavailable`` when
the collaborator cannot answer.
"""

from abc import ABC, abstractmethod

from pickpack.api.schemas import OrderPayload, PackSlipResponse, PickListResponse, WarehousePayload


class MasterDataPort(ABC):
    """Abstract interface for master data adapters."""

    @abstractmethod
    def list_orders(self) -> list[OrderPayload]: ...

    @abstractmethod
    def list_warehouses(self) -> list[WarehousePayload]: ...

    @abstractmethod
    def list_pick_lists(self, order_id: str | None = None) -> list[PickListResponse]: ...

    @abstractmethod
    def list_pack_slips(self, order_id: str | None = None) -> list[PackSlipResponse]: ...

    def default_warehouse(self) -> WarehousePayload | None:
        """The warehouse flagged as default, else the first one, else None."""
        warehouses = self.list_warehouses()
        return next((w for w in warehouses if w.is_default), warehouses[0] if warehouses else None)

    def get_order(self, order_id) -> OrderPayload | None:
        """The order with ``order_id``, or None when the source does not know it."""
        return next((o for o in self.list_orders() if o.id == str(order_id)), None)
