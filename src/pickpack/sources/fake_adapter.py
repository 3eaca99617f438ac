"""Fake master data: in-memory orders, warehouses and documents for tests and development.

Configurable failure makes every read raise ``SourceUnavailable``.
"""

from pickpack.api.schemas import OrderPayload, PackSlipResponse, PickListResponse, WarehousePayload
from pickpack.shared.errors import SourceUnavailable
from pickpack.sources.port import MasterDataPort


class FakeMasterData(MasterDataPort):
    def __init__(self):
        self.orders: list[OrderPayload] = []
        self.warehouses: list[WarehousePayload] = []
        self.pick_lists: list[PickListResponse] = []
        self.pack_slips: list[PackSlipResponse] = []
        self.should_succeed = True
        self.failure_reason = "Master data unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Master data unavailable"):
        """Configure the fake master data behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def add_order(self, payload: dict) -> OrderPayload:
        order = OrderPayload.model_validate(payload)
        self.orders.append(order)
        return order

    def add_warehouse(self, payload: dict) -> WarehousePayload:
        warehouse = WarehousePayload.model_validate(payload)
        self.warehouses.append(warehouse)
        return warehouse

    def add_pick_list(self, payload: dict) -> PickListResponse:
        pick_list = PickListResponse.model_validate(payload)
        self.pick_lists.append(pick_list)
        return pick_list

    def add_pack_slip(self, payload: dict) -> PackSlipResponse:
        pack_slip = PackSlipResponse.model_validate(payload)
        self.pack_slips.append(pack_slip)
        return pack_slip

    def _check(self):
        if not self.should_succeed:
            raise SourceUnavailable(self.failure_reason)

    def list_orders(self):
        self._check()
        return list(self.orders)

    def list_warehouses(self):
        self._check()
        return list(self.warehouses)

    def list_pick_lists(self, order_id=None):
        self._check()
        return [p for p in self.pick_lists if order_id is None or p.order_id == str(order_id)]

    def list_pack_slips(self, order_id=None):
        self._check()
        return [p for p in self.pack_slips if order_id is None or p.order_id == str(order_id)]
