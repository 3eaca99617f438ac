"""Pick List Builder: choose unfulfilled order quantities to pull from a warehouse."""

from protean.exceptions import ValidationError

from pickpack.allocation import ItemSelection, check_allocation, pick_ceilings
from pickpack.api.schemas import CreatePickListRequest, PickListItemRequest, PickListResponse
from pickpack.builders.base import DocumentBuilder

NOTHING_TO_PICK = "This order has no items left to pick"


class PickListBuilder(DocumentBuilder):
    document_name = "pick list"
    path = "/pick-lists"
    response_model = PickListResponse

    def _reset(self) -> None:
        super()._reset()
        self.warehouses: list = []
        self.warehouse_id: str | None = None
        self.assigned_to: str | None = None
        self.notes: str | None = None
        self.selection = ItemSelection()

    def open(self) -> None:
        super().open()
        self.warehouses = self._load(self.master_data.list_warehouses, "warehouses")

    def choose_order(self, order_id) -> None:
        """Pick the order and offer each line's remaining quantity."""
        self.order = self._find_order(order_id)
        self.selection = ItemSelection(pick_ceilings(self.order))
        self.error = NOTHING_TO_PICK if not self.selection.ceilings else None

    def choose_warehouse(self, warehouse_id) -> None:
        if not any(w.id == str(warehouse_id) for w in self.warehouses):
            raise ValidationError({"warehouse_id": ["Warehouse is not available"]})
        self.warehouse_id = str(warehouse_id)

    def toggle_item(self, order_line_id) -> None:
        self.selection.toggle(order_line_id)

    def set_quantity(self, order_line_id, quantity: int) -> int:
        return self.selection.set_quantity(order_line_id, quantity)

    def select_all(self) -> None:
        self.selection.select_all()

    def deselect_all(self) -> None:
        self.selection.deselect_all()

    def build_request(self) -> dict:
        if self.order is None or self.warehouse_id is None:
            raise ValidationError({"order_id": ["Please select an order and warehouse"]})
        if not self.selection.ceilings:
            raise ValidationError({"items": [NOTHING_TO_PICK]})

        allocations = check_allocation(
            self.selection.ceilings,
            self.selection.selected,
            empty_message="Please select at least one item to pick",
        )
        lines = {line.order_line_id: line for line in self.order.order_lines}
        request = CreatePickListRequest(
            order_id=self.order.id,
            warehouse_id=self.warehouse_id,
            assigned_to=self.assigned_to or None,
            notes=self.notes or None,
            items=[
                PickListItemRequest(
                    order_line_id=key,
                    product_id=lines[key].product_id,
                    sku=lines[key].sku,
                    product_name=lines[key].product_name,
                    quantity=quantity,
                )
                for key, quantity in allocations
            ],
        )
        return request.model_dump(by_alias=True, exclude_none=True)
