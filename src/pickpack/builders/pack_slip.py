"""Pack Slip Builder: box what a pick list retrieved, or pack straight from the order."""

from protean.exceptions import ValidationError

from pickpack.allocation import ItemSelection, check_allocation, pack_ceilings
from pickpack.api.mapping import dimensions_or_none, parse_optional_float, parse_package_count
from pickpack.api.schemas import CreatePackSlipRequest, DimensionsPayload, PackSlipItemRequest, PackSlipResponse
from pickpack.builders.base import DocumentBuilder


class PackSlipBuilder(DocumentBuilder):
    document_name = "pack slip"
    path = "/pack-slips"
    response_model = PackSlipResponse

    def _reset(self) -> None:
        super()._reset()
        self.warehouses: list = []
        self.pick_lists: list = []
        self.pick_list = None
        self.warehouse_id: str | None = None
        self.packed_by: str | None = None
        # Raw form values; parsed on submit.
        self.package_count: str | int = "1"
        self.weight: str | float | None = ""
        self.length: str | float | None = ""
        self.width: str | float | None = ""
        self.height: str | float | None = ""
        self.notes: str | None = None
        self.selection = ItemSelection()

    def open(self) -> None:
        super().open()
        self.warehouses = self._load(self.master_data.list_warehouses, "warehouses")

    def choose_order(self, order_id) -> None:
        """Pick the order; its pick lists become available and items come from its lines."""
        self.order = self._find_order(order_id)
        self.pick_lists = self._load(self.master_data.list_pick_lists, "pick lists", self.order.id)
        self.pick_list = None
        self._refresh_selection()

    def choose_pick_list(self, pick_list_id) -> None:
        """Pack from a pick list of the chosen order; ``None`` packs from the order lines."""
        if self.order is None:
            raise ValidationError({"order_id": ["Please select an order"]})
        if pick_list_id is None:
            self.pick_list = None
        else:
            pick_list = next((p for p in self.pick_lists if p.id == str(pick_list_id)), None)
            if pick_list is None or pick_list.order_id != self.order.id:
                raise ValidationError({"pick_list_id": ["Pick list is not available for this order"]})
            self.pick_list = pick_list
            if not self.warehouse_id:
                self.warehouse_id = pick_list.warehouse_id
        self._refresh_selection()

    def choose_warehouse(self, warehouse_id) -> None:
        if not any(w.id == str(warehouse_id) for w in self.warehouses):
            raise ValidationError({"warehouse_id": ["Warehouse is not available"]})
        self.warehouse_id = str(warehouse_id)

    def _refresh_selection(self) -> None:
        self.selection = ItemSelection(pack_ceilings(self.order, self.pick_list))
        self.error = None if self.selection.ceilings else "There are no items to pack"

    def toggle_item(self, order_line_id) -> None:
        self.selection.toggle(order_line_id)

    def set_quantity(self, order_line_id, quantity: int) -> int:
        return self.selection.set_quantity(order_line_id, quantity)

    def select_all(self) -> None:
        self.selection.select_all()

    def deselect_all(self) -> None:
        self.selection.deselect_all()

    def _source_lines(self) -> dict:
        """Product details per order line, from the pick list when one is chosen."""
        if self.pick_list is not None:
            return {item.order_line_id: item for item in self.pick_list.items}
        return {line.order_line_id: line for line in self.order.order_lines}

    def build_request(self) -> dict:
        if self.order is None or self.warehouse_id is None:
            raise ValidationError({"order_id": ["Please select an order and warehouse"]})

        allocations = check_allocation(
            self.selection.ceilings,
            self.selection.selected,
            empty_message="Please select at least one item to pack",
        )
        dimensions = dimensions_or_none(self.length, self.width, self.height)
        lines = self._source_lines()
        request = CreatePackSlipRequest(
            order_id=self.order.id,
            warehouse_id=self.warehouse_id,
            pick_list_id=self.pick_list.id if self.pick_list is not None else None,
            packed_by=self.packed_by or None,
            package_count=parse_package_count(self.package_count),
            weight=parse_optional_float(self.weight, "weight"),
            dimensions=DimensionsPayload(**dimensions) if dimensions else None,
            notes=self.notes or None,
            items=[
                PackSlipItemRequest(
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
