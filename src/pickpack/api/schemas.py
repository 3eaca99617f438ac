"""Pydantic API schemas for the pickpack domain.

These are the external wire contracts, camelCase on the wire and snake_case
in Python. Upstream payloads (orders, warehouses) accept the field spellings
the order service actually sends: an order line may carry ``id`` or
``orderLineId``, ``quantity`` or ``orderedQuantity``, ``fulfilledQty`` or
``fulfilledQuantity``.
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


# ---------------------------------------------------------------------------
# Upstream payloads
# ---------------------------------------------------------------------------
class ProductRef(CamelModel):
    id: str | None = None
    name: str | None = None
    sku: str | None = None


class CustomerRef(CamelModel):
    id: str | None = None
    name: str | None = None


class OrderLinePayload(CamelModel):
    order_line_id: str = Field(validation_alias=AliasChoices("orderLineId", "order_line_id", "id"))
    product_id: str
    sku: str | None = None
    product_name: str | None = None
    product: ProductRef | None = None
    ordered_quantity: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("orderedQuantity", "ordered_quantity", "quantity"),
    )
    fulfilled_quantity: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("fulfilledQuantity", "fulfilled_quantity", "fulfilledQty"),
    )

    @model_validator(mode="after")
    def flatten_product(self):
        if self.product is not None:
            self.sku = self.sku or self.product.sku
            self.product_name = self.product_name or self.product.name
        return self


class OrderPayload(CamelModel):
    id: str
    order_number: str | None = None
    status: str | None = None
    customer_id: str | None = None
    customer: CustomerRef | None = None
    order_lines: list[OrderLinePayload] = Field(
        default_factory=list,
        validation_alias=AliasChoices("orderLines", "order_lines", "lines"),
    )

    @property
    def customer_name(self) -> str | None:
        return self.customer.name if self.customer else None


class WarehousePayload(CamelModel):
    id: str
    name: str
    code: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    is_default: bool = False


# ---------------------------------------------------------------------------
# Shared parts
# ---------------------------------------------------------------------------
class DimensionsPayload(CamelModel):
    length: float | None = Field(default=None, ge=0)
    width: float | None = Field(default=None, ge=0)
    height: float | None = Field(default=None, ge=0)


class AddressPayload(CamelModel):
    # Completeness is checked by the domain so the caller gets one message per address.
    name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class PickListItemRequest(CamelModel):
    order_line_id: str
    product_id: str
    sku: str | None = None
    product_name: str | None = None
    bin_location: str | None = None
    quantity: int
    notes: str | None = None


class CreatePickListRequest(CamelModel):
    order_id: str
    warehouse_id: str
    assigned_to: str | None = None
    notes: str | None = None
    items: list[PickListItemRequest]


class PackSlipItemRequest(CamelModel):
    order_line_id: str
    product_id: str
    sku: str | None = None
    product_name: str | None = None
    quantity: int
    notes: str | None = None


class CreatePackSlipRequest(CamelModel):
    order_id: str
    warehouse_id: str
    pick_list_id: str | None = None
    packed_by: str | None = None
    package_count: int = 1
    weight: float | None = None
    dimensions: DimensionsPayload | None = None
    notes: str | None = None
    items: list[PackSlipItemRequest]


class CreateShippingLabelRequest(CamelModel):
    order_id: str
    pack_slip_id: str | None = None
    carrier: str
    service_type: str | None = None
    tracking_number: str | None = None
    from_address: AddressPayload | None = None
    to_address: AddressPayload | None = None
    weight: float | None = None
    dimensions: DimensionsPayload | None = None
    notes: str | None = None


# Fields left out (or null) keep their stored value; ``items`` replaces every item.
class UpdatePickListRequest(CamelModel):
    warehouse_id: str | None = None
    assigned_to: str | None = None
    notes: str | None = None
    items: list[PickListItemRequest] | None = None


class UpdatePackSlipRequest(CamelModel):
    warehouse_id: str | None = None
    packed_by: str | None = None
    package_count: int | None = None
    weight: float | None = None
    dimensions: DimensionsPayload | None = None
    notes: str | None = None
    items: list[PackSlipItemRequest] | None = None


class UpdateShippingLabelRequest(CamelModel):
    carrier: str | None = None
    service_type: str | None = None
    tracking_number: str | None = None
    from_address: AddressPayload | None = None
    to_address: AddressPayload | None = None
    weight: float | None = None
    dimensions: DimensionsPayload | None = None
    notes: str | None = None


class PickListStatusRequest(CamelModel):
    status: str
    assigned_to: str | None = None


class PackSlipStatusRequest(CamelModel):
    status: str
    packed_by: str | None = None


class ShippingLabelStatusRequest(CamelModel):
    status: str
    tracking_number: str | None = None
    label_url: str | None = None


class RecordItemPickedRequest(CamelModel):
    picked_quantity: int
    picked_by: str | None = None


class RecordItemPackedRequest(CamelModel):
    packed_quantity: int
    package_number: int | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------
class PickListItemResponse(CamelModel):
    id: str | None = None
    order_line_id: str
    product_id: str
    sku: str | None = None
    product_name: str | None = None
    bin_location: str | None = None
    quantity: int
    picked_quantity: int = 0
    status: str = "PENDING"
    picked_by: str | None = None
    picked_at: datetime | None = None
    notes: str | None = None


class PickListResponse(CamelModel):
    id: str
    pick_list_number: str | None = None
    order_id: str
    warehouse_id: str
    status: str
    assigned_to: str | None = None
    notes: str | None = None
    items: list[PickListItemResponse] = Field(default_factory=list)
    created_at: datetime | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None
    updated_at: datetime | None = None


class PackSlipItemResponse(CamelModel):
    id: str | None = None
    order_line_id: str
    product_id: str
    sku: str | None = None
    product_name: str | None = None
    quantity: int
    packed_quantity: int = 0
    package_number: int | None = None
    notes: str | None = None


class PackSlipResponse(CamelModel):
    id: str
    pack_slip_number: str | None = None
    order_id: str
    pick_list_id: str | None = None
    warehouse_id: str
    status: str
    packed_by: str | None = None
    package_count: int = 1
    weight: float | None = None
    dimensions: DimensionsPayload | None = None
    notes: str | None = None
    items: list[PackSlipItemResponse] = Field(default_factory=list)
    created_at: datetime | None = None
    packed_at: datetime | None = None
    shipped_at: datetime | None = None
    cancelled_at: datetime | None = None
    updated_at: datetime | None = None


class ShippingLabelResponse(CamelModel):
    id: str
    label_number: str | None = None
    order_id: str
    pack_slip_id: str | None = None
    carrier: str
    service_type: str | None = None
    tracking_number: str | None = None
    status: str
    from_address: AddressPayload | None = None
    to_address: AddressPayload | None = None
    weight: float | None = None
    dimensions: DimensionsPayload | None = None
    cost: float | None = None
    label_url: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    generated_at: datetime | None = None
    printed_at: datetime | None = None
    shipped_at: datetime | None = None
    cancelled_at: datetime | None = None
    updated_at: datetime | None = None


class PickListPage(CamelModel):
    data: list[PickListResponse]
    total: int


class PackSlipPage(CamelModel):
    data: list[PackSlipResponse]
    total: int


class ShippingLabelPage(CamelModel):
    data: list[ShippingLabelResponse]
    total: int


class OrderFulfillmentResponse(CamelModel):
    order_id: str
    pick_lists: list[PickListResponse]
    pack_slips: list[PackSlipResponse]
    shipping_labels: list[ShippingLabelResponse]


class NextStatusesResponse(CamelModel):
    status: str
    next_statuses: list[str]


class StatusResponse(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"
