"""FastAPI routes for the pickpack domain."""

import json

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from pickpack.api.mapping import (
    dimensions_or_none,
    pack_slip_to_response,
    parse_optional_float,
    parse_package_count,
    pick_list_to_response,
    shipping_label_to_response,
)
from pickpack.api.schemas import (
    CreatePackSlipRequest,
    CreatePickListRequest,
    CreateShippingLabelRequest,
    NextStatusesResponse,
    OrderFulfillmentResponse,
    PackSlipPage,
    PackSlipResponse,
    PackSlipStatusRequest,
    PickListPage,
    PickListResponse,
    PickListStatusRequest,
    RecordItemPackedRequest,
    RecordItemPickedRequest,
    ShippingLabelPage,
    ShippingLabelResponse,
    ShippingLabelStatusRequest,
    StatusResponse,
    UpdatePackSlipRequest,
    UpdatePickListRequest,
    UpdateShippingLabelRequest,
)
from pickpack.pack_slip.creation import CreatePackSlip
from pickpack.pack_slip.pack_slip import PACK_SLIP_LIFECYCLE, PackSlip
from pickpack.pack_slip.packing import ChangePackSlipStatus, RecordPackSlipItemPacked
from pickpack.pack_slip.revision import DeletePackSlip, UpdatePackSlip
from pickpack.pick_list.creation import CreatePickList
from pickpack.pick_list.pick_list import PICK_LIST_LIFECYCLE, PickList
from pickpack.pick_list.picking import ChangePickListStatus, RecordPickListItemPicked, SkipPickListItem
from pickpack.pick_list.revision import DeletePickList, UpdatePickList
from pickpack.registry.registry import FulfillmentRegistry
from pickpack.registry.summary import FulfillmentSummary
from pickpack.shipping_label.creation import CreateShippingLabel
from pickpack.shipping_label.labelling import ChangeShippingLabelStatus
from pickpack.shipping_label.revision import DeleteShippingLabel, UpdateShippingLabel
from pickpack.shipping_label.shipping_label import SHIPPING_LABEL_LIFECYCLE, ShippingLabel


def _dimensions_json(dimensions) -> str | None:
    if dimensions is None:
        return None
    sides = dimensions_or_none(dimensions.length, dimensions.width, dimensions.height)
    return json.dumps(sides) if sides else None


def _get_pick_list(pick_list_id: str) -> PickListResponse:
    return pick_list_to_response(current_domain.repository_for(PickList).get(pick_list_id))


def _get_pack_slip(pack_slip_id: str) -> PackSlipResponse:
    return pack_slip_to_response(current_domain.repository_for(PackSlip).get(pack_slip_id))


def _get_shipping_label(shipping_label_id: str) -> ShippingLabelResponse:
    return shipping_label_to_response(current_domain.repository_for(ShippingLabel).get(shipping_label_id))


# ---------------------------------------------------------------------------
# Pick List Router
# ---------------------------------------------------------------------------
pick_list_router = APIRouter(prefix="/pick-lists", tags=["pick-lists"])


@pick_list_router.post("", status_code=201, response_model=PickListResponse)
async def create_pick_list(body: CreatePickListRequest) -> PickListResponse:
    """Draft a pick list from an order's unfulfilled quantities."""
    command = CreatePickList(
        order_id=body.order_id,
        warehouse_id=body.warehouse_id,
        assigned_to=body.assigned_to,
        notes=body.notes,
        items=json.dumps([item.model_dump() for item in body.items]),
    )
    pick_list_id = current_domain.process(command, asynchronous=False)
    return _get_pick_list(pick_list_id)


@pick_list_router.get("", response_model=PickListPage)
async def list_pick_lists(
    skip: int = Query(default=0, ge=0),
    take: int = Query(default=100, ge=1, le=1000),
    status: str | None = None,
    warehouse_id: str | None = Query(default=None, alias="warehouseId"),
    order_id: str | None = Query(default=None, alias="orderId"),
) -> PickListPage:
    page = FulfillmentRegistry().pick_lists(
        order_id=order_id, warehouse_id=warehouse_id, status=status, skip=skip, take=take
    )
    return PickListPage(data=[pick_list_to_response(p) for p in page.items], total=page.total)


@pick_list_router.get("/{pick_list_id}", response_model=PickListResponse)
async def get_pick_list(pick_list_id: str) -> PickListResponse:
    return _get_pick_list(pick_list_id)


@pick_list_router.put("/{pick_list_id}", response_model=PickListResponse)
async def update_pick_list(pick_list_id: str, body: UpdatePickListRequest) -> PickListResponse:
    """Edit a draft pick list."""
    command = UpdatePickList(
        pick_list_id=pick_list_id,
        warehouse_id=body.warehouse_id,
        assigned_to=body.assigned_to,
        notes=body.notes,
        items=json.dumps([item.model_dump() for item in body.items]) if body.items is not None else None,
    )
    current_domain.process(command, asynchronous=False)
    return _get_pick_list(pick_list_id)


@pick_list_router.delete("/{pick_list_id}", response_model=StatusResponse)
async def delete_pick_list(pick_list_id: str) -> StatusResponse:
    """Delete a draft or cancelled pick list."""
    current_domain.process(DeletePickList(pick_list_id=pick_list_id), asynchronous=False)
    return StatusResponse()


@pick_list_router.get("/{pick_list_id}/next-statuses", response_model=NextStatusesResponse)
async def pick_list_next_statuses(pick_list_id: str) -> NextStatusesResponse:
    """Statuses the pick list may move to next."""
    pick_list = current_domain.repository_for(PickList).get(pick_list_id)
    return NextStatusesResponse(
        status=pick_list.status,
        next_statuses=[s.value for s in PICK_LIST_LIFECYCLE.next_statuses(pick_list.status)],
    )


@pick_list_router.patch("/{pick_list_id}", response_model=PickListResponse)
async def change_pick_list_status(pick_list_id: str, body: PickListStatusRequest) -> PickListResponse:
    command = ChangePickListStatus(
        pick_list_id=pick_list_id,
        status=body.status,
        assigned_to=body.assigned_to,
    )
    current_domain.process(command, asynchronous=False)
    return _get_pick_list(pick_list_id)


@pick_list_router.put("/{pick_list_id}/items/{item_id}/pick", response_model=PickListResponse)
async def record_pick_list_item_picked(
    pick_list_id: str, item_id: str, body: RecordItemPickedRequest
) -> PickListResponse:
    """Record the quantity actually retrieved for one line."""
    command = RecordPickListItemPicked(
        pick_list_id=pick_list_id,
        item_id=item_id,
        picked_quantity=body.picked_quantity,
        picked_by=body.picked_by,
    )
    current_domain.process(command, asynchronous=False)
    return _get_pick_list(pick_list_id)


@pick_list_router.put("/{pick_list_id}/items/{item_id}/skip", response_model=PickListResponse)
async def skip_pick_list_item(pick_list_id: str, item_id: str) -> PickListResponse:
    current_domain.process(SkipPickListItem(pick_list_id=pick_list_id, item_id=item_id), asynchronous=False)
    return _get_pick_list(pick_list_id)


# ---------------------------------------------------------------------------
# Pack Slip Router
# ---------------------------------------------------------------------------
pack_slip_router = APIRouter(prefix="/pack-slips", tags=["pack-slips"])


@pack_slip_router.post("", status_code=201, response_model=PackSlipResponse)
async def create_pack_slip(body: CreatePackSlipRequest) -> PackSlipResponse:
    """Draft a pack slip from a pick list or straight from the order."""
    command = CreatePackSlip(
        order_id=body.order_id,
        warehouse_id=body.warehouse_id,
        pick_list_id=body.pick_list_id or None,
        packed_by=body.packed_by,
        package_count=parse_package_count(body.package_count),
        weight=parse_optional_float(body.weight, "weight"),
        dimensions=_dimensions_json(body.dimensions),
        notes=body.notes,
        items=json.dumps([item.model_dump() for item in body.items]),
    )
    pack_slip_id = current_domain.process(command, asynchronous=False)
    return _get_pack_slip(pack_slip_id)


@pack_slip_router.get("", response_model=PackSlipPage)
async def list_pack_slips(
    skip: int = Query(default=0, ge=0),
    take: int = Query(default=100, ge=1, le=1000),
    status: str | None = None,
    warehouse_id: str | None = Query(default=None, alias="warehouseId"),
    order_id: str | None = Query(default=None, alias="orderId"),
) -> PackSlipPage:
    page = FulfillmentRegistry().pack_slips(
        order_id=order_id, warehouse_id=warehouse_id, status=status, skip=skip, take=take
    )
    return PackSlipPage(data=[pack_slip_to_response(p) for p in page.items], total=page.total)


@pack_slip_router.get("/{pack_slip_id}", response_model=PackSlipResponse)
async def get_pack_slip(pack_slip_id: str) -> PackSlipResponse:
    return _get_pack_slip(pack_slip_id)


@pack_slip_router.put("/{pack_slip_id}", response_model=PackSlipResponse)
async def update_pack_slip(pack_slip_id: str, body: UpdatePackSlipRequest) -> PackSlipResponse:
    """Edit a draft pack slip."""
    command = UpdatePackSlip(
        pack_slip_id=pack_slip_id,
        warehouse_id=body.warehouse_id,
        packed_by=body.packed_by,
        package_count=parse_package_count(body.package_count) if body.package_count is not None else None,
        weight=parse_optional_float(body.weight, "weight"),
        dimensions=_dimensions_json(body.dimensions),
        notes=body.notes,
        items=json.dumps([item.model_dump() for item in body.items]) if body.items is not None else None,
    )
    current_domain.process(command, asynchronous=False)
    return _get_pack_slip(pack_slip_id)


@pack_slip_router.delete("/{pack_slip_id}", response_model=StatusResponse)
async def delete_pack_slip(pack_slip_id: str) -> StatusResponse:
    """Delete a draft or cancelled pack slip."""
    current_domain.process(DeletePackSlip(pack_slip_id=pack_slip_id), asynchronous=False)
    return StatusResponse()


@pack_slip_router.get("/{pack_slip_id}/next-statuses", response_model=NextStatusesResponse)
async def pack_slip_next_statuses(pack_slip_id: str) -> NextStatusesResponse:
    pack_slip = current_domain.repository_for(PackSlip).get(pack_slip_id)
    return NextStatusesResponse(
        status=pack_slip.status,
        next_statuses=[s.value for s in PACK_SLIP_LIFECYCLE.next_statuses(pack_slip.status)],
    )


@pack_slip_router.patch("/{pack_slip_id}", response_model=PackSlipResponse)
async def change_pack_slip_status(pack_slip_id: str, body: PackSlipStatusRequest) -> PackSlipResponse:
    command = ChangePackSlipStatus(
        pack_slip_id=pack_slip_id,
        status=body.status,
        packed_by=body.packed_by,
    )
    current_domain.process(command, asynchronous=False)
    return _get_pack_slip(pack_slip_id)


@pack_slip_router.put("/{pack_slip_id}/items/{item_id}/pack", response_model=PackSlipResponse)
async def record_pack_slip_item_packed(
    pack_slip_id: str, item_id: str, body: RecordItemPackedRequest
) -> PackSlipResponse:
    command = RecordPackSlipItemPacked(
        pack_slip_id=pack_slip_id,
        item_id=item_id,
        packed_quantity=body.packed_quantity,
        package_number=body.package_number,
    )
    current_domain.process(command, asynchronous=False)
    return _get_pack_slip(pack_slip_id)


# ---------------------------------------------------------------------------
# Shipping Label Router
# ---------------------------------------------------------------------------
shipping_label_router = APIRouter(prefix="/shipping-labels", tags=["shipping-labels"])


@shipping_label_router.post("", status_code=201, response_model=ShippingLabelResponse)
async def create_shipping_label(body: CreateShippingLabelRequest) -> ShippingLabelResponse:
    """Draft a shipping label with both addresses."""
    command = CreateShippingLabel(
        order_id=body.order_id,
        pack_slip_id=body.pack_slip_id or None,
        carrier=body.carrier,
        service_type=body.service_type,
        tracking_number=body.tracking_number,
        from_address=json.dumps(body.from_address.model_dump() if body.from_address else {}),
        to_address=json.dumps(body.to_address.model_dump() if body.to_address else {}),
        weight=parse_optional_float(body.weight, "weight"),
        dimensions=_dimensions_json(body.dimensions),
        notes=body.notes,
    )
    shipping_label_id = current_domain.process(command, asynchronous=False)
    return _get_shipping_label(shipping_label_id)


@shipping_label_router.get("", response_model=ShippingLabelPage)
async def list_shipping_labels(
    skip: int = Query(default=0, ge=0),
    take: int = Query(default=100, ge=1, le=1000),
    status: str | None = None,
    order_id: str | None = Query(default=None, alias="orderId"),
) -> ShippingLabelPage:
    page = FulfillmentRegistry().shipping_labels(order_id=order_id, status=status, skip=skip, take=take)
    return ShippingLabelPage(data=[shipping_label_to_response(label) for label in page.items], total=page.total)


@shipping_label_router.get("/{shipping_label_id}", response_model=ShippingLabelResponse)
async def get_shipping_label(shipping_label_id: str) -> ShippingLabelResponse:
    return _get_shipping_label(shipping_label_id)


@shipping_label_router.put("/{shipping_label_id}", response_model=ShippingLabelResponse)
async def update_shipping_label(shipping_label_id: str, body: UpdateShippingLabelRequest) -> ShippingLabelResponse:
    """Edit a draft shipping label."""
    command = UpdateShippingLabel(
        shipping_label_id=shipping_label_id,
        carrier=body.carrier,
        service_type=body.service_type,
        tracking_number=body.tracking_number,
        from_address=json.dumps(body.from_address.model_dump()) if body.from_address else None,
        to_address=json.dumps(body.to_address.model_dump()) if body.to_address else None,
        weight=parse_optional_float(body.weight, "weight"),
        dimensions=_dimensions_json(body.dimensions),
        notes=body.notes,
    )
    current_domain.process(command, asynchronous=False)
    return _get_shipping_label(shipping_label_id)


@shipping_label_router.delete("/{shipping_label_id}", response_model=StatusResponse)
async def delete_shipping_label(shipping_label_id: str) -> StatusResponse:
    """Delete a draft or cancelled shipping label."""
    current_domain.process(DeleteShippingLabel(shipping_label_id=shipping_label_id), asynchronous=False)
    return StatusResponse()


@shipping_label_router.get("/{shipping_label_id}/next-statuses", response_model=NextStatusesResponse)
async def shipping_label_next_statuses(shipping_label_id: str) -> NextStatusesResponse:
    label = current_domain.repository_for(ShippingLabel).get(shipping_label_id)
    return NextStatusesResponse(
        status=label.status,
        next_statuses=[s.value for s in SHIPPING_LABEL_LIFECYCLE.next_statuses(label.status)],
    )


@shipping_label_router.patch("/{shipping_label_id}", response_model=ShippingLabelResponse)
async def change_shipping_label_status(
    shipping_label_id: str, body: ShippingLabelStatusRequest
) -> ShippingLabelResponse:
    command = ChangeShippingLabelStatus(
        shipping_label_id=shipping_label_id,
        status=body.status,
        tracking_number=body.tracking_number,
        label_url=body.label_url,
    )
    current_domain.process(command, asynchronous=False)
    return _get_shipping_label(shipping_label_id)


# ---------------------------------------------------------------------------
# Fulfillment Registry Router
# ---------------------------------------------------------------------------
fulfillment_router = APIRouter(tags=["fulfillment"])


@fulfillment_router.get("/fulfillment/summary", response_model=FulfillmentSummary)
async def fulfillment_summary(
    warehouse_id: str | None = Query(default=None, alias="warehouseId"),
    status: str | None = None,
) -> FulfillmentSummary:
    """Per-status counts for the dashboard."""
    return FulfillmentRegistry().summary(warehouse_id=warehouse_id, status=status)


@fulfillment_router.get("/orders/{order_id}/fulfillment", response_model=OrderFulfillmentResponse)
async def order_fulfillment(order_id: str) -> OrderFulfillmentResponse:
    """Every pick list, pack slip and shipping label of one order."""
    documents = FulfillmentRegistry().for_order(order_id)
    return OrderFulfillmentResponse(
        order_id=documents.order_id,
        pick_lists=[pick_list_to_response(p) for p in documents.pick_lists],
        pack_slips=[pack_slip_to_response(p) for p in documents.pack_slips],
        shipping_labels=[shipping_label_to_response(label) for label in documents.shipping_labels],
    )


routers = [pick_list_router, pack_slip_router, shipping_label_router, fulfillment_router]
