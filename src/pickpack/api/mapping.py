"""Boundary functions between wire payloads and the domain.

All parsing and defaulting of loosely typed input happens here: blank form
values, numeric strings, list envelopes. Aggregates are converted to
response schemas here too, so the routes stay thin.
"""

from protean.exceptions import ValidationError

from pickpack.api.schemas import (
    AddressPayload,
    DimensionsPayload,
    PackSlipItemResponse,
    PackSlipResponse,
    PickListItemResponse,
    PickListResponse,
    ShippingLabelResponse,
)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_optional_float(value, field: str = "value") -> float | None:
    """Blank means absent; anything else must be a non-negative number."""
    if _is_blank(value):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError({field: [f"{value!r} is not a number"]}) from None
    if number != number or number < 0:
        raise ValidationError({field: ["Must be a non-negative number"]})
    return number


def parse_package_count(value) -> int:
    """Blank defaults to one package; otherwise a positive whole number."""
    if _is_blank(value):
        return 1
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError({"package_count": [f"{value!r} is not a number"]}) from None
    if number != int(number) or number < 1:
        raise ValidationError({"package_count": ["Package count must be a positive whole number"]})
    return int(number)


def dimensions_or_none(length=None, width=None, height=None) -> dict | None:
    """A dimensions dict when at least one side is given, otherwise None."""
    sides = {
        "length": parse_optional_float(length, "length"),
        "width": parse_optional_float(width, "width"),
        "height": parse_optional_float(height, "height"),
    }
    if all(value is None for value in sides.values()):
        return None
    return sides


def unwrap_collection(payload) -> list:
    """Accept a bare list or a ``{"data": [...], "total": n}`` envelope."""
    if payload is None:
        return []
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    raise ValueError("Expected a list or a {data: [...]} envelope")


# ---------------------------------------------------------------------------
# Domain → wire
# ---------------------------------------------------------------------------
def _dimensions(value) -> DimensionsPayload | None:
    if value is None:
        return None
    return DimensionsPayload(length=value.length, width=value.width, height=value.height)


def _address(value) -> AddressPayload | None:
    if value is None:
        return None
    return AddressPayload(
        name=value.name,
        address=value.address,
        city=value.city,
        state=value.state,
        postal_code=value.postal_code,
        country=value.country,
    )


def _str_or_none(value) -> str | None:
    return str(value) if value else None


def pick_list_to_response(pick_list) -> PickListResponse:
    return PickListResponse(
        id=str(pick_list.id),
        pick_list_number=pick_list.pick_list_number,
        order_id=str(pick_list.order_id),
        warehouse_id=str(pick_list.warehouse_id),
        status=pick_list.status,
        assigned_to=pick_list.assigned_to,
        notes=pick_list.notes,
        items=[
            PickListItemResponse(
                id=str(item.id),
                order_line_id=str(item.order_line_id),
                product_id=str(item.product_id),
                sku=item.sku,
                product_name=item.product_name,
                bin_location=item.bin_location,
                quantity=item.quantity,
                picked_quantity=item.picked_quantity or 0,
                status=item.status,
                picked_by=item.picked_by,
                picked_at=item.picked_at,
                notes=item.notes,
            )
            for item in pick_list.items or []
        ],
        created_at=pick_list.created_at,
        started_at=pick_list.started_at,
        completed_at=pick_list.completed_at,
        cancelled_at=pick_list.cancelled_at,
        updated_at=pick_list.updated_at,
    )


def pack_slip_to_response(pack_slip) -> PackSlipResponse:
    return PackSlipResponse(
        id=str(pack_slip.id),
        pack_slip_number=pack_slip.pack_slip_number,
        order_id=str(pack_slip.order_id),
        pick_list_id=_str_or_none(pack_slip.pick_list_id),
        warehouse_id=str(pack_slip.warehouse_id),
        status=pack_slip.status,
        packed_by=pack_slip.packed_by,
        package_count=pack_slip.package_count or 1,
        weight=pack_slip.weight,
        dimensions=_dimensions(pack_slip.dimensions),
        notes=pack_slip.notes,
        items=[
            PackSlipItemResponse(
                id=str(item.id),
                order_line_id=str(item.order_line_id),
                product_id=str(item.product_id),
                sku=item.sku,
                product_name=item.product_name,
                quantity=item.quantity,
                packed_quantity=item.packed_quantity or 0,
                package_number=item.package_number,
                notes=item.notes,
            )
            for item in pack_slip.items or []
        ],
        created_at=pack_slip.created_at,
        packed_at=pack_slip.packed_at,
        shipped_at=pack_slip.shipped_at,
        cancelled_at=pack_slip.cancelled_at,
        updated_at=pack_slip.updated_at,
    )


def shipping_label_to_response(label) -> ShippingLabelResponse:
    return ShippingLabelResponse(
        id=str(label.id),
        label_number=label.label_number,
        order_id=str(label.order_id),
        pack_slip_id=_str_or_none(label.pack_slip_id),
        carrier=label.carrier,
        service_type=label.service_type,
        tracking_number=label.tracking_number,
        status=label.status,
        from_address=_address(label.from_address),
        to_address=_address(label.to_address),
        weight=label.weight,
        dimensions=_dimensions(label.dimensions),
        cost=label.cost,
        label_url=label.label_url,
        notes=label.notes,
        created_at=label.created_at,
        generated_at=label.generated_at,
        printed_at=label.printed_at,
        shipped_at=label.shipped_at,
        cancelled_at=label.cancelled_at,
        updated_at=label.updated_at,
    )
