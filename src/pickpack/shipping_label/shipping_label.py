"""Shipping Label aggregate (CQRS): carrier-facing addresses and tracking for a shipment.

A label belongs to an order and optionally to the pack slip whose packages
it covers. Both addresses are complete value objects; ``state`` is the only
part of an address that may be left out.

State Machine:
    DRAFT → GENERATED → PRINTED → SHIPPED
    {DRAFT, GENERATED, PRINTED} → CANCELLED
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text, ValueObject

from pickpack.domain import pickpack
from pickpack.numbering import SHIPPING_LABEL_PREFIX, document_number
from pickpack.shared.lifecycle import Lifecycle, normalize_status
from pickpack.shared.value_objects import ADDRESS_REQUIRED_FIELDS, Address, Dimensions
from pickpack.shipping_label.events import (
    ShippingLabelCancelled,
    ShippingLabelCreated,
    ShippingLabelGenerated,
    ShippingLabelPrinted,
    ShippingLabelRevised,
    ShippingLabelShipped,
)


class Carrier(Enum):
    FEDEX = "FEDEX"
    UPS = "UPS"
    DHL = "DHL"
    USPS = "USPS"
    OTHER = "OTHER"


class ShippingLabelStatus(Enum):
    DRAFT = "DRAFT"
    GENERATED = "GENERATED"
    PRINTED = "PRINTED"
    SHIPPED = "SHIPPED"
    CANCELLED = "CANCELLED"


SHIPPING_LABEL_LIFECYCLE = Lifecycle(
    ShippingLabelStatus,
    [
        ShippingLabelStatus.DRAFT,
        ShippingLabelStatus.GENERATED,
        ShippingLabelStatus.PRINTED,
        ShippingLabelStatus.SHIPPED,
    ],
    cancelled=ShippingLabelStatus.CANCELLED,
)

# Distinguishes "not provided" from None in partial updates
_UNSET = object()


def parse_carrier(value) -> Carrier:
    normalized = normalize_status(value)
    try:
        return Carrier(normalized)
    except ValueError:
        raise ValidationError({"carrier": [f"Unknown carrier: {value}"]}) from None


def build_address(data: dict | None, field_name: str) -> Address:
    """Build an Address, naming every missing mandatory part at once."""
    data = data or {}
    missing = [part for part in ADDRESS_REQUIRED_FIELDS if not str(data.get(part) or "").strip()]
    if missing:
        raise ValidationError({field_name: [f"Address is incomplete, missing: {', '.join(missing)}"]})
    return Address(
        name=data["name"],
        address=data["address"],
        city=data["city"],
        state=data.get("state") or None,
        postal_code=data["postal_code"],
        country=data["country"],
    )


def build_addresses(**addresses) -> dict[str, Address]:
    """Build every given address, reporting the gaps of all of them together."""
    errors: dict[str, list[str]] = {}
    built = {}
    for field_name, data in addresses.items():
        try:
            built[field_name] = build_address(data, field_name)
        except ValidationError as exc:
            errors.update(exc.messages)
    if errors:
        raise ValidationError(errors)
    return built


@pickpack.aggregate
class ShippingLabel:
    label_number = String(max_length=50)
    order_id = Identifier(required=True)
    pack_slip_id = Identifier()
    carrier = String(max_length=10, choices=Carrier, default=Carrier.OTHER.value)
    service_type = String(max_length=100)
    tracking_number = String(max_length=255)
    status = String(
        max_length=20,
        choices=ShippingLabelStatus,
        default=ShippingLabelStatus.DRAFT.value,
    )
    from_address = ValueObject(Address, required=True)
    to_address = ValueObject(Address, required=True)
    weight = Float(min_value=0.0)
    dimensions = ValueObject(Dimensions)
    cost = Float(min_value=0.0)
    label_url = String(max_length=1000)
    notes = Text()
    created_at = DateTime()
    generated_at = DateTime()
    printed_at = DateTime()
    shipped_at = DateTime()
    cancelled_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        order_id: str,
        carrier,
        from_address: dict,
        to_address: dict,
        pack_slip_id: str | None = None,
        service_type: str | None = None,
        tracking_number: str | None = None,
        weight: float | None = None,
        dimensions: dict | None = None,
        notes: str | None = None,
    ):
        addresses = build_addresses(from_address=from_address, to_address=to_address)

        now = datetime.now(UTC)
        label = cls(
            label_number=document_number(SHIPPING_LABEL_PREFIX, now),
            order_id=order_id,
            pack_slip_id=pack_slip_id or None,
            carrier=parse_carrier(carrier).value,
            service_type=service_type or None,
            tracking_number=tracking_number or None,
            status=ShippingLabelStatus.DRAFT.value,
            from_address=addresses["from_address"],
            to_address=addresses["to_address"],
            weight=weight,
            dimensions=Dimensions(**dimensions) if dimensions else None,
            notes=notes or None,
            created_at=now,
            updated_at=now,
        )
        label.raise_(
            ShippingLabelCreated(
                shipping_label_id=str(label.id),
                label_number=label.label_number,
                order_id=order_id,
                pack_slip_id=str(pack_slip_id) if pack_slip_id else "",
                carrier=label.carrier,
                service_type=label.service_type or "",
                tracking_number=label.tracking_number or "",
                to_country=label.to_address.country,
                weight=weight,
                created_at=now,
            )
        )
        return label

    # -------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------
    def revise(
        self,
        carrier=_UNSET,
        service_type=_UNSET,
        tracking_number=_UNSET,
        from_address=_UNSET,
        to_address=_UNSET,
        weight=_UNSET,
        dimensions=_UNSET,
        notes=_UNSET,
    ) -> None:
        """Edit a draft. A given address replaces the stored one whole."""
        if self.status != ShippingLabelStatus.DRAFT.value:
            raise ValidationError({"status": [f"A {self.status} shipping label cannot be edited"]})

        given = {
            field_name: data
            for field_name, data in (("from_address", from_address), ("to_address", to_address))
            if data is not _UNSET
        }
        addresses = build_addresses(**given)
        new_carrier = parse_carrier(carrier).value if carrier is not _UNSET else self.carrier

        now = datetime.now(UTC)
        self.carrier = new_carrier
        if service_type is not _UNSET:
            self.service_type = service_type or None
        if tracking_number is not _UNSET:
            self.tracking_number = tracking_number or None
        for field_name, address in addresses.items():
            setattr(self, field_name, address)
        if weight is not _UNSET:
            self.weight = weight
        if dimensions is not _UNSET:
            self.dimensions = Dimensions(**dimensions) if dimensions else None
        if notes is not _UNSET:
            self.notes = notes or None
        self.updated_at = now

        self.raise_(
            ShippingLabelRevised(
                shipping_label_id=str(self.id),
                order_id=str(self.order_id),
                carrier=self.carrier,
                to_country=self.to_address.country,
                weight=self.weight,
                revised_at=now,
            )
        )

    def assert_removable(self) -> None:
        if not SHIPPING_LABEL_LIFECYCLE.is_removable(self.status):
            raise ValidationError({"status": [f"A {self.status} shipping label cannot be deleted"]})

    # -------------------------------------------------------------------
    # State transition helpers
    # -------------------------------------------------------------------
    def _move_to(self, target: ShippingLabelStatus, now: datetime) -> ShippingLabelStatus:
        current = ShippingLabelStatus(self.status)
        SHIPPING_LABEL_LIFECYCLE.assert_can_transition(current, target)
        self.status = target.value
        self.updated_at = now
        return current

    def change_status(self, status, tracking_number: str | None = None, label_url: str | None = None) -> None:
        """Move to ``status`` through the matching lifecycle operation."""
        target = SHIPPING_LABEL_LIFECYCLE.parse(status)
        if target == ShippingLabelStatus.GENERATED:
            self.generate(label_url)
        elif target == ShippingLabelStatus.PRINTED:
            self.print_label()
        elif target == ShippingLabelStatus.SHIPPED:
            self.mark_shipped(tracking_number)
        elif target == ShippingLabelStatus.CANCELLED:
            self.cancel()
        else:
            SHIPPING_LABEL_LIFECYCLE.assert_can_transition(self.status, target)

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def generate(self, label_url: str | None = None) -> None:
        now = datetime.now(UTC)
        self._move_to(ShippingLabelStatus.GENERATED, now)
        if label_url:
            self.label_url = label_url
        self.generated_at = now
        self.raise_(
            ShippingLabelGenerated(
                shipping_label_id=str(self.id),
                label_url=self.label_url or "",
                generated_at=now,
            )
        )

    def print_label(self) -> None:
        now = datetime.now(UTC)
        self._move_to(ShippingLabelStatus.PRINTED, now)
        self.printed_at = now
        self.raise_(ShippingLabelPrinted(shipping_label_id=str(self.id), printed_at=now))

    def mark_shipped(self, tracking_number: str | None = None) -> None:
        """Hand the package to the carrier, recording the tracking number if given."""
        now = datetime.now(UTC)
        self._move_to(ShippingLabelStatus.SHIPPED, now)
        if tracking_number:
            self.tracking_number = tracking_number
        self.shipped_at = now
        self.raise_(
            ShippingLabelShipped(
                shipping_label_id=str(self.id),
                order_id=str(self.order_id),
                carrier=self.carrier,
                tracking_number=self.tracking_number or "",
                shipped_at=now,
            )
        )

    def cancel(self) -> None:
        now = datetime.now(UTC)
        previous = self._move_to(ShippingLabelStatus.CANCELLED, now)
        self.cancelled_at = now
        self.raise_(
            ShippingLabelCancelled(
                shipping_label_id=str(self.id),
                order_id=str(self.order_id),
                previous_status=previous.value,
                cancelled_at=now,
            )
        )
