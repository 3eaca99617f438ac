"""Pack Slip aggregate (CQRS): how retrieved quantities are boxed for an order.

A pack slip either packs what a pick list actually retrieved or packs
straight from the order lines. Package metadata (count, weight, dimensions)
travels with it to the shipping label.

State Machine:
    DRAFT → PACKING → PACKED → SHIPPED
    {DRAFT, PACKING, PACKED} → CANCELLED
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from pickpack.domain import pickpack
from pickpack.numbering import PACK_SLIP_PREFIX, document_number
from pickpack.pack_slip.events import (
    PackingStarted,
    PackSlipCancelled,
    PackSlipCreated,
    PackSlipItemPacked,
    PackSlipPacked,
    PackSlipRevised,
    PackSlipShipped,
)
from pickpack.shared.lifecycle import Lifecycle
from pickpack.shared.value_objects import Dimensions


class PackSlipStatus(Enum):
    DRAFT = "DRAFT"
    PACKING = "PACKING"
    PACKED = "PACKED"
    SHIPPED = "SHIPPED"
    CANCELLED = "CANCELLED"


PACK_SLIP_LIFECYCLE = Lifecycle(
    PackSlipStatus,
    [
        PackSlipStatus.DRAFT,
        PackSlipStatus.PACKING,
        PackSlipStatus.PACKED,
        PackSlipStatus.SHIPPED,
    ],
    cancelled=PackSlipStatus.CANCELLED,
)

# Distinguishes "not provided" from None in partial updates
_UNSET = object()


@pickpack.entity(part_of="PackSlip")
class PackSlipItem:
    """One order line to box, with the requested and boxed quantities."""

    order_line_id = Identifier(required=True)
    product_id = Identifier(required=True)
    sku = String(max_length=100)
    product_name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    packed_quantity = Integer(default=0, min_value=0)
    package_number = Integer(min_value=1)
    notes = Text()


def _new_item(item_data: dict) -> PackSlipItem:
    return PackSlipItem(
        order_line_id=item_data["order_line_id"],
        product_id=item_data["product_id"],
        sku=item_data.get("sku"),
        product_name=item_data.get("product_name"),
        quantity=item_data["quantity"],
        packed_quantity=0,
        notes=item_data.get("notes"),
    )


def _items_json(items) -> str:
    return json.dumps(
        [
            {
                "order_line_id": str(item.order_line_id),
                "product_id": str(item.product_id),
                "quantity": item.quantity,
            }
            for item in items
        ]
    )


@pickpack.aggregate
class PackSlip:
    pack_slip_number = String(max_length=50)
    order_id = Identifier(required=True)
    pick_list_id = Identifier()
    warehouse_id = Identifier(required=True)
    status = String(
        max_length=20,
        choices=PackSlipStatus,
        default=PackSlipStatus.DRAFT.value,
    )
    packed_by = String(max_length=100)
    package_count = Integer(default=1, min_value=1)
    weight = Float(min_value=0.0)
    dimensions = ValueObject(Dimensions)
    notes = Text()
    items = HasMany(PackSlipItem)
    created_at = DateTime()
    packed_at = DateTime()
    shipped_at = DateTime()
    cancelled_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def packed_quantity_cannot_exceed_requested(self):
        for item in self.items or []:
            if (item.packed_quantity or 0) > item.quantity:
                raise ValidationError(
                    {"packed_quantity": [f"Packed quantity {item.packed_quantity} exceeds requested {item.quantity}"]}
                )

    @invariant.post
    def package_numbers_within_package_count(self):
        for item in self.items or []:
            if item.package_number and item.package_number > (self.package_count or 1):
                raise ValidationError(
                    {"package_number": [f"Package {item.package_number} exceeds package count {self.package_count}"]}
                )

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        order_id: str,
        warehouse_id: str,
        items_data: list[dict],
        pick_list_id: str | None = None,
        packed_by: str | None = None,
        package_count: int = 1,
        weight: float | None = None,
        dimensions: dict | None = None,
        notes: str | None = None,
    ):
        """Draft a pack slip. Every item starts with nothing packed."""
        if not items_data:
            raise ValidationError({"items": ["A pack slip needs at least one item"]})

        now = datetime.now(UTC)
        pack_slip = cls(
            pack_slip_number=document_number(PACK_SLIP_PREFIX, now),
            order_id=order_id,
            pick_list_id=pick_list_id or None,
            warehouse_id=warehouse_id,
            status=PackSlipStatus.DRAFT.value,
            packed_by=packed_by or None,
            package_count=package_count if package_count is not None else 1,
            weight=weight,
            dimensions=Dimensions(**dimensions) if dimensions else None,
            notes=notes or None,
            created_at=now,
            updated_at=now,
        )
        for item_data in items_data:
            pack_slip.add_items(_new_item(item_data))

        pack_slip.raise_(
            PackSlipCreated(
                pack_slip_id=str(pack_slip.id),
                pack_slip_number=pack_slip.pack_slip_number,
                order_id=order_id,
                pick_list_id=str(pick_list_id) if pick_list_id else "",
                warehouse_id=warehouse_id,
                items=_items_json(pack_slip.items),
                item_count=len(pack_slip.items),
                package_count=pack_slip.package_count,
                weight=weight,
                created_at=now,
            )
        )
        return pack_slip

    # -------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------
    def revise(
        self,
        warehouse_id=_UNSET,
        packed_by=_UNSET,
        package_count=_UNSET,
        weight=_UNSET,
        dimensions=_UNSET,
        notes=_UNSET,
        items_data=_UNSET,
    ) -> None:
        """Edit a draft. ``items_data``, when given, replaces every item."""
        if self.status != PackSlipStatus.DRAFT.value:
            raise ValidationError({"status": [f"A {self.status} pack slip cannot be edited"]})
        if items_data is not _UNSET and not items_data:
            raise ValidationError({"items": ["A pack slip needs at least one item"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            if warehouse_id is not _UNSET:
                self.warehouse_id = warehouse_id
            if packed_by is not _UNSET:
                self.packed_by = packed_by or None
            if package_count is not _UNSET:
                self.package_count = package_count if package_count is not None else 1
            if weight is not _UNSET:
                self.weight = weight
            if dimensions is not _UNSET:
                self.dimensions = Dimensions(**dimensions) if dimensions else None
            if notes is not _UNSET:
                self.notes = notes or None
            if items_data is not _UNSET:
                for item in list(self.items):
                    self.remove_items(item)
                for item_data in items_data:
                    self.add_items(_new_item(item_data))
            self.updated_at = now

        self.raise_(
            PackSlipRevised(
                pack_slip_id=str(self.id),
                order_id=str(self.order_id),
                items=_items_json(self.items),
                item_count=len(self.items),
                package_count=self.package_count,
                weight=self.weight,
                revised_at=now,
            )
        )

    def assert_removable(self) -> None:
        if not PACK_SLIP_LIFECYCLE.is_removable(self.status):
            raise ValidationError({"status": [f"A {self.status} pack slip cannot be deleted"]})

    # -------------------------------------------------------------------
    # State transition helpers
    # -------------------------------------------------------------------
    def _move_to(self, target: PackSlipStatus, now: datetime) -> PackSlipStatus:
        current = PackSlipStatus(self.status)
        PACK_SLIP_LIFECYCLE.assert_can_transition(current, target)
        self.status = target.value
        self.updated_at = now
        return current

    def change_status(self, status, packed_by: str | None = None) -> None:
        """Move to ``status`` through the matching lifecycle operation."""
        target = PACK_SLIP_LIFECYCLE.parse(status)
        if target == PackSlipStatus.PACKING:
            self.start_packing(packed_by)
        elif target == PackSlipStatus.PACKED:
            self.complete_packing(packed_by)
        elif target == PackSlipStatus.SHIPPED:
            self.mark_shipped()
        elif target == PackSlipStatus.CANCELLED:
            self.cancel()
        else:
            PACK_SLIP_LIFECYCLE.assert_can_transition(self.status, target)

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def start_packing(self, packed_by: str | None = None) -> None:
        now = datetime.now(UTC)
        self._move_to(PackSlipStatus.PACKING, now)
        if packed_by:
            self.packed_by = packed_by
        self.raise_(
            PackingStarted(
                pack_slip_id=str(self.id),
                packed_by=self.packed_by or "",
                started_at=now,
            )
        )

    def record_item_packed(self, item_id: str, packed_quantity: int, package_number: int | None = None) -> None:
        """Record how much of one line went into the boxes."""
        if PackSlipStatus(self.status) != PackSlipStatus.PACKING:
            raise ValidationError({"status": ["Items can only be packed during PACKING"]})

        item = next((i for i in (self.items or []) if str(i.id) == str(item_id)), None)
        if item is None:
            raise ValidationError({"item_id": ["Item not found in this pack slip"]})
        if packed_quantity is None or packed_quantity < 0:
            raise ValidationError({"packed_quantity": ["Packed quantity cannot be negative"]})
        if packed_quantity > item.quantity:
            raise ValidationError(
                {"packed_quantity": [f"Packed quantity {packed_quantity} exceeds requested {item.quantity}"]}
            )
        if package_number is not None and not 1 <= package_number <= (self.package_count or 1):
            raise ValidationError(
                {"package_number": [f"Package {package_number} exceeds package count {self.package_count}"]}
            )

        now = datetime.now(UTC)
        item.packed_quantity = packed_quantity
        if package_number is not None:
            item.package_number = package_number
        self.updated_at = now
        self.raise_(
            PackSlipItemPacked(
                pack_slip_id=str(self.id),
                item_id=str(item.id),
                order_line_id=str(item.order_line_id),
                packed_quantity=packed_quantity,
                package_number=item.package_number,
                packed_at=now,
            )
        )

    def complete_packing(self, packed_by: str | None = None) -> None:
        now = datetime.now(UTC)
        self._move_to(PackSlipStatus.PACKED, now)
        if packed_by:
            self.packed_by = packed_by
        self.packed_at = now
        self.raise_(
            PackSlipPacked(
                pack_slip_id=str(self.id),
                order_id=str(self.order_id),
                packed_by=self.packed_by or "",
                package_count=self.package_count,
                packed_at=now,
            )
        )

    def mark_shipped(self) -> None:
        now = datetime.now(UTC)
        self._move_to(PackSlipStatus.SHIPPED, now)
        self.shipped_at = now
        self.raise_(
            PackSlipShipped(
                pack_slip_id=str(self.id),
                order_id=str(self.order_id),
                shipped_at=now,
            )
        )

    def cancel(self) -> None:
        """Cancel the pack slip (only before it ships)."""
        now = datetime.now(UTC)
        previous = self._move_to(PackSlipStatus.CANCELLED, now)
        self.cancelled_at = now
        self.raise_(
            PackSlipCancelled(
                pack_slip_id=str(self.id),
                order_id=str(self.order_id),
                previous_status=previous.value,
                cancelled_at=now,
            )
        )
