"""Pick List aggregate (CQRS): which order-line quantities to pull from stock.

A pick list is drafted by the Pick List Builder from an order's unfulfilled
line quantities. Later transitions are driven by warehouse staff.

State Machine:
    DRAFT → ASSIGNED → IN_PROGRESS → COMPLETED
    {DRAFT, ASSIGNED, IN_PROGRESS} → CANCELLED
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from pickpack.domain import pickpack
from pickpack.numbering import PICK_LIST_PREFIX, document_number
from pickpack.pick_list.events import (
    PickListAssigned,
    PickListCancelled,
    PickListCompleted,
    PickListCreated,
    PickListItemPicked,
    PickListItemSkipped,
    PickListRevised,
    PickListStarted,
)
from pickpack.shared.lifecycle import Lifecycle


class PickListStatus(Enum):
    DRAFT = "DRAFT"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class PickListItemStatus(Enum):
    PENDING = "PENDING"
    PICKED = "PICKED"
    PARTIAL = "PARTIAL"
    SKIPPED = "SKIPPED"


PICK_LIST_LIFECYCLE = Lifecycle(
    PickListStatus,
    [
        PickListStatus.DRAFT,
        PickListStatus.ASSIGNED,
        PickListStatus.IN_PROGRESS,
        PickListStatus.COMPLETED,
    ],
    cancelled=PickListStatus.CANCELLED,
)

_PICKABLE_STATUSES = {PickListStatus.ASSIGNED, PickListStatus.IN_PROGRESS}

# Distinguishes "not provided" from None in partial updates
_UNSET = object()


@pickpack.entity(part_of="PickList")
class PickListItem:
    """One order line to retrieve, with the requested and actual quantities."""

    order_line_id = Identifier(required=True)
    product_id = Identifier(required=True)
    sku = String(max_length=100)
    product_name = String(max_length=255)
    bin_location = String(max_length=100)
    quantity = Integer(required=True, min_value=1)
    picked_quantity = Integer(default=0, min_value=0)
    status = String(
        max_length=20,
        choices=PickListItemStatus,
        default=PickListItemStatus.PENDING.value,
    )
    picked_by = String(max_length=100)
    picked_at = DateTime()
    notes = Text()


def _new_item(item_data: dict) -> PickListItem:
    return PickListItem(
        order_line_id=item_data["order_line_id"],
        product_id=item_data["product_id"],
        sku=item_data.get("sku"),
        product_name=item_data.get("product_name"),
        bin_location=item_data.get("bin_location"),
        quantity=item_data["quantity"],
        picked_quantity=0,
        status=PickListItemStatus.PENDING.value,
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
class PickList:
    pick_list_number = String(max_length=50)
    order_id = Identifier(required=True)
    warehouse_id = Identifier(required=True)
    status = String(
        max_length=20,
        choices=PickListStatus,
        default=PickListStatus.DRAFT.value,
    )
    assigned_to = String(max_length=100)
    notes = Text()
    items = HasMany(PickListItem)
    created_at = DateTime()
    started_at = DateTime()
    completed_at = DateTime()
    cancelled_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def picked_quantity_cannot_exceed_requested(self):
        for item in self.items or []:
            if (item.picked_quantity or 0) > item.quantity:
                raise ValidationError(
                    {"picked_quantity": [f"Picked quantity {item.picked_quantity} exceeds requested {item.quantity}"]}
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
        assigned_to: str | None = None,
        notes: str | None = None,
    ):
        """Draft a pick list. Every item starts PENDING with nothing picked."""
        if not items_data:
            raise ValidationError({"items": ["A pick list needs at least one item"]})

        now = datetime.now(UTC)
        pick_list = cls(
            pick_list_number=document_number(PICK_LIST_PREFIX, now),
            order_id=order_id,
            warehouse_id=warehouse_id,
            status=PickListStatus.DRAFT.value,
            assigned_to=assigned_to or None,
            notes=notes or None,
            created_at=now,
            updated_at=now,
        )
        for item_data in items_data:
            pick_list.add_items(_new_item(item_data))

        pick_list.raise_(
            PickListCreated(
                pick_list_id=str(pick_list.id),
                pick_list_number=pick_list.pick_list_number,
                order_id=order_id,
                warehouse_id=warehouse_id,
                assigned_to=pick_list.assigned_to or "",
                items=_items_json(pick_list.items),
                item_count=len(pick_list.items),
                created_at=now,
            )
        )
        return pick_list

    # -------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------
    def revise(self, warehouse_id=_UNSET, assigned_to=_UNSET, notes=_UNSET, items_data=_UNSET) -> None:
        """Edit a draft. ``items_data``, when given, replaces every item."""
        if self.status != PickListStatus.DRAFT.value:
            raise ValidationError({"status": [f"A {self.status} pick list cannot be edited"]})
        if items_data is not _UNSET and not items_data:
            raise ValidationError({"items": ["A pick list needs at least one item"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            if warehouse_id is not _UNSET:
                self.warehouse_id = warehouse_id
            if assigned_to is not _UNSET:
                self.assigned_to = assigned_to or None
            if notes is not _UNSET:
                self.notes = notes or None
            if items_data is not _UNSET:
                for item in list(self.items):
                    self.remove_items(item)
                for item_data in items_data:
                    self.add_items(_new_item(item_data))
            self.updated_at = now

        self.raise_(
            PickListRevised(
                pick_list_id=str(self.id),
                order_id=str(self.order_id),
                warehouse_id=str(self.warehouse_id),
                assigned_to=self.assigned_to or "",
                items=_items_json(self.items),
                item_count=len(self.items),
                revised_at=now,
            )
        )

    def assert_removable(self) -> None:
        if not PICK_LIST_LIFECYCLE.is_removable(self.status):
            raise ValidationError({"status": [f"A {self.status} pick list cannot be deleted"]})

    # -------------------------------------------------------------------
    # State transition helpers
    # -------------------------------------------------------------------
    def _move_to(self, target: PickListStatus, now: datetime) -> PickListStatus:
        current = PickListStatus(self.status)
        PICK_LIST_LIFECYCLE.assert_can_transition(current, target)
        self.status = target.value
        self.updated_at = now
        return current

    def _find_item(self, item_id: str) -> PickListItem:
        item = next((i for i in (self.items or []) if str(i.id) == str(item_id)), None)
        if item is None:
            raise ValidationError({"item_id": ["Item not found in this pick list"]})
        return item

    def change_status(self, status, assigned_to: str | None = None) -> None:
        """Move to ``status`` through the matching lifecycle operation."""
        target = PICK_LIST_LIFECYCLE.parse(status)
        if target == PickListStatus.ASSIGNED:
            self.assign(assigned_to)
        elif target == PickListStatus.IN_PROGRESS:
            self.start()
        elif target == PickListStatus.COMPLETED:
            self.complete()
        elif target == PickListStatus.CANCELLED:
            self.cancel()
        else:
            PICK_LIST_LIFECYCLE.assert_can_transition(self.status, target)

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def assign(self, assigned_to: str | None = None) -> None:
        """Hand the pick list to a picker."""
        assignee = assigned_to or self.assigned_to
        if not assignee:
            raise ValidationError({"assigned_to": ["A picker is required to assign the pick list"]})

        now = datetime.now(UTC)
        self._move_to(PickListStatus.ASSIGNED, now)
        self.assigned_to = assignee
        self.raise_(
            PickListAssigned(
                pick_list_id=str(self.id),
                assigned_to=assignee,
                assigned_at=now,
            )
        )

    def start(self) -> None:
        """Begin picking."""
        now = datetime.now(UTC)
        self._move_to(PickListStatus.IN_PROGRESS, now)
        self.started_at = now
        self.raise_(PickListStarted(pick_list_id=str(self.id), started_at=now))

    def record_item_picked(self, item_id: str, picked_quantity: int, picked_by: str | None = None) -> None:
        """Record the quantity actually retrieved for one line.

        Recording a pick on an ASSIGNED list starts it.
        """
        current = PickListStatus(self.status)
        if current not in _PICKABLE_STATUSES:
            raise ValidationError({"status": [f"Items cannot be picked while the pick list is {current.value}"]})

        item = self._find_item(item_id)
        if picked_quantity is None or picked_quantity < 1:
            raise ValidationError({"picked_quantity": ["Picked quantity must be at least 1; skip the item instead"]})
        if picked_quantity > item.quantity:
            raise ValidationError(
                {"picked_quantity": [f"Picked quantity {picked_quantity} exceeds requested {item.quantity}"]}
            )

        if current == PickListStatus.ASSIGNED:
            self.start()

        now = datetime.now(UTC)
        item.picked_quantity = picked_quantity
        item.status = (
            PickListItemStatus.PICKED.value if picked_quantity == item.quantity else PickListItemStatus.PARTIAL.value
        )
        item.picked_by = picked_by or self.assigned_to
        item.picked_at = now
        self.updated_at = now
        self.raise_(
            PickListItemPicked(
                pick_list_id=str(self.id),
                item_id=str(item.id),
                order_line_id=str(item.order_line_id),
                picked_quantity=picked_quantity,
                item_status=item.status,
                picked_at=now,
            )
        )

    def skip_item(self, item_id: str) -> None:
        """Mark a line as not picked."""
        current = PickListStatus(self.status)
        if current not in _PICKABLE_STATUSES:
            raise ValidationError({"status": [f"Items cannot be skipped while the pick list is {current.value}"]})

        item = self._find_item(item_id)
        now = datetime.now(UTC)
        item.picked_quantity = 0
        item.status = PickListItemStatus.SKIPPED.value
        self.updated_at = now
        self.raise_(
            PickListItemSkipped(
                pick_list_id=str(self.id),
                item_id=str(item.id),
                order_line_id=str(item.order_line_id),
                skipped_at=now,
            )
        )

    def complete(self) -> None:
        """Finish picking."""
        now = datetime.now(UTC)
        self._move_to(PickListStatus.COMPLETED, now)
        self.completed_at = now
        self.raise_(
            PickListCompleted(
                pick_list_id=str(self.id),
                order_id=str(self.order_id),
                completed_at=now,
            )
        )

    def cancel(self) -> None:
        """Cancel the pick list (only before it is completed)."""
        now = datetime.now(UTC)
        previous = self._move_to(PickListStatus.CANCELLED, now)
        self.cancelled_at = now
        self.raise_(
            PickListCancelled(
                pick_list_id=str(self.id),
                order_id=str(self.order_id),
                previous_status=previous.value,
                cancelled_at=now,
            )
        )
