"""Tests for the PickList aggregate: creation, picking and lifecycle operations."""

import pytest
from pickpack.pick_list.events import (
    PickListAssigned,
    PickListCancelled,
    PickListCreated,
    PickListItemPicked,
    PickListItemSkipped,
    PickListRevised,
    PickListStarted,
)
from pickpack.pick_list.pick_list import PickList, PickListItemStatus, PickListStatus
from protean.exceptions import ValidationError


def _items(*quantities):
    return [
        {
            "order_line_id": f"ol-{i}",
            "product_id": f"prod-{i}",
            "sku": f"SKU-{i:03d}",
            "product_name": f"Product {i}",
            "quantity": quantity,
        }
        for i, quantity in enumerate(quantities, start=1)
    ]


def _make_pick_list(*quantities, **kwargs):
    return PickList.create(
        order_id="ord-001",
        warehouse_id="wh-001",
        items_data=_items(*(quantities or (5,))),
        **kwargs,
    )


def _assigned(*quantities):
    pick_list = _make_pick_list(*quantities)
    pick_list.assign("Alice")
    return pick_list


class TestCreatePickList:
    def test_starts_in_draft(self):
        pick_list = _make_pick_list(5, 2)
        assert pick_list.status == PickListStatus.DRAFT.value

    def test_items_start_pending_with_nothing_picked(self):
        pick_list = _make_pick_list(5, 2)
        assert len(pick_list.items) == 2
        for item in pick_list.items:
            assert item.picked_quantity == 0
            assert item.status == PickListItemStatus.PENDING.value

    def test_number_assigned_on_creation(self):
        pick_list = _make_pick_list()
        assert pick_list.pick_list_number.startswith("PL-")

    def test_optional_assignee_and_notes(self):
        pick_list = _make_pick_list(assigned_to="Alice", notes="Fragile")
        assert pick_list.assigned_to == "Alice"
        assert pick_list.notes == "Fragile"

    def test_raises_created_event(self):
        pick_list = _make_pick_list(5, 2)
        event = pick_list._events[-1]
        assert isinstance(event, PickListCreated)
        assert event.item_count == 2
        assert event.order_id == "ord-001"

    def test_no_items_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            PickList.create(order_id="ord-001", warehouse_id="wh-001", items_data=[])
        assert "items" in exc_info.value.messages

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError):
            _make_pick_list(0)


class TestAssignAndStart:
    def test_assign_sets_picker(self):
        pick_list = _make_pick_list()
        pick_list.assign("Alice")
        assert pick_list.status == PickListStatus.ASSIGNED.value
        assert pick_list.assigned_to == "Alice"
        assert isinstance(pick_list._events[-1], PickListAssigned)

    def test_assign_uses_existing_assignee(self):
        pick_list = _make_pick_list(assigned_to="Bob")
        pick_list.assign()
        assert pick_list.assigned_to == "Bob"

    def test_assign_requires_picker(self):
        pick_list = _make_pick_list()
        with pytest.raises(ValidationError) as exc_info:
            pick_list.assign()
        assert "assigned_to" in exc_info.value.messages

    def test_start_stamps_started_at(self):
        pick_list = _assigned(3)
        pick_list.start()
        assert pick_list.status == PickListStatus.IN_PROGRESS.value
        assert pick_list.started_at is not None
        assert isinstance(pick_list._events[-1], PickListStarted)

    def test_cannot_start_from_draft(self):
        pick_list = _make_pick_list()
        with pytest.raises(ValidationError):
            pick_list.start()


class TestRecordItemPicked:
    def test_full_pick_marks_item_picked(self):
        pick_list = _assigned(5)
        item = pick_list.items[0]
        pick_list.record_item_picked(str(item.id), 5)
        assert item.picked_quantity == 5
        assert item.status == PickListItemStatus.PICKED.value
        assert item.picked_at is not None

    def test_short_pick_marks_item_partial(self):
        pick_list = _assigned(5)
        item = pick_list.items[0]
        pick_list.record_item_picked(str(item.id), 3, picked_by="Carol")
        assert item.status == PickListItemStatus.PARTIAL.value
        assert item.picked_by == "Carol"

    def test_picker_defaults_to_assignee(self):
        pick_list = _assigned(5)
        pick_list.record_item_picked(str(pick_list.items[0].id), 5)
        assert pick_list.items[0].picked_by == "Alice"

    def test_first_pick_starts_an_assigned_list(self):
        pick_list = _assigned(5)
        pick_list.record_item_picked(str(pick_list.items[0].id), 1)
        assert pick_list.status == PickListStatus.IN_PROGRESS.value
        event_types = [type(e) for e in pick_list._events]
        assert PickListStarted in event_types
        assert isinstance(pick_list._events[-1], PickListItemPicked)

    def test_over_pick_rejected(self):
        pick_list = _assigned(5)
        with pytest.raises(ValidationError) as exc_info:
            pick_list.record_item_picked(str(pick_list.items[0].id), 6)
        assert "picked_quantity" in exc_info.value.messages

    def test_zero_pick_rejected(self):
        pick_list = _assigned(5)
        with pytest.raises(ValidationError):
            pick_list.record_item_picked(str(pick_list.items[0].id), 0)

    def test_cannot_pick_in_draft(self):
        pick_list = _make_pick_list(5)
        with pytest.raises(ValidationError) as exc_info:
            pick_list.record_item_picked(str(pick_list.items[0].id), 5)
        assert "status" in exc_info.value.messages

    def test_unknown_item_rejected(self):
        pick_list = _assigned(5)
        with pytest.raises(ValidationError) as exc_info:
            pick_list.record_item_picked("missing", 1)
        assert "item_id" in exc_info.value.messages


class TestSkipItem:
    def test_skip_marks_item_skipped(self):
        pick_list = _assigned(5, 2)
        item = pick_list.items[1]
        pick_list.skip_item(str(item.id))
        assert item.status == PickListItemStatus.SKIPPED.value
        assert item.picked_quantity == 0
        assert isinstance(pick_list._events[-1], PickListItemSkipped)

    def test_cannot_skip_after_completion(self):
        pick_list = _assigned(5)
        pick_list.start()
        pick_list.complete()
        with pytest.raises(ValidationError):
            pick_list.skip_item(str(pick_list.items[0].id))


class TestCompleteAndCancel:
    def test_complete_from_in_progress(self):
        pick_list = _assigned(5)
        pick_list.start()
        pick_list.complete()
        assert pick_list.status == PickListStatus.COMPLETED.value
        assert pick_list.completed_at is not None

    def test_cancel_records_previous_status(self):
        pick_list = _assigned(5)
        pick_list.cancel()
        event = pick_list._events[-1]
        assert pick_list.status == PickListStatus.CANCELLED.value
        assert isinstance(event, PickListCancelled)
        assert event.previous_status == PickListStatus.ASSIGNED.value

    def test_completed_list_cannot_be_cancelled(self):
        pick_list = _assigned(5)
        pick_list.start()
        pick_list.complete()
        with pytest.raises(ValidationError):
            pick_list.cancel()

    def test_cancelled_list_stays_cancelled(self):
        pick_list = _make_pick_list()
        pick_list.cancel()
        with pytest.raises(ValidationError):
            pick_list.assign("Alice")


class TestChangeStatus:
    def test_dispatches_to_assign(self):
        pick_list = _make_pick_list()
        pick_list.change_status("ASSIGNED", assigned_to="Dana")
        assert pick_list.assigned_to == "Dana"

    def test_walks_the_whole_path(self):
        pick_list = _make_pick_list()
        pick_list.change_status("ASSIGNED", assigned_to="Dana")
        pick_list.change_status("in progress")
        pick_list.change_status("COMPLETED")
        assert pick_list.status == PickListStatus.COMPLETED.value

    def test_same_status_rejected(self):
        pick_list = _make_pick_list()
        with pytest.raises(ValidationError):
            pick_list.change_status("DRAFT")

    def test_skipping_a_step_rejected(self):
        pick_list = _make_pick_list()
        with pytest.raises(ValidationError):
            pick_list.change_status("COMPLETED")


class TestRevise:
    def test_replaces_items_and_raises_revised_event(self):
        pick_list = _make_pick_list(5, 2)
        pick_list.revise(assigned_to="Bob", items_data=_items(3))

        assert pick_list.assigned_to == "Bob"
        assert [(item.order_line_id, item.quantity) for item in pick_list.items] == [("ol-1", 3)]
        assert pick_list.items[0].status == PickListItemStatus.PENDING.value
        event = pick_list._events[-1]
        assert isinstance(event, PickListRevised)
        assert event.item_count == 1
        assert event.assigned_to == "Bob"

    def test_fields_not_given_are_kept(self):
        pick_list = _make_pick_list(5, notes="Fragile")
        pick_list.revise(warehouse_id="wh-002")
        assert pick_list.warehouse_id == "wh-002"
        assert pick_list.notes == "Fragile"
        assert len(pick_list.items) == 1

    def test_blank_notes_clear_them(self):
        pick_list = _make_pick_list(5, notes="Fragile")
        pick_list.revise(notes="")
        assert pick_list.notes is None

    def test_empty_items_rejected(self):
        pick_list = _make_pick_list(5)
        with pytest.raises(ValidationError) as exc_info:
            pick_list.revise(items_data=[])
        assert "items" in exc_info.value.messages

    def test_only_drafts(self):
        pick_list = _assigned(5)
        with pytest.raises(ValidationError) as exc_info:
            pick_list.revise(notes="Late")
        assert exc_info.value.messages["status"] == ["A ASSIGNED pick list cannot be edited"]


class TestRemovable:
    def test_draft_and_cancelled_may_be_removed(self):
        pick_list = _make_pick_list()
        pick_list.assert_removable()
        pick_list.cancel()
        pick_list.assert_removable()

    def test_assigned_is_kept(self):
        with pytest.raises(ValidationError) as exc_info:
            _assigned(5).assert_removable()
        assert exc_info.value.messages["status"] == ["A ASSIGNED pick list cannot be deleted"]
