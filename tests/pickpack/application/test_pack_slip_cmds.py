"""Application tests for pack slip commands: including the pick list re-check."""

import json

import pytest
from pickpack.pack_slip.creation import CreatePackSlip
from pickpack.pack_slip.pack_slip import PackSlip, PackSlipStatus
from pickpack.pack_slip.packing import ChangePackSlipStatus, RecordPackSlipItemPacked
from pickpack.pack_slip.revision import DeletePackSlip, UpdatePackSlip
from pickpack.pick_list.creation import CreatePickList
from pickpack.pick_list.pick_list import PickList
from pickpack.pick_list.picking import ChangePickListStatus, RecordPickListItemPicked
from pickpack.pick_list.revision import DeletePickList
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

pytestmark = pytest.mark.usefixtures("open_orders")


def _line(line_id="ol-1", quantity=5):
    return {"order_line_id": line_id, "product_id": f"prod-{line_id}", "quantity": quantity}


def _create_pick_list(order_id="ord-001", quantity=5):
    return current_domain.process(
        CreatePickList(order_id=order_id, warehouse_id="wh-001", items=json.dumps([_line(quantity=quantity)])),
        asynchronous=False,
    )


def _create_pack_slip(items, pick_list_id=None, order_id="ord-001", **kwargs):
    return current_domain.process(
        CreatePackSlip(
            order_id=order_id,
            warehouse_id="wh-001",
            pick_list_id=pick_list_id,
            items=json.dumps(items),
            **kwargs,
        ),
        asynchronous=False,
    )


class TestCreatePackSlipFromOrder:
    def test_persists_draft_with_metadata(self):
        pack_slip_id = _create_pack_slip(
            [_line(quantity=2)],
            package_count=2,
            weight=1.25,
            dimensions=json.dumps({"length": 40.0, "width": None, "height": None}),
        )
        pack_slip = current_domain.repository_for(PackSlip).get(pack_slip_id)
        assert pack_slip.status == PackSlipStatus.DRAFT.value
        assert pack_slip.package_count == 2
        assert pack_slip.weight == 1.25
        assert pack_slip.dimensions.length == 40.0
        assert pack_slip.pick_list_id is None

    def test_more_than_the_order_still_needs_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            _create_pack_slip([_line(quantity=11)])
        assert exc_info.value.messages["items"] == ["Quantity 11 for order line ol-1 exceeds the available 10"]

    def test_line_split_across_rows_is_summed(self):
        with pytest.raises(ValidationError) as exc_info:
            _create_pack_slip([_line(quantity=6), _line(quantity=6)])
        assert exc_info.value.messages["items"] == ["Quantity 12 for order line ol-1 exceeds the available 10"]

    def test_line_not_on_the_order_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            _create_pack_slip([_line("ol-7", 1)])
        assert exc_info.value.messages["items"] == ["Order line ol-7 is not available"]


class TestCreatePackSlipFromPickList:
    def test_requested_quantity_is_the_ceiling_before_picking(self):
        pick_list_id = _create_pick_list(quantity=5)
        pack_slip_id = _create_pack_slip([_line(quantity=5)], pick_list_id=pick_list_id)
        assert current_domain.repository_for(PackSlip).get(pack_slip_id).pick_list_id == pick_list_id

    def test_cannot_pack_more_than_picked(self):
        pick_list_id = _create_pick_list(quantity=5)
        current_domain.process(
            ChangePickListStatus(pick_list_id=pick_list_id, status="ASSIGNED", assigned_to="Alice"),
            asynchronous=False,
        )
        item_id = str(current_domain.repository_for(PickList).get(pick_list_id).items[0].id)
        current_domain.process(
            RecordPickListItemPicked(pick_list_id=pick_list_id, item_id=item_id, picked_quantity=3),
            asynchronous=False,
        )

        with pytest.raises(ValidationError) as exc_info:
            _create_pack_slip([_line(quantity=4)], pick_list_id=pick_list_id)
        assert "items" in exc_info.value.messages

        assert _create_pack_slip([_line(quantity=3)], pick_list_id=pick_list_id)

    def test_line_not_on_pick_list_rejected(self):
        pick_list_id = _create_pick_list()
        with pytest.raises(ValidationError):
            _create_pack_slip([_line("ol-9", 1)], pick_list_id=pick_list_id)

    def test_pick_list_of_another_order_rejected(self):
        pick_list_id = _create_pick_list(order_id="ord-other")
        with pytest.raises(ValidationError) as exc_info:
            _create_pack_slip([_line(quantity=1)], pick_list_id=pick_list_id)
        assert "pick_list_id" in exc_info.value.messages

    def test_missing_pick_list_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            _create_pack_slip([_line(quantity=1)], pick_list_id="missing")
        assert exc_info.value.messages["pick_list_id"] == ["Pick list not found"]


class TestPacking:
    def test_pack_items_and_ship(self):
        pack_slip_id = _create_pack_slip([_line(quantity=2)])
        current_domain.process(
            ChangePackSlipStatus(pack_slip_id=pack_slip_id, status="PACKING", packed_by="Bob"),
            asynchronous=False,
        )
        item_id = str(current_domain.repository_for(PackSlip).get(pack_slip_id).items[0].id)
        current_domain.process(
            RecordPackSlipItemPacked(pack_slip_id=pack_slip_id, item_id=item_id, packed_quantity=2, package_number=1),
            asynchronous=False,
        )
        current_domain.process(ChangePackSlipStatus(pack_slip_id=pack_slip_id, status="PACKED"), asynchronous=False)
        current_domain.process(ChangePackSlipStatus(pack_slip_id=pack_slip_id, status="SHIPPED"), asynchronous=False)

        pack_slip = current_domain.repository_for(PackSlip).get(pack_slip_id)
        assert pack_slip.status == PackSlipStatus.SHIPPED.value
        assert pack_slip.items[0].packed_quantity == 2
        assert pack_slip.packed_by == "Bob"


class TestUpdatePackSlip:
    def test_header_and_items_are_replaced(self):
        pack_slip_id = _create_pack_slip([_line(quantity=2)])
        current_domain.process(
            UpdatePackSlip(
                pack_slip_id=pack_slip_id,
                packed_by="Carol",
                package_count=2,
                weight=3.5,
                dimensions=json.dumps({"length": 30.0, "width": 20.0, "height": None}),
                items=json.dumps([_line("ol-2", 4), _line("ol-3", 1)]),
            ),
            asynchronous=False,
        )
        pack_slip = current_domain.repository_for(PackSlip).get(pack_slip_id)
        assert pack_slip.packed_by == "Carol"
        assert pack_slip.package_count == 2
        assert pack_slip.weight == 3.5
        assert pack_slip.dimensions.width == 20.0
        assert sorted((item.order_line_id, item.quantity) for item in pack_slip.items) == [("ol-2", 4), ("ol-3", 1)]

    def test_items_from_a_pick_list_are_checked_against_it(self):
        pick_list_id = _create_pick_list(quantity=3)
        pack_slip_id = _create_pack_slip([_line(quantity=1)], pick_list_id=pick_list_id)

        with pytest.raises(ValidationError) as exc_info:
            current_domain.process(
                UpdatePackSlip(pack_slip_id=pack_slip_id, items=json.dumps([_line(quantity=4)])),
                asynchronous=False,
            )
        assert exc_info.value.messages["items"] == ["Quantity 4 for order line ol-1 exceeds the available 3"]

    def test_items_without_a_pick_list_are_checked_against_the_order(self):
        pack_slip_id = _create_pack_slip([_line(quantity=1)])
        with pytest.raises(ValidationError) as exc_info:
            current_domain.process(
                UpdatePackSlip(pack_slip_id=pack_slip_id, items=json.dumps([_line(quantity=11)])),
                asynchronous=False,
            )
        assert exc_info.value.messages["items"] == ["Quantity 11 for order line ol-1 exceeds the available 10"]

    def test_only_a_draft_can_be_edited(self):
        pack_slip_id = _create_pack_slip([_line(quantity=2)])
        current_domain.process(
            ChangePackSlipStatus(pack_slip_id=pack_slip_id, status="PACKING", packed_by="Bob"),
            asynchronous=False,
        )
        with pytest.raises(ValidationError) as exc_info:
            current_domain.process(UpdatePackSlip(pack_slip_id=pack_slip_id, weight=2.0), asynchronous=False)
        assert exc_info.value.messages["status"] == ["A PACKING pack slip cannot be edited"]


class TestDeletePackSlip:
    def test_draft_is_removed(self):
        pack_slip_id = _create_pack_slip([_line(quantity=2)])
        current_domain.process(DeletePackSlip(pack_slip_id=pack_slip_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(PackSlip).get(pack_slip_id)

    def test_pick_list_in_use_cannot_be_deleted(self):
        pick_list_id = _create_pick_list()
        pack_slip_id = _create_pack_slip([_line(quantity=1)], pick_list_id=pick_list_id)
        pack_slip_number = current_domain.repository_for(PackSlip).get(pack_slip_id).pack_slip_number

        with pytest.raises(ValidationError) as exc_info:
            current_domain.process(DeletePickList(pick_list_id=pick_list_id), asynchronous=False)
        assert exc_info.value.messages["pick_list_id"] == [f"Pick list is used by pack slip {pack_slip_number}"]

    def test_packing_slip_is_kept(self):
        pack_slip_id = _create_pack_slip([_line(quantity=2)])
        current_domain.process(
            ChangePackSlipStatus(pack_slip_id=pack_slip_id, status="PACKING", packed_by="Bob"),
            asynchronous=False,
        )
        with pytest.raises(ValidationError) as exc_info:
            current_domain.process(DeletePackSlip(pack_slip_id=pack_slip_id), asynchronous=False)
        assert exc_info.value.messages["status"] == ["A PACKING pack slip cannot be deleted"]
