"""Tests for dashboard counting and the registry over an in-memory repository."""

from types import SimpleNamespace

from pickpack.registry.registry import FulfillmentRegistry
from pickpack.registry.repository import InMemoryDocumentRepository
from pickpack.registry.summary import summarize


def _doc(status, order_id="ord-1", warehouse_id="wh-1"):
    return SimpleNamespace(status=status, order_id=order_id, warehouse_id=warehouse_id)


class TestSummarize:
    def test_pick_list_buckets(self):
        result = summarize(
            pick_lists=[_doc("DRAFT"), _doc("ASSIGNED"), _doc("IN_PROGRESS"), _doc("COMPLETED"), _doc("CANCELLED")]
        )
        counts = result.pick_lists
        assert (counts.total, counts.draft, counts.in_progress, counts.completed, counts.cancelled) == (5, 1, 2, 1, 1)

    def test_pack_slip_buckets(self):
        result = summarize(pack_slips=[_doc("DRAFT"), _doc("PACKING"), _doc("PACKED"), _doc("PACKED")])
        counts = result.pack_slips
        assert (counts.total, counts.packing, counts.packed, counts.shipped) == (4, 1, 2, 0)

    def test_generated_bucket_counts_printed_labels(self):
        result = summarize(shipping_labels=[_doc("GENERATED"), _doc("PRINTED"), _doc("SHIPPED")])
        counts = result.shipping_labels
        assert (counts.total, counts.generated, counts.shipped) == (3, 1, 1)

    def test_unknown_status_counts_only_in_total(self):
        result = summarize(pick_lists=[_doc("ON_HOLD")])
        assert result.pick_lists.total == 1
        assert result.pick_lists.draft == 0

    def test_legacy_pending_counts_as_draft(self):
        assert summarize(pick_lists=[_doc("PENDING")]).pick_lists.draft == 1

    def test_serializes_camel_case(self):
        body = summarize().model_dump(by_alias=True)
        assert body["pickLists"]["inProgress"] == 0
        assert body["shippingLabels"]["generated"] == 0


class TestRegistry:
    def _registry(self):
        return FulfillmentRegistry(
            InMemoryDocumentRepository(
                pick_lists=[
                    _doc("ASSIGNED"),
                    _doc("COMPLETED", warehouse_id="wh-2"),
                    _doc("DRAFT", order_id="ord-2"),
                ],
                pack_slips=[_doc("PACKING"), _doc("SHIPPED", warehouse_id="wh-2")],
                shipping_labels=[_doc("SHIPPED"), _doc("PRINTED", order_id="ord-2")],
            )
        )

    def test_for_order(self):
        documents = self._registry().for_order("ord-1")
        assert len(documents.pick_lists) == 2
        assert len(documents.pack_slips) == 2
        assert len(documents.shipping_labels) == 1

    def test_for_order_without_documents(self):
        documents = self._registry().for_order("ord-404")
        assert documents.pick_lists == documents.pack_slips == documents.shipping_labels == []

    def test_summary_unfiltered(self):
        result = self._registry().summary()
        assert result.pick_lists.total == 3
        assert result.pack_slips.total == 2
        assert result.shipping_labels.total == 2

    def test_warehouse_filter_leaves_labels_whole(self):
        result = self._registry().summary(warehouse_id="wh-2")
        assert result.pick_lists.total == 1
        assert result.pack_slips.total == 1
        assert result.shipping_labels.total == 2

    def test_status_filter_applies_where_legal(self):
        result = self._registry().summary(status="SHIPPED")
        # SHIPPED is not a pick list status, so pick lists stay whole.
        assert result.pick_lists.total == 3
        assert result.pack_slips.total == 1
        assert result.shipping_labels.total == 1

    def test_listing_by_status(self):
        page = self._registry().pick_lists(status="completed")
        assert [p.status for p in page.items] == ["COMPLETED"]
        assert page.total == 1

    def test_page_counts_every_match(self):
        page = self._registry().pick_lists(order_id="ord-1", skip=1, take=1)
        assert page.total == 2
        assert [p.status for p in page.items] == ["ASSIGNED"]


class TestInMemoryPaging:
    def _repository(self, count):
        return InMemoryDocumentRepository(pick_lists=[_doc("DRAFT", order_id=f"ord-{n}") for n in range(count)])

    def test_newest_first(self):
        page = self._repository(3).pick_lists()
        assert [p.order_id for p in page.items] == ["ord-2", "ord-1", "ord-0"]

    def test_skip_and_take(self):
        page = self._repository(10).pick_lists(skip=8, take=5)
        assert [p.order_id for p in page.items] == ["ord-1", "ord-0"]
        assert page.total == 10

    def test_no_take_keeps_everything_after_skip(self):
        page = self._repository(250).pick_lists(skip=100)
        assert len(page.items) == 150
        assert page.total == 250
