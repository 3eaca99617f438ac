"""Fake reconciler: remembers every call for assertions in tests."""

from pickpack.reconciliation.port import ReconciliationPort


class FakeReconciler(ReconciliationPort):
    def __init__(self):
        self.calls: list[tuple[str, dict]] = []

    def pick_list_created(self, pick_list_id, order_id, items):
        self.calls.append(("pick_list_created", {"pick_list_id": pick_list_id, "order_id": order_id, "items": items}))

    def pack_slip_created(self, pack_slip_id, order_id, pick_list_id, items):
        self.calls.append(
            (
                "pack_slip_created",
                {"pack_slip_id": pack_slip_id, "order_id": order_id, "pick_list_id": pick_list_id, "items": items},
            )
        )

    def shipping_label_created(self, shipping_label_id, order_id, pack_slip_id):
        self.calls.append(
            (
                "shipping_label_created",
                {"shipping_label_id": shipping_label_id, "order_id": order_id, "pack_slip_id": pack_slip_id},
            )
        )

    def calls_named(self, name: str) -> list[dict]:
        return [payload for call, payload in self.calls if call == name]
