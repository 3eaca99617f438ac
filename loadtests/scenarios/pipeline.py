"""Document pipeline load test scenarios.

Stateful SequentialTaskSet journeys: the full pick → pack → label happy
path, packing straight from an order, cancellation part way through
picking, and editing then deleting a draft.
"""

import random
import uuid

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    open_order,
    pack_slip_data,
    pick_list_data,
    shipping_label_data,
    tracking_number,
    warehouse_id,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import PipelineState


def _start_state(num_lines: int | None = None) -> PipelineState:
    order, lines = open_order(num_lines)
    return PipelineState(order_id=order, warehouse_id=warehouse_id(), lines=lines)


class PipelineJourney(SequentialTaskSet):
    """Pick List → Assign → Pick → Complete → Pack Slip → Pack → Ship →
    Shipping Label → Generate → Print → Ship.

    The happy path: every document of one order walked to its final status.
    """

    def on_start(self):
        self.state = _start_state()
        if self.state.order_id is None:
            self.interrupt()

    def _patch(self, path: str, name: str, body: dict):
        with self.client.patch(path, json=body, catch_response=True, name=name) as resp:
            if resp.status_code != 200:
                resp.failure(f"{name} failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def create_pick_list(self):
        with self.client.post(
            "/pick-lists",
            json=pick_list_data(self.state.order_id, self.state.warehouse_id, self.state.lines),
            catch_response=True,
            name="POST /pick-lists",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.pick_list_id = body["id"]
                self.state.pick_item_ids = [item["id"] for item in body["items"]]
            else:
                resp.failure(f"Create pick list failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def assign_picker(self):
        self._patch(
            f"/pick-lists/{self.state.pick_list_id}",
            "PATCH /pick-lists/{id}",
            {"status": "ASSIGNED", "assignedTo": f"Picker-{uuid.uuid4().hex[:4]}"},
        )

    @task
    def pick_items(self):
        """Pick most lines in full, some short, and skip the odd one."""
        for item_id, line in zip(self.state.pick_item_ids, self.state.lines, strict=True):
            roll = random.random()
            if roll < 0.1:
                action, body, picked = "skip", None, 0
            else:
                picked = line["quantity"] if roll < 0.8 else random.randint(1, line["quantity"])
                action, body = "pick", {"pickedQuantity": picked}
            with self.client.put(
                f"/pick-lists/{self.state.pick_list_id}/items/{item_id}/{action}",
                json=body,
                catch_response=True,
                name=f"PUT /pick-lists/{{id}}/items/{{item_id}}/{action}",
            ) as resp:
                if resp.status_code == 200:
                    self.state.picked[line["orderLineId"]] = picked
                else:
                    resp.failure(f"{action} failed: {resp.status_code} - {extract_error_detail(resp)}")
                    self.interrupt()

    @task
    def complete_pick_list(self):
        self._patch(f"/pick-lists/{self.state.pick_list_id}", "PATCH /pick-lists/{id}", {"status": "COMPLETED"})
        if not any(self.state.picked.values()):
            self.interrupt()

    @task
    def create_pack_slip(self):
        payload = pack_slip_data(
            self.state.order_id,
            self.state.warehouse_id,
            self.state.pick_list_id,
            self.state.lines,
            self.state.picked,
        )
        with self.client.post("/pack-slips", json=payload, catch_response=True, name="POST /pack-slips") as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.pack_slip_id = body["id"]
                self.state.packed = {item["id"]: item["quantity"] for item in body["items"]}
                self.state.package_count = body["packageCount"]
                self.state.weight = body.get("weight")
            else:
                resp.failure(f"Create pack slip failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def pack_items(self):
        self._patch(f"/pack-slips/{self.state.pack_slip_id}", "PATCH /pack-slips/{id}", {"status": "PACKING"})
        for item_id, quantity in self.state.packed.items():
            with self.client.put(
                f"/pack-slips/{self.state.pack_slip_id}/items/{item_id}/pack",
                json={"packedQuantity": quantity, "packageNumber": random.randint(1, self.state.package_count)},
                catch_response=True,
                name="PUT /pack-slips/{id}/items/{item_id}/pack",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Pack item failed: {resp.status_code} - {extract_error_detail(resp)}")
                    self.interrupt()
        self._patch(f"/pack-slips/{self.state.pack_slip_id}", "PATCH /pack-slips/{id}", {"status": "PACKED"})

    @task
    def create_shipping_label(self):
        with self.client.post(
            "/shipping-labels",
            json=shipping_label_data(self.state.order_id, self.state.pack_slip_id, self.state.weight),
            catch_response=True,
            name="POST /shipping-labels",
        ) as resp:
            if resp.status_code == 201:
                self.state.shipping_label_id = resp.json()["id"]
            else:
                resp.failure(f"Create shipping label failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def ship(self):
        path = f"/shipping-labels/{self.state.shipping_label_id}"
        self._patch(
            path,
            "PATCH /shipping-labels/{id}",
            {"status": "GENERATED", "labelUrl": f"https://labels.example.com/{uuid.uuid4().hex}.pdf"},
        )
        self._patch(path, "PATCH /shipping-labels/{id}", {"status": "PRINTED"})
        self.state.tracking_number = tracking_number()
        self._patch(
            path, "PATCH /shipping-labels/{id}", {"status": "SHIPPED", "trackingNumber": self.state.tracking_number}
        )
        self._patch(f"/pack-slips/{self.state.pack_slip_id}", "PATCH /pack-slips/{id}", {"status": "SHIPPED"})

    @task
    def check_order(self):
        self.client.get(f"/orders/{self.state.order_id}/fulfillment", name="GET /orders/{id}/fulfillment")

    @task
    def done(self):
        self.interrupt()


class DirectPackJourney(SequentialTaskSet):
    """Pack Slip straight from the order → Shipping Label without a state."""

    def on_start(self):
        self.state = _start_state(2)
        if self.state.order_id is None:
            self.interrupt()

    @task
    def create_pack_slip(self):
        payload = pack_slip_data(self.state.order_id, self.state.warehouse_id, None, self.state.lines, {})
        with self.client.post("/pack-slips", json=payload, catch_response=True, name="POST /pack-slips") as resp:
            if resp.status_code == 201:
                self.state.pack_slip_id = resp.json()["id"]
            else:
                resp.failure(f"Create pack slip failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def create_shipping_label(self):
        payload = shipping_label_data(self.state.order_id, self.state.pack_slip_id)
        payload["toAddress"].pop("state", None)
        with self.client.post(
            "/shipping-labels", json=payload, catch_response=True, name="POST /shipping-labels"
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Create shipping label failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class PickListCancellationJourney(SequentialTaskSet):
    """Pick List → Assign → Cancel."""

    def on_start(self):
        self.state = _start_state(1)
        if self.state.order_id is None:
            self.interrupt()

    @task
    def create_pick_list(self):
        with self.client.post(
            "/pick-lists",
            json=pick_list_data(self.state.order_id, self.state.warehouse_id, self.state.lines),
            catch_response=True,
            name="POST /pick-lists",
        ) as resp:
            if resp.status_code == 201:
                self.state.pick_list_id = resp.json()["id"]
            else:
                resp.failure(f"Create pick list failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def assign_and_cancel(self):
        for body in ({"status": "ASSIGNED", "assignedTo": "CancelPicker"}, {"status": "CANCELLED"}):
            with self.client.patch(
                f"/pick-lists/{self.state.pick_list_id}",
                json=body,
                catch_response=True,
                name="PATCH /pick-lists/{id}",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"{body['status']} failed: {extract_error_detail(resp)}")
                    self.interrupt()

    @task
    def done(self):
        self.interrupt()


class DraftRevisionJourney(SequentialTaskSet):
    """Pick List → Edit draft → Delete."""

    def on_start(self):
        self.state = _start_state(2)
        if self.state.order_id is None:
            self.interrupt()

    @task
    def create_pick_list(self):
        with self.client.post(
            "/pick-lists",
            json=pick_list_data(self.state.order_id, self.state.warehouse_id, self.state.lines),
            catch_response=True,
            name="POST /pick-lists",
        ) as resp:
            if resp.status_code == 201:
                self.state.pick_list_id = resp.json()["id"]
            else:
                resp.failure(f"Create pick list failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def edit_draft(self):
        """Drop to the first line at half its quantity and change the header."""
        line = self.state.lines[0]
        body = {
            "assignedTo": f"Picker-{uuid.uuid4().hex[:4]}",
            "notes": "Revised during load test",
            "items": [{**line, "quantity": max(line["quantity"] // 2, 1)}],
        }
        with self.client.put(
            f"/pick-lists/{self.state.pick_list_id}",
            json=body,
            catch_response=True,
            name="PUT /pick-lists/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Edit pick list failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def delete_draft(self):
        with self.client.delete(
            f"/pick-lists/{self.state.pick_list_id}", catch_response=True, name="DELETE /pick-lists/{id}"
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Delete pick list failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class PickPackUser(HttpUser):
    """Locust user simulating warehouse document traffic.

    Weighted distribution:
    - 55% Full pipeline (happy path: pick list → shipped label)
    - 20% Packing straight from the order
    - 15% Pick list cancellation
    - 10% Editing and deleting a draft pick list
    """

    wait_time = between(0.5, 2.0)
    tasks = {
        PipelineJourney: 11,
        DirectPackJourney: 4,
        PickListCancellationJourney: 3,
        DraftRevisionJourney: 2,
    }
