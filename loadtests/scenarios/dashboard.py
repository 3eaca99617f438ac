"""Read-heavy dashboard scenario: lists, filters and the summary."""

import random

from locust import HttpUser, between, task

from loadtests.data_generators import warehouse_id


class DashboardUser(HttpUser):
    """Polls what the fulfillment dashboard shows."""

    wait_time = between(1.0, 3.0)

    @task(5)
    def summary(self):
        params = {"warehouseId": warehouse_id()} if random.random() < 0.5 else {}
        self.client.get("/fulfillment/summary", params=params, name="GET /fulfillment/summary")

    @task(3)
    def pick_lists(self):
        status = random.choice([None, "DRAFT", "IN_PROGRESS", "COMPLETED"])
        params = {"take": 50, **({"status": status} if status else {})}
        self.client.get("/pick-lists", params=params, name="GET /pick-lists")

    @task(2)
    def pack_slips(self):
        self.client.get("/pack-slips", params={"take": 50}, name="GET /pack-slips")

    @task(2)
    def shipping_labels(self):
        self.client.get("/shipping-labels", params={"take": 50, "status": "SHIPPED"}, name="GET /shipping-labels")
