import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pickpack.api.routes import routers
from protean.integrations.fastapi import register_exception_handlers

SENDER = {
    "name": "Main Warehouse",
    "address": "1 Dock Road",
    "city": "Springfield",
    "postalCode": "62701",
    "country": "US",
}

RECIPIENT = {
    "name": "Jane Doe",
    "address": "9 Elm St",
    "city": "Shelbyville",
    "state": "IL",
    "postalCode": "62565",
    "country": "US",
}


class Documents:
    """Shortcuts for creating documents through the API."""

    def __init__(self, client):
        self.client = client

    def pick_list(self, order_id="ord-001", warehouse_id="wh-001", quantity=5) -> dict:
        response = self.client.post(
            "/pick-lists",
            json={
                "orderId": order_id,
                "warehouseId": warehouse_id,
                "items": [{"orderLineId": "ol-1", "productId": "prod-1", "sku": "SKU-001", "quantity": quantity}],
            },
        )
        assert response.status_code == 201
        return response.json()

    def pack_slip(self, order_id="ord-001", warehouse_id="wh-001", pick_list_id=None, quantity=2, **extra):
        body = {
            "orderId": order_id,
            "warehouseId": warehouse_id,
            "items": [{"orderLineId": "ol-1", "productId": "prod-1", "quantity": quantity}],
            **extra,
        }
        if pick_list_id:
            body["pickListId"] = pick_list_id
        return self.client.post("/pack-slips", json=body)

    def shipping_label(self, order_id="ord-001", **extra):
        return self.client.post(
            "/shipping-labels",
            json={"orderId": order_id, "carrier": "UPS", "fromAddress": SENDER, "toAddress": RECIPIENT, **extra},
        )


@pytest.fixture()
def app():
    app = FastAPI()
    for router in routers:
        app.include_router(router)
    register_exception_handlers(app)
    return app


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def documents(client, open_orders):
    return Documents(client)
