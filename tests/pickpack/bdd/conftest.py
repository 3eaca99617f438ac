"""Shared BDD fixtures and step definitions for document creation."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pickpack.api.routes import routers
from pickpack.gateway.http_adapter import HttpResourceGateway
from pickpack.sources import get_master_data
from protean.integrations.fastapi import register_exception_handlers
from pytest_bdd import given, parsers, then


@pytest.fixture()
def master_data():
    """The master data the API also checks orders against."""
    return get_master_data()


@pytest.fixture()
def gateway():
    app = FastAPI()
    for router in routers:
        app.include_router(router)
    register_exception_handlers(app)
    return HttpResourceGateway(base_url="", timeout=None, session=TestClient(app))


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('an order "{order_id}" with one line ordering {ordered:d} of which {fulfilled:d} are fulfilled'))
def order_with_one_line(master_data, order_id, ordered, fulfilled):
    master_data.add_order(
        {
            "id": order_id,
            "status": "CONFIRMED",
            "customer": {"id": "cust-bdd", "name": "Jane Doe"},
            "orderLines": [
                {
                    "id": "ol-1",
                    "productId": "prod-1",
                    "sku": "SKU-001",
                    "orderedQuantity": ordered,
                    "fulfilledQuantity": fulfilled,
                }
            ],
        }
    )


@given(parsers.cfparse('a default warehouse "{warehouse_id}"'))
def default_warehouse(master_data, warehouse_id):
    master_data.add_warehouse(
        {
            "id": warehouse_id,
            "name": "Main Warehouse",
            "address": "1 Dock Road",
            "city": "Springfield",
            "postalCode": "62701",
            "country": "US",
            "isDefault": True,
        }
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("nothing is created")
def nothing_created(builder, created):
    assert created is None
    assert builder.is_open is True


@then(parsers.cfparse('the error "{message}" is shown'))
def error_shown(builder, message):
    assert builder.error == message
