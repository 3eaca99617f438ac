import pytest
from pickpack.gateway import reset_gateway
from pickpack.reconciliation import reset_reconciler
from pickpack.sources import get_master_data, reset_master_data
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def pickpack_bed():
    from pickpack.domain import pickpack

    bed = DomainFixture(pickpack)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(pickpack_bed):
    with pickpack_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def _adapters():
    """Fresh adapter singletons for every test."""
    reset_master_data()
    reset_gateway()
    reset_reconciler()
    yield
    reset_master_data()
    reset_gateway()
    reset_reconciler()


@pytest.fixture
def open_orders():
    """Orders the command handlers allocate against: three lines of ten, nothing fulfilled yet."""
    source = get_master_data()
    for order_id in ("ord-001", "ord-1", "ord-2", "ord-9", "ord-a", "ord-b", "ord-other"):
        source.add_order(
            {
                "id": order_id,
                "status": "CONFIRMED",
                "customer": {"name": "Jane Doe"},
                "orderLines": [
                    {
                        "id": f"ol-{n}",
                        "productId": f"prod-{n}",
                        "sku": f"SKU-{n:03d}",
                        "orderedQuantity": 10,
                        "fulfilledQuantity": 0,
                    }
                    for n in (1, 2, 3)
                ],
            }
        )
    return source
