"""BDD tests for failed and blocked document creation."""

from pickpack.builders.pick_list import PickListBuilder
from pickpack.builders.shipping_label import ShippingLabelBuilder
from pickpack.gateway.fake_adapter import FakeResourceGateway
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/creation_failures.feature")


@given(
    parsers.cfparse('a pick list builder for "{order_id}" with quantity {quantity:d}'),
    target_fixture="builder",
)
def pick_list_builder_with_quantity(master_data, order_id, quantity):
    builder = PickListBuilder(master_data=master_data, gateway=FakeResourceGateway())
    builder.open()
    builder.choose_order(order_id)
    builder.choose_warehouse("WH-1")
    builder.set_quantity("ol-1", quantity)
    return builder


@given(
    parsers.cfparse('a pick list builder for "{order_id}" sending quantity {quantity:d} to the document service'),
    target_fixture="builder",
)
def pick_list_builder_against_service(master_data, gateway, order_id, quantity):
    builder = PickListBuilder(master_data=master_data, gateway=gateway)
    builder.open()
    builder.choose_order(order_id)
    builder.choose_warehouse("WH-1")
    builder.set_quantity("ol-1", quantity)
    return builder


@given(parsers.cfparse('{count:d} more units of "{order_id}" are fulfilled elsewhere'))
def fulfilled_elsewhere(master_data, count, order_id):
    order = next(o for o in master_data.orders if o.id == order_id)
    updated = order.model_copy(deep=True)
    updated.order_lines[0].fulfilled_quantity += count
    master_data.orders = [updated if o.id == order_id else o for o in master_data.orders]


@given(parsers.cfparse('a pick list builder for "{order_id}" with nothing selected'), target_fixture="builder")
def pick_list_builder_empty(master_data, gateway, order_id):
    builder = PickListBuilder(master_data=master_data, gateway=gateway)
    builder.open()
    builder.choose_order(order_id)
    builder.choose_warehouse("WH-1")
    return builder


@given(parsers.cfparse('the document service is failing with "{message}"'))
def failing_service(builder, message):
    builder.gateway.configure(should_succeed=False, failure_message=message)


@when("the pick list is submitted", target_fixture="created")
def submit_pick_list(builder):
    return builder.submit()


@then(parsers.cfparse("the builder still holds quantity {quantity:d} for the order line"))
def quantity_kept(builder, quantity):
    assert builder.selection.selected == {"ol-1": quantity}
    assert builder.order.id == "ORD-1"


@given(
    parsers.cfparse('a shipping label builder for "{order_id}" with a complete recipient'),
    target_fixture="builder",
)
def label_builder(master_data, gateway, order_id):
    builder = ShippingLabelBuilder(master_data=master_data, gateway=gateway)
    builder.open()
    builder.choose_order(order_id)
    builder.set_to_address(address="9 Elm St", city="Shelbyville", postal_code="62565", country="US")
    return builder


@given("the sender city is cleared")
def clear_sender_city(builder):
    builder.set_from_address(city="")


@when("the shipping label is submitted", target_fixture="created")
def submit_label(builder):
    return builder.submit()


@then("the recipient address is unchanged")
def recipient_unchanged(builder):
    assert builder.to_address == {
        "name": "Jane Doe",
        "address": "9 Elm St",
        "city": "Shelbyville",
        "state": "",
        "postal_code": "62565",
        "country": "US",
    }
