"""BDD tests for creating pick lists, pack slips and shipping labels."""

from pickpack.builders.pack_slip import PackSlipBuilder
from pickpack.builders.pick_list import PickListBuilder
from pickpack.builders.shipping_label import ShippingLabelBuilder
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/document_creation.feature")


@when(parsers.cfparse('a pick list is built for "{order_id}" with quantity {quantity:d}'), target_fixture="created")
def build_pick_list(master_data, gateway, order_id, quantity):
    builder = PickListBuilder(master_data=master_data, gateway=gateway)
    builder.open()
    builder.choose_order(order_id)
    builder.choose_warehouse(master_data.default_warehouse().id)
    builder.set_quantity("ol-1", quantity)
    created = builder.submit()
    assert builder.error is None
    return created


@then(parsers.cfparse("the pick list is created with quantity {quantity:d}"))
def pick_list_created(created, quantity):
    assert created.status == "DRAFT"
    assert created.items[0].quantity == quantity


@when(parsers.cfparse("a quantity of {quantity:d} is requested for the order line"))
def request_too_much(master_data, gateway, quantity, error):
    builder = PickListBuilder(master_data=master_data, gateway=gateway)
    builder.open()
    builder.choose_order("ORD-1")
    try:
        builder.selection.set_quantity("ol-1", quantity, clamp=False)
    except ValidationError as exc:
        error["exc"] = exc


@then(parsers.cfparse('the request is rejected with "{fragment}"'))
def request_rejected(error, fragment):
    assert error["exc"] is not None
    assert fragment in error["exc"].messages["items"][0]


@given(
    parsers.cfparse('a pick list "{pick_list_id}" for "{order_id}" with quantity {quantity:d} and nothing picked')
)
def pick_list_nothing_picked(master_data, pick_list_id, order_id, quantity):
    master_data.add_pick_list(
        {
            "id": pick_list_id,
            "orderId": order_id,
            "warehouseId": "WH-1",
            "status": "DRAFT",
            "items": [{"orderLineId": "ol-1", "productId": "prod-1", "quantity": quantity, "pickedQuantity": 0}],
        }
    )


@when(parsers.cfparse('a pack slip is started from "{pick_list_id}"'), target_fixture="builder")
def start_pack_slip(master_data, gateway, pick_list_id):
    builder = PackSlipBuilder(master_data=master_data, gateway=gateway)
    builder.open()
    builder.choose_order("ORD-1")
    builder.choose_pick_list(pick_list_id)
    return builder


@then(parsers.cfparse("the pack slip offers at most {quantity:d} for the order line"))
def pack_slip_offers(builder, quantity):
    assert builder.selection.ceilings == {"ol-1": quantity}
    assert builder.set_quantity("ol-1", quantity + 1) == quantity


@when(
    parsers.cfparse('a shipping label is built for "{order_id}" without a recipient state'),
    target_fixture="created",
)
def build_label_without_state(master_data, gateway, order_id):
    builder = ShippingLabelBuilder(master_data=master_data, gateway=gateway)
    builder.open()
    builder.choose_order(order_id)
    builder.set_to_address(address="9 Elm St", city="Shelbyville", postal_code="62565", country="US")
    return builder.submit()


@then("the shipping label is created")
def label_created(created):
    assert created is not None
    assert created.status == "DRAFT"


@then("the recipient state is empty")
def recipient_state_empty(created):
    assert created.to_address.state is None
