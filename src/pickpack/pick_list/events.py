"""Pick list domain events: immutable facts about pick list state changes."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from pickpack.domain import pickpack


@pickpack.event(part_of="PickList")
class PickListCreated:
    """A pick list was drafted from an order's unfulfilled quantities."""

    __version__ = 1

    pick_list_id = Identifier(required=True)
    pick_list_number = String(required=True)
    order_id = Identifier(required=True)
    warehouse_id = Identifier(required=True)
    assigned_to = String()
    items = Text(required=True)  # JSON list of {order_line_id, product_id, quantity}
    item_count = Integer(required=True)
    created_at = DateTime(required=True)


@pickpack.event(part_of="PickList")
class PickListAssigned:
    """A picker was assigned to the pick list."""

    __version__ = 1

    pick_list_id = Identifier(required=True)
    assigned_to = String(required=True)
    assigned_at = DateTime(required=True)


@pickpack.event(part_of="PickList")
class PickListStarted:
    """Picking began on the warehouse floor."""

    __version__ = 1

    pick_list_id = Identifier(required=True)
    started_at = DateTime(required=True)


@pickpack.event(part_of="PickList")
class PickListItemPicked:
    """Stock was retrieved for one pick list line."""

    __version__ = 1

    pick_list_id = Identifier(required=True)
    item_id = Identifier(required=True)
    order_line_id = Identifier(required=True)
    picked_quantity = Integer(required=True)
    item_status = String(required=True)
    picked_at = DateTime(required=True)


@pickpack.event(part_of="PickList")
class PickListItemSkipped:
    """A pick list line was skipped."""

    __version__ = 1

    pick_list_id = Identifier(required=True)
    item_id = Identifier(required=True)
    order_line_id = Identifier(required=True)
    skipped_at = DateTime(required=True)


@pickpack.event(part_of="PickList")
class PickListCompleted:
    """Picking finished for the pick list."""

    __version__ = 1

    pick_list_id = Identifier(required=True)
    order_id = Identifier(required=True)
    completed_at = DateTime(required=True)


@pickpack.event(part_of="PickList")
class PickListCancelled:
    """The pick list was cancelled before completion."""

    __version__ = 1

    pick_list_id = Identifier(required=True)
    order_id = Identifier(required=True)
    previous_status = String(required=True)
    cancelled_at = DateTime(required=True)


@pickpack.event(part_of="PickList")
class PickListRevised:
    """A draft pick list was edited before anyone started on it."""

    __version__ = 1

    pick_list_id = Identifier(required=True)
    order_id = Identifier(required=True)
    warehouse_id = Identifier(required=True)
    assigned_to = String()
    items = Text(required=True)  # JSON list of {order_line_id, product_id, quantity}
    item_count = Integer(required=True)
    revised_at = DateTime(required=True)
