"""Pack slip domain events: immutable facts about pack slip state changes."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from pickpack.domain import pickpack


@pickpack.event(part_of="PackSlip")
class PackSlipCreated:
    """A pack slip was drafted from a pick list or directly from an order."""

    __version__ = 1

    pack_slip_id = Identifier(required=True)
    pack_slip_number = String(required=True)
    order_id = Identifier(required=True)
    pick_list_id = String()
    warehouse_id = Identifier(required=True)
    items = Text(required=True)  # JSON list of {order_line_id, product_id, quantity}
    item_count = Integer(required=True)
    package_count = Integer(required=True)
    weight = Float()
    created_at = DateTime(required=True)


@pickpack.event(part_of="PackSlip")
class PackingStarted:
    """Packing began at a packing station."""

    __version__ = 1

    pack_slip_id = Identifier(required=True)
    packed_by = String()
    started_at = DateTime(required=True)


@pickpack.event(part_of="PackSlip")
class PackSlipItemPacked:
    """Quantities of one line were boxed."""

    __version__ = 1

    pack_slip_id = Identifier(required=True)
    item_id = Identifier(required=True)
    order_line_id = Identifier(required=True)
    packed_quantity = Integer(required=True)
    package_number = Integer()
    packed_at = DateTime(required=True)


@pickpack.event(part_of="PackSlip")
class PackSlipPacked:
    """All packages for the pack slip are closed."""

    __version__ = 1

    pack_slip_id = Identifier(required=True)
    order_id = Identifier(required=True)
    packed_by = String()
    package_count = Integer(required=True)
    packed_at = DateTime(required=True)


@pickpack.event(part_of="PackSlip")
class PackSlipShipped:
    """The packages left the warehouse."""

    __version__ = 1

    pack_slip_id = Identifier(required=True)
    order_id = Identifier(required=True)
    shipped_at = DateTime(required=True)


@pickpack.event(part_of="PackSlip")
class PackSlipCancelled:
    """The pack slip was cancelled before shipping."""

    __version__ = 1

    pack_slip_id = Identifier(required=True)
    order_id = Identifier(required=True)
    previous_status = String(required=True)
    cancelled_at = DateTime(required=True)


@pickpack.event(part_of="PackSlip")
class PackSlipRevised:
    """A draft pack slip was edited before packing started."""

    __version__ = 1

    pack_slip_id = Identifier(required=True)
    order_id = Identifier(required=True)
    items = Text(required=True)  # JSON list of {order_line_id, product_id, quantity}
    item_count = Integer(required=True)
    package_count = Integer(required=True)
    weight = Float()
    revised_at = DateTime(required=True)
