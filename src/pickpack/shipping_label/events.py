"""Shipping label domain events: immutable facts about shipping label state changes."""

from protean.fields import DateTime, Float, Identifier, String

from pickpack.domain import pickpack


@pickpack.event(part_of="ShippingLabel")
class ShippingLabelCreated:
    """A shipping label was drafted for an order."""

    __version__ = 1

    shipping_label_id = Identifier(required=True)
    label_number = String(required=True)
    order_id = Identifier(required=True)
    pack_slip_id = String()
    carrier = String(required=True)
    service_type = String()
    tracking_number = String()
    to_country = String(required=True)
    weight = Float()
    created_at = DateTime(required=True)


@pickpack.event(part_of="ShippingLabel")
class ShippingLabelGenerated:
    """The carrier produced the label document."""

    __version__ = 1

    shipping_label_id = Identifier(required=True)
    label_url = String()
    generated_at = DateTime(required=True)


@pickpack.event(part_of="ShippingLabel")
class ShippingLabelPrinted:
    __version__ = 1

    shipping_label_id = Identifier(required=True)
    printed_at = DateTime(required=True)


@pickpack.event(part_of="ShippingLabel")
class ShippingLabelShipped:
    """The labelled package was handed to the carrier."""

    __version__ = 1

    shipping_label_id = Identifier(required=True)
    order_id = Identifier(required=True)
    carrier = String(required=True)
    tracking_number = String()
    shipped_at = DateTime(required=True)


@pickpack.event(part_of="ShippingLabel")
class ShippingLabelCancelled:
    """The label was voided before shipping."""

    __version__ = 1

    shipping_label_id = Identifier(required=True)
    order_id = Identifier(required=True)
    previous_status = String(required=True)
    cancelled_at = DateTime(required=True)


@pickpack.event(part_of="ShippingLabel")
class ShippingLabelRevised:
    """A draft shipping label was edited before the carrier generated it."""

    __version__ = 1

    shipping_label_id = Identifier(required=True)
    order_id = Identifier(required=True)
    carrier = String(required=True)
    to_country = String(required=True)
    weight = Float()
    revised_at = DateTime(required=True)
