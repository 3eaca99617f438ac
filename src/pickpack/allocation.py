"""Quantity allocation along Order → Pick List → Pack Slip.

Each downstream document may only allocate up to a ceiling taken from its
upstream document:

- a pick list line is bounded by the order line's remaining quantity
  (ordered minus already fulfilled);
- a pack slip line built from a pick list is bounded by what was picked,
  or by the requested pick quantity when nothing has been recorded yet;
- a pack slip line built straight from the order is bounded by the order
  line's remaining quantity.

Ceilings are keyed by order line id. The functions read plain attributes
(``order_lines``, ``order_line_id``, ``quantity``, ``picked_quantity``...)
so they work on wire payloads and aggregates alike.
"""

from collections.abc import Mapping

from protean.exceptions import ValidationError


def remaining_quantity(line) -> int:
    """Ordered minus already fulfilled, never below zero."""
    return max((line.ordered_quantity or 0) - (line.fulfilled_quantity or 0), 0)


def pick_ceilings(order) -> dict[str, int]:
    """Order lines that still have something left to pick."""
    ceilings = {}
    for line in order.order_lines or []:
        remaining = remaining_quantity(line)
        if remaining > 0:
            ceilings[str(line.order_line_id)] = remaining
    return ceilings


def pick_list_ceilings(pick_list) -> dict[str, int]:
    """What a pack slip may take from each line of a pick list."""
    ceilings: dict[str, int] = {}
    for item in pick_list.items or []:
        ceiling = item.picked_quantity or item.quantity
        if ceiling and ceiling > 0:
            key = str(item.order_line_id)
            ceilings[key] = ceilings.get(key, 0) + ceiling
    return ceilings


def pack_ceilings(order, pick_list=None) -> dict[str, int]:
    if pick_list is not None:
        return pick_list_ceilings(pick_list)
    return pick_ceilings(order)


def requested_quantities(items_data) -> dict[str, int]:
    """Sum item quantities per order line; a line may appear more than once."""
    requested: dict[str, int] = {}
    for item in items_data or []:
        key = str(item["order_line_id"])
        requested[key] = requested.get(key, 0) + (item.get("quantity") or 0)
    return requested


def check_allocation(
    ceilings: Mapping[str, int],
    requested: Mapping[str, int],
    empty_message: str = "Please select at least one item",
) -> list[tuple[str, int]]:
    """Validate requested quantities against their ceilings.

    Returns ``(order_line_id, quantity)`` pairs in ceiling order. Raises
    ``ValidationError`` for an empty request, an unknown line, or a
    quantity outside ``1..ceiling``.
    """
    if not requested:
        raise ValidationError({"items": [empty_message]})

    errors = []
    for key, quantity in requested.items():
        key = str(key)
        if key not in ceilings:
            errors.append(f"Order line {key} is not available")
        elif quantity is None or quantity < 1:
            errors.append(f"Quantity for order line {key} must be at least 1")
        elif quantity > ceilings[key]:
            errors.append(f"Quantity {quantity} for order line {key} exceeds the available {ceilings[key]}")
    if errors:
        raise ValidationError({"items": errors})

    requested = {str(key): quantity for key, quantity in requested.items()}
    return [(key, requested[key]) for key in ceilings if key in requested]


class ItemSelection:
    """Per-line quantities chosen in a creation form.

    A line is selected when it has a quantity of at least 1. Setting a line
    to zero or less deselects it.
    """

    def __init__(self, ceilings: Mapping[str, int] | None = None):
        self._ceilings = {str(key): value for key, value in (ceilings or {}).items() if value > 0}
        self._quantities: dict[str, int] = {}

    @property
    def ceilings(self) -> dict[str, int]:
        return dict(self._ceilings)

    @property
    def selected(self) -> dict[str, int]:
        return {key: self._quantities[key] for key in self._ceilings if key in self._quantities}

    def is_empty(self) -> bool:
        return not self._quantities

    def quantity_of(self, key) -> int:
        return self._quantities.get(str(key), 0)

    def _ceiling_for(self, key: str) -> int:
        if key not in self._ceilings:
            raise ValidationError({"items": [f"Order line {key} is not available"]})
        return self._ceilings[key]

    def toggle(self, key) -> None:
        """Select a line at its full ceiling, or deselect it."""
        key = str(key)
        ceiling = self._ceiling_for(key)
        if key in self._quantities:
            del self._quantities[key]
        else:
            self._quantities[key] = ceiling

    def set_quantity(self, key, quantity: int, clamp: bool = True) -> int:
        """Set a line's quantity and return what was stored.

        With ``clamp`` the value is cut down to the ceiling, the way the form
        input behaves; without it an over-allocation is rejected.
        """
        key = str(key)
        ceiling = self._ceiling_for(key)
        if quantity is None or quantity <= 0:
            self._quantities.pop(key, None)
            return 0
        if quantity > ceiling:
            if not clamp:
                raise ValidationError(
                    {"items": [f"Quantity {quantity} for order line {key} exceeds the available {ceiling}"]}
                )
            quantity = ceiling
        self._quantities[key] = quantity
        return quantity

    def select_all(self) -> None:
        self._quantities = dict(self._ceilings)

    def deselect_all(self) -> None:
        self._quantities.clear()
