"""Status lifecycles shared by the three fulfillment documents.

Every document moves forward along a single path and can be cancelled from
any status that is not terminal:

    Pick List       DRAFT → ASSIGNED → IN_PROGRESS → COMPLETED
    Pack Slip       DRAFT → PACKING → PACKED → SHIPPED
    Shipping Label  DRAFT → GENERATED → PRINTED → SHIPPED

The end of the path and CANCELLED are terminal. Aggregates assert against
these tables before changing status; the API reads them to offer the next
legal statuses.
"""

from enum import Enum

from protean.exceptions import ValidationError

# Older clients send PENDING for a freshly created document.
_LEGACY_ALIASES = {"PENDING": "DRAFT"}


def normalize_status(value) -> str:
    """Upper-case a status and turn inner whitespace into underscores."""
    if isinstance(value, Enum):
        value = value.value
    return "_".join(str(value or "").strip().upper().split())


class Lifecycle:
    """Forward path plus cancellation for one document type."""

    def __init__(self, statuses: type[Enum], path: list[Enum], cancelled: Enum):
        self.statuses = statuses
        self.path = list(path)
        self.cancelled = cancelled
        self.transitions: dict[Enum, set[Enum]] = {}
        for current, following in zip(self.path, self.path[1:], strict=False):
            self.transitions[current] = {following, cancelled}
        self.transitions[self.path[-1]] = set()
        self.transitions[cancelled] = set()

    @property
    def initial(self) -> Enum:
        return self.path[0]

    def parse(self, value) -> Enum:
        """Turn a wire or enum value into a member of this lifecycle."""
        if isinstance(value, self.statuses):
            return value
        normalized = normalize_status(value)
        members = {member.value: member for member in self.statuses}
        if normalized in members:
            return members[normalized]
        if _LEGACY_ALIASES.get(normalized) in members:
            return members[_LEGACY_ALIASES[normalized]]
        raise ValidationError({"status": [f"Unknown status: {value}"]})

    def is_legal(self, value) -> bool:
        try:
            self.parse(value)
        except ValidationError:
            return False
        return True

    def is_terminal(self, status) -> bool:
        return not self.transitions[self.parse(status)]

    def is_removable(self, status) -> bool:
        """Only drafts and cancelled documents may be deleted."""
        return self.parse(status) in (self.initial, self.cancelled)

    def can_transition(self, current, target) -> bool:
        return self.parse(target) in self.transitions[self.parse(current)]

    def next_statuses(self, current) -> list[Enum]:
        """Forward status first, then CANCELLED; empty for terminal statuses."""
        status = self.parse(current)
        if self.is_terminal(status):
            return []
        following = self.path[self.path.index(status) + 1]
        return [following, self.cancelled]

    def assert_can_transition(self, current, target) -> None:
        current, target = self.parse(current), self.parse(target)
        if target not in self.transitions[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})
