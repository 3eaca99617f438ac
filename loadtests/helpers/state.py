"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared
between users. State tracks document IDs returned by creation endpoints so
follow-up operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class PipelineState:
    """One order travelling through pick list, pack slip and shipping label."""

    order_id: str | None = None
    warehouse_id: str | None = None
    lines: list[dict] = field(default_factory=list)
    pick_list_id: str | None = None
    pick_item_ids: list[str] = field(default_factory=list)
    picked: dict[str, int] = field(default_factory=dict)
    pack_slip_id: str | None = None
    packed: dict[str, int] = field(default_factory=dict)
    package_count: int = 1
    weight: float | None = None
    shipping_label_id: str | None = None
    tracking_number: str | None = None
