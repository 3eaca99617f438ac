"""Human-readable document numbers assigned when a document is created."""

from datetime import UTC, datetime
from uuid import uuid4

PICK_LIST_PREFIX = "PL"
PACK_SLIP_PREFIX = "PS"
SHIPPING_LABEL_PREFIX = "SL"


def document_number(prefix: str, now: datetime | None = None) -> str:
    """Return a number like ``PL-20260117-3F9A1C``."""
    now = now or datetime.now(UTC)
    return f"{prefix}-{now:%Y%m%d}-{uuid4().hex[:6].upper()}"
