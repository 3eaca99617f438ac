"""Shared behaviour of the document builders.

A builder holds what a creation dialog holds: the chosen upstream
documents, the item selection, free-form metadata, the last user-visible
``error`` and ``notices`` about master data that could not be loaded.

``submit()`` never raises. It validates locally, sends one create request
through the resource gateway and, on success, closes the builder and
returns the created document. On failure it records the message in
``error`` and keeps every entered value so the user can retry.
"""

import structlog
from protean.exceptions import ValidationError
from pydantic import ValidationError as PayloadError

from pickpack.gateway import get_gateway
from pickpack.shared.errors import ResourceRequestFailed, SourceUnavailable
from pickpack.sources import get_master_data

logger = structlog.get_logger(__name__)

ELIGIBLE_ORDER_STATUSES = frozenset({"CONFIRMED", "PROCESSING", "PARTIALLY_FULFILLED"})


def first_message(exc: ValidationError) -> str:
    messages = exc.messages if isinstance(exc.messages, dict) else {"": exc.messages}
    for field_messages in messages.values():
        if isinstance(field_messages, list) and field_messages:
            return str(field_messages[0])
        if field_messages:
            return str(field_messages)
    return str(exc)


def is_eligible(order) -> bool:
    """Only confirmed or partially processed orders can be fulfilled."""
    return (order.status or "").upper() in ELIGIBLE_ORDER_STATUSES


class DocumentBuilder:
    document_name: str = "document"
    path: str = ""
    response_model = None

    def __init__(self, master_data=None, gateway=None):
        self.master_data = master_data or get_master_data()
        self.gateway = gateway or get_gateway()
        self.is_open = False
        self.created = None
        self._reset()

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def _reset(self) -> None:
        self.error: str | None = None
        self.notices: list[str] = []
        self.orders: list = []
        self.order = None

    def open(self) -> None:
        """Load master data and start with an empty form."""
        self._reset()
        self.created = None
        self.orders = [o for o in self._load(self.master_data.list_orders, "orders") if is_eligible(o)]
        self.is_open = True

    def close(self) -> None:
        """Discard everything entered."""
        self._reset()
        self.is_open = False

    def _load(self, loader, what: str, *args) -> list:
        try:
            rows = loader(*args)
        except SourceUnavailable as exc:
            logger.warning("Master data unavailable", document=self.document_name, source=what, error=exc.message)
            rows = []
        if not rows:
            self.notices.append(f"No {what} available")
        return rows

    def _find_order(self, order_id):
        order = next((o for o in self.orders if o.id == str(order_id)), None)
        if order is None:
            raise ValidationError({"order_id": ["Order is not available"]})
        return order

    # -------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------
    def build_request(self) -> dict:
        """Validate the form and return the create request body."""
        raise NotImplementedError

    def submit(self):
        self.error = None
        try:
            body = self.build_request()
        except ValidationError as exc:
            self.error = first_message(exc)
            logger.info("Submission blocked", document=self.document_name, error=self.error)
            return None

        fallback = f"Failed to create {self.document_name}"
        try:
            payload = self.gateway.request("POST", self.path, body)
            created = self.response_model.model_validate(payload)
        except ResourceRequestFailed as exc:
            self.error = exc.message or fallback
            logger.warning("Creation failed", document=self.document_name, error=self.error)
            return None
        except PayloadError as exc:
            self.error = fallback
            logger.warning("Creation response rejected", document=self.document_name, error=str(exc))
            return None

        logger.info("Document created", document=self.document_name, id=created.id)
        self.close()
        self.created = created
        return created
