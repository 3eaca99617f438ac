"""Fake resource gateway: echoes created resources back with server-assigned fields.

Configurable failure, optionally with a server message, for exercising the
builders' error path.
"""

from datetime import UTC, datetime
from uuid import uuid4

from pickpack.gateway.port import ResourceGateway
from pickpack.numbering import PACK_SLIP_PREFIX, PICK_LIST_PREFIX, SHIPPING_LABEL_PREFIX, document_number
from pickpack.shared.errors import ResourceRequestFailed

_NUMBER_FIELDS = {
    "/pick-lists": ("pickListNumber", PICK_LIST_PREFIX),
    "/pack-slips": ("packSlipNumber", PACK_SLIP_PREFIX),
    "/shipping-labels": ("labelNumber", SHIPPING_LABEL_PREFIX),
}


class FakeResourceGateway(ResourceGateway):
    """Fake gateway that always succeeds by default."""

    def __init__(self):
        self.should_succeed = True
        self.failure_message: str | None = None
        self.requests: list[tuple[str, str, dict | None]] = []

    def configure(self, should_succeed: bool = True, failure_message: str | None = None):
        """Configure the fake gateway behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_message = failure_message

    def request(self, method, path, body=None):
        self.requests.append((method.upper(), path, body))
        if not self.should_succeed:
            raise ResourceRequestFailed(self.failure_message, status_code=500 if self.failure_message is None else 400)

        resource = dict(body or {})
        if method.upper() == "POST" and path in _NUMBER_FIELDS:
            number_field, prefix = _NUMBER_FIELDS[path]
            resource.setdefault("id", str(uuid4()))
            resource[number_field] = document_number(prefix)
            resource["status"] = "DRAFT"
            resource["createdAt"] = datetime.now(UTC).isoformat()
        return resource
