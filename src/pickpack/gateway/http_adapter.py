"""HTTP resource gateway: one request per call, no retries.

Any requests-compatible session works, including a FastAPI ``TestClient``.
"""

import requests
import structlog

from pickpack.gateway.port import ResourceGateway
from pickpack.shared.errors import ResourceRequestFailed

logger = structlog.get_logger(__name__)

_MESSAGE_KEYS = ("message", "error", "detail")


def server_message(payload) -> str | None:
    """Pull a human-readable message out of an error body."""
    if not isinstance(payload, dict):
        return None
    for key in _MESSAGE_KEYS:
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
        if isinstance(value, dict) and value:
            # Field errors: {"items": ["..."], ...}
            messages = [m for msgs in value.values() for m in (msgs if isinstance(msgs, list) else [msgs])]
            if messages:
                return "; ".join(str(m) for m in messages)
        if isinstance(value, list) and value:
            return "; ".join(str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in value)
    return None


class HttpResourceGateway(ResourceGateway):
    def __init__(self, base_url: str = "", timeout: float | None = None, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def request(self, method, path, body=None):
        kwargs = {"json": body}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        try:
            response = self.session.request(method.upper(), f"{self.base_url}{path}", **kwargs)
        except requests.RequestException as exc:
            logger.warning("Resource request failed", method=method, path=path, error=str(exc))
            raise ResourceRequestFailed() from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.status_code >= 400:
            message = server_message(payload)
            logger.warning(
                "Resource request rejected",
                method=method,
                path=path,
                status_code=response.status_code,
                message=message,
            )
            raise ResourceRequestFailed(message, status_code=response.status_code)

        if not isinstance(payload, dict):
            raise ResourceRequestFailed(status_code=response.status_code)
        return payload
