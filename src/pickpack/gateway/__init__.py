"""Resource gateway abstraction: the create/update requests builders send."""

import os

_gateway_instance = None


def get_gateway():
    """Return the configured resource gateway (singleton).

    Uses FakeResourceGateway by default. Set RESOURCE_GATEWAY=http (with
    PICKPACK_API_URL) to talk to the fulfillment API.
    Requests wait indefinitely unless PICKPACK_HTTP_TIMEOUT sets seconds.
    """
    global _gateway_instance
    if _gateway_instance is None:
        adapter = os.environ.get("RESOURCE_GATEWAY", "fake")
        if adapter == "fake":
            from pickpack.gateway.fake_adapter import FakeResourceGateway

            _gateway_instance = FakeResourceGateway()
        elif adapter == "http":
            from pickpack.gateway.http_adapter import HttpResourceGateway

            timeout = os.environ.get("PICKPACK_HTTP_TIMEOUT")
            _gateway_instance = HttpResourceGateway(
                base_url=os.environ.get("PICKPACK_API_URL", "http://localhost:8000"),
                timeout=float(timeout) if timeout else None,
            )
        else:
            raise ValueError(f"Unknown resource gateway: {adapter}")
    return _gateway_instance


def reset_gateway():
    """Reset the gateway singleton (useful for testing)."""
    global _gateway_instance
    _gateway_instance = None
