"""Master data adapter abstraction: orders, warehouses and existing documents."""

import os

_master_data_instance = None


def get_master_data():
    """Return the configured master data adapter (singleton).

    Uses FakeMasterData by default. Set MASTER_DATA_ADAPTER=http (with
    PICKPACK_API_URL) to read from the fulfillment API.
    Requests wait indefinitely unless PICKPACK_HTTP_TIMEOUT sets seconds.
    """
    global _master_data_instance
    if _master_data_instance is None:
        adapter = os.environ.get("MASTER_DATA_ADAPTER", "fake")
        if adapter == "fake":
            from pickpack.sources.fake_adapter import FakeMasterData

            _master_data_instance = FakeMasterData()
        elif adapter == "http":
            from pickpack.sources.http_adapter import HttpMasterData

            timeout = os.environ.get("PICKPACK_HTTP_TIMEOUT")
            _master_data_instance = HttpMasterData(
                base_url=os.environ.get("PICKPACK_API_URL", "http://localhost:8000"),
                timeout=float(timeout) if timeout else None,
            )
        else:
            raise ValueError(f"Unknown master data adapter: {adapter}")
    return _master_data_instance


def reset_master_data():
    """Reset the master data singleton (useful for testing)."""
    global _master_data_instance
    _master_data_instance = None
