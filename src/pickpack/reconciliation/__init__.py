"""Reconciliation adapter abstraction: where created documents report back upstream.

Creating a document never changes the quantities of the documents or order
it was built from. Whether that write-back belongs to this service or to the
order system is undecided, so it is routed through a port. The default
adapter only logs.
"""

import os

_reconciler_instance = None


def get_reconciler():
    """Return the configured reconciliation adapter (singleton).

    Uses LoggingReconciler by default. Select another one via the
    RECONCILIATION_ADAPTER environment variable.
    """
    global _reconciler_instance
    if _reconciler_instance is None:
        adapter = os.environ.get("RECONCILIATION_ADAPTER", "log")
        if adapter == "log":
            from pickpack.reconciliation.logging_adapter import LoggingReconciler

            _reconciler_instance = LoggingReconciler()
        elif adapter == "fake":
            from pickpack.reconciliation.fake_adapter import FakeReconciler

            _reconciler_instance = FakeReconciler()
        else:
            raise ValueError(f"Unknown reconciliation adapter: {adapter}")
    return _reconciler_instance


def reset_reconciler():
    """Reset the reconciler singleton (useful for testing)."""
    global _reconciler_instance
    _reconciler_instance = None
