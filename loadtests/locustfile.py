"""PickPack Load Testing - Locust entry point.

Discovers all user classes from the scenarios package.
Run specific scenarios with Locust's class selection.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Document pipeline only:
    locust -f loadtests/locustfile.py PickPackUser

    # Orders come from PICKPACK_API_URL (the service's order source;
    # defaults to the target host):
    PICKPACK_API_URL=http://orders:8000 locust -f loadtests/locustfile.py

    # Headless (CI mode):
    locust -f loadtests/locustfile.py PickPackUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import os
import time

import requests
from locust import events

from loadtests.data_generators import load_open_orders
from loadtests.helpers.response import extract_error_detail

# Import all user classes so Locust discovers them
from loadtests.scenarios.dashboard import DashboardUser  # noqa: F401
from loadtests.scenarios.pipeline import PickPackUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Extracts the API error body so you see "Cannot transition from DRAFT to
    COMPLETED" instead of just "400".
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Log a marker and load the open orders journeys draw from."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    source = os.environ.get("PICKPACK_API_URL", environment.host)
    try:
        found = load_open_orders(source)
        print(f"[LOADTEST] Open orders from {source}: {found}")
    except requests.RequestException as e:
        print(f"[LOADTEST] Could not load open orders from {source}: {e}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Print the fulfillment summary the run left behind."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    try:
        summary = requests.get(f"{environment.host}/fulfillment/summary", timeout=5).json()
        print("\n[LOADTEST] Final document counts:")
        for collection, counts in summary.items():
            print(f"  {collection}: " + ", ".join(f"{k}={v}" for k, v in counts.items()))
        print()
    except Exception as e:
        print(f"[LOADTEST] Could not fetch fulfillment summary: {e}\n")
