"""Storefront Load Testing — Locust entry point.

Discovers all user classes from the scenarios package.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py --host http://localhost:8000

    # Purchase journey only:
    locust -f loadtests/locustfile.py PurchaseUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py PurchaseUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.browsing import BrowsingUser  # noqa: F401
from loadtests.scenarios.purchase import PurchaseUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Check the target is up and log a start marker."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    if environment.host:
        try:
            resp = requests.get(f"{environment.host}/health", timeout=5)
            print(f"[LOADTEST] Health check: {resp.status_code} {resp.text}")
        except requests.RequestException as e:
            print(f"[LOADTEST] Health check failed: {e}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Sweep checkouts abandoned mid-run and log a stop marker."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    if environment.host:
        try:
            resp = requests.post(f"{environment.host}/checkouts/maintenance/cleanup-expired", timeout=10)
            print(f"[LOADTEST] Expired checkout sweep: {resp.json().get('message')}")
        except (requests.RequestException, ValueError) as e:
            print(f"[LOADTEST] Could not run checkout sweep: {e}")
    print()
