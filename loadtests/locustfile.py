"""Storefront Load Testing — Locust entry point.

Usage:
    # Web UI:
    locust -f loadtests/locustfile.py --host http://localhost:8000

    # Headless (CI mode):
    locust -f loadtests/locustfile.py StorefrontUser --headless \
           -u 20 -r 2 -t 120s --host http://localhost:8000 --csv=results/loadtest

Run the API with STOREFRONT_CHECKOUT_DELAY=0 to measure the server rather
than the simulated checkout wait.
"""

import logging
import time

import requests
from locust import events

from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.storefront import StorefrontUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Extracts the API error body so you see "phone: Invalid phone number format"
    instead of just "400".
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Log a marker when load test begins."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Print the storefront health summary when the test ends."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    if not environment.host:
        return
    try:
        resp = requests.get(f"{environment.host}/health", timeout=5)
        body = resp.json()
        print(f"[LOADTEST] Products: {body.get('products')}  Orders: {body.get('orders')}")
        print()
    except requests.RequestException as e:
        print(f"[LOADTEST] Could not fetch health summary: {e}")
