"""Storefront Load Testing: Locust entry point.

Usage:
    # Buyers and sellers together (web UI):
    locust -f loadtests/locustfile.py BuyerUser SellerUser

    # Oversell check: many buyers racing for one unit
    locust -f loadtests/locustfile.py LastUnitRushUser --headless -u 50 -r 50 -t 30s

    # Headless (CI mode):
    locust -f loadtests/locustfile.py BuyerUser SellerUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

from locust import events

from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.storefront import BuyerUser, LastUnitRushUser, SellerUser  # noqa: F401

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
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print()


@events.test_stop.add_listener
def on_test_stop(**_kwargs):
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
