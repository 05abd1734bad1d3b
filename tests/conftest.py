import os
from pathlib import Path

import pytest

# Test layer is decided by the directory a test module lives in
LAYER_MARKERS = {
    "domain": pytest.mark.domain,
    "application": pytest.mark.application,
    "integration": pytest.mark.integration,
    "bdd": pytest.mark.bdd,
}


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Protean config overlay (PROTEAN_ENV) for the test run",
    )


def pytest_sessionstart(session):
    """Select the config overlay and switch off the simulated checkout wait.

    Runs before collection, so settings read at import time already see these
    values. The storefront domain itself is initialized in
    ``tests/storefront/conftest.py``.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("STOREFRONT_CHECKOUT_DELAY", "0")


def pytest_collection_modifyitems(config, items):
    for item in items:
        parts = Path(str(item.fspath)).parts
        for layer, marker in LAYER_MARKERS.items():
            if layer in parts:
                item.add_marker(marker)
                break
