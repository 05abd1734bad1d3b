"""Storefront FastAPI application.

Single-session web server over the storefront domain. The session (catalogue,
cart and order store) lives in process memory for as long as the server runs.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay; STOREFRONT_* variables configure
# the session (see storefront/config.py).
from storefront.api import create_app  # noqa: E402
from storefront.domain import storefront  # noqa: E402

storefront.init()

app = create_app()
