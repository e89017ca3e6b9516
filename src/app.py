"""Storefront FastAPI application.

Processes commands synchronously via HTTP.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# PROTEAN_ENV selects the configuration overlay applied at init
from storefront.api import create_app
from storefront.domain import storefront

storefront.init()

app = create_app()
