"""Storefront HTTP API package."""

from storefront.api.app import create_app
from storefront.api.errors import install_error_handlers

__all__ = ["create_app", "install_error_handlers"]
