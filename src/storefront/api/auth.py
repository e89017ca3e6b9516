"""Request authentication.

The storefront trusts an upstream gateway to authenticate callers and pass
the principal id in a request header.
"""

from fastapi import Request

from storefront import settings
from storefront.errors import Forbidden, Unauthenticated
from storefront.utils.logging import bind_request_context


class HeaderAuthProvider:
    """Resolve the calling principal from a request header."""

    def __init__(self, header=None):
        self.header = header or settings.PRINCIPAL_HEADER

    def __call__(self, request: Request) -> str:
        principal = (request.headers.get(self.header) or "").strip()
        if not principal:
            raise Unauthenticated("Authentication required")
        bind_request_context(principal=principal)
        return principal


current_principal = HeaderAuthProvider()


def require_admin(principal: str) -> str:
    if principal not in settings.ADMIN_IDS:
        raise Forbidden("Admin access required")
    return principal
