"""FastAPI application factory for the storefront."""

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api.errors import install_error_handlers
from storefront.api.routes import admin_router, buyer_router, cart_router, order_router, seller_router
from storefront.domain import storefront
from storefront.utils.logging import bind_request_context, clear_request_context


def create_app() -> FastAPI:
    """Build the API. The storefront domain must already be initialized."""
    app = FastAPI(
        title="Storefront API",
        description="Multi-seller storefront: carts, cash-on-delivery checkout and seller fulfillment",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context and a per-request log context."""
        clear_request_context()
        bind_request_context(
            request_id=request.headers.get("X-Request-Id") or str(uuid4()),
            method=request.method,
            path=request.url.path,
        )
        try:
            with storefront.domain_context():
                return await call_next(request)
        finally:
            clear_request_context()

    for router in (buyer_router, cart_router, order_router, seller_router, admin_router):
        app.include_router(router)

    install_error_handlers(app)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    return app
