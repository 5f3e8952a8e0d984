"""Storefront order service — FastAPI application.

Processes checkout and order commands synchronously via HTTP.
Each request is wrapped in the ordering domain context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ordering.domain import logger, ordering
from ordering.utils.logging import add_context, clear_context

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied (memory by default,
# PostgreSQL under "production").
ordering.init()

if os.environ.get("SEED_CATALOGUE") == "1":
    from ordering.product.registration import seed_catalogue

    with ordering.domain_context():
        seed_catalogue()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/checkout": ordering,
    "/orders": ordering,
    "/admin": ordering,
    "/products": ordering,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront Order Service",
    description="Shirt storefront — checkout settlement and order lifecycle",
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
    """Push the correct Protean domain context for each request."""
    domain = _resolve_domain(request.url.path)
    clear_context()
    add_context(
        method=request.method,
        path=request.url.path,
        customer_id=request.headers.get("x-customer-id", "guest"),
    )
    if domain is not None:
        with domain.domain_context():
            response = await call_next(request)
        return response
    # No domain match: health check, docs
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from ordering.api import (  # noqa: E402
    admin_router,
    analytics_router,
    checkout_router,
    order_router,
    product_router,
    register_error_handlers,
)

app.include_router(checkout_router)
app.include_router(order_router)
app.include_router(admin_router)
app.include_router(analytics_router)
app.include_router(product_router)
register_error_handlers(app)

logger.info("Order service ready", routes=sorted(_ROUTE_DOMAIN_MAP))


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "ordering": {"name": ordering.name},
            },
        }
    )
