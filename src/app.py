"""MiniWorld storefront FastAPI application.

Processes commands synchronously via HTTP. Every request runs inside the
miniworld domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → event_processing = "sync"  (handlers fire in UoW)
#   - "production" → event_processing = "async" (handlers fire via Engine)
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from miniworld.bootstrap import install_services
from miniworld.domain import miniworld
from miniworld.utils.logging import add_context, clear_context, configure_logging

configure_logging()
miniworld.init()
config = install_services()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="MiniWorld API",
    description="Baby-products storefront: catalogue, cart, checkout, orders and back office",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the miniworld domain context for each request."""
    add_context(method=request.method, path=request.url.path)
    try:
        with miniworld.domain_context():
            response = await call_next(request)
    finally:
        clear_context()
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from miniworld.catalogue.api import admin_catalogue_router, category_router, product_router  # noqa: E402
from miniworld.identity.api import admin_user_router, customer_router  # noqa: E402
from miniworld.notifications.api import admin_communications_router, newsletter_router  # noqa: E402
from miniworld.ordering.api import admin_order_router, cart_router, checkout_router, order_router  # noqa: E402
from miniworld.payments.api import admin_payment_router, admin_wallet_router, payment_router  # noqa: E402
from miniworld.settings.api import admin_settings_router, settings_router  # noqa: E402

for router in (
    category_router,
    product_router,
    cart_router,
    checkout_router,
    order_router,
    payment_router,
    customer_router,
    newsletter_router,
    settings_router,
    admin_catalogue_router,
    admin_order_router,
    admin_settings_router,
    admin_payment_router,
    admin_wallet_router,
    admin_user_router,
    admin_communications_router,
):
    app.include_router(router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domain": miniworld.name,
            "environment": config.environment,
            "jazzcash_sandbox": config.jazzcash.is_sandbox,
        }
    )
