"""Identity API package."""

from miniworld.identity.api.routes import admin_user_router, customer_router

__all__ = ["customer_router", "admin_user_router"]
