"""Notifications API package."""

from miniworld.notifications.api.routes import admin_communications_router, newsletter_router

__all__ = ["newsletter_router", "admin_communications_router"]
