"""Store settings API package."""

from miniworld.settings.api.routes import admin_settings_router, settings_router

__all__ = ["settings_router", "admin_settings_router"]
