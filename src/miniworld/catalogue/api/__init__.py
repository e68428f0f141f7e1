"""Catalogue API package."""

from miniworld.catalogue.api.routes import admin_catalogue_router, category_router, product_router

__all__ = ["category_router", "product_router", "admin_catalogue_router"]
