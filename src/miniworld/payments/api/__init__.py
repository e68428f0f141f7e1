"""Payments API package."""

from miniworld.payments.api.routes import admin_payment_router, admin_wallet_router, payment_router

__all__ = ["payment_router", "admin_payment_router", "admin_wallet_router"]
