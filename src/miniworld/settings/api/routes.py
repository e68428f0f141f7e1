"""FastAPI endpoints for reading and changing the store settings.

Every write refreshes the installed settings cache so subsequent
checkouts price with the new values.
"""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from miniworld import services
from miniworld.identity.auth.dependencies import require_admin
from miniworld.settings.api.schemas import (
    UpdateCurrencyRequest,
    UpdateShippingRateRequest,
    UpdateTaxRateRequest,
)
from miniworld.settings.management import UpdateCurrency, UpdateShippingRate, UpdateTaxRate

settings_router = APIRouter(prefix="/settings", tags=["settings"])
admin_settings_router = APIRouter(
    prefix="/admin/settings", tags=["admin-settings"], dependencies=[Depends(require_admin)]
)


def _refreshed() -> dict:
    return services.settings_cache().refresh().to_dict()


@settings_router.get("")
async def store_settings() -> dict:
    return services.settings_cache().get().to_dict()


@admin_settings_router.get("")
async def admin_store_settings() -> dict:
    return _refreshed()


@admin_settings_router.put("/tax")
async def update_tax_rate(body: UpdateTaxRateRequest) -> dict:
    current_domain.process(UpdateTaxRate(rate=body.rate, description=body.description), asynchronous=False)
    return _refreshed()


@admin_settings_router.put("/shipping")
async def update_shipping_rate(body: UpdateShippingRateRequest) -> dict:
    command = UpdateShippingRate(
        rate=body.rate,
        free_shipping_threshold=body.free_shipping_threshold,
        description=body.description,
    )
    current_domain.process(command, asynchronous=False)
    return _refreshed()


@admin_settings_router.put("/currency")
async def update_currency(body: UpdateCurrencyRequest) -> dict:
    command = UpdateCurrency(code=body.code, symbol=body.symbol, name=body.name)
    current_domain.process(command, asynchronous=False)
    return _refreshed()
