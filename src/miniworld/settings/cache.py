"""Process-local settings cache.

Settings are read from the repository the first time they are needed and
then served from memory. Only an explicit ``refresh()`` reloads them, so
an update made by another process stays invisible here until then.
"""

from collections.abc import Callable

from protean.utils.globals import current_domain

from miniworld.settings.pricing import (
    DEFAULT_SETTINGS,
    CurrencySettings,
    ShippingSettings,
    StoreSettings,
    TaxSettings,
)
from miniworld.settings.site_setting import SettingKey, SiteSetting
from miniworld.utils.logging import get_logger

logger = get_logger(__name__)


def load_store_settings() -> StoreSettings:
    """Read every stored setting, falling back to defaults for missing keys."""
    records = current_domain.repository_for(SiteSetting)._dao.query.all().items
    by_key = {record.setting_key: record.value for record in records}

    tax = DEFAULT_SETTINGS.tax
    shipping = DEFAULT_SETTINGS.shipping
    currency = DEFAULT_SETTINGS.currency

    if SettingKey.TAX_RATE.value in by_key:
        value = by_key[SettingKey.TAX_RATE.value]
        tax = TaxSettings(
            rate=float(value.get("rate", tax.rate)),
            description=value.get("description", tax.description),
        )
    if SettingKey.SHIPPING_RATE.value in by_key:
        value = by_key[SettingKey.SHIPPING_RATE.value]
        shipping = ShippingSettings(
            rate=float(value.get("rate", shipping.rate)),
            free_shipping_threshold=float(value.get("free_shipping_threshold", shipping.free_shipping_threshold)),
            description=value.get("description", shipping.description),
        )
    if SettingKey.CURRENCY.value in by_key:
        value = by_key[SettingKey.CURRENCY.value]
        currency = CurrencySettings(
            code=value.get("code", currency.code),
            symbol=value.get("symbol", currency.symbol),
            name=value.get("name", currency.name),
        )

    return StoreSettings(tax=tax, shipping=shipping, currency=currency)


class SettingsCache:
    def __init__(self, loader: Callable[[], StoreSettings] = load_store_settings):
        self._loader = loader
        self._settings: StoreSettings | None = None

    @property
    def loaded(self) -> bool:
        return self._settings is not None

    def get(self) -> StoreSettings:
        if self._settings is None:
            self.refresh()
        return self._settings

    def refresh(self) -> StoreSettings:
        self._settings = self._loader()
        logger.debug("settings_loaded", settings=self._settings.to_dict())
        return self._settings

    def clear(self) -> None:
        self._settings = None
