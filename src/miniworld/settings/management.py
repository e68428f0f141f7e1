"""Store settings updates: commands and handler.

Every update is an upsert keyed by ``setting_key``.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, String
from protean.utils.globals import current_domain

from miniworld.domain import miniworld
from miniworld.settings.site_setting import SettingKey, SiteSetting
from miniworld.utils.logging import get_logger

logger = get_logger(__name__)


@miniworld.command(part_of="SiteSetting")
class UpdateTaxRate:
    rate: Float(required=True)
    description: String(max_length=255)


@miniworld.command(part_of="SiteSetting")
class UpdateShippingRate:
    rate: Float(required=True)
    free_shipping_threshold: Float(required=True)
    description: String(max_length=255)


@miniworld.command(part_of="SiteSetting")
class UpdateCurrency:
    code: String(required=True, max_length=3)
    symbol: String(required=True, max_length=10)
    name: String(required=True, max_length=100)


def _upsert(key: SettingKey, value: dict, description: str):
    repo = current_domain.repository_for(SiteSetting)
    setting = repo._dao.query.filter(setting_key=key.value).all().first
    if setting is None:
        setting = SiteSetting.create(key.value, value, description=description)
    else:
        setting.change_value(value, description=description)
    repo.add(setting)
    logger.info("setting_updated", setting_key=key.value, value=value)
    return str(setting.id)


@miniworld.command_handler(part_of=SiteSetting)
class ManageSettingsHandler:
    @handle(UpdateTaxRate)
    def update_tax_rate(self, command):
        if not 0 <= command.rate <= 1:
            raise ValidationError({"rate": ["Tax rate must be between 0 and 1"]})
        description = command.description or f"Tax rate ({command.rate * 100:g}%)"
        return _upsert(
            SettingKey.TAX_RATE,
            {"rate": command.rate, "description": description},
            "Default tax rate applied to orders",
        )

    @handle(UpdateShippingRate)
    def update_shipping_rate(self, command):
        if command.rate < 0:
            raise ValidationError({"rate": ["Shipping rate cannot be negative"]})
        if command.free_shipping_threshold < 0:
            raise ValidationError({"free_shipping_threshold": ["Free shipping threshold cannot be negative"]})
        description = command.description or (
            f"PKR {command.rate:g} shipping, free over PKR {command.free_shipping_threshold:,.0f}"
        )
        return _upsert(
            SettingKey.SHIPPING_RATE,
            {
                "rate": command.rate,
                "free_shipping_threshold": command.free_shipping_threshold,
                "description": description,
            },
            "Shipping rates and free shipping threshold",
        )

    @handle(UpdateCurrency)
    def update_currency(self, command):
        return _upsert(
            SettingKey.CURRENCY,
            {"code": command.code.upper(), "symbol": command.symbol, "name": command.name},
            "Store currency",
        )
