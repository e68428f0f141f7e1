"""SiteSetting aggregate: one key/value record per store setting."""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from miniworld.domain import miniworld


class SettingKey(Enum):
    TAX_RATE = "tax_rate"
    SHIPPING_RATE = "shipping_rate"
    CURRENCY = "currency"


@miniworld.event(part_of="SiteSetting")
class SiteSettingUpdated:
    __version__ = 1

    setting_id: Identifier(required=True)
    setting_key: String(required=True)
    setting_value: Text(required=True)
    updated_at: DateTime(required=True)


@miniworld.aggregate
class SiteSetting:
    setting_key: String(required=True, choices=SettingKey, unique=True)
    setting_value: Text(required=True)
    description: String(max_length=255)
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @property
    def value(self) -> dict:
        try:
            loaded = json.loads(self.setting_value)
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"setting_value": ["Setting value must be valid JSON"]}) from None
        if not isinstance(loaded, dict):
            raise ValidationError({"setting_value": ["Setting value must be a JSON object"]})
        return loaded

    @classmethod
    def create(cls, setting_key, value: dict, description=None):
        setting = cls(
            setting_key=setting_key,
            setting_value=json.dumps(value),
            description=description,
        )
        setting._record_update()
        return setting

    def change_value(self, value: dict, description=None):
        self.setting_value = json.dumps(value)
        if description is not None:
            self.description = description
        self.updated_at = datetime.now(UTC)
        self._record_update()

    def _record_update(self):
        self.raise_(
            SiteSettingUpdated(
                setting_id=self.id,
                setting_key=self.setting_key,
                setting_value=self.setting_value,
                updated_at=self.updated_at,
            )
        )
