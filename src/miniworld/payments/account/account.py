"""PaymentAccount aggregate: a merchant receiving account shown at checkout.

Gateway secrets never live on this record; they come from configuration.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, Text

from miniworld.domain import miniworld


class PaymentMethodType(Enum):
    BANK_TRANSFER = "bank_transfer"
    JAZZCASH = "jazzcash"
    EASYPAISA = "easypaisa"
    OTHER = "other"


_WALLET_TYPES = {PaymentMethodType.JAZZCASH.value, PaymentMethodType.EASYPAISA.value}

_EDITABLE_FIELDS = (
    "account_name",
    "account_number",
    "bank_name",
    "payment_method_type",
    "routing_number",
    "swift_code",
    "iban",
    "mobile_number",
    "merchant_id",
    "branch_code",
    "description",
)


@miniworld.event(part_of="PaymentAccount")
class PaymentAccountStatusToggled:
    __version__ = 1

    account_id: String(required=True)
    is_active: Boolean(required=True)


@miniworld.aggregate
class PaymentAccount:
    account_name: String(required=True, max_length=255)
    account_number: String(required=True, max_length=100)
    bank_name: String(required=True, max_length=255)
    payment_method_type: String(choices=PaymentMethodType, default=PaymentMethodType.BANK_TRANSFER.value)
    routing_number: String(max_length=50)
    swift_code: String(max_length=20)
    iban: String(max_length=50)
    mobile_number: String(max_length=20)
    merchant_id: String(max_length=100)
    branch_code: String(max_length=20)
    description: Text()
    is_active: Boolean(default=True)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @property
    def is_wallet(self) -> bool:
        return self.payment_method_type in _WALLET_TYPES

    def update(self, **changes):
        unknown = set(changes) - set(_EDITABLE_FIELDS)
        if unknown:
            raise ValidationError({"account": [f"Cannot update fields: {', '.join(sorted(unknown))}"]})

        for field_name, value in changes.items():
            if value is not None:
                setattr(self, field_name, value)
        self.updated_at = datetime.now(UTC)

    def toggle_active(self):
        self.is_active = not self.is_active
        self.updated_at = datetime.now(UTC)
        self.raise_(PaymentAccountStatusToggled(account_id=str(self.id), is_active=self.is_active))

    def to_dict(self) -> dict:
        data = {"id": str(self.id)}
        data.update({name: getattr(self, name) for name in _EDITABLE_FIELDS})
        data["is_active"] = self.is_active
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data
