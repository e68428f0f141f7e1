"""Customer aggregate: storefront shoppers with a profile."""

import json
from datetime import UTC, date, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, Date, DateTime, String, Text

from miniworld.domain import miniworld


@miniworld.event(part_of="Customer")
class CustomerRegistered:
    __version__ = 1

    customer_id: String(required=True)
    email: String(required=True)
    name: String(required=True)
    registered_at: DateTime(required=True)


@miniworld.event(part_of="Customer")
class CustomerProfileUpdated:
    __version__ = 1

    customer_id: String(required=True)
    email: String(required=True)


@miniworld.aggregate
class Customer:
    email: String(required=True, max_length=255, unique=True)
    name: String(required=True, max_length=255)
    mobile: String(max_length=20)
    date_of_birth: Date()
    addresses: Text(default="[]")
    is_verified: Boolean(default=False)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @property
    def address_list(self) -> list[dict]:
        try:
            loaded = json.loads(self.addresses or "[]")
        except json.JSONDecodeError:
            return []
        return loaded if isinstance(loaded, list) else []

    @classmethod
    def register(cls, email, name, mobile=None, date_of_birth=None):
        if "@" not in (email or ""):
            raise ValidationError({"email": ["Enter a valid email address"]})

        now = datetime.now(UTC)
        customer = cls(
            email=email.strip().lower(),
            name=name,
            mobile=mobile,
            date_of_birth=date_of_birth,
            created_at=now,
            updated_at=now,
        )
        customer.raise_(
            CustomerRegistered(
                customer_id=str(customer.id),
                email=customer.email,
                name=name,
                registered_at=now,
            )
        )
        return customer

    def update_profile(self, name=None, mobile=None, date_of_birth: date | None = None, addresses=None):
        if name is not None:
            self.name = name
        if mobile is not None:
            self.mobile = mobile
        if date_of_birth is not None:
            self.date_of_birth = date_of_birth
        if addresses is not None:
            if not isinstance(addresses, list):
                raise ValidationError({"addresses": ["Addresses must be a list"]})
            self.addresses = json.dumps(addresses)
        self.updated_at = datetime.now(UTC)
        self.raise_(CustomerProfileUpdated(customer_id=str(self.id), email=self.email))

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "email": self.email,
            "name": self.name,
            "mobile": self.mobile,
            "date_of_birth": self.date_of_birth.isoformat() if self.date_of_birth else None,
            "addresses": self.address_list,
            "is_verified": self.is_verified,
        }
