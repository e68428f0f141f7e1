"""AdminUser aggregate: back-office staff accounts.

Credentials are held by the external auth provider; this record carries
only the role and lifecycle flags the storefront needs.
"""

import secrets
import string
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String

from miniworld.domain import miniworld

TEMP_PASSWORD_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "!@#$%^&*"
TEMP_PASSWORD_LENGTH = 12


class AdminRole(Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"


MANAGER_ROLES = frozenset({AdminRole.SUPER_ADMIN.value, AdminRole.ADMIN.value})


def generate_temp_password(length: int = TEMP_PASSWORD_LENGTH) -> str:
    return "".join(secrets.choice(TEMP_PASSWORD_ALPHABET) for _ in range(length))


@miniworld.event(part_of="AdminUser")
class AdminUserCreated:
    __version__ = 1

    admin_id: Identifier(required=True)
    email: String(required=True)
    role: String(required=True)
    created_by: Identifier()


@miniworld.event(part_of="AdminUser")
class AdminUserDeactivated:
    __version__ = 1

    admin_id: Identifier(required=True)
    email: String(required=True)


@miniworld.event(part_of="AdminUser")
class AdminPasswordChanged:
    __version__ = 1

    admin_id: Identifier(required=True)
    changed_at: DateTime(required=True)


@miniworld.aggregate
class AdminUser:
    email: String(required=True, max_length=255, unique=True)
    name: String(required=True, max_length=255)
    mobile: String(max_length=20)
    role: String(choices=AdminRole, default=AdminRole.ADMIN.value)
    is_first_login: Boolean(default=True)
    is_active: Boolean(default=True)
    created_by: Identifier()
    last_login: DateTime()
    created_at: DateTime(default=lambda: datetime.now(UTC))

    @property
    def can_manage_admins(self) -> bool:
        return self.is_active and self.role in MANAGER_ROLES

    @classmethod
    def create(cls, email, name, role=AdminRole.ADMIN.value, mobile=None, created_by=None, is_first_login=True):
        admin = cls(
            email=email.strip().lower(),
            name=name,
            mobile=mobile,
            role=role,
            is_first_login=is_first_login,
            created_by=created_by,
        )
        admin.raise_(AdminUserCreated(admin_id=admin.id, email=admin.email, role=role, created_by=created_by))
        return admin

    def update(self, name=None, mobile=None, role=None):
        if name is not None:
            self.name = name
        if mobile is not None:
            self.mobile = mobile
        if role is not None:
            self.role = role

    def deactivate(self):
        if not self.is_active:
            raise ValidationError({"is_active": ["Admin user is already inactive"]})
        self.is_active = False
        self.raise_(AdminUserDeactivated(admin_id=self.id, email=self.email))

    def complete_password_change(self):
        now = datetime.now(UTC)
        self.is_first_login = False
        self.last_login = now
        self.raise_(AdminPasswordChanged(admin_id=self.id, changed_at=now))

    def record_login(self):
        self.last_login = datetime.now(UTC)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "email": self.email,
            "name": self.name,
            "mobile": self.mobile,
            "role": self.role,
            "is_first_login": self.is_first_login,
            "is_active": self.is_active,
            "created_by": str(self.created_by) if self.created_by else None,
            "last_login": self.last_login.isoformat() if self.last_login else None,
        }
