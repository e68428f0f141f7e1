"""Role objects built from an authenticated user and the local records."""

from dataclasses import dataclass

from miniworld.identity.admin.admin_user import MANAGER_ROLES, AdminUser
from miniworld.identity.admin.management import find_admin_by_email
from miniworld.identity.auth.provider import AuthenticatedUser
from miniworld.identity.customer.customer import Customer
from miniworld.identity.customer.registration import find_customer_by_email


@dataclass(frozen=True)
class AdminSession:
    admin_id: str
    email: str
    name: str
    role: str
    is_first_login: bool

    @property
    def can_manage_admins(self) -> bool:
        return self.role in MANAGER_ROLES

    @classmethod
    def from_record(cls, admin: AdminUser) -> "AdminSession":
        return cls(
            admin_id=str(admin.id),
            email=admin.email,
            name=admin.name,
            role=admin.role,
            is_first_login=admin.is_first_login,
        )


@dataclass(frozen=True)
class CustomerSession:
    customer_id: str
    email: str
    name: str

    @classmethod
    def from_record(cls, customer: Customer) -> "CustomerSession":
        return cls(customer_id=str(customer.id), email=customer.email, name=customer.name)


def admin_session_for(user: AuthenticatedUser) -> AdminSession | None:
    """Inactive and unknown accounts are not admins."""
    admin = find_admin_by_email(user.email)
    if admin is None or not admin.is_active:
        return None
    return AdminSession.from_record(admin)


def customer_session_for(user: AuthenticatedUser) -> CustomerSession | None:
    customer = find_customer_by_email(user.email)
    if customer is None:
        return None
    return CustomerSession.from_record(customer)
