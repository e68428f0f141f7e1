"""Customer registration and profile updates."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Date, Identifier, String, Text
from protean.utils.globals import current_domain

from miniworld.domain import miniworld
from miniworld.identity.customer.customer import Customer


@miniworld.command(part_of="Customer")
class RegisterCustomer:
    email: String(required=True, max_length=255)
    name: String(required=True, max_length=255)
    mobile: String(max_length=20)
    date_of_birth: Date()


@miniworld.command(part_of="Customer")
class UpdateCustomerProfile:
    customer_id: Identifier(required=True)
    name: String(max_length=255)
    mobile: String(max_length=20)
    date_of_birth: Date()
    addresses: Text()


def _parse_addresses(raw):
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError({"addresses": ["Addresses must be valid JSON"]}) from None


def find_customer_by_email(email: str) -> Customer | None:
    return (
        current_domain.repository_for(Customer)
        ._dao.query.filter(email=email.strip().lower())
        .all()
        .first
    )


@miniworld.command_handler(part_of=Customer)
class CustomerRegistrationHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        if find_customer_by_email(command.email) is not None:
            raise ValidationError({"email": ["An account with this email already exists"]})

        customer = Customer.register(
            email=command.email,
            name=command.name,
            mobile=command.mobile,
            date_of_birth=command.date_of_birth,
        )
        current_domain.repository_for(Customer).add(customer)
        return str(customer.id)

    @handle(UpdateCustomerProfile)
    def update_customer_profile(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        customer.update_profile(
            name=command.name,
            mobile=command.mobile,
            date_of_birth=command.date_of_birth,
            addresses=_parse_addresses(command.addresses),
        )
        repo.add(customer)
