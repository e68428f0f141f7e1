"""Payment account administration: commands and handler."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from miniworld.domain import miniworld
from miniworld.payments.account.account import PaymentAccount, PaymentMethodType
from miniworld.utils.logging import get_logger

logger = get_logger(__name__)


@miniworld.command(part_of="PaymentAccount")
class AddPaymentAccount:
    account_name: String(required=True, max_length=255)
    account_number: String(required=True, max_length=100)
    bank_name: String(required=True, max_length=255)
    payment_method_type: String(max_length=20, default=PaymentMethodType.BANK_TRANSFER.value)
    routing_number: String(max_length=50)
    swift_code: String(max_length=20)
    iban: String(max_length=50)
    mobile_number: String(max_length=20)
    merchant_id: String(max_length=100)
    branch_code: String(max_length=20)
    description: Text()


@miniworld.command(part_of="PaymentAccount")
class UpdatePaymentAccount:
    account_id: Identifier(required=True)
    account_name: String(max_length=255)
    account_number: String(max_length=100)
    bank_name: String(max_length=255)
    payment_method_type: String(max_length=20)
    routing_number: String(max_length=50)
    swift_code: String(max_length=20)
    iban: String(max_length=50)
    mobile_number: String(max_length=20)
    merchant_id: String(max_length=100)
    branch_code: String(max_length=20)
    description: Text()


@miniworld.command(part_of="PaymentAccount")
class RemovePaymentAccount:
    account_id: Identifier(required=True)


@miniworld.command(part_of="PaymentAccount")
class TogglePaymentAccount:
    account_id: Identifier(required=True)


def _details(command) -> dict:
    return {
        "account_name": command.account_name,
        "account_number": command.account_number,
        "bank_name": command.bank_name,
        "payment_method_type": command.payment_method_type,
        "routing_number": command.routing_number,
        "swift_code": command.swift_code,
        "iban": command.iban,
        "mobile_number": command.mobile_number,
        "merchant_id": command.merchant_id,
        "branch_code": command.branch_code,
        "description": command.description,
    }


@miniworld.command_handler(part_of=PaymentAccount)
class ManagePaymentAccountHandler:
    @handle(AddPaymentAccount)
    def add_payment_account(self, command):
        account = PaymentAccount(**_details(command))
        current_domain.repository_for(PaymentAccount).add(account)
        logger.info("payment_account_added", account_id=str(account.id), method=account.payment_method_type)
        return str(account.id)

    @handle(UpdatePaymentAccount)
    def update_payment_account(self, command):
        repo = current_domain.repository_for(PaymentAccount)
        account = repo.get(command.account_id)
        account.update(**_details(command))
        repo.add(account)

    @handle(RemovePaymentAccount)
    def remove_payment_account(self, command):
        repo = current_domain.repository_for(PaymentAccount)
        account = repo.get(command.account_id)
        repo._dao.delete(account)
        logger.info("payment_account_removed", account_id=str(command.account_id))

    @handle(TogglePaymentAccount)
    def toggle_payment_account(self, command):
        repo = current_domain.repository_for(PaymentAccount)
        account = repo.get(command.account_id)
        account.toggle_active()
        repo.add(account)
        return account.is_active


def list_payment_accounts(active_only: bool = False) -> list[PaymentAccount]:
    query = current_domain.repository_for(PaymentAccount)._dao.query
    if active_only:
        query = query.filter(is_active=True)
    return query.order_by("-created_at").all().items
