"""Mobile wallet gateway port.

Defines the contract for wallet payment adapters so the checkout code
does not depend on a particular provider.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class WalletPaymentStatus(Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class WalletCustomer:
    customer_name: str
    mobile_number: str
    cnic: str | None = None


@dataclass(frozen=True)
class WalletPaymentRequest:
    amount: float
    bill_reference: str
    description: str
    customer: WalletCustomer
    email: str
    address: str
    order_number: str
    currency: str = "PKR"
    language: str = "EN"


@dataclass(frozen=True)
class WalletPaymentResult:
    transaction_id: str
    status: WalletPaymentStatus
    amount: float
    currency: str
    response_code: str
    response_message: str
    order_number: str
    created_at: datetime
    redirect_url: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == WalletPaymentStatus.SUCCESS

    def to_dict(self) -> dict:
        return {
            "transaction_id": self.transaction_id,
            "status": self.status.value,
            "amount": self.amount,
            "currency": self.currency,
            "response_code": self.response_code,
            "response_message": self.response_message,
            "order_number": self.order_number,
            "created_at": self.created_at.isoformat(),
            "redirect_url": self.redirect_url,
        }


@dataclass(frozen=True)
class MobileWallet:
    name: str
    prefix: str


@dataclass(frozen=True)
class GatewayCallback:
    """Parameters posted back by the gateway on the return or cancel URL."""

    transaction_ref: str | None
    amount: float
    response_code: str | None
    bill_reference: str | None
    extras: dict = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.response_code == "000"


class WalletGateway(ABC):
    """Abstract mobile wallet gateway interface."""

    @abstractmethod
    def process_payment(self, request: WalletPaymentRequest) -> WalletPaymentResult:
        """Start (or, in sandbox mode, simulate) a wallet payment."""
        ...

    @abstractmethod
    def verify_transaction(self, transaction_id: str) -> WalletPaymentResult:
        """Look up the final state of a transaction."""
        ...

    @abstractmethod
    def verify_callback(self, params: Mapping[str, str]) -> bool:
        """Check that return parameters were signed by the gateway."""
        ...

    @abstractmethod
    def supported_wallets(self) -> list[MobileWallet]:
        """Mobile networks whose numbers can pay through this gateway."""
        ...
