"""JazzCash hosted-checkout adapter.

Builds the hidden form the browser auto-submits to JazzCash, and in
sandbox mode synthesizes gateway responses from the wallet number so the
checkout flow can be exercised without a merchant account:

- numbers ending in ``1111`` fail with 121 (insufficient balance)
- numbers ending in ``2222`` fail with 114 (declined)
- anything else succeeds with 000

The secure hash is a 32-bit rolling checksum, not an HMAC.
"""

import base64
import hmac
import html
import random
import string
import time
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta

from miniworld.config import JazzCashSettings
from miniworld.payments.gateway.port import (
    GatewayCallback,
    MobileWallet,
    WalletGateway,
    WalletPaymentRequest,
    WalletPaymentResult,
    WalletPaymentStatus,
)
from miniworld.utils.logging import get_logger

logger = get_logger(__name__)

SANDBOX_URL = "https://sandbox.jazzcash.com.pk/ApplicationAPI/API/Payment/DoTransaction"
PRODUCTION_URL = "https://payments.jazzcash.com.pk/ApplicationAPI/API/Payment/DoTransaction"

SUCCESS_CODE = "000"
FAILED_CODE = "999"

_TXN_DATETIME_FORMAT = "%Y%m%dT%H%M%S"
_EXPIRY = timedelta(minutes=30)
_BASE36 = string.digits + string.ascii_lowercase

SUPPORTED_WALLETS = (
    MobileWallet(name="Jazz", prefix="0300"),
    MobileWallet(name="JazzCash", prefix="0301"),
    MobileWallet(name="Warid", prefix="0321"),
    MobileWallet(name="Ufone", prefix="0333"),
    MobileWallet(name="Telenor", prefix="0345"),
    MobileWallet(name="Zong", prefix="0310"),
)

_SANDBOX_FAILURES = {
    "1111": ("121", "Insufficient balance"),
    "2222": ("114", "Transaction declined"),
}


def rolling_checksum(text: str) -> int:
    """``h = h * 31 + unit`` over UTF-16 code units, wrapped to a signed 32-bit int."""
    encoded = text.encode("utf-16-le")
    value = 0
    for index in range(0, len(encoded), 2):
        unit = encoded[index] | (encoded[index + 1] << 8)
        value = (value * 31 + unit) & 0xFFFFFFFF
        if value >= 0x80000000:
            value -= 0x100000000
    return value


def secure_hash(fields: Mapping[str, str], hash_key: str) -> str:
    """Hash the field values in key order, prefixed with the merchant hash key."""
    joined = "&".join(str(fields[key]) for key in sorted(fields))
    return format(abs(rolling_checksum(f"{hash_key}&{joined}")), "x").zfill(64)


def generate_transaction_ref() -> str:
    suffix = "".join(random.choices(_BASE36, k=6))
    return f"MW{int(time.time() * 1000)}{suffix}".upper()


def to_paisa(amount: float) -> str:
    return str(round(amount * 100))


def parse_callback(params: Mapping[str, str]) -> GatewayCallback:
    """Read the gateway's return/cancel parameters; amounts arrive in paisa."""
    raw_amount = params.get("pp_Amount") or "0"
    try:
        amount = int(raw_amount) / 100
    except ValueError:
        amount = 0.0
    known = {"pp_TxnRefNo", "pp_Amount", "pp_ResponseCode", "pp_BillReference"}
    return GatewayCallback(
        transaction_ref=params.get("pp_TxnRefNo"),
        amount=amount,
        response_code=params.get("pp_ResponseCode"),
        bill_reference=params.get("pp_BillReference"),
        extras={key: value for key, value in params.items() if key not in known},
    )


class JazzCashGateway(WalletGateway):
    def __init__(self, settings: JazzCashSettings):
        self.settings = settings

    @property
    def endpoint(self) -> str:
        return SANDBOX_URL if self.settings.is_sandbox else PRODUCTION_URL

    def form_fields(self, request: WalletPaymentRequest, now: datetime | None = None) -> dict[str, str]:
        now = now or datetime.now(UTC)
        fields = {
            "pp_Version": "1.1",
            "pp_TxnType": "MWALLET",
            "pp_Language": request.language or "EN",
            "pp_MerchantID": self.settings.merchant_id,
            "pp_SubMerchantID": "",
            "pp_Password": self.settings.password,
            "pp_BankID": "TBANK",
            "pp_ProductID": "RETL",
            "pp_TxnRefNo": generate_transaction_ref(),
            "pp_Amount": to_paisa(request.amount),
            "pp_TxnCurrency": request.currency,
            "pp_TxnDateTime": now.strftime(_TXN_DATETIME_FORMAT),
            "pp_BillReference": request.bill_reference,
            "pp_Description": request.description,
            "pp_TxnExpiryDateTime": (now + _EXPIRY).strftime(_TXN_DATETIME_FORMAT),
            "pp_ReturnURL": self.settings.return_url,
            "pp_CancelURL": self.settings.cancel_url,
            "ppmpf_1": request.customer.customer_name,
            "ppmpf_2": request.customer.mobile_number,
            "ppmpf_3": request.customer.cnic or "",
            "ppmpf_4": request.email,
            "ppmpf_5": request.address,
        }
        fields["pp_SecureHash"] = secure_hash(fields, self.settings.hash_key)
        return fields

    def checkout_form(self, request: WalletPaymentRequest) -> str:
        inputs = "".join(
            f'<input type="hidden" name="{html.escape(key)}" value="{html.escape(str(value))}" />'
            for key, value in self.form_fields(request).items()
        )
        return (
            f'<form id="jazzcash-form" action="{self.endpoint}" method="post" style="display: none;">'
            f"{inputs}</form>"
            "<script>document.getElementById('jazzcash-form').submit();</script>"
        )

    def process_payment(self, request: WalletPaymentRequest) -> WalletPaymentResult:
        try:
            if self.settings.is_sandbox:
                return self._simulate(request)

            form = self.checkout_form(request)
            return self._result(
                request,
                WalletPaymentStatus.PENDING,
                SUCCESS_CODE,
                "Transaction initiated successfully",
                redirect_url="data:text/html;base64," + base64.b64encode(form.encode("utf-8")).decode("ascii"),
            )
        except Exception as exc:
            logger.error("jazzcash_payment_failed", order_number=request.order_number, error=str(exc))
            return self._result(
                request,
                WalletPaymentStatus.FAILED,
                FAILED_CODE,
                "Payment processing failed",
                transaction_id="",
            )

    def verify_transaction(self, transaction_id: str) -> WalletPaymentResult:
        if not self.settings.is_sandbox:
            raise NotImplementedError("Transaction verification not implemented for production")

        return WalletPaymentResult(
            transaction_id=transaction_id,
            status=WalletPaymentStatus.SUCCESS,
            amount=0.0,
            currency="PKR",
            response_code=SUCCESS_CODE,
            response_message="Transaction verified successfully",
            order_number="",
            created_at=datetime.now(UTC),
        )

    def verify_callback(self, params: Mapping[str, str]) -> bool:
        """Recompute the secure hash over the returned pp_ and ppmpf_ fields."""
        received = params.get("pp_SecureHash") or ""
        fields = {
            key: value
            for key, value in params.items()
            if key.startswith(("pp_", "ppmpf_")) and key != "pp_SecureHash"
        }
        expected = secure_hash(fields, self.settings.hash_key)
        return hmac.compare_digest(expected.encode(), received.lower().encode())

    def supported_wallets(self) -> list[MobileWallet]:
        return list(SUPPORTED_WALLETS)

    def _simulate(self, request: WalletPaymentRequest) -> WalletPaymentResult:
        mobile = request.customer.mobile_number or ""
        for suffix, (code, message) in _SANDBOX_FAILURES.items():
            if mobile.endswith(suffix):
                logger.info("jazzcash_sandbox_declined", order_number=request.order_number, code=code)
                return self._result(request, WalletPaymentStatus.FAILED, code, message)
        return self._result(
            request, WalletPaymentStatus.SUCCESS, SUCCESS_CODE, "Transaction completed successfully"
        )

    def _result(self, request, status, code, message, redirect_url=None, transaction_id=None):
        return WalletPaymentResult(
            transaction_id=generate_transaction_ref() if transaction_id is None else transaction_id,
            status=status,
            amount=request.amount,
            currency=request.currency,
            response_code=code,
            response_message=message,
            order_number=request.order_number,
            created_at=datetime.now(UTC),
            redirect_url=redirect_url,
        )
