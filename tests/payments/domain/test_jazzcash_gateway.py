"""Tests for the JazzCash wallet gateway adapter."""

import base64
from datetime import UTC, datetime

import pytest

from miniworld.config import JazzCashSettings
from miniworld.payments.gateway.jazzcash import (
    PRODUCTION_URL,
    SANDBOX_URL,
    JazzCashGateway,
    parse_callback,
    rolling_checksum,
    secure_hash,
    to_paisa,
)
from miniworld.payments.gateway.port import WalletCustomer, WalletPaymentRequest, WalletPaymentStatus


def _settings(is_sandbox=True):
    return JazzCashSettings(
        merchant_id="MW_MERCHANT_001",
        password="miniworld_password",
        hash_key="miniworld_hash_key_12345",
        return_url="http://testserver/checkout/jazzcash/success",
        cancel_url="http://testserver/checkout/jazzcash/cancel",
        is_sandbox=is_sandbox,
    )


def _request(mobile="03001234567", amount=4550):
    return WalletPaymentRequest(
        amount=amount,
        bill_reference="MW1717243200000123",
        description="MiniWorld order MW1717243200000123",
        customer=WalletCustomer(customer_name="Ayesha Khan", mobile_number=mobile),
        email="ayesha@example.com",
        address="House 12, Islamabad",
        order_number="MW1717243200000123",
    )


class TestSecureHash:
    def test_rolling_checksum(self):
        assert rolling_checksum("") == 0
        assert rolling_checksum("a") == 97
        assert rolling_checksum("ab") == 97 * 31 + 98

    def test_checksum_wraps_to_signed_32_bits(self):
        value = rolling_checksum("miniworld_hash_key_12345" * 20)
        assert -(2**31) <= value < 2**31

    def test_hash_sorts_fields_and_pads(self):
        digest = secure_hash({"b": "2", "a": "1"}, "k")
        assert digest == "5f5d5c2".zfill(64)
        assert len(digest) == 64

    def test_hash_depends_on_key(self):
        fields = {"pp_Amount": "455000"}
        assert secure_hash(fields, "key-one") != secure_hash(fields, "key-two")


class TestFormFields:
    def test_fields(self):
        gateway = JazzCashGateway(_settings())
        now = datetime(2024, 6, 1, 12, 0, 0, tzinfo=UTC)
        fields = gateway.form_fields(_request(), now=now)

        assert fields["pp_TxnType"] == "MWALLET"
        assert fields["pp_Amount"] == "455000"
        assert fields["pp_TxnDateTime"] == "20240601T120000"
        assert fields["pp_TxnExpiryDateTime"] == "20240601T123000"
        assert fields["pp_ReturnURL"] == "http://testserver/checkout/jazzcash/success"
        assert fields["ppmpf_2"] == "03001234567"

        unsigned = {key: value for key, value in fields.items() if key != "pp_SecureHash"}
        assert fields["pp_SecureHash"] == secure_hash(unsigned, "miniworld_hash_key_12345")

    def test_checkout_form_posts_to_endpoint(self):
        form = JazzCashGateway(_settings()).checkout_form(_request())
        assert f'action="{SANDBOX_URL}"' in form
        assert 'name="pp_SecureHash"' in form

    def test_to_paisa(self):
        assert to_paisa(45.5) == "4550"


class TestSandbox:
    def test_success(self):
        result = JazzCashGateway(_settings()).process_payment(_request())
        assert result.succeeded
        assert result.response_code == "000"
        assert result.amount == 4550
        assert result.transaction_id.startswith("MW")

    @pytest.mark.parametrize("mobile,code", [("03001231111", "121"), ("03001232222", "114")])
    def test_simulated_failures(self, mobile, code):
        result = JazzCashGateway(_settings()).process_payment(_request(mobile=mobile))
        assert result.status == WalletPaymentStatus.FAILED
        assert result.response_code == code

    def test_verify_transaction(self):
        result = JazzCashGateway(_settings()).verify_transaction("T123")
        assert result.succeeded
        assert result.transaction_id == "T123"

    def test_supported_wallets(self):
        prefixes = [wallet.prefix for wallet in JazzCashGateway(_settings()).supported_wallets()]
        assert "0300" in prefixes
        assert len(prefixes) == 6


class TestProduction:
    def test_returns_pending_redirect(self):
        gateway = JazzCashGateway(_settings(is_sandbox=False))
        result = gateway.process_payment(_request())
        assert result.status == WalletPaymentStatus.PENDING
        assert result.redirect_url.startswith("data:text/html;base64,")

        html = base64.b64decode(result.redirect_url.split(",", 1)[1]).decode("utf-8")
        assert PRODUCTION_URL in html

    def test_verify_not_available(self):
        with pytest.raises(NotImplementedError):
            JazzCashGateway(_settings(is_sandbox=False)).verify_transaction("T123")


class TestCallback:
    def test_parse_success(self):
        callback = parse_callback(
            {
                "pp_TxnRefNo": "T20240601120000",
                "pp_Amount": "455000",
                "pp_ResponseCode": "000",
                "pp_BillReference": "MW1717243200000123",
                "pp_ResponseMessage": "Thank you for using JazzCash",
            }
        )
        assert callback.succeeded
        assert callback.amount == 4550
        assert callback.bill_reference == "MW1717243200000123"
        assert callback.extras == {"pp_ResponseMessage": "Thank you for using JazzCash"}

    def test_parse_failure_and_bad_amount(self):
        callback = parse_callback({"pp_ResponseCode": "121", "pp_Amount": "n/a"})
        assert not callback.succeeded
        assert callback.amount == 0

    def test_verify_signed_callback(self):
        params = {
            "pp_TxnRefNo": "T20240601120000",
            "pp_Amount": "455000",
            "pp_ResponseCode": "000",
            "pp_BillReference": "MW1717243200000123",
            "ppmpf_1": "Ayesha Khan",
        }
        signed = {**params, "pp_SecureHash": secure_hash(params, "miniworld_hash_key_12345").upper()}
        gateway = JazzCashGateway(_settings())
        assert gateway.verify_callback(signed)
        assert gateway.verify_callback({**signed, "utm_source": "sms"})

    def test_verify_rejects_tampered_or_missing_hash(self):
        params = {"pp_TxnRefNo": "T1", "pp_Amount": "455000", "pp_ResponseCode": "000"}
        signed = {**params, "pp_SecureHash": secure_hash(params, "miniworld_hash_key_12345")}
        gateway = JazzCashGateway(_settings())
        assert not gateway.verify_callback({**signed, "pp_Amount": "100"})
        assert not gateway.verify_callback(params)
        assert not gateway.verify_callback({**params, "pp_SecureHash": secure_hash(params, "other-key")})
