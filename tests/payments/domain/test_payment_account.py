import pytest
from protean.exceptions import ValidationError

from miniworld.payments.account.account import PaymentAccount, PaymentAccountStatusToggled


def _account(**overrides):
    values = {
        "account_name": "MiniWorld Pvt Ltd",
        "account_number": "0123456789012",
        "bank_name": "Meezan Bank",
    }
    values.update(overrides)
    return PaymentAccount(**values)


class TestPaymentAccount:
    def test_defaults(self):
        account = _account()
        assert account.is_active is True
        assert account.payment_method_type == "bank_transfer"
        assert account.is_wallet is False

    def test_wallet_account(self):
        assert _account(payment_method_type="jazzcash", mobile_number="03001234567").is_wallet

    def test_rejects_unknown_method(self):
        with pytest.raises(ValidationError):
            _account(payment_method_type="bitcoin")

    def test_update_ignores_missing_values(self):
        account = _account()
        account.update(bank_name="HBL", iban=None)
        assert account.bank_name == "HBL"
        assert account.iban is None
        assert account.account_name == "MiniWorld Pvt Ltd"

    def test_update_rejects_unknown_fields(self):
        with pytest.raises(ValidationError) as exc:
            _account().update(is_active=False)
        assert "is_active" in str(exc.value.messages)

    def test_toggle_raises_event(self):
        account = _account()
        account.toggle_active()
        assert account.is_active is False
        assert len(account._events) == 1
        assert isinstance(account._events[0], PaymentAccountStatusToggled)
        assert account._events[0].is_active is False

        account.toggle_active()
        assert account.is_active is True

    def test_to_dict(self):
        data = _account(iban="PK36MEZN0001230123456789").to_dict()
        assert data["iban"] == "PK36MEZN0001230123456789"
        assert data["is_active"] is True
        assert set(data) >= {"id", "account_name", "description", "created_at"}
