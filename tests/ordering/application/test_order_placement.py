"""Application tests for checkout, order status commands and order emails."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from miniworld.catalogue.product.management import AddProduct, SetStockLevel, UpdateProductDetails
from miniworld.notifications.email.email_log import EmailLog
from miniworld.ordering.cart.items import AddToCart
from miniworld.ordering.order import queries
from miniworld.ordering.order.order import Order
from miniworld.ordering.order.placement import PlaceOrder
from miniworld.ordering.order.status import AttachTrackingNumber, RecordWalletPayment, UpdateOrderStatus
from miniworld.payments.account.management import AddPaymentAccount, TogglePaymentAccount
from miniworld.settings.management import UpdateShippingRate


def _stock_cart(price=2000, quantity=2, stock=5, session_id="sess-001"):
    product_id = current_domain.process(
        AddProduct(name="QuantumWalk Learning Walker", price=price, category="1-3-years", stock_quantity=stock),
        asynchronous=False,
    )
    current_domain.process(
        AddToCart(session_id=session_id, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )
    return product_id


def _place(session_id="sess-001", **overrides):
    data = {
        "session_id": session_id,
        "full_name": "Ayesha Khan",
        "phone": "03001234567",
        "email": "ayesha@example.com",
        "address": "House 12, Street 4, F-7/2",
        "city": "Islamabad",
        "payment_method": "cash_on_delivery",
    }
    data.update(overrides)
    return current_domain.process(PlaceOrder(**data), asynchronous=False)


def _bank_account():
    return current_domain.process(
        AddPaymentAccount(account_name="MiniWorld Pvt Ltd", account_number="0123456789", bank_name="Meezan Bank"),
        asynchronous=False,
    )


class TestPlaceOrder:
    def test_cash_on_delivery_order(self):
        _stock_cart()
        order = current_domain.repository_for(Order).get(_place())
        assert order.status == "confirmed"
        assert order.subtotal == 4000
        assert order.tax == 400
        assert order.shipping == 150
        assert order.total == 4550
        assert order.shipping_address.country == "Pakistan"

    def test_free_shipping_at_threshold(self):
        _stock_cart(price=2500, quantity=2)
        order = current_domain.repository_for(Order).get(_place())
        assert order.shipping == 0

    def test_uses_cached_store_settings(self):
        current_domain.process(UpdateShippingRate(rate=300, free_shipping_threshold=10000), asynchronous=False)
        _stock_cart(price=2500, quantity=2)
        order = current_domain.repository_for(Order).get(_place())
        assert order.shipping == 300

    def test_empty_cart_rejected(self):
        with pytest.raises(ValidationError):
            _place(session_id="sess-empty")

    def test_stock_is_rechecked(self):
        product_id = _stock_cart(quantity=3, stock=5)
        current_domain.process(SetStockLevel(product_id=product_id, quantity=2), asynchronous=False)
        with pytest.raises(ValidationError):
            _place()

    def test_price_change_since_add_is_rejected(self):
        product_id = _stock_cart(price=2000, quantity=1)
        current_domain.process(UpdateProductDetails(product_id=product_id, price=2200), asynchronous=False)
        with pytest.raises(ValidationError) as exc:
            _place()
        assert exc.value.messages["items"] == [
            "The price of QuantumWalk Learning Walker is now PKR 2,200; please review your cart"
        ]
        assert current_domain.repository_for(Order)._dao.query.all().total == 0

    def test_refreshed_cart_places_at_new_price(self):
        product_id = _stock_cart(price=2000, quantity=1)
        current_domain.process(UpdateProductDetails(product_id=product_id, price=2200), asynchronous=False)
        current_domain.process(
            AddToCart(session_id="sess-001", product_id=product_id, quantity=1), asynchronous=False
        )
        order = current_domain.repository_for(Order).get(_place())
        assert order.subtotal == 4400

    def test_unsupported_payment_method(self):
        _stock_cart()
        with pytest.raises(ValidationError):
            _place(payment_method="cheque")

    def test_bank_transfer_requires_account(self):
        _stock_cart()
        with pytest.raises(ValidationError):
            _place(payment_method="bank_transfer")

    def test_bank_transfer_snapshots_account(self):
        _stock_cart()
        account_id = _bank_account()
        order = current_domain.repository_for(Order).get(
            _place(payment_method="bank_transfer", payment_account_id=account_id)
        )
        assert order.status == "pending"
        assert order.payment.bank_name == "Meezan Bank"

    def test_inactive_account_rejected(self):
        _stock_cart()
        account_id = _bank_account()
        current_domain.process(TogglePaymentAccount(account_id=account_id), asynchronous=False)
        with pytest.raises(ValidationError):
            _place(payment_method="bank_transfer", payment_account_id=account_id)

    def test_wallet_requires_number(self):
        _stock_cart()
        with pytest.raises(ValidationError):
            _place(payment_method="jazzcash")


class TestOrderEmails:
    def test_confirmation_email_sent_and_logged(self, email_adapter):
        _stock_cart()
        order = current_domain.repository_for(Order).get(_place())

        assert len(email_adapter.sent_emails) == 1
        assert email_adapter.sent_emails[0]["subject"] == f"Order Confirmation - {order.order_number}"
        logs = current_domain.repository_for(EmailLog)._dao.query.all().items
        assert [log.email_type for log in logs] == ["order_confirmation"]

    def test_failed_email_does_not_block_checkout(self, email_adapter):
        email_adapter.configure(should_succeed=False)
        _stock_cart()
        order_id = _place()
        assert current_domain.repository_for(Order).get(order_id).status == "confirmed"
        logs = current_domain.repository_for(EmailLog)._dao.query.all().items
        assert logs[0].status == "failed"

    def test_status_change_sends_update(self, email_adapter):
        _stock_cart()
        order_id = _place()
        current_domain.process(UpdateOrderStatus(order_id=order_id, status="processing"), asynchronous=False)
        assert email_adapter.sent_emails[-1]["subject"].endswith("is now processing")


class TestOrderStatusCommands:
    def test_illegal_transition_rejected(self):
        _stock_cart()
        order_id = _place()
        with pytest.raises(ValidationError):
            current_domain.process(UpdateOrderStatus(order_id=order_id, status="delivered"), asynchronous=False)

    def test_attach_tracking_number(self):
        _stock_cart()
        order_id = _place()
        current_domain.process(AttachTrackingNumber(order_id=order_id, tracking_number="TCS-998877"), asynchronous=False)
        assert current_domain.repository_for(Order).get(order_id).tracking_number == "TCS-998877"

    def test_record_wallet_payment_by_order_number(self):
        _stock_cart()
        order_id = _place(payment_method="jazzcash", wallet_number="03001234567")
        order = current_domain.repository_for(Order).get(order_id)

        current_domain.process(
            RecordWalletPayment(order_number=order.order_number, transaction_ref="T1", amount=order.total),
            asynchronous=False,
        )
        assert current_domain.repository_for(Order).get(order_id).status == "confirmed"

    def test_record_wallet_payment_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                RecordWalletPayment(order_number="MW0", transaction_ref="T1", amount=10),
                asynchronous=False,
            )


class TestOrderQueries:
    def test_list_and_filter(self):
        _stock_cart(session_id="sess-a")
        _place(session_id="sess-a")
        _stock_cart(session_id="sess-b")
        _place(session_id="sess-b", payment_method="jazzcash", wallet_number="03001234567")

        assert len(queries.list_orders()) == 2
        assert len(queries.list_orders("pending")) == 1

    def test_orders_for_customer(self):
        _stock_cart()
        _place(email="Ayesha@Example.com")
        assert len(queries.orders_for_customer("ayesha@example.com")) == 1

    def test_order_stats(self):
        _stock_cart()
        _place()
        stats = queries.order_stats()
        assert stats["total_orders"] == 1
