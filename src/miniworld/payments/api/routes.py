"""FastAPI endpoints for payment accounts and the JazzCash wallet flow."""

from dataclasses import asdict

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from miniworld import services
from miniworld.identity.auth.dependencies import require_admin
from miniworld.ordering.order.queries import get_order
from miniworld.ordering.order.status import RecordWalletPayment
from miniworld.payments.account.management import (
    AddPaymentAccount,
    RemovePaymentAccount,
    TogglePaymentAccount,
    UpdatePaymentAccount,
    list_payment_accounts,
)
from miniworld.payments.api.schemas import (
    AccountIdResponse,
    AddPaymentAccountRequest,
    StatusResponse,
    UpdatePaymentAccountRequest,
    WalletCheckoutRequest,
)
from miniworld.payments.gateway.jazzcash import parse_callback
from miniworld.payments.gateway.port import WalletCustomer, WalletPaymentRequest

logger = structlog.get_logger(__name__)

payment_router = APIRouter(tags=["payments"])
admin_payment_router = APIRouter(
    prefix="/admin/payment-accounts", tags=["admin-payments"], dependencies=[Depends(require_admin)]
)
admin_wallet_router = APIRouter(
    prefix="/admin/payments", tags=["admin-payments"], dependencies=[Depends(require_admin)]
)


# --- Storefront endpoints ---


@payment_router.get("/payment-accounts")
async def active_payment_accounts() -> list[dict]:
    return [account.to_dict() for account in list_payment_accounts(active_only=True)]


@payment_router.get("/payments/jazzcash/wallets")
async def supported_wallets() -> list[dict]:
    return [asdict(wallet) for wallet in services.payment_gateway().supported_wallets()]


@payment_router.post("/payments/jazzcash/checkout")
async def jazzcash_checkout(body: WalletCheckoutRequest) -> dict:
    order = get_order(body.order_id)
    order.assert_awaiting_wallet_payment()
    address = order.shipping_address
    request = WalletPaymentRequest(
        amount=order.total,
        bill_reference=order.order_number,
        description=f"MiniWorld order {order.order_number}",
        customer=WalletCustomer(
            customer_name=address.full_name,
            mobile_number=body.mobile_number,
            cnic=body.cnic,
        ),
        email=address.email,
        address=f"{address.address}, {address.city}",
        order_number=order.order_number,
    )
    result = services.payment_gateway().process_payment(request)
    logger.info(
        "wallet_payment_processed",
        order_number=order.order_number,
        status=result.status.value,
        response_code=result.response_code,
    )

    if result.succeeded:
        command = RecordWalletPayment(
            order_number=order.order_number,
            transaction_ref=result.transaction_id,
            amount=result.amount,
        )
        current_domain.process(command, asynchronous=False)
    return result.to_dict()


@payment_router.get("/checkout/jazzcash/success")
async def jazzcash_return(request: Request) -> dict:
    callback = parse_callback(dict(request.query_params))
    if not callback.succeeded or not callback.bill_reference:
        logger.warning(
            "wallet_payment_declined",
            order_number=callback.bill_reference,
            response_code=callback.response_code,
        )
        return {
            "status": "failed",
            "order_number": callback.bill_reference,
            "response_code": callback.response_code,
        }

    if not services.payment_gateway().verify_callback(request.query_params):
        logger.warning("wallet_callback_rejected", order_number=callback.bill_reference)
        raise ValidationError({"pp_SecureHash": ["Callback signature does not match"]})

    command = RecordWalletPayment(
        order_number=callback.bill_reference,
        transaction_ref=callback.transaction_ref or "",
        amount=callback.amount,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return {
        "status": "success",
        "order_id": order_id,
        "order_number": callback.bill_reference,
        "transaction_ref": callback.transaction_ref,
    }


@payment_router.get("/checkout/jazzcash/cancel")
async def jazzcash_cancel(request: Request) -> dict:
    callback = parse_callback(dict(request.query_params))
    logger.info("wallet_payment_cancelled", order_number=callback.bill_reference)
    return {"status": "cancelled", "order_number": callback.bill_reference}


# --- Back-office endpoints ---


@admin_payment_router.get("")
async def all_payment_accounts() -> list[dict]:
    return [account.to_dict() for account in list_payment_accounts()]


@admin_payment_router.post("", status_code=201, response_model=AccountIdResponse)
async def add_payment_account(body: AddPaymentAccountRequest) -> AccountIdResponse:
    account_id = current_domain.process(AddPaymentAccount(**body.model_dump()), asynchronous=False)
    return AccountIdResponse(account_id=account_id)


@admin_payment_router.put("/{account_id}", response_model=StatusResponse)
async def update_payment_account(account_id: str, body: UpdatePaymentAccountRequest) -> StatusResponse:
    command = UpdatePaymentAccount(account_id=account_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_payment_router.delete("/{account_id}", response_model=StatusResponse)
async def remove_payment_account(account_id: str) -> StatusResponse:
    current_domain.process(RemovePaymentAccount(account_id=account_id), asynchronous=False)
    return StatusResponse()


@admin_payment_router.post("/{account_id}/toggle")
async def toggle_payment_account(account_id: str) -> dict:
    is_active = current_domain.process(TogglePaymentAccount(account_id=account_id), asynchronous=False)
    return {"account_id": account_id, "is_active": is_active}


@admin_wallet_router.get("/jazzcash/transactions/{transaction_id}")
async def verify_wallet_transaction(transaction_id: str) -> dict:
    try:
        result = services.payment_gateway().verify_transaction(transaction_id)
    except NotImplementedError as exc:
        raise HTTPException(status_code=501, detail=str(exc)) from exc
    return result.to_dict()
