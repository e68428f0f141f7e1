"""FastAPI endpoints for customer accounts and back-office users."""

import json

from fastapi import APIRouter, Depends, HTTPException, status
from protean.utils.globals import current_domain

from miniworld.identity.admin.management import (
    CompletePasswordChange,
    CreateSubAdmin,
    DeactivateAdminUser,
    UpdateAdminUser,
    list_admin_users,
)
from miniworld.identity.api.schemas import (
    CreateAdminRequest,
    CustomerIdResponse,
    NewAdminResponse,
    RegisterCustomerRequest,
    StatusResponse,
    UpdateAdminRequest,
    UpdateCustomerProfileRequest,
)
from miniworld.identity.auth.dependencies import optional_customer, require_admin, require_admin_manager
from miniworld.identity.auth.sessions import AdminSession, CustomerSession
from miniworld.identity.customer.customer import Customer
from miniworld.identity.customer.registration import RegisterCustomer, UpdateCustomerProfile

customer_router = APIRouter(prefix="/customers", tags=["customers"])
admin_user_router = APIRouter(prefix="/admin", tags=["admin-users"])


def _require_owner(customer_id: str, session: CustomerSession | None) -> None:
    if session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    if session.customer_id != customer_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Cannot access another customer's profile")


# --- Customer endpoints ---


@customer_router.post("", status_code=201, response_model=CustomerIdResponse)
async def register_customer(body: RegisterCustomerRequest) -> CustomerIdResponse:
    command = RegisterCustomer(
        email=body.email,
        name=body.name,
        mobile=body.mobile,
        date_of_birth=body.date_of_birth,
    )
    customer_id = current_domain.process(command, asynchronous=False)
    return CustomerIdResponse(customer_id=customer_id)


@customer_router.get("/{customer_id}")
async def customer_profile(
    customer_id: str,
    session: CustomerSession | None = Depends(optional_customer),
) -> dict:
    _require_owner(customer_id, session)
    return current_domain.repository_for(Customer).get(customer_id).to_dict()


@customer_router.put("/{customer_id}", response_model=StatusResponse)
async def update_customer_profile(
    customer_id: str,
    body: UpdateCustomerProfileRequest,
    session: CustomerSession | None = Depends(optional_customer),
) -> StatusResponse:
    _require_owner(customer_id, session)
    command = UpdateCustomerProfile(
        customer_id=customer_id,
        name=body.name,
        mobile=body.mobile,
        date_of_birth=body.date_of_birth,
        addresses=json.dumps(body.addresses) if body.addresses is not None else None,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# --- Back-office user endpoints ---


@admin_user_router.get("/me")
async def current_admin(admin: AdminSession = Depends(require_admin)) -> dict:
    return {
        "admin_id": admin.admin_id,
        "email": admin.email,
        "name": admin.name,
        "role": admin.role,
        "is_first_login": admin.is_first_login,
        "can_manage_admins": admin.can_manage_admins,
    }


@admin_user_router.post("/me/password-changed", response_model=StatusResponse)
async def password_changed(admin: AdminSession = Depends(require_admin)) -> StatusResponse:
    current_domain.process(CompletePasswordChange(admin_id=admin.admin_id), asynchronous=False)
    return StatusResponse()


@admin_user_router.get("/users")
async def admin_users(
    include_inactive: bool = False,
    admin: AdminSession = Depends(require_admin_manager),
) -> list[dict]:
    return [user.to_dict() for user in list_admin_users(active_only=not include_inactive)]


@admin_user_router.post("/users", status_code=201, response_model=NewAdminResponse)
async def create_sub_admin(
    body: CreateAdminRequest,
    admin: AdminSession = Depends(require_admin_manager),
) -> NewAdminResponse:
    command = CreateSubAdmin(email=body.email, name=body.name, mobile=body.mobile, created_by=admin.admin_id)
    result = current_domain.process(command, asynchronous=False)
    return NewAdminResponse(**result)


@admin_user_router.put("/users/{admin_id}", response_model=StatusResponse)
async def update_admin_user(
    admin_id: str,
    body: UpdateAdminRequest,
    admin: AdminSession = Depends(require_admin_manager),
) -> StatusResponse:
    command = UpdateAdminUser(admin_id=admin_id, name=body.name, mobile=body.mobile, role=body.role)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_user_router.delete("/users/{admin_id}", response_model=StatusResponse)
async def deactivate_admin_user(
    admin_id: str,
    admin: AdminSession = Depends(require_admin_manager),
) -> StatusResponse:
    current_domain.process(DeactivateAdminUser(admin_id=admin_id, requested_by=admin.admin_id), asynchronous=False)
    return StatusResponse()
