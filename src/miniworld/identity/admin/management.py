"""Back-office account management: commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from miniworld.domain import miniworld
from miniworld.identity.admin.admin_user import AdminRole, AdminUser, generate_temp_password
from miniworld.utils.logging import get_logger

logger = get_logger(__name__)


@miniworld.command(part_of="AdminUser")
class CreateSuperAdmin:
    """Bootstrap the first back-office account."""

    email: String(required=True, max_length=255)
    name: String(required=True, max_length=255)
    mobile: String(max_length=20)


@miniworld.command(part_of="AdminUser")
class CreateSubAdmin:
    email: String(required=True, max_length=255)
    name: String(required=True, max_length=255)
    mobile: String(max_length=20)
    created_by: Identifier(required=True)


@miniworld.command(part_of="AdminUser")
class UpdateAdminUser:
    admin_id: Identifier(required=True)
    name: String(max_length=255)
    mobile: String(max_length=20)
    role: String(max_length=20)


@miniworld.command(part_of="AdminUser")
class DeactivateAdminUser:
    admin_id: Identifier(required=True)
    requested_by: Identifier(required=True)


@miniworld.command(part_of="AdminUser")
class CompletePasswordChange:
    admin_id: Identifier(required=True)


def find_admin_by_email(email: str) -> AdminUser | None:
    return current_domain.repository_for(AdminUser)._dao.query.filter(email=email.strip().lower()).all().first


def list_admin_users(active_only: bool = True) -> list[AdminUser]:
    query = current_domain.repository_for(AdminUser)._dao.query
    if active_only:
        query = query.filter(is_active=True)
    return query.order_by("-created_at").all().items


def _ensure_email_free(email: str):
    if find_admin_by_email(email) is not None:
        raise ValidationError({"email": ["An admin with this email already exists"]})


def _ensure_manager(admin_id):
    requester = current_domain.repository_for(AdminUser).get(admin_id)
    if not requester.can_manage_admins:
        raise ValidationError({"role": ["Unauthorized. Admin access required."]})
    return requester


@miniworld.command_handler(part_of=AdminUser)
class ManageAdminUsersHandler:
    @handle(CreateSuperAdmin)
    def create_super_admin(self, command):
        if current_domain.repository_for(AdminUser)._dao.query.all().total > 0:
            raise ValidationError({"email": ["A super admin already exists"]})

        admin = AdminUser.create(
            email=command.email,
            name=command.name,
            mobile=command.mobile,
            role=AdminRole.SUPER_ADMIN.value,
            is_first_login=False,
        )
        current_domain.repository_for(AdminUser).add(admin)
        logger.info("super_admin_created", admin_id=str(admin.id))
        return str(admin.id)

    @handle(CreateSubAdmin)
    def create_sub_admin(self, command):
        requester = _ensure_manager(command.created_by)
        _ensure_email_free(command.email)

        admin = AdminUser.create(
            email=command.email,
            name=command.name,
            mobile=command.mobile,
            role=AdminRole.ADMIN.value,
            created_by=requester.id,
        )
        current_domain.repository_for(AdminUser).add(admin)
        logger.info("sub_admin_created", admin_id=str(admin.id), created_by=str(requester.id))
        return {"admin_id": str(admin.id), "temp_password": generate_temp_password()}

    @handle(UpdateAdminUser)
    def update_admin_user(self, command):
        repo = current_domain.repository_for(AdminUser)
        admin = repo.get(command.admin_id)
        admin.update(name=command.name, mobile=command.mobile, role=command.role)
        repo.add(admin)

    @handle(DeactivateAdminUser)
    def deactivate_admin_user(self, command):
        _ensure_manager(command.requested_by)
        if str(command.admin_id) == str(command.requested_by):
            raise ValidationError({"admin_id": ["You cannot deactivate your own account"]})

        repo = current_domain.repository_for(AdminUser)
        admin = repo.get(command.admin_id)
        admin.deactivate()
        repo.add(admin)

    @handle(CompletePasswordChange)
    def complete_password_change(self, command):
        repo = current_domain.repository_for(AdminUser)
        admin = repo.get(command.admin_id)
        admin.complete_password_change()
        repo.add(admin)
