"""
Update User Use Case

Partial update of a user record, gated by who is calling.
"""

from typing import Optional

from tenantgram.libs.result import Error, Result, Return
from tenantgram.app.services.authorization import (
    Principal,
    is_admin,
    is_super_admin,
    same_tenant,
)
from tenantgram.app.services.file_service import FileService, upload_error
from tenantgram.app.services.file_storage import StorageError
from tenantgram.app.services.media import MediaError
from tenantgram.app.services.passwords import hash_password, validate_password, verify_password
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.domain.entities import User, UserRole
from .dtos import UpdateUserCommand, UserResponse

ASSIGNABLE_ROLES = (UserRole.ADMIN, UserRole.DEFAULT)

PERSONAL_FIELDS = ("first_name", "last_name", "notifications", "phone_number")


class UpdateUserUseCase:
    """
    Use case for updating a user.

    Business Rules:
    - Personal fields (names, notifications, phone number, profile picture):
      the user themselves, an ADMIN of the same business, or SUPER_ADMIN
    - ADMIN cannot act on users of another business, nor on a SUPER_ADMIN
    - ADMIN may act on an unbound user only in a request that binds that user
      to the ADMIN's own business
    - role: ADMIN or SUPER_ADMIN only, and only to ADMIN or DEFAULT
    - profile_status: SUPER_ADMIN only
    - business_id: SUPER_ADMIN sets any value; ADMIN may only bind an unbound
      user to the ADMIN's own business
    - password: a self-change needs the current password; ADMIN and
      SUPER_ADMIN may reset another user's password within their scope
    - email is never changed here
    - Profile pictures are public images
    """

    def __init__(self, uow: UnitOfWork, file_service: FileService):
        self.uow = uow
        self.file_service = file_service

    def _check_access(
        self, caller: Principal, target: User, command: UpdateUserCommand
    ) -> Optional[Error]:
        is_self = caller.id == target.id

        if is_admin(caller) and not is_self:
            if target.role == UserRole.SUPER_ADMIN:
                return Error("INSUFFICIENT_ROLE", "Administrators cannot modify a super admin")
            # An unbound target is in scope only when this request binds it to the caller
            scope = target.business_id or command.business_id
            if not same_tenant(caller, scope):
                return Error("CROSS_TENANT_ACCESS", "User belongs to another business")

        if not is_self and not is_admin(caller) and not is_super_admin(caller):
            return Error("INSUFFICIENT_ROLE", "You can only update your own profile")

        if command.role is not None:
            if not (is_admin(caller) or is_super_admin(caller)):
                return Error("INSUFFICIENT_ROLE", "Only administrators can change roles")
            if command.role not in ASSIGNABLE_ROLES:
                return Error("INVALID_ROLE", f"Role {command.role.value} cannot be assigned")

        if command.profile_status is not None and not is_super_admin(caller):
            return Error("INSUFFICIENT_ROLE", "Only super admins can change profile status")

        if command.business_id is not None and not is_super_admin(caller):
            if not is_admin(caller):
                return Error("INSUFFICIENT_ROLE", "Only administrators can assign a business")
            if target.business_id and command.business_id != target.business_id:
                return Error("CROSS_TENANT_ACCESS", "User is already assigned to a business")
            if command.business_id != caller.business_id:
                return Error("CROSS_TENANT_ACCESS", "Users can only be bound to your own business")

        return None

    def _check_password(
        self, caller: Principal, target: User, command: UpdateUserCommand
    ) -> Optional[Error]:
        if command.password is None:
            return None

        if caller.id == target.id:
            if command.current_password is None or not verify_password(
                command.current_password, target.password_hash
            ):
                return Error("INVALID_CREDENTIALS", "Current password is incorrect")

        password_error = validate_password(command.password)
        if password_error:
            return Error("INVALID_PASSWORD", password_error)
        return None

    async def execute(
        self, caller: Principal, user_id: str, command: UpdateUserCommand
    ) -> Result[UserResponse]:
        """
        Execute update user use case.

        Args:
            caller: Authenticated principal
            user_id: ID of the user to update
            command: Fields to change

        Returns:
            Result with the updated user, or Error
        """
        async with self.uow:
            target = await self.uow.users.get_by_id(user_id)
            if target is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            error = self._check_access(caller, target, command)
            if error is None:
                error = self._check_password(caller, target, command)
            if error is not None:
                return Return.err(error)

            for field in PERSONAL_FIELDS:
                value = getattr(command, field)
                if value is not None:
                    setattr(target, field, value)

            if command.role is not None:
                target.role = command.role
            if command.profile_status is not None:
                target.profile_status = command.profile_status
            if command.business_id is not None:
                target.business_id = command.business_id
            if command.password is not None:
                target.password_hash = hash_password(command.password)

            metadata = None
            if command.profile_picture:
                try:
                    metadata = await self.file_service.store(
                        self.uow,
                        command.profile_picture,
                        command.profile_picture_filename,
                        business_id=target.business_id,
                        user_id=target.id,
                        require_image=True,
                        public_access=True,
                    )
                except (MediaError, StorageError) as e:
                    return Return.err(upload_error(e))
                target.profile_picture = metadata.stored_filename

            target = await self.uow.users.update(target)
            await self.file_service.commit(self.uow, metadata)

            return Return.ok(UserResponse.from_user(target))
