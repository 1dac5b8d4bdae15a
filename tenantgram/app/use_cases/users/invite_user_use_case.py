"""
Invite User Use Case

Binds an existing, unassigned user to the inviting administrator's business.
"""

import logging

from tenantgram.libs.result import Error, Result, Return
from tenantgram.app.services.authorization import Principal, is_admin
from tenantgram.app.services.email_service import EmailError, IEmailService
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.app.use_cases.common import MessageResponse

logger = logging.getLogger(__name__)


class InviteUserUseCase:
    """
    Use case for inviting a user to a business.

    Business Rules:
    - Only ADMIN may invite
    - Invitee must already have an account
    - Invitee must not belong to a business yet
    - Invitee is bound to the ADMIN's business, then notified by email
    """

    def __init__(self, uow: UnitOfWork, email_service: IEmailService):
        self.uow = uow
        self.email_service = email_service

    async def execute(self, caller: Principal, email: str) -> Result[MessageResponse]:
        if not is_admin(caller):
            return Return.err(Error("INSUFFICIENT_ROLE", "Only administrators can invite users"))

        async with self.uow:
            invitee = await self.uow.users.get_by_email(email)
            if invitee is None:
                return Return.err(
                    Error("USER_NOT_FOUND", f"User with email {email} not found.")
                )

            if invitee.business_id:
                return Return.err(
                    Error("ALREADY_ASSIGNED", "User already assigned to a business.")
                )

            business = None
            if caller.business_id:
                business = await self.uow.businesses.get_by_id(caller.business_id)
            if business is None:
                return Return.err(Error("BUSINESS_NOT_FOUND", "Business not found."))

            invitee.business_id = business.id
            await self.uow.users.update(invitee)
            await self.uow.commit()

            recipient = invitee.email
            business_name = business.name

        try:
            await self.email_service.send_email(
                recipient,
                f"You have been invited to join Tenantgram : {business_name}",
                "You have been invited to join. Please log in with your email on the app.",
            )
        except EmailError as e:
            logger.error(f"Failed to send invitation email to {recipient}: {e}")
            return Return.err(Error("EMAIL_SEND_FAILED", "Failed to send invitation email."))

        return Return.ok(MessageResponse(message="User invited successfully."))
