"""
Update Post Use Case
"""

from tenantgram.libs.result import Error, Result, Return
from tenantgram.app.services.authorization import Principal
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.domain.entities import UserRole
from .dtos import PostResponse, UpdatePostCommand
from .validation import validate_post_fields


class UpdatePostUseCase:
    """
    Business Rules:
    - ADMIN only
    - The caller must be the author and the post must be in the caller's business
    - title, description and location are replaced; the image is kept
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Principal, post_id: str, command: UpdatePostCommand
    ) -> Result[PostResponse]:
        if caller.role != UserRole.ADMIN:
            return Return.err(Error("INSUFFICIENT_ROLE", "Only administrators can update posts"))

        error = validate_post_fields(command.title, command.description, command.location)
        if error:
            return Return.err(error)

        async with self.uow:
            post = await self.uow.posts.get_by_id(post_id)
            if post is None:
                return Return.err(Error("POST_NOT_FOUND", "Post not found"))

            if post.user_id != caller.id or post.business_id != caller.business_id:
                return Return.err(Error("CROSS_TENANT_ACCESS", "You cannot update this post"))

            post.title = command.title
            post.description = command.description
            post.location = command.location
            post = await self.uow.posts.update(post)
            await self.uow.commit()

            return Return.ok(PostResponse.from_post(post))
