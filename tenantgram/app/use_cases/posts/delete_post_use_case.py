"""
Delete Post Use Case
"""

from tenantgram.libs.result import Error, Result, Return
from tenantgram.app.services.authorization import Principal
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.domain.entities import UserRole


class DeletePostUseCase:
    """
    Business Rules:
    - DEFAULT users only
    - The caller must be the author and the post must be in the caller's business
    - The post's likes are removed with it; the image blob is kept
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Principal, post_id: str) -> Result[None]:
        if caller.role != UserRole.DEFAULT:
            return Return.err(Error("INSUFFICIENT_ROLE", "Only members can delete posts"))

        async with self.uow:
            post = await self.uow.posts.get_by_id(post_id)
            if post is None:
                return Return.err(Error("POST_NOT_FOUND", "Post not found"))

            if post.user_id != caller.id or post.business_id != caller.business_id:
                return Return.err(Error("CROSS_TENANT_ACCESS", "You cannot delete this post"))

            await self.uow.likes.delete_by_post(post.id)
            await self.uow.posts.delete(post)
            await self.uow.commit()
            return Return.ok(None)
