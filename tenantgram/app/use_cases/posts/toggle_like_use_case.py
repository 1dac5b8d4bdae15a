"""
Toggle Like Use Case

Likes or unlikes a post for the caller and keeps the post's counter in step.
"""

from tenantgram.libs.result import Error, Result, Return
from tenantgram.app.services.authorization import CONTENT_MEMBER, Principal
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.domain.entities import Like


class ToggleLikeUseCase:
    """
    Use case for toggling a like.

    Business Rules:
    - ADMIN or DEFAULT, within the post's business
    - No Like row yet: insert liked=True and increment the counter
    - Existing row: flip liked; increment when now liked, decrement otherwise
    - The counter is adjusted in one atomic statement and never drops below 0
    - Returns the new liked state
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Principal, post_id: str) -> Result[bool]:
        if caller.role not in CONTENT_MEMBER:
            return Return.err(Error("INSUFFICIENT_ROLE", "Only members can like posts"))

        async with self.uow:
            post = await self.uow.posts.get_by_id(post_id)
            if post is None:
                return Return.err(Error("POST_NOT_FOUND", "Post not found"))

            if not caller.business_id or post.business_id != caller.business_id:
                return Return.err(Error("CROSS_TENANT_ACCESS", "You cannot like this post"))

            like = await self.uow.likes.get_by_user_and_post(caller.id, post_id)
            if like is None:
                like = Like(user_id=caller.id, post_id=post_id, liked=True)
                await self.uow.likes.create(like)
                is_liked = True
            else:
                is_liked = not like.liked
                like.liked = is_liked
                await self.uow.likes.update(like)

            await self.uow.posts.adjust_likes(post_id, 1 if is_liked else -1)
            await self.uow.commit()
            return Return.ok(is_liked)
