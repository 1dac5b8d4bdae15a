"""
List Posts Use Case

Pages through the caller's business feed, newest first.
"""

from typing import List

from tenantgram.libs.result import Result, Return
from tenantgram.app.services.authorization import Principal
from tenantgram.app.services.unit_of_work import UnitOfWork
from .dtos import PostResponse

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def normalize_paging(page: int, size: int) -> tuple:
    """
    Map client paging to a 0-based page index.

    Clients count pages from 1; page 0 is kept as the first page as well.
    """
    if page > 0:
        page -= 1
    page = max(page, 0)
    if size < 1:
        size = DEFAULT_PAGE_SIZE
    size = min(size, MAX_PAGE_SIZE)
    return page, size


class ListPostsUseCase:
    """
    Business Rules:
    - Only posts of the caller's business are returned
    - Sorted by creation date, newest first
    - Each post carries is_liked for the caller (a Like row with liked=True)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Principal, page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> Result[List[PostResponse]]:
        if not caller.business_id:
            return Return.ok([])

        page, size = normalize_paging(page, size)

        async with self.uow:
            posts = await self.uow.posts.list_by_business(caller.business_id, page, size)
            likes = await self.uow.likes.get_by_user_and_posts(
                caller.id, [p.id for p in posts]
            )
            liked = {like.post_id for like in likes if like.liked}

            return Return.ok([PostResponse.from_post(p, p.id in liked) for p in posts])
