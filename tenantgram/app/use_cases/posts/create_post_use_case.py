"""
Create Post Use Case

Stores the attached image through the media pipeline and creates the post.
"""

from tenantgram.libs.result import Error, Result, Return
from tenantgram.app.services.authorization import Principal
from tenantgram.app.services.file_service import FileService, upload_error
from tenantgram.app.services.file_storage import StorageError
from tenantgram.app.services.media import MediaError
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.domain.base import utc_now
from tenantgram.domain.entities import Post, UserRole
from .dtos import CreatePostCommand, PostResponse
from .validation import validate_post_fields


class CreatePostUseCase:
    """
    Use case for creating a post.

    Business Rules:
    - DEFAULT users only
    - The caller must belong to a business; the post belongs to that business
    - Title is required (max 255), description max 1000, location max 255
    - An image (JPEG, PNG or WebP) is required and stored tenant-private
    - likes starts at 0
    """

    def __init__(self, uow: UnitOfWork, file_service: FileService):
        self.uow = uow
        self.file_service = file_service

    async def execute(self, caller: Principal, command: CreatePostCommand) -> Result[PostResponse]:
        if caller.role != UserRole.DEFAULT:
            return Return.err(Error("INSUFFICIENT_ROLE", "Only members can create posts"))
        if not caller.business_id:
            return Return.err(Error("NO_BUSINESS", "You must belong to a business to post"))

        error = validate_post_fields(command.title, command.description, command.location)
        if error:
            return Return.err(error)
        if not command.image:
            return Return.err(Error("VALIDATION_ERROR", "An image file is required"))

        async with self.uow:
            try:
                metadata = await self.file_service.store(
                    self.uow,
                    command.image,
                    command.image_filename,
                    business_id=caller.business_id,
                    user_id=caller.id,
                    require_image=True,
                )
            except (MediaError, StorageError) as e:
                return Return.err(upload_error(e))

            post = Post(
                title=command.title,
                description=command.description,
                location=command.location,
                creation_date_utc=utc_now(),
                user_id=caller.id,
                business_id=caller.business_id,
                image_url=metadata.stored_filename,
                likes=0,
            )
            post = await self.uow.posts.create(post)
            await self.file_service.commit(self.uow, metadata)

            return Return.ok(PostResponse.from_post(post))
