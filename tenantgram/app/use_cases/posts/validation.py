from typing import Optional

from tenantgram.libs.result import Error
from tenantgram.domain.entities.post import (
    DESCRIPTION_MAX_LENGTH,
    LOCATION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)


def validate_post_fields(
    title: Optional[str], description: Optional[str], location: Optional[str]
) -> Optional[Error]:
    """Return the first violated field rule, or None"""
    if title is None or not title.strip():
        return Error("VALIDATION_ERROR", "Title is required")
    if len(title) > TITLE_MAX_LENGTH:
        return Error("VALIDATION_ERROR", f"Title must be at most {TITLE_MAX_LENGTH} characters")
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        return Error(
            "VALIDATION_ERROR",
            f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters",
        )
    if location is not None and len(location) > LOCATION_MAX_LENGTH:
        return Error(
            "VALIDATION_ERROR", f"Location must be at most {LOCATION_MAX_LENGTH} characters"
        )
    return None
