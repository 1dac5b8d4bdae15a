"""
Shared DTO base classes.

Responses are serialized with camelCase keys, the wire format the mobile
clients expect; Python code keeps snake_case attribute names.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class MessageResponse(BaseModel):
    """Plain confirmation message"""

    message: str
