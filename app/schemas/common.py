"""
Shared schema primitives used across the API.
"""
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys (`jobLocation`, `lastName`, ...)."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        # Field rules accept numbers as text; so do the models.
        coerce_numbers_to_str=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    msg: str


class ErrorResponse(BaseModel):
    """Standard error envelope returned for all 4xx/5xx responses."""
    model_config = ConfigDict(from_attributes=True)

    code: str
    message: str
    details: Optional[dict[str, Any]] = None
