"""Shared Pydantic schemas for Widget-Relay."""

from typing import Annotated, Any

from pydantic import AfterValidator, AnyHttpUrl, BaseModel, ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire model that speaks camelCase and also accepts snake_case input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    service: str = "widget-relay"


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    code: str
    details: Any = None


class MessageResponse(BaseModel):
    success: bool = True
    message: str


_HTTP_URL = TypeAdapter(AnyHttpUrl)


def _check_http_url(value: str) -> str:
    """Validate as an http(s) URL but keep the caller's spelling."""
    try:
        _HTTP_URL.validate_python(value)
    except PydanticValidationError:
        raise ValueError("Please enter a valid URL") from None
    return value


HttpUrlStr = Annotated[str, AfterValidator(_check_http_url)]
