"""Pydantic schemas for chat configuration endpoints."""

import re
from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import Field, field_validator

from widget_relay.common.schemas import CamelModel, HttpUrlStr

SLUG_PATTERN = r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$"

# Mutable fields written by a full save. publicSlug is only honoured at creation.
MUTABLE_FIELDS = (
    "base_url",
    "workflow_id",
    "api_key",
    "company_name",
    "logo_url",
    "primary_color",
    "secondary_color",
    "welcome_message",
    "chat_title",
    "placeholder_text",
    "is_enabled",
)

# Columns that may not be cleared by a partial update.
REQUIRED_FIELDS = ("base_url", "workflow_id", "api_key", "is_enabled")


class ChatConfigCreate(CamelModel):
    base_url: HttpUrlStr
    workflow_id: str = Field(..., min_length=1)
    api_key: str = Field(..., min_length=1)
    company_name: Optional[str] = None
    logo_url: Optional[Union[HttpUrlStr, Literal[""]]] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    welcome_message: Optional[str] = None
    chat_title: Optional[str] = None
    placeholder_text: Optional[str] = None
    is_enabled: Optional[bool] = None
    public_slug: Optional[str] = Field(None, max_length=64)

    @field_validator("public_slug")
    @classmethod
    def _normalize_slug(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == "":
            return None
        v = v.strip().lower()
        if not re.match(SLUG_PATTERN, v):
            raise ValueError("publicSlug may only contain lowercase letters, digits and hyphens")
        return v

    def to_fields(self) -> dict:
        """Column values for the fields present in the request body."""
        return self.model_dump(exclude_unset=True, exclude={"public_slug"})


class ChatConfigUpdate(CamelModel):
    """Partial update; only fields present in the request body are applied."""

    base_url: Optional[HttpUrlStr] = None
    workflow_id: Optional[str] = Field(None, min_length=1)
    api_key: Optional[str] = Field(None, min_length=1)
    company_name: Optional[str] = None
    logo_url: Optional[Union[HttpUrlStr, Literal[""]]] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    welcome_message: Optional[str] = None
    chat_title: Optional[str] = None
    placeholder_text: Optional[str] = None
    is_enabled: Optional[bool] = None
    # Accepted for symmetry with the create body, never applied.
    public_slug: Optional[str] = None

    def to_fields(self) -> dict:
        data = self.model_dump(exclude_unset=True, exclude={"public_slug"})
        for key in REQUIRED_FIELDS:
            if key in data and data[key] is None:
                del data[key]
        return data


class ChatConfigRead(CamelModel):
    """Configuration as returned to its owner: the API key is replaced by a flag."""

    id: int
    organization_id: str
    base_url: str
    workflow_id: str
    company_name: Optional[str] = None
    logo_url: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    welcome_message: Optional[str] = None
    chat_title: Optional[str] = None
    placeholder_text: Optional[str] = None
    is_enabled: bool
    public_slug: str
    has_api_key: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ChatConfigResponse(CamelModel):
    success: bool = True
    data: ChatConfigRead
    message: Optional[str] = None


class ConnectionTestRequest(CamelModel):
    base_url: HttpUrlStr
    workflow_id: str = Field(..., min_length=1)
    api_key: str = Field(..., min_length=1)
    test_message: Optional[str] = None
