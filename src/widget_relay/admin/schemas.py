"""Pydantic schemas for admin endpoints."""

from typing import Optional

from widget_relay.common.schemas import CamelModel


class ChatConfigSummary(CamelModel):
    id: int
    organization_id: str
    public_slug: str
    company_name: Optional[str] = None
    is_enabled: bool
    base_url: str
    workflow_id: str
    has_api_key: bool

    model_config = {"from_attributes": True}


class ChatConfigListResponse(CamelModel):
    success: bool = True
    data: list[ChatConfigSummary]
    message: str = "All chat configurations"
