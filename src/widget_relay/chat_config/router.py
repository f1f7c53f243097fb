"""Chat configuration API: owner-scoped CRUD plus a connection check."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from widget_relay.chat_config.schemas import (
    ChatConfigCreate,
    ChatConfigRead,
    ChatConfigResponse,
    ChatConfigUpdate,
    ConnectionTestRequest,
)
from widget_relay.chat_config.service import ChatConfigService
from widget_relay.common.database import DatabaseManager
from widget_relay.common.exceptions import NotFoundError
from widget_relay.common.schemas import MessageResponse
from widget_relay.common.security import OrganizationContext, require_organization
from widget_relay.deps import get_config_service, get_db, get_relay
from widget_relay.relay.client import RelaySuccess, WorkflowRelay

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/config")


@router.get("", response_model=ChatConfigResponse)
async def get_config(
    org: OrganizationContext = Depends(require_organization),
    db: DatabaseManager = Depends(get_db),
    svc: ChatConfigService = Depends(get_config_service),
):
    async with db.get_session() as session:
        config = await svc.get_by_organization(session, org.organization_id)
        if config is None:
            raise NotFoundError()
        return ChatConfigResponse(data=ChatConfigRead.model_validate(config))


@router.post("", response_model=ChatConfigResponse)
async def save_config(
    body: ChatConfigCreate,
    org: OrganizationContext = Depends(require_organization),
    db: DatabaseManager = Depends(get_db),
    svc: ChatConfigService = Depends(get_config_service),
):
    async with db.get_session() as session:
        config = await svc.upsert(
            session,
            org.organization_id,
            public_slug=body.public_slug,
            **body.to_fields(),
        )
        return ChatConfigResponse(
            data=ChatConfigRead.model_validate(config),
            message="Chat configuration saved successfully",
        )


@router.put("", response_model=ChatConfigResponse)
async def update_config(
    body: ChatConfigUpdate,
    org: OrganizationContext = Depends(require_organization),
    db: DatabaseManager = Depends(get_db),
    svc: ChatConfigService = Depends(get_config_service),
):
    async with db.get_session() as session:
        config = await svc.update(session, org.organization_id, **body.to_fields())
        if config is None:
            raise NotFoundError()
        return ChatConfigResponse(
            data=ChatConfigRead.model_validate(config),
            message="Chat configuration updated successfully",
        )


@router.delete("", response_model=MessageResponse)
async def delete_config(
    org: OrganizationContext = Depends(require_organization),
    db: DatabaseManager = Depends(get_db),
    svc: ChatConfigService = Depends(get_config_service),
):
    async with db.get_session() as session:
        config = await svc.delete(session, org.organization_id)
        if config is None:
            raise NotFoundError()
        return MessageResponse(message="Chat configuration deleted successfully")


@router.post("/test")
async def test_connection(
    body: ConnectionTestRequest,
    org: OrganizationContext = Depends(require_organization),
    relay: WorkflowRelay = Depends(get_relay),
):
    result = await relay.test_connection(
        body.base_url, body.workflow_id, body.api_key, body.test_message,
    )
    if isinstance(result, RelaySuccess):
        return {"success": True, "message": result.message, "data": result.payload}
    logger.info(
        "Connection test for organization %s failed: %s",
        org.organization_id, result.error,
    )
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": result.message, "error": result.error},
    )
