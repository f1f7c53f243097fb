"""Public chat relay: no organization auth, resolves the config by id."""

import logging

from fastapi import APIRouter, Depends

from widget_relay.chat_config.service import ChatConfigService
from widget_relay.common.database import DatabaseManager
from widget_relay.common.exceptions import NotFoundError, UpstreamError
from widget_relay.deps import get_config_service, get_db, get_relay
from widget_relay.relay.client import RelayFailure, WorkflowRelay
from widget_relay.relay.normalize import extract_reply
from widget_relay.relay.schemas import ChatReplyData, ChatSendRequest, ChatSendResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat")


@router.post("/send", response_model=ChatSendResponse)
async def send_message(
    body: ChatSendRequest,
    db: DatabaseManager = Depends(get_db),
    svc: ChatConfigService = Depends(get_config_service),
    relay: WorkflowRelay = Depends(get_relay),
):
    # Read what the relay needs, then release the session before the outbound call.
    async with db.get_session() as session:
        config = await svc.get_by_id(session, body.config_id)
        if config is None or not config.is_enabled:
            raise NotFoundError("Chat configuration not found or disabled")
        target = (config.base_url, config.workflow_id, config.api_key)

    result = await relay.relay(*target, body.message, body.session_id)
    if isinstance(result, RelayFailure):
        logger.error("Relay for config %s failed: %s", body.config_id, result.error)
        raise UpstreamError(details=result.error)

    return ChatSendResponse(
        data=ChatReplyData(
            response=extract_reply(result.payload),
            session_id=body.session_id,
        )
    )
