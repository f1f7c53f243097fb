"""Admin API router: requires the super-admin key."""

from fastapi import APIRouter, Depends

from widget_relay.admin.schemas import ChatConfigListResponse, ChatConfigSummary
from widget_relay.chat_config.service import ChatConfigService
from widget_relay.common.database import DatabaseManager
from widget_relay.common.security import require_super_admin
from widget_relay.deps import get_config_service, get_db

router = APIRouter(prefix="/admin")


@router.get("/configs", response_model=ChatConfigListResponse)
async def list_configs(
    _=Depends(require_super_admin),
    db: DatabaseManager = Depends(get_db),
    svc: ChatConfigService = Depends(get_config_service),
):
    async with db.get_session() as session:
        configs = await svc.list_configs(session)
        return ChatConfigListResponse(
            data=[ChatConfigSummary.model_validate(c) for c in configs],
        )
