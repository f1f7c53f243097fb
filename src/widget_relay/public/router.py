"""Slug-addressed public routes: JSON lookup and the hosted chat page."""

import pathlib

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from widget_relay.chat_config.service import ChatConfigService
from widget_relay.common.database import DatabaseManager
from widget_relay.common.exceptions import NotFoundError
from widget_relay.deps import get_config_service, get_db
from widget_relay.public.service import page_title, public_view, resolve_public

_TEMPLATES_DIR = pathlib.Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(_TEMPLATES_DIR))

router = APIRouter()


@router.get("/public/{slug}")
async def get_public_config(
    slug: str,
    db: DatabaseManager = Depends(get_db),
    svc: ChatConfigService = Depends(get_config_service),
):
    async with db.get_session() as session:
        config = await resolve_public(session, svc, slug)
        return {"success": True, "data": public_view(config)}


@router.get("/chat/{slug}", response_class=HTMLResponse)
async def chat_page(
    request: Request,
    slug: str,
    db: DatabaseManager = Depends(get_db),
    svc: ChatConfigService = Depends(get_config_service),
):
    async with db.get_session() as session:
        try:
            config = await resolve_public(session, svc, slug)
        except NotFoundError:
            return templates.TemplateResponse(
                request, "not_found.html", {"title": "Chat Not Found"}, status_code=404,
            )
        return templates.TemplateResponse(
            request,
            "chat.html",
            {"title": page_title(config), "widget": public_view(config)},
        )
