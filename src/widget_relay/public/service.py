"""Public resolution of a slug to a chat configuration."""

from sqlalchemy.ext.asyncio import AsyncSession

from widget_relay.chat_config.models import ChatConfigModel
from widget_relay.chat_config.service import ChatConfigService
from widget_relay.common.exceptions import NotFoundError

DEFAULT_PRIMARY_COLOR = "#3B82F6"
DEFAULT_SECONDARY_COLOR = "#10B981"
DEFAULT_COMPANY_NAME = "Support"
DEFAULT_CHAT_TITLE = "Chat Support"
DEFAULT_WELCOME_MESSAGE = "Hello! How can I help you today?"
DEFAULT_PLACEHOLDER_TEXT = "Type your message here..."


async def resolve_public(
    session: AsyncSession, svc: ChatConfigService, slug: str
) -> ChatConfigModel:
    """Look up a configuration by slug for anonymous callers.

    A disabled configuration is reported exactly like a missing one. The
    returned row still carries the API key; callers must only hand
    ``public_view(config)`` to the browser.
    """
    config = await svc.get_by_public_slug(session, slug)
    if config is None or not config.is_enabled:
        raise NotFoundError()
    return config


def public_view(config: ChatConfigModel) -> dict:
    """Browser-safe fields with display defaults filled in."""
    return {
        "id": config.id,
        "publicSlug": config.public_slug,
        "companyName": config.company_name or DEFAULT_COMPANY_NAME,
        "logoUrl": config.logo_url or None,
        "primaryColor": config.primary_color or DEFAULT_PRIMARY_COLOR,
        "secondaryColor": config.secondary_color or DEFAULT_SECONDARY_COLOR,
        "welcomeMessage": config.welcome_message or DEFAULT_WELCOME_MESSAGE,
        "chatTitle": config.chat_title or DEFAULT_CHAT_TITLE,
        "placeholderText": config.placeholder_text or DEFAULT_PLACEHOLDER_TEXT,
    }


def page_title(config: ChatConfigModel) -> str:
    return f"{config.chat_title or 'Chat'} - {config.company_name or 'Support'}"
