"""Chat configuration CRUD service."""

import logging
import secrets
import string
from typing import Any, Callable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from widget_relay.chat_config.models import ChatConfigModel
from widget_relay.chat_config.schemas import MUTABLE_FIELDS, REQUIRED_FIELDS
from widget_relay.common.config import RelaySettings
from widget_relay.common.exceptions import InternalError, SlugExhaustedError
from widget_relay.common.models import utcnow

logger = logging.getLogger(__name__)

SLUG_ALPHABET = string.ascii_lowercase + string.digits

# Largest value a 64-bit INTEGER primary key can hold.
MAX_CONFIG_ID = 2**63 - 1


def generate_slug(length: int = 10) -> str:
    """Short, URL-safe, lowercase random token."""
    return "".join(secrets.choice(SLUG_ALPHABET) for _ in range(length))


class ChatConfigService:
    """One configuration per organization, addressable by a unique public slug."""

    def __init__(
        self,
        settings: RelaySettings,
        slug_factory: Callable[[], str] | None = None,
    ):
        self.settings = settings
        self._slug_factory = slug_factory

    # ── Lookups ──

    async def get_by_organization(
        self, session: AsyncSession, organization_id: str
    ) -> ChatConfigModel | None:
        result = await session.execute(
            select(ChatConfigModel).where(
                ChatConfigModel.organization_id == organization_id
            )
        )
        return result.scalar_one_or_none()

    async def get_by_public_slug(
        self, session: AsyncSession, slug: str
    ) -> ChatConfigModel | None:
        result = await session.execute(
            select(ChatConfigModel).where(ChatConfigModel.public_slug == slug)
        )
        return result.scalar_one_or_none()

    async def get_by_id(
        self, session: AsyncSession, config_id: int
    ) -> ChatConfigModel | None:
        if not 0 < config_id <= MAX_CONFIG_ID:
            return None
        return await session.get(ChatConfigModel, config_id)

    async def list_configs(self, session: AsyncSession) -> list[ChatConfigModel]:
        result = await session.execute(
            select(ChatConfigModel).order_by(ChatConfigModel.id)
        )
        return list(result.scalars().all())

    # ── Slugs ──

    def generate_slug(self) -> str:
        if self._slug_factory is not None:
            return self._slug_factory()
        return generate_slug(self.settings.slug_length)

    async def is_slug_available(self, session: AsyncSession, slug: str) -> bool:
        return await self.get_by_public_slug(session, slug) is None

    async def allocate_slug(
        self, session: AsyncSession, preferred: str | None = None
    ) -> str:
        """Return a slug no configuration holds, trying ``preferred`` first.

        Raises SlugExhaustedError after ``slug_max_attempts`` taken candidates.
        """
        candidate = preferred or self.generate_slug()
        attempts = self.settings.slug_max_attempts
        for _ in range(attempts):
            if await self.is_slug_available(session, candidate):
                return candidate
            candidate = self.generate_slug()
        logger.error("Slug allocation exhausted after %d attempts", attempts)
        raise SlugExhaustedError(attempts)

    # ── Mutations ──

    async def upsert(
        self,
        session: AsyncSession,
        organization_id: str,
        public_slug: str | None = None,
        **fields: Any,
    ) -> ChatConfigModel:
        """Create the organization's configuration, or overwrite the existing one.

        The public slug is only chosen on creation; an existing row keeps its slug.
        """
        config = await self.get_by_organization(session, organization_id)
        if config is not None:
            self._apply(config, fields)
            await session.flush()
            logger.info(
                "Chat config %s updated for organization %s",
                config.id, organization_id,
            )
            return config

        slug = await self.allocate_slug(session, public_slug)
        values = {k: v for k, v in fields.items() if k in MUTABLE_FIELDS}
        if values.get("is_enabled") is None:
            values["is_enabled"] = True
        config = ChatConfigModel(
            organization_id=organization_id,
            public_slug=slug,
            **values,
        )
        session.add(config)
        try:
            await session.flush()
        except IntegrityError as exc:
            logger.error(
                "Chat config insert rejected for organization %s: %s",
                organization_id, exc.orig,
            )
            raise InternalError("Failed to save configuration") from exc
        logger.info(
            "Chat config %s created for organization %s (slug=%s)",
            config.id, organization_id, slug,
        )
        return config

    async def update(
        self, session: AsyncSession, organization_id: str, **updates: Any
    ) -> ChatConfigModel | None:
        """Apply only the given fields. Returns None when nothing exists to update."""
        config = await self.get_by_organization(session, organization_id)
        if config is None:
            return None
        self._apply(config, updates)
        await session.flush()
        logger.info(
            "Chat config %s patched for organization %s (%s)",
            config.id, organization_id, ", ".join(sorted(updates)) or "no fields",
        )
        return config

    async def delete(
        self, session: AsyncSession, organization_id: str
    ) -> ChatConfigModel | None:
        """Remove the organization's configuration and return the removed row."""
        config = await self.get_by_organization(session, organization_id)
        if config is None:
            return None
        await session.delete(config)
        await session.flush()
        logger.info(
            "Chat config %s deleted for organization %s",
            config.id, organization_id,
        )
        return config

    @staticmethod
    def _apply(config: ChatConfigModel, fields: dict[str, Any]) -> None:
        for field in MUTABLE_FIELDS:
            if field not in fields:
                continue
            value = fields[field]
            if value is None and field in REQUIRED_FIELDS:
                continue
            setattr(config, field, value)
        config.updated_at = utcnow()
