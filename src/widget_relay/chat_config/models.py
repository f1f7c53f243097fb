"""SQLAlchemy model for chat widget configurations."""

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from widget_relay.common.models import Base, TimestampMixin


class ChatConfigModel(Base, TimestampMixin):
    __tablename__ = "chat_configs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )

    # Relay target
    base_url: Mapped[str] = mapped_column(Text, nullable=False)
    workflow_id: Mapped[str] = mapped_column(String(255), nullable=False)
    api_key: Mapped[str] = mapped_column(Text, nullable=False)

    # Branding
    company_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    logo_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    primary_color: Mapped[str | None] = mapped_column(String(32), nullable=True)
    secondary_color: Mapped[str | None] = mapped_column(String(32), nullable=True)
    welcome_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Chat surface
    chat_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    placeholder_text: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    public_slug: Mapped[str] = mapped_column(
        String(64), unique=True, nullable=False, index=True
    )

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)
