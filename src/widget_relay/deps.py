"""Dependency providers for Widget-Relay.

Each provider builds its service once from explicit settings; routers take
them through ``Depends`` so tests can swap fakes in with
``app.dependency_overrides``.
"""

from widget_relay.common.config import get_settings
from widget_relay.common.database import DatabaseManager
from widget_relay.chat_config.service import ChatConfigService
from widget_relay.relay.client import WorkflowRelay

_db: DatabaseManager | None = None
_configs: ChatConfigService | None = None
_relay: WorkflowRelay | None = None


def get_db() -> DatabaseManager:
    global _db
    if _db is None:
        _db = DatabaseManager(get_settings())
    return _db


def get_config_service() -> ChatConfigService:
    global _configs
    if _configs is None:
        _configs = ChatConfigService(get_settings())
    return _configs


def get_relay() -> WorkflowRelay:
    global _relay
    if _relay is None:
        _relay = WorkflowRelay(get_settings())
    return _relay


def reset_singletons() -> None:
    """Reset all singletons (for testing)."""
    global _db, _configs, _relay
    _db = None
    _configs = None
    _relay = None
