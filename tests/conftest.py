"""Shared test fixtures for Widget-Relay."""

import json
import os

import httpx
import pytest
from httpx import ASGITransport, AsyncClient


SECRET_KEY = "test-secret-key-for-unit-tests"
SUPER_ADMIN_KEY = "test-super-admin-key"
ORG_ID = "org_acme"


class FakeUpstream:
    """Stand-in for the external workflow runner, served via httpx.MockTransport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.payload = {"response": "hello"}
        self.raw_body: bytes | None = None
        self.exc: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def app(upstream):
    """Create a test app with in-memory DB and a fake workflow runner."""
    os.environ["RELAY_DB_URL"] = "sqlite+aiosqlite://"
    os.environ["RELAY_SECRET_KEY"] = SECRET_KEY
    os.environ["RELAY_SUPER_ADMIN_KEY"] = SUPER_ADMIN_KEY
    os.environ["RELAY_LOG_JSON"] = "false"

    # Clear caches and singletons so new env vars take effect
    from widget_relay.common.config import get_settings
    get_settings.cache_clear()

    from widget_relay.deps import reset_singletons
    reset_singletons()

    from widget_relay.app import create_app
    from widget_relay.deps import get_relay
    from widget_relay.relay.client import WorkflowRelay

    application = create_app()
    relay = WorkflowRelay(get_settings(), transport=upstream.transport)
    application.dependency_overrides[get_relay] = lambda: relay
    return application


@pytest.fixture
async def client(app):
    # Manually init DB since ASGITransport doesn't run lifespan
    from widget_relay.deps import get_db
    db = get_db()
    await db.init()
    await db.create_all()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await db.close()


@pytest.fixture
def org_headers(app):
    from widget_relay.common.security import issue_org_token
    return {"Authorization": f"Bearer {issue_org_token(ORG_ID)}"}


@pytest.fixture
def other_org_headers(app):
    from widget_relay.common.security import issue_org_token
    return {"Authorization": f"Bearer {issue_org_token('org_globex')}"}


@pytest.fixture
def admin_headers():
    return {"X-Relay-Admin-Key": SUPER_ADMIN_KEY}


@pytest.fixture
def config_body():
    return {
        "baseUrl": "https://api.example.com/run/",
        "workflowId": "wf-1",
        "apiKey": "k",
    }
