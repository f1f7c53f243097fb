#!/usr/bin/env python3
"""Seed a demo chat configuration and print how to reach it.

Usage:
    python scripts/seed_demo_config.py [ORG_ID] [BASE_URL] [WORKFLOW_ID] [API_KEY]
"""

import asyncio
import sys
from pathlib import Path

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from widget_relay.chat_config.service import ChatConfigService
from widget_relay.common.config import get_settings
from widget_relay.common.database import DatabaseManager
from widget_relay.common.security import issue_org_token

DEMO = {
    "organization_id": "org_demo",
    "base_url": "http://localhost:7860/api/v1/run/",
    "workflow_id": "demo-workflow",
    "api_key": "demo-key",
}


async def seed_demo(argv: list[str]) -> None:
    values = dict(DEMO)
    for key, arg in zip(("organization_id", "base_url", "workflow_id", "api_key"), argv):
        values[key] = arg

    settings = get_settings()
    db = DatabaseManager(settings)
    await db.init()
    await db.create_all()

    org_id = values.pop("organization_id")
    svc = ChatConfigService(settings)
    async with db.get_session() as session:
        existing = await svc.get_by_organization(session, org_id)
        config = await svc.upsert(
            session,
            org_id,
            company_name="Demo Co",
            chat_title="Demo Chat",
            **values,
        )
        verb = "updated" if existing else "created"
        print(f"  [{verb}] config {config.id} (slug={config.public_slug})")

    await db.close()
    print(f"\nPublic page: http://{settings.host}:{settings.port}/chat/{config.public_slug}")
    print(f"Owner token: {issue_org_token(config.organization_id, settings)}")


if __name__ == "__main__":
    asyncio.run(seed_demo(sys.argv[1:]))
