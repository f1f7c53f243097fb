"""Tests for chat config service: upsert, partial update, delete, slug allocation."""

import pytest
from sqlalchemy.exc import IntegrityError

from widget_relay.chat_config.models import ChatConfigModel
from widget_relay.chat_config.service import SLUG_ALPHABET, ChatConfigService, generate_slug
from widget_relay.common.config import RelaySettings
from widget_relay.common.database import DatabaseManager
from widget_relay.common.exceptions import InternalError, SlugExhaustedError


def make_settings(**overrides) -> RelaySettings:
    defaults = {"db_url": "sqlite+aiosqlite://"}
    defaults.update(overrides)
    return RelaySettings(**defaults)


FIELDS = {
    "base_url": "https://api.example.com/run/",
    "workflow_id": "wf-1",
    "api_key": "secret-key",
}


@pytest.fixture
async def db():
    manager = DatabaseManager(make_settings())
    await manager.init()
    await manager.create_all()
    yield manager
    await manager.close()


@pytest.fixture
def svc():
    return ChatConfigService(make_settings())


class TestGenerateSlug:
    def test_length_and_alphabet(self):
        slug = generate_slug(10)
        assert len(slug) == 10
        assert set(slug) <= set(SLUG_ALPHABET)
        assert slug == slug.lower()

    def test_random(self):
        assert len({generate_slug() for _ in range(50)}) == 50


class TestUpsert:
    async def test_create(self, db, svc):
        async with db.get_session() as session:
            config = await svc.upsert(session, "org_1", **FIELDS)
            assert config.id is not None
            assert config.organization_id == "org_1"
            assert config.is_enabled is True
            assert len(config.public_slug) == 10
            assert config.created_at is not None

    async def test_create_respects_is_enabled(self, db, svc):
        async with db.get_session() as session:
            config = await svc.upsert(session, "org_1", is_enabled=False, **FIELDS)
            assert config.is_enabled is False

    async def test_second_call_updates_same_row(self, db, svc):
        async with db.get_session() as session:
            first = await svc.upsert(session, "org_1", **FIELDS)
        async with db.get_session() as session:
            second = await svc.upsert(session, "org_1", **FIELDS)
        assert second.id == first.id
        assert second.public_slug == first.public_slug
        async with db.get_session() as session:
            assert len(await svc.list_configs(session)) == 1

    async def test_existing_row_keeps_slug(self, db, svc):
        async with db.get_session() as session:
            first = await svc.upsert(session, "org_1", **FIELDS)
        async with db.get_session() as session:
            second = await svc.upsert(
                session, "org_1", public_slug="new-slug",
                **{**FIELDS, "workflow_id": "wf-2"},
            )
            assert second.public_slug == first.public_slug
            assert second.workflow_id == "wf-2"

    async def test_preferred_slug_used_when_free(self, db, svc):
        async with db.get_session() as session:
            config = await svc.upsert(session, "org_1", public_slug="acme", **FIELDS)
            assert config.public_slug == "acme"

    async def test_preferred_slug_replaced_when_taken(self, db, svc):
        async with db.get_session() as session:
            await svc.upsert(session, "org_1", public_slug="acme", **FIELDS)
        async with db.get_session() as session:
            config = await svc.upsert(session, "org_2", public_slug="acme", **FIELDS)
            assert config.public_slug != "acme"

    async def test_colliding_generator_retries(self, db):
        candidates = iter(["dup", "dup", "dup", "fresh"])
        svc = ChatConfigService(make_settings(), slug_factory=lambda: next(candidates))
        async with db.get_session() as session:
            first = await svc.upsert(session, "org_1", **FIELDS)
        async with db.get_session() as session:
            second = await svc.upsert(session, "org_2", **FIELDS)
        assert first.public_slug == "dup"
        assert second.public_slug == "fresh"

    async def test_slug_retries_are_bounded(self, db):
        svc = ChatConfigService(
            make_settings(slug_max_attempts=3),
            slug_factory=lambda: "always",
        )
        async with db.get_session() as session:
            await svc.upsert(session, "org_1", **FIELDS)
        with pytest.raises(SlugExhaustedError) as exc_info:
            async with db.get_session() as session:
                await svc.upsert(session, "org_2", **FIELDS)
        assert exc_info.value.attempts == 3

    async def test_update_path_refreshes_updated_at(self, db, svc):
        async with db.get_session() as session:
            first = await svc.upsert(session, "org_1", **FIELDS)
            created_stamp = first.updated_at
        async with db.get_session() as session:
            second = await svc.upsert(session, "org_1", **FIELDS)
            assert second.updated_at >= created_stamp


class TestSlugAvailability:
    async def test_available(self, db, svc):
        async with db.get_session() as session:
            assert await svc.is_slug_available(session, "free") is True

    async def test_taken(self, db, svc):
        async with db.get_session() as session:
            config = await svc.upsert(session, "org_1", **FIELDS)
        async with db.get_session() as session:
            assert await svc.is_slug_available(session, config.public_slug) is False


class TestLookup:
    async def test_by_organization(self, db, svc):
        async with db.get_session() as session:
            await svc.upsert(session, "org_1", **FIELDS)
        async with db.get_session() as session:
            found = await svc.get_by_organization(session, "org_1")
            assert found is not None
            assert found.workflow_id == "wf-1"

    async def test_by_slug_and_id(self, db, svc):
        async with db.get_session() as session:
            config = await svc.upsert(session, "org_1", **FIELDS)
        async with db.get_session() as session:
            assert (await svc.get_by_public_slug(session, config.public_slug)).id == config.id
            assert (await svc.get_by_id(session, config.id)).public_slug == config.public_slug

    async def test_missing(self, db, svc):
        async with db.get_session() as session:
            assert await svc.get_by_organization(session, "nope") is None
            assert await svc.get_by_public_slug(session, "nope") is None
            assert await svc.get_by_id(session, 999) is None


class TestUpdate:
    async def test_partial_update_only_touches_given_fields(self, db, svc):
        async with db.get_session() as session:
            config = await svc.upsert(session, "org_1", company_name="Old", **FIELDS)
            slug = config.public_slug
        async with db.get_session() as session:
            updated = await svc.update(session, "org_1", company_name="X")
            assert updated.company_name == "X"
            assert updated.public_slug == slug
            assert updated.api_key == "secret-key"
            assert updated.workflow_id == "wf-1"

    async def test_update_ignores_null_required_fields(self, db, svc):
        async with db.get_session() as session:
            await svc.upsert(session, "org_1", **FIELDS)
        async with db.get_session() as session:
            updated = await svc.update(session, "org_1", api_key=None, is_enabled=None)
            assert updated.api_key == "secret-key"
            assert updated.is_enabled is True

    async def test_update_can_disable(self, db, svc):
        async with db.get_session() as session:
            await svc.upsert(session, "org_1", **FIELDS)
        async with db.get_session() as session:
            updated = await svc.update(session, "org_1", is_enabled=False)
            assert updated.is_enabled is False

    async def test_update_not_found(self, db, svc):
        async with db.get_session() as session:
            assert await svc.update(session, "nope", company_name="X") is None


class TestDelete:
    async def test_delete_returns_removed_row(self, db, svc):
        async with db.get_session() as session:
            config = await svc.upsert(session, "org_1", **FIELDS)
        async with db.get_session() as session:
            removed = await svc.delete(session, "org_1")
            assert removed is not None
            assert removed.id == config.id
        async with db.get_session() as session:
            assert await svc.get_by_organization(session, "org_1") is None
            assert await svc.get_by_public_slug(session, config.public_slug) is None

    async def test_delete_not_found(self, db, svc):
        async with db.get_session() as session:
            assert await svc.delete(session, "nope") is None


class OptimisticSlugService(ChatConfigService):
    """Trusts every candidate slug, leaving uniqueness to the unique index."""

    async def is_slug_available(self, session, slug):
        return True


class TestStoreUniqueness:
    async def test_duplicate_slug_rejected_by_store(self, db):
        with pytest.raises(IntegrityError):
            async with db.get_session() as session:
                session.add(ChatConfigModel(organization_id="org_1", public_slug="dup", **FIELDS))
                session.add(ChatConfigModel(organization_id="org_2", public_slug="dup", **FIELDS))
                await session.flush()

    async def test_duplicate_organization_rejected_by_store(self, db):
        with pytest.raises(IntegrityError):
            async with db.get_session() as session:
                session.add(ChatConfigModel(organization_id="org_1", public_slug="one", **FIELDS))
                session.add(ChatConfigModel(organization_id="org_1", public_slug="two", **FIELDS))
                await session.flush()

    async def test_upsert_maps_store_conflict_to_internal_error(self, db):
        svc = OptimisticSlugService(make_settings(), slug_factory=lambda: "dup")
        async with db.get_session() as session:
            await svc.upsert(session, "org_1", **FIELDS)
        with pytest.raises(InternalError) as exc_info:
            async with db.get_session() as session:
                await svc.upsert(session, "org_2", **FIELDS)
        assert exc_info.value.message == "Failed to save configuration"
        async with db.get_session() as session:
            assert [c.organization_id for c in await svc.list_configs(session)] == ["org_1"]


class TestGetByIdRange:
    async def test_out_of_range_id_is_absent(self, db, svc):
        async with db.get_session() as session:
            assert await svc.get_by_id(session, 2**63) is None
