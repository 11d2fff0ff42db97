"""Rekey atomicity: a rename either fully happens or leaves the old row intact."""

from datetime import datetime, timezone

import pytest
from sqlalchemy import select

from carobar.models.maker import Maker
from carobar.reference.repository import ReferenceRepository

SEEDED_AT = datetime(2024, 1, 1, 8, 30, tzinfo=timezone.utc)


async def seed_maker(session_factory, name: str = "TOYOTA") -> None:
    async with session_factory() as session:
        session.add(Maker(
            company_id="company-a",
            name=name,
            created_by="alice",
            created_at=SEEDED_AT,
            updated_by="alice",
            updated_at=SEEDED_AT,
        ))
        await session.commit()


async def maker_names(session_factory) -> list[str]:
    async with session_factory() as session:
        result = await session.execute(
            select(Maker.name).where(Maker.company_id == "company-a").order_by(Maker.name)
        )
        return list(result.scalars().all())


@pytest.mark.integration
@pytest.mark.asyncio
class TestRepositoryRekey:

    async def test_rekey_carries_creation_stamps(self, session_factory):
        await seed_maker(session_factory)

        async with session_factory() as session:
            repo = ReferenceRepository(session, Maker, "name")
            existing = await repo.find_unique("company-a", "TOYOTA")
            record = await repo.rekey(existing, {
                "company_id": "company-a",
                "name": "LEXUS",
                "updated_by": "bob",
                "updated_at": datetime.now(timezone.utc),
            })
            await session.commit()

        assert record.name == "LEXUS"
        assert record.created_by == "alice"
        assert record.created_at.replace(tzinfo=None) == SEEDED_AT.replace(tzinfo=None)
        assert await maker_names(session_factory) == ["LEXUS"]

    async def test_rekey_to_same_key_replaces_the_row(self, session_factory):
        await seed_maker(session_factory)

        async with session_factory() as session:
            repo = ReferenceRepository(session, Maker, "name")
            existing = await repo.find_unique("company-a", "TOYOTA")
            await repo.rekey(existing, {
                "company_id": "company-a",
                "name": "TOYOTA",
                "updated_by": "bob",
            })
            await session.commit()

        async with session_factory() as session:
            repo = ReferenceRepository(session, Maker, "name")
            stored = await repo.find_unique("company-a", "TOYOTA")

        assert stored.updated_by == "bob"
        assert stored.created_by == "alice"
        assert await maker_names(session_factory) == ["TOYOTA"]

    async def test_failure_after_delete_keeps_old_row(self, session_factory):
        await seed_maker(session_factory)

        async def failing_create(values):
            raise RuntimeError("insert failed")

        async with session_factory() as session:
            repo = ReferenceRepository(session, Maker, "name")
            existing = await repo.find_unique("company-a", "TOYOTA")
            repo.create = failing_create

            with pytest.raises(RuntimeError):
                await repo.rekey(existing, {"company_id": "company-a", "name": "LEXUS"})

            # Still visible inside the same transaction
            assert await repo.find_unique("company-a", "TOYOTA") is not None
            await session.commit()

        assert await maker_names(session_factory) == ["TOYOTA"]


@pytest.mark.integration
@pytest.mark.asyncio
class TestRekeyOverHttp:

    async def test_failed_rename_returns_500_and_keeps_record(
        self, client, session_factory, staff_headers, monkeypatch
    ):
        await seed_maker(session_factory)

        async def failing_create(self, values):
            raise RuntimeError("insert failed")

        monkeypatch.setattr(ReferenceRepository, "create", failing_create)

        resp = await client.put(
            "/api/makers",
            json={"oldMaker": {"name": "TOYOTA"}, "newMaker": {"name": "LEXUS"}},
            headers=staff_headers,
        )

        assert resp.status_code == 500
        assert resp.json()["error"] == {
            "code": "PERSISTENCE_ERROR",
            "message": "Failed to update maker",
        }
        assert await maker_names(session_factory) == ["TOYOTA"]
