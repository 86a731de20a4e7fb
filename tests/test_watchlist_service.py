import asyncio

import pytest

from anime_tracker.database import Base, build_engine, build_sessionmaker
from anime_tracker.errors import Forbidden, InvalidReference
from anime_tracker.models.show_model import Show, ShowType
from anime_tracker.models.user_model import User
from anime_tracker.models.watchlist_model import WatchStatus
from anime_tracker.schemas.user_schemas import Identity
from anime_tracker.schemas.watchlist_schemas import WatchlistCreate, WatchlistUpdate
from anime_tracker.services import watchlist_service

ALICE = Identity(id=1, username="alice")
BOB = Identity(id=2, username="bob")


@pytest.fixture
def run_ledger(tmp_path):
    """Run a coroutine against a fresh database seeded with two users and a show."""

    def runner(scenario):
        async def main():
            engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
            try:
                async with engine.begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
                sessions = build_sessionmaker(engine)
                async with sessions() as session:
                    session.add_all([
                        User(id=ALICE.id, username="alice", email="a@x.com", password_hash="x"),
                        User(id=BOB.id, username="bob", email="b@x.com", password_hash="x"),
                        Show(id=5, title="Mushishi", type=ShowType.ANIME, total_episodes=26),
                    ])
                    await session.commit()
                async with sessions() as session:
                    return await scenario(session)
            finally:
                await engine.dispose()

        return asyncio.run(main())

    return runner


def test_scenario_create_update_list(run_ledger):
    async def scenario(session):
        entry_id = await watchlist_service.create_entry(
            session, ALICE, WatchlistCreate(show_id=5, status="watching")
        )
        assert entry_id == 1

        with pytest.raises(Forbidden):
            await watchlist_service.update_entry(
                session, BOB, entry_id, WatchlistUpdate(status="dropped", progress=1)
            )

        changes = await watchlist_service.update_entry(
            session,
            ALICE,
            entry_id,
            WatchlistUpdate(status="completed", progress=12, rating=9, notes="great"),
        )
        assert changes == 1
        return await watchlist_service.list_entries(session, ALICE.id, ALICE)

    rows = run_ledger(scenario)
    assert len(rows) == 1
    assert rows[0]["id"] == 1
    assert rows[0]["status"] == WatchStatus.COMPLETED
    assert rows[0]["progress"] == 12
    assert rows[0]["title"] == "Mushishi"


def test_list_of_other_user_is_forbidden(run_ledger):
    async def scenario(session):
        await watchlist_service.create_entry(session, ALICE, WatchlistCreate(show_id=5, status="watching"))
        with pytest.raises(Forbidden):
            await watchlist_service.list_entries(session, ALICE.id, BOB)
        return await watchlist_service.list_entries(session, BOB.id, BOB)

    assert run_ledger(scenario) == []


def test_delete_by_other_user_leaves_row(run_ledger):
    async def scenario(session):
        entry_id = await watchlist_service.create_entry(
            session, ALICE, WatchlistCreate(show_id=5, status="plan_to_watch")
        )
        with pytest.raises(Forbidden):
            await watchlist_service.delete_entry(session, BOB, entry_id)
        before = await watchlist_service.list_entries(session, ALICE.id, ALICE)
        assert await watchlist_service.delete_entry(session, ALICE, entry_id) == 1
        with pytest.raises(Forbidden):
            await watchlist_service.delete_entry(session, ALICE, entry_id)
        return before

    rows = run_ledger(scenario)
    assert [r["status"] for r in rows] == [WatchStatus.PLAN_TO_WATCH]


def test_create_with_unknown_show(run_ledger):
    async def scenario(session):
        with pytest.raises(InvalidReference):
            await watchlist_service.create_entry(session, ALICE, WatchlistCreate(show_id=404, status="watching"))
        return await watchlist_service.list_entries(session, ALICE.id, ALICE)

    assert run_ledger(scenario) == []


def test_entries_of_removed_show_drop_out_of_list(run_ledger):
    async def scenario(session):
        await watchlist_service.create_entry(session, ALICE, WatchlistCreate(show_id=5, status="watching"))
        # sqlite leaves FK enforcement off, so the entry now dangles
        show = await session.get(Show, 5)
        await session.delete(show)
        await session.commit()
        return await watchlist_service.list_entries(session, ALICE.id, ALICE)

    assert run_ledger(scenario) == []
