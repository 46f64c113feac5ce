# tests/conftest.py
# Shared fixtures: controllable clock, link stores and an intake pipeline

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from linknest.database import init_db
from linknest.exceptions import StorageError
from linknest.services.link_store import InMemoryLinkStore, SqlAlchemyLinkStore
from linknest.services.pipeline import IntakePipeline
from linknest.services.recent_share import RecentShareDeduplicator

EPOCH = datetime(2026, 1, 1, tzinfo=timezone.utc)


def at(ms: int) -> datetime:
    """Timestamp ``ms`` milliseconds after a fixed epoch."""
    return EPOCH + timedelta(milliseconds=ms)


class FakeClock:
    def __init__(self, start_ms: int = 0) -> None:
        self.now = at(start_ms)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += timedelta(milliseconds=ms)


class FailingLinkStore(InMemoryLinkStore):
    """Store whose writes always fail, as with a full disk."""

    def __init__(self) -> None:
        super().__init__()
        self.insert_calls = 0

    async def insert(self, record):
        self.insert_calls += 1
        raise StorageError("disk full")


class CountingLinkStore(InMemoryLinkStore):
    def __init__(self) -> None:
        super().__init__()
        self.exists_calls = 0
        self.insert_calls = 0

    async def exists(self, url):
        self.exists_calls += 1
        return await super().exists(url)

    async def insert(self, record):
        self.insert_calls += 1
        await super().insert(record)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return CountingLinkStore()


@pytest.fixture
def recent():
    return RecentShareDeduplicator()


@pytest.fixture
def pipeline(store, recent, clock):
    return IntakePipeline(store=store, recent=recent, clock=clock)


@pytest_asyncio.fixture
async def sqlite_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def sql_store(sqlite_engine):
    return SqlAlchemyLinkStore(async_sessionmaker(sqlite_engine, expire_on_commit=False))
