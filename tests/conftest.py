from datetime import UTC, date, datetime, time, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from versekeep.app import create_app
from versekeep.database import Base
from versekeep.services.container import Services
from versekeep.services.kv_store import SqlKeyValueStore
import versekeep.models  # noqa: F401

TEST_DB_URL = "sqlite+aiosqlite://"  # in-memory

engine = create_async_engine(TEST_DB_URL, echo=False)
TestSession = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class FakeClock:
    """Controllable calendar; every now() call is one second after the last."""

    def __init__(self, current: date = date(2026, 3, 15)) -> None:
        self.current = current
        self._ticks = 0

    def today(self) -> date:
        return self.current

    def now(self) -> datetime:
        self._ticks += 1
        return datetime.combine(self.current, time(8, 0), tzinfo=UTC) + timedelta(seconds=self._ticks)

    def advance(self, days: int = 1) -> None:
        self.current += timedelta(days=days)


@pytest.fixture(autouse=True)
async def setup_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def kv():
    return SqlKeyValueStore(TestSession)


@pytest.fixture
def services(kv, clock):
    return Services(kv, today=clock.today, now=clock.now)


@pytest.fixture
async def client(services):
    app = create_app(services)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
