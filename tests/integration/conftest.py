from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from clubauthz.adapter.services.audit_recorder import BackgroundAuditRecorder
from clubauthz.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from clubauthz.api.utils.jwt import generate_jwt
from clubauthz.depends import get_audit_recorder, get_clock, get_unit_of_work
from clubauthz.domain.entities import (
    AuditLog,
    Club,
    ClubMembership,
    Facility,
    FacilityMembership,
    SuperAdmin,
    User,
)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class Seeder:
    """Writes fixture rows through its own short-lived sessions"""

    def __init__(self, session_factory):
        self.session_factory = session_factory
        self._counter = 0

    async def add(self, entity):
        async with self.session_factory() as session:
            session.add(entity)
            await session.commit()
        return entity

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    async def user(self, **kwargs) -> User:
        kwargs.setdefault("email", f"user{self._next()}@example.com")
        return await self.add(User(**kwargs))

    async def facility(self) -> Facility:
        number = self._next()
        return await self.add(Facility(name=f"Boathouse {number}", slug=f"boathouse-{number}"))

    async def club(self, facility: Facility = None) -> Club:
        number = self._next()
        return await self.add(
            Club(
                name=f"Club {number}",
                slug=f"club-{number}",
                facility_id=facility.id if facility else None,
            )
        )

    async def member(self, club: Club, user: User, roles) -> ClubMembership:
        return await self.add(ClubMembership(club_id=club.id, user_id=user.id, roles=list(roles)))

    async def facility_admin(self, facility: Facility, user: User) -> FacilityMembership:
        return await self.add(
            FacilityMembership(facility_id=facility.id, user_id=user.id, roles=["FACILITY_ADMIN"])
        )

    async def super_admin(self, user: User) -> SuperAdmin:
        return await self.add(SuperAdmin(user_id=user.id))

    async def audit_entries(self, action: str = None):
        async with self.session_factory() as session:
            statement = select(AuditLog)
            if action is not None:
                statement = statement.where(AuditLog.action == action)
            result = await session.exec(statement)
            return result.all()


def _auth_headers(user: User, club: Club = None) -> dict:
    headers = {"Authorization": f"Bearer {generate_jwt(user.id)}"}
    if club is not None:
        headers["X-Club-Id"] = str(club.id)
    return headers


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def seed(session_factory):
    return Seeder(session_factory)


@pytest.fixture
def auth_headers():
    return _auth_headers


@pytest_asyncio.fixture
async def recorder(session_factory):
    recorder = BackgroundAuditRecorder(session_factory, retries=3, retry_delay=0.05)
    yield recorder
    await recorder.drain()


@pytest_asyncio.fixture
async def clock():
    return FakeClock(datetime(2026, 3, 1, 12, 0, 0))


@pytest_asyncio.fixture
async def client(session_factory, recorder, clock):
    from clubauthz.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_audit_recorder] = lambda: recorder
    app.dependency_overrides[get_clock] = lambda: clock

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
