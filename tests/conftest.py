import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from datetime import datetime
from decimal import Decimal
from typing import AsyncGenerator
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

import careshift.models  # noqa: F401
from careshift.main import app
from careshift.core.database import get_async_session
from careshift.models.base import Base
from careshift.models.care.care_plan import CarePlan
from careshift.models.care.care_shift import CareShift
from careshift.models.care.care_team_member import CareTeamMember
from careshift.models.shared.enums import ShiftStatus, TeamMemberStatus

# Test database URL, one fresh in-memory database per test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    """Create test client bound to the per-test database"""
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as db:
            yield db

    app.dependency_overrides[get_async_session] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def care_plan(session) -> CarePlan:
    plan = CarePlan(family_id=10, title="Care for Grandma Rose")
    session.add(plan)
    await session.commit()
    await session.refresh(plan)
    return plan


@pytest.fixture
async def caregiver(session, care_plan) -> CareTeamMember:
    """Active member with a 20.00 regular rate and no explicit overtime rate"""
    member = CareTeamMember(
        care_plan_id=care_plan.id,
        caregiver_id=501,
        display_name="Alice Rivera",
        status=TeamMemberStatus.ACTIVE,
        regular_rate=Decimal("20.00"),
    )
    session.add(member)
    await session.commit()
    await session.refresh(member)
    return member


@pytest.fixture
async def inactive_caregiver(session, care_plan) -> CareTeamMember:
    member = CareTeamMember(
        care_plan_id=care_plan.id,
        caregiver_id=502,
        display_name="Ben Okafor",
        status=TeamMemberStatus.INACTIVE,
        regular_rate=Decimal("18.00"),
    )
    session.add(member)
    await session.commit()
    await session.refresh(member)
    return member


@pytest.fixture
async def assigned_shift(session, care_plan, caregiver) -> CareShift:
    """Monday 09:00-17:00 assigned to the active caregiver"""
    shift = CareShift(
        care_plan_id=care_plan.id,
        family_id=care_plan.family_id,
        caregiver_id=caregiver.caregiver_id,
        title="Day shift",
        status=ShiftStatus.ASSIGNED,
        start_time=datetime(2026, 10, 19, 9, 0),
        end_time=datetime(2026, 10, 19, 17, 0),
    )
    session.add(shift)
    await session.commit()
    await session.refresh(shift)
    return shift
