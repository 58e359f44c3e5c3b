import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.database import Base, get_db
from app.core.dependencies import get_matching_service
from app.main import app
from app.schemas.matching import EmployeeRecord, UserRecord
from app.services.matching import MatchingService

# PostgreSQL required for integration tests (Docker must be running)
TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    "postgresql+asyncpg://hr:hr@localhost:5432/hr_compliance",
)

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSession = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


class InMemoryMatchStore:
    """Stand-in for MatchStore holding plain records.

    ``links`` maps user id -> employee id for users that are already linked.
    """

    def __init__(self, users=(), employees=(), settings=None, links=None, banned=(), inactive=()):
        self.users = list(users)
        self.employees = list(employees)
        self.settings = dict(settings or {})
        self.links = dict(links or {})
        self.banned = set(banned)
        self.inactive = set(inactive)

    async def get_settings(self) -> dict[str, str]:
        return dict(self.settings)

    async def list_unlinked_users(self) -> list[UserRecord]:
        return [u for u in self.users if u.id not in self.links and u.id not in self.banned]

    async def list_unlinked_employees(self) -> list[EmployeeRecord]:
        linked = set(self.links.values())
        return [e for e in self.employees if e.id not in linked and e.id not in self.inactive]

    async def get_employee(self, employee_id: int) -> EmployeeRecord | None:
        return next((e for e in self.employees if e.id == employee_id), None)

    async def is_employee_linked(self, employee_id: int) -> bool:
        return employee_id in self.links.values()


@pytest.fixture()
def memory_store():
    return InMemoryMatchStore()


@pytest_asyncio.fixture()
async def api_client(memory_store):
    """HTTP client whose matching endpoints read from ``memory_store``."""
    app.dependency_overrides[get_matching_service] = lambda: MatchingService(memory_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def _setup_db():
    """Create tables, yield, then drop. Skips if PostgreSQL unavailable."""
    try:
        async with test_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception:
        pytest.skip("PostgreSQL not available (start Docker)")
    yield
    try:
        async with test_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
    except Exception:
        pass


@pytest_asyncio.fixture()
async def db_session(_setup_db):
    async with TestSession() as session:
        yield session


@pytest_asyncio.fixture()
async def client(_setup_db):
    async def override_get_db():
        async with TestSession() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
