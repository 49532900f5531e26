"""Pytest configuration and fixtures for noticeboard.

Environment defaults are set before noticeboard.main is imported so Settings
validation passes without a .env file. Repository and API tests run against
an in-memory SQLite database (aiosqlite, StaticPool) created from the ORM
metadata; the identity provider, AI gateway and object storage are replaced
through FastAPI dependency overrides.
"""

import os
import tempfile

_STORAGE_ROOT = tempfile.mkdtemp(prefix="noticeboard-test-")

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("IDENTITY_PROVIDER_URL", "https://identity.test/auth/v1")
os.environ.setdefault("MASTER_PIN", "124124")
os.environ.setdefault("ADMIN_PIN", "421421")
os.environ.setdefault("SCHEDULER_SECRET", "test-scheduler-secret")
os.environ.setdefault("TELEMETRY_ENABLED", "false")
os.environ.setdefault("STORAGE_BACKEND", "local")
os.environ.setdefault("STORAGE_ROOT", _STORAGE_ROOT)
os.environ.setdefault("STORAGE_PUBLIC_BASE_URL", "http://test/files")

from collections.abc import AsyncIterator  # noqa: E402
from dataclasses import dataclass, field  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from noticeboard.api.v1.dependencies import (  # noqa: E402
    get_analyzer,
    get_identity_provider,
    get_storage_service,
)
from noticeboard.application.dtos.analysis import AnnouncementAnalysis  # noqa: E402
from noticeboard.application.dtos.user import Identity  # noqa: E402
from noticeboard.core.limiter import limiter  # noqa: E402
from noticeboard.domain.enums import Priority, Role  # noqa: E402
from noticeboard.domain.exceptions import (  # noqa: E402
    AuthenticationException,
    ExternalServiceException,
)
from noticeboard.infrastructure.external.storage.local_storage import (  # noqa: E402
    LocalStorageService,
)
from noticeboard.infrastructure.persistence import models  # noqa: E402, F401
from noticeboard.infrastructure.persistence.database import (  # noqa: E402
    Base,
    get_db,
    get_db_transactional,
)
from noticeboard.infrastructure.persistence.repositories import SqlRoleStore  # noqa: E402
from noticeboard.main import app  # noqa: E402

MASTER = Identity(id="user-master", email="master@example.com", display_name="Mona Master")
ADMIN = Identity(id="user-admin", email="admin@example.com", display_name="Ada Admin")
READER = Identity(id="user-reader", email="reader@example.com", display_name="Rex Reader")
NEWCOMER = Identity(id="user-new", email="new@example.com", display_name="Nia New")

TOKENS: dict[str, Identity] = {
    "token-master": MASTER,
    "token-admin": ADMIN,
    "token-reader": READER,
    "token-new": NEWCOMER,
}


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class FakeIdentityProvider:
    """Resolves the fixed test tokens; anything else is rejected."""

    async def get_identity(self, access_token: str) -> Identity:
        identity = TOKENS.get(access_token)
        if identity is None:
            raise AuthenticationException("Invalid or expired session")
        return identity


@dataclass
class FakeAnalyzer:
    """Returns a fixed analysis, or raises `error` when set."""

    result: AnnouncementAnalysis = field(
        default_factory=lambda: AnnouncementAnalysis(
            summary="AI summary.", category="Events", priority=Priority.HIGH
        )
    )
    error: ExternalServiceException | None = None
    calls: int = 0

    async def analyze(self, title: str, content: str) -> AnnouncementAnalysis:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """In-memory SQLite engine with all tables created."""
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Session for repository tests (expire_on_commit=False like the app)."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def analyzer() -> FakeAnalyzer:
    return FakeAnalyzer()


@pytest.fixture
def storage(tmp_path) -> LocalStorageService:
    return LocalStorageService(storage_root=str(tmp_path / "files"), base_url="http://test/files")


@pytest.fixture
async def client(
    db_session: AsyncSession,
    analyzer: FakeAnalyzer,
    storage: LocalStorageService,
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI) with test dependencies."""

    async def _get_db() -> AsyncIterator[AsyncSession]:
        yield db_session

    async def _get_db_transactional() -> AsyncIterator[AsyncSession]:
        try:
            yield db_session
        except Exception:
            await db_session.rollback()
            raise
        else:
            await db_session.commit()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_db_transactional] = _get_db_transactional
    app.dependency_overrides[get_identity_provider] = FakeIdentityProvider
    app.dependency_overrides[get_analyzer] = lambda: analyzer
    app.dependency_overrides[get_storage_service] = lambda: storage
    limiter.enabled = False
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture
async def seed_roles(db_session: AsyncSession) -> None:
    """Store roles for MASTER, ADMIN and READER; NEWCOMER stays unassigned."""
    store = SqlRoleStore(db_session)
    await store.set_role(MASTER.id, Role.MASTER)
    await store.set_role(ADMIN.id, Role.ADMIN)
    await store.set_role(READER.id, Role.USER)
    await db_session.commit()
