import re
from collections.abc import AsyncGenerator, Iterator
from dataclasses import dataclass, field
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from mydiary.core.config import settings
from mydiary.core.rate_limiting import limiter
from mydiary.models.base import Base

# Credentials that satisfy the format rules (4-8 chars, mixed classes)
TEST_USERNAME = "user1"
TEST_PASSWORD = "Abcd1!"  # nosec B105
TEST_EMAIL = "a@b.com"

_CODE_PATTERN = re.compile(r"\b(\d{6})\b")


# =============================================================================
# Database
# =============================================================================


@pytest_asyncio.fixture(scope="function")
async def db_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Engine on a throwaway SQLite file.

    A file (not :memory:) so separate sessions get separate connections
    and see each other's commits, which the concurrency tests rely on.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'mydiary_test.db'}",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Factory for additional independent sessions on the test database."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch: pytest.MonkeyPatch) -> None:
    """Lower Argon2 cost so hashing does not dominate test time."""
    monkeypatch.setattr(settings, "argon2_time_cost", 1)
    monkeypatch.setattr(settings, "argon2_memory_cost", 8)
    monkeypatch.setattr(settings, "argon2_parallelism", 1)


@pytest.fixture(autouse=True)
def no_rate_limits() -> Iterator[None]:
    """Disable slowapi for tests that do not exercise it explicitly."""
    original = limiter.enabled
    limiter.enabled = False
    yield
    limiter.enabled = original


# =============================================================================
# Mail
# =============================================================================


@dataclass
class SentMail:
    to_email: str
    subject: str
    body: str

    @property
    def code(self) -> str:
        match = _CODE_PATTERN.search(self.body)
        assert match is not None, "no verification code in mail body"
        return match.group(1)


@dataclass
class FakeMailSender:
    """MailSender that records messages instead of delivering them.

    Set ``fail`` to simulate a delivery failure.
    """

    fail: bool = False
    sent: list[SentMail] = field(default_factory=list)

    async def send(self, *, to_email: str, subject: str, body: str) -> bool:
        if self.fail:
            return False
        self.sent.append(SentMail(to_email=to_email, subject=subject, body=body))
        return True

    @property
    def last_code(self) -> str:
        assert self.sent, "no mail was sent"
        return self.sent[-1].code


@pytest.fixture
def mailer() -> FakeMailSender:
    return FakeMailSender()


# =============================================================================
# API
# =============================================================================


@pytest_asyncio.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    mailer: FakeMailSender,
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against a fresh app wired to the test database.

    Sets up:
    - get_db override with commit/rollback like the real dependency
    - get_mail_sender override returning the recording FakeMailSender
    - cookie jar, so the signed session cookie flows between requests

    Redirects are not followed; tests assert on each hop.
    """
    from mydiary.core.database import get_db
    from mydiary.core.email import get_mail_sender
    from mydiary.main import create_app

    app = create_app()

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mail_sender] = lambda: mailer

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
