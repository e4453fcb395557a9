"""Shared fixtures: in-memory database, API client and account factories"""
import os
import tempfile

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("STORAGE_DIR", tempfile.mkdtemp(prefix="faris-storage-"))
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from faris.core.config import settings
from faris.core.security import create_access_token, hash_password
from faris.models import Base, User
from faris.models.base import bind_engine, get_async_session_maker
from faris.services.session_registry import registry

TEST_PASSWORD = "secret123"
_password_hash: str | None = None


def _hashed_password() -> str:
    global _password_hash
    if _password_hash is None:
        _password_hash = hash_password(TEST_PASSWORD)
    return _password_hash


@pytest_asyncio.fixture
async def test_engine(tmp_path, monkeypatch):
    """Fresh in-memory sqlite database per test"""
    monkeypatch.setattr(settings, "storage_dir", str(tmp_path / "storage"))
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    bind_engine(engine)
    registry.clear()

    yield engine

    registry.clear()
    await engine.dispose()


@pytest_asyncio.fixture
async def test_db_session(test_engine):
    async with get_async_session_maker()() as session:
        yield session


@pytest_asyncio.fixture
async def client(test_engine):
    from faris.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_user(test_db_session):
    """Factory inserting a user row"""
    counter = {"n": 0}

    async def _make_user(
        email: str | None = None,
        role: str = "student",
        status: str = "active",
        grade: str | None = "sec_2",
        username: str = "طالب",
    ) -> User:
        counter["n"] += 1
        user = User(
            username=username,
            email=email or f"user{counter['n']}@example.com",
            phone="01012345678",
            grade=grade,
            role=role,
            status=status,
            password_hash=_hashed_password(),
        )
        test_db_session.add(user)
        await test_db_session.commit()
        await test_db_session.refresh(user)
        return user

    return _make_user


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest_asyncio.fixture
async def student(make_user):
    return await make_user(email="student@example.com")


@pytest_asyncio.fixture
async def admin(make_user):
    return await make_user(email="admin@example.com", role="admin", grade=None, username="المدير")


@pytest.fixture
def student_headers(student):
    return auth_headers(student)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def headers_for():
    """Bearer headers for an arbitrary user"""
    return auth_headers


@pytest.fixture
def add_rows(test_db_session):
    """Insert model instances directly and return them refreshed"""

    async def _add_rows(*rows):
        test_db_session.add_all(rows)
        await test_db_session.commit()
        for row in rows:
            await test_db_session.refresh(row)
        return list(rows)

    return _add_rows
