"""
Shared fixtures. Every test gets its own SQLite database file, so nothing leaks
between tests. HTTP tests talk to the FastAPI app in-process through httpx.
"""

import time
import pytest
from httpx import AsyncClient, ASGITransport
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from clinic.config import get_settings
from clinic.database import Base, get_db
from clinic.main import app
from clinic.services.storage import ClinicStorage
import clinic.models  # noqa: F401

STAFF_IDENTITY = {
    "sub": "staff-1",
    "email": "ada@clinic.example",
    "first_name": "Ada",
    "last_name": "Okafor",
}


def login_body(claims: dict, secret: str = None, expires_in: int = 300) -> dict:
    """Request body for POST /api/login carrying an assertion signed like the upstream provider does."""
    payload = {**claims, "exp": int(time.time()) + expires_in}
    token = jwt.encode(payload, secret or get_settings().identity_secret, algorithm="HS256")
    return {"assertion": token}


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'clinic-test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def storage(session_factory):
    async with session_factory() as session:
        yield ClinicStorage(session)


@pytest.fixture
async def anon_client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def client(anon_client):
    """A client holding a signed-in session cookie."""
    response = await anon_client.post("/api/login", json=login_body(STAFF_IDENTITY))
    assert response.status_code == 200
    return anon_client
