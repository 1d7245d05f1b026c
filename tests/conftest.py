from typing import List, Optional, Union

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import saarthi.models  # noqa: F401  (registers tables on Base.metadata)
from saarthi.ai.llm import GenerationBackend, InlineImage, ResilientGenerationClient
from saarthi.api.deps import get_archive_storage, get_generator
from saarthi.core.config import settings
from saarthi.db.database import Base, get_db
from saarthi.main import app as fastapi_app
from saarthi.storage import LocalStorage

# Smallest byte string filetype recognises as PNG
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 64


class ScriptedBackend(GenerationBackend):
    """
    Plays back a script: each call pops the next item, returning
    strings and raising exceptions. The last item repeats once the
    script runs out.
    """

    def __init__(self, script: Optional[List[Union[str, BaseException]]] = None):
        self.script = list(script or ["ok"])
        self.calls: List[tuple] = []

    async def generate(self, prompt: str, image: Optional[InlineImage] = None) -> str:
        self.calls.append((prompt, image))
        item = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(item, BaseException):
            raise item
        return item


class OverloadedError(Exception):
    """Looks like google.genai's APIError: the HTTP status sits on ``code``."""

    def __init__(self, message: str = "The model is overloaded. Please try again later.", code: int = 503):
        super().__init__(message)
        self.code = code
        self.message = message


class SleepRecorder:
    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def backend() -> ScriptedBackend:
    return ScriptedBackend()


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def generator(backend, sleeper) -> ResilientGenerationClient:
    return ResilientGenerationClient(backend, max_attempts=3, backoff_seconds=2.0, sleep=sleeper)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory, generator, tmp_path):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    storage = LocalStorage(base_path=str(tmp_path / "uploads"))

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_generator] = lambda: generator
    fastapi_app.dependency_overrides[get_archive_storage] = lambda: storage if settings.ARCHIVE_UPLOADS else None

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://test") as ac:
        yield ac

    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def auth_headers(client) -> dict:
    response = await client.post(
        "/api/v1/auth/register",
        json={
            "username": "aarav",
            "email": "aarav@school.edu",
            "password": "StudyHard42",
        },
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
