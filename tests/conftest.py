import asyncio
import os

# antes de importar la app: el engine global no debe apuntar a Postgres en tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./.pytest-snapfeed.db")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.client.api import SocialApiClient
from app.core.config import settings
from app.core.security import create_access_token
from app.db.base import Base
from app.db.session import build_engine, get_session
from app.main import app as fastapi_app

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06"
    b"\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f\x00\x00\x01\x01"
    b"\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)


def auth_headers(sub: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(sub)}"}


@pytest.fixture()
def media_dir(tmp_path, monkeypatch):
    path = tmp_path / "media"
    path.mkdir()
    monkeypatch.setattr(settings, "MEDIA_DIR", str(path))
    return path


@pytest.fixture()
def session_factory(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    async def _create_all():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_create_all())
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
def override_db(session_factory, monkeypatch):
    async def _session():
        async with session_factory() as session:
            yield session

    async def _no_init():
        return None

    monkeypatch.setattr("app.main.init_models", _no_init)
    fastapi_app.dependency_overrides[get_session] = _session
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def client(override_db, media_dir):
    with TestClient(override_db) as test_client:
        yield test_client


@pytest.fixture()
def make_user(client):
    def _make(sub: str, name: str | None = None) -> dict:
        resp = client.post("/api/users/sync", json={"name": name or sub}, headers=auth_headers(sub))
        assert resp.status_code == 200, resp.text
        user = resp.json()["user"]
        user["headers"] = auth_headers(sub)
        return user

    return _make


@pytest.fixture()
def make_post(client):
    def _make(user: dict, caption: str | None = None) -> dict:
        data = {"caption": caption} if caption is not None else {}
        resp = client.post(
            "/api/posts",
            data=data,
            files={"image": ("photo.png", PNG_BYTES, "image/png")},
            headers=user["headers"],
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["post"]

    return _make


def post_json(post_id: int, **overrides) -> dict:
    """Un post tal cual lo devuelve GET /api/posts."""
    data = {
        "id": post_id,
        "image_url": f"/media/user_kim/posts/{post_id}-abcd1234.png",
        "caption": f"post {post_id}",
        "created_at": "2026-10-01T12:00:00+00:00",
        "user": {"id": 1, "name": "kim", "external_auth_id": "user_kim", "profile_image_url": None},
        "likes_count": 0,
        "comments_count": 0,
        "is_liked": False,
        "comments": [],
    }
    data.update(overrides)
    return data


@pytest.fixture()
def make_api():
    """SocialApiClient contra un httpx.MockTransport con el handler dado."""
    def _make(handler, token: str | None = "token"):
        return SocialApiClient("http://testserver", token, transport=httpx.MockTransport(handler))

    return _make
