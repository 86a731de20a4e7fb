import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-long-enough-1234567890")

import httpx
import pytest
from fastapi.testclient import TestClient

from anime_tracker.main import create_app
from anime_tracker.services.catalog import CatalogClient

CATALOG_BASE = "https://catalog.test/v4"


class CatalogStub:
    """Fake upstream catalog: echoes what it was asked for."""

    def __init__(self):
        self.requests = []
        self.fail_with = None
        self.raw_body = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        if self.raw_body is not None:
            return httpx.Response(200, content=self.raw_body)
        return httpx.Response(
            200,
            json={
                "data": [{"mal_id": 1, "title": "Cowboy Bebop"}],
                "path": request.url.path,
                "params": dict(request.url.params),
            },
        )


@pytest.fixture
def catalog_stub():
    return CatalogStub()


@pytest.fixture
def public_dir(tmp_path):
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<html><body>shell</body></html>")
    (public / "app.js").write_text("console.log('hi');")
    return public


@pytest.fixture
def app(tmp_path, catalog_stub, public_dir):
    catalog = CatalogClient(
        base_url=CATALOG_BASE,
        timeout=1,
        transport=httpx.MockTransport(catalog_stub),
    )
    return create_app(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        catalog_client=catalog,
        public_dir=public_dir,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def register(client, username, email=None, password="pw"):
    res = client.post(
        "/api/auth/register",
        json={"username": username, "email": email or f"{username}@example.com", "password": password},
    )
    assert res.status_code == 200, res.text
    return res.json()


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


def create_show(client, title="Cowboy Bebop", **extra):
    body = {"title": title, "type": "anime", "genre": "Sci-Fi", "release_year": 1998,
            "total_episodes": 26, "status": "completed"}
    body.update(extra)
    res = client.post("/api/shows", json=body)
    assert res.status_code == 200, res.text
    return res.json()["id"]


@pytest.fixture
def alice(client):
    data = register(client, "alice", "a@x.com", "pw")
    return {"id": data["user"]["id"], "headers": auth_headers(data["token"])}


@pytest.fixture
def bob(client):
    data = register(client, "bob", "b@x.com", "pw")
    return {"id": data["user"]["id"], "headers": auth_headers(data["token"])}
