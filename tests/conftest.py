"""Shared fixtures: every store test runs against both storage backends."""

import pytest
from fastapi.testclient import TestClient

from quietseed.db.session import create_db_and_tables, make_engine
from quietseed.main import create_app
from quietseed.services.auth import AuthService
from quietseed.storage import DatabaseStorage, MemStorage

ADMIN_PASSWORD = "s3cret-admin"
READER_PASSWORD = "s3cret-reader"


@pytest.fixture(params=["memory", "database"])
def storage(request):
    """A fresh, empty store of each kind."""
    if request.param == "memory":
        yield MemStorage()
        return
    engine = make_engine("sqlite://")
    create_db_and_tables(engine)
    yield DatabaseStorage(engine)
    engine.dispose()


@pytest.fixture
def author(storage):
    return storage.create_user(
        {"username": "maichi", "password_hash": "not-a-real-hash", "display_name": "Mai Chi"}
    )


@pytest.fixture
def make_post(storage, author):
    """Factory creating posts with sensible defaults for omitted fields."""
    counter = {"n": 0}

    def _make_post(**overrides):
        counter["n"] += 1
        data = {
            "title": f"Post number {counter['n']}",
            "content": "<p>Some calm words.</p>",
            "excerpt": "Some calm words.",
            "published_at": "2023-01-01",
            "author_id": author.id,
        }
        data.update(overrides)
        return storage.create_post(data)

    return _make_post


@pytest.fixture
def auth_service(storage):
    return AuthService(storage)


@pytest.fixture
def admin(auth_service):
    return auth_service.register_user("admin", ADMIN_PASSWORD, display_name="Admin User", is_admin=True)


@pytest.fixture
def reader(auth_service):
    return auth_service.register_user("reader", READER_PASSWORD, display_name="Reader")


@pytest.fixture
def client(storage):
    app = create_app(storage=storage, seed=False)
    return TestClient(app)


def _login_headers(client, username, password):
    response = client.post("/api/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    # Keep tests explicit about credentials instead of relying on the cookie jar
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client, admin):
    return _login_headers(client, "admin", ADMIN_PASSWORD)


@pytest.fixture
def reader_headers(client, reader):
    return _login_headers(client, "reader", READER_PASSWORD)
