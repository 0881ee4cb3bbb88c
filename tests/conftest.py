"""Pytest configuration and fixtures."""

import os
import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from tierlist.api.dependencies import get_storage_service
from tierlist.database import Base, get_db
from tierlist.domain.result import Result, unexpected
from tierlist.main import app
from tierlist.services.storage import UploadTicket


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and username."""

    def __init__(self, *args, user_id: int | None = None, username: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.username = username


class FakeStorage:
    """In-memory stand-in for the S3 image storage service."""

    def __init__(self):
        self.deleted: list[str] = []
        self.fail_deletes = False

    def get_upload_url(self, file_name: str, content_type: str) -> Result[UploadTicket]:
        storage_key = uuid.uuid4()
        return Result.success(
            UploadTicket(url=f"https://storage.test/upload/{storage_key}", storage_key=storage_key)
        )

    def get_download_url(self, storage_key) -> Result[str]:
        return Result.success(f"https://storage.test/download/{storage_key}")

    def delete_image(self, storage_key) -> Result[None]:
        if self.fail_deletes:
            return Result.failure(unexpected("Could not delete the stored image."))
        self.deleted.append(str(storage_key))
        return Result.success()


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/tier_list", "/tier_list_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture(scope="function")
def client(db, storage):
    """Create a test client with database and storage overrides."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage_service] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Register and log in a user and return auth headers with user info."""
    response = client.post(
        "/api/v1/auth/register",
        json={"username": "testuser", "password": "testpass123"},
    )
    assert response.status_code == 201
    user_id = response.json()["id"]

    response = client.post(
        "/api/v1/auth/login",
        json={"username": "testuser", "password": "testpass123"},
    )
    assert response.status_code == 200
    token = response.json()["access_token"]

    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user_id, username="testuser")


@pytest.fixture
def tier_list(client, auth_headers):
    """Create a tier list and return its full data (rows A, B, C and the backup row)."""
    response = client.post("/api/v1/lists", headers=auth_headers, json={"title": "My List"})
    assert response.status_code == 201
    list_id = response.json()["id"]

    response = client.get(f"/api/v1/lists/{list_id}", headers=auth_headers)
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def add_image(client, auth_headers):
    """Return a helper that saves an image into a container."""

    def _add_image(list_id: int, container_id: int, note: str = "", order: int | None = None):
        storage_key = str(uuid.uuid4())
        payload = {
            "list_id": list_id,
            "container_id": container_id,
            "storage_key": storage_key,
            "url": f"https://storage.test/images/{storage_key}.png",
            "note": note,
        }
        if order is not None:
            payload["order"] = order
        response = client.post("/api/v1/images", headers=auth_headers, json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _add_image
