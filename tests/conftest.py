"""Test fixtures: an in-memory SQLite database recreated for every test.

Environment variables are set before the application is imported so the
engine and settings pick them up.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "development"
os.environ["COOKIE_SECURE"] = "true"

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.database import Base, SessionLocal, engine  # noqa: E402
from app.models.task import Task  # noqa: E402
from app.models.user import User  # noqa: E402
from app.utils.security import hash_password  # noqa: E402
from main import app  # noqa: E402

# Secure cookies are only sent back over https
BASE_URL = "https://testserver"
PASSWORD = "password123"


@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client():
    """Anonymous client with its own cookie jar"""
    return TestClient(app, base_url=BASE_URL)


def signup(client, email, name="Test User", password=PASSWORD, role=None):
    body = {"name": name, "email": email, "password": password}
    if role is not None:
        body["role"] = role
    return client.post("/api/auth/signup", json=body)


@pytest.fixture()
def make_user_client():
    """Factory: sign up a new account and return (client, user json).

    Each client keeps its own session cookie, so several users can act in
    the same test.
    """

    def _make(email, name="Test User", role=None):
        user_client = TestClient(app, base_url=BASE_URL)
        r = signup(user_client, email, name=name, role=role)
        assert r.status_code == 201, r.text
        return user_client, r.json()

    return _make


@pytest.fixture()
def alice(make_user_client):
    return make_user_client("alice@taskapp.io", name="Alice")


@pytest.fixture()
def bob(make_user_client):
    return make_user_client("bob@taskapp.io", name="Bob")


@pytest.fixture()
def admin(make_user_client):
    return make_user_client("admin@taskapp.io", name="Admin", role="admin")


@pytest.fixture()
def seed_tasks(db_session):
    """Insert tasks for a user directly, oldest first.

    Returns a callable taking the owner id and a list of dicts with
    title/description/status overrides.
    """

    def _seed(user_id, rows):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        tasks = []
        for i, row in enumerate(rows):
            task = Task(
                title=row.get("title", f"Task {i + 1}"),
                description=row.get("description", f"Description {i + 1}"),
                due_date=base + timedelta(days=30),
                status=row.get("status", "pending"),
                user_id=user_id,
                created_at=base + timedelta(minutes=i),
            )
            db_session.add(task)
            tasks.append(task)
        db_session.commit()
        for task in tasks:
            db_session.refresh(task)
        return tasks

    return _seed


@pytest.fixture()
def stored_user(db_session):
    """Create a user row without going through the API"""

    def _create(email, name="Stored User", role="user", password=PASSWORD):
        user = User(name=name, email=email, hashed_password=hash_password(password), role=role)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _create
