"""
Shared pytest fixtures.

Uses a file-backed SQLite database so no Postgres is required for tests.
Tables are emptied before every test, so the first account a test
registers is always the admin.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_jobboard.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.db.base import Base, get_db
from app.main import app
from app.models.job import Job
from app.models.user import User

SQLITE_URL = "sqlite:///./test_jobboard.db"
DEFAULT_PASSWORD = "secret123"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def register_payload(email: str, password: str = DEFAULT_PASSWORD, **overrides) -> dict:
    payload = {
        "name": "Ana",
        "lastName": "Lopez",
        "email": email,
        "password": password,
        "location": "Lisbon",
    }
    payload.update(overrides)
    return payload


def job_payload(**overrides) -> dict:
    payload = {
        "company": "Acme",
        "position": "Backend Engineer",
        "jobLocation": "Remote",
        "jobStatus": "pending",
        "jobType": "full-time",
    }
    payload.update(overrides)
    return payload


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_tables():
    with engine.begin() as conn:
        conn.execute(Job.__table__.delete())
        conn.execute(User.__table__.delete())
    yield


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_user():
    """Register and log in an account on its own TestClient (own cookie jar)."""
    clients: list[TestClient] = []

    def _make(email: str, password: str = DEFAULT_PASSWORD, **fields) -> TestClient:
        c = TestClient(app)
        clients.append(c)
        r = c.post("/auth/register", json=register_payload(email, password, **fields))
        assert r.status_code == 201, r.text
        r = c.post("/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        return c

    yield _make
    for c in clients:
        c.close()


@pytest.fixture()
def admin(make_user):
    """First account registered, hence an admin."""
    return make_user("admin@mail.com")


@pytest.fixture()
def owner(admin, make_user):
    return make_user("owner@mail.com")


@pytest.fixture()
def stranger(owner, make_user):
    return make_user("stranger@mail.com")


@pytest.fixture()
def owned_job(owner) -> dict:
    r = owner.post("/jobs", json=job_payload())
    assert r.status_code == 201, r.text
    return r.json()["job"]
