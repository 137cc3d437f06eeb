import os

# Keep the module-level engine off disk; tests bind their own engine below
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fittrack.database import Base, configure_sqlite, get_db
from fittrack.main import app
from fittrack.services.auth_service import AuthService


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    configure_sqlite(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_user(db):
    counter = {"n": 0}

    def _make(name="Runner", email=None):
        counter["n"] += 1
        return AuthService(db).signup(
            name=name,
            email=email or f"user{counter['n']}@example.com",
            password="secret123",
        )

    return _make


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def signup(client):
    """Register through the API and return (user_id, auth headers)."""
    def _signup(name, email):
        r = client.post("/api/auth/signup", json={"name": name, "email": email, "password": "secret123"})
        assert r.status_code == 201, r.text
        data = r.json()
        return data["user"]["id"], {"Authorization": f"Bearer {data['access_token']}"}

    return _signup
