import os

# must be set before taskboard.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ["RATE_LIMIT_ENABLED"] = "false"

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from taskboard.db import Base, engine_options, get_db
from taskboard.main import create_app

PASSWORD = "correct-horse-battery"

@pytest.fixture()
def db_session() -> Session:
    database_url = os.environ.get("TEST_DATABASE_URL", "sqlite+pysqlite:///:memory:")

    options = engine_options(database_url)
    if database_url.startswith("sqlite"):
        # one shared connection so every request sees the same in-memory db
        options["poolclass"] = StaticPool
    engine = create_engine(database_url, **options)

    Base.metadata.create_all(engine)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session: Session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()

@pytest.fixture()
def client(db_session: Session) -> TestClient:
    app = create_app()

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)

def _auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

def _signup(client, prefix: str) -> tuple[str, str]:
    # unique per test to avoid collisions on a shared database
    email = f"{prefix}+{uuid.uuid4().hex[:8]}@example.com"
    r = client.post("/auth/register", json={"email": email, "password": PASSWORD, "name": prefix})
    assert r.status_code == 201, r.text
    jwt = r.json()["access_token"]

    r = client.get("/auth/me", headers=_auth(jwt))
    assert r.status_code == 200, r.text
    return jwt, r.json()["id"]

@pytest.fixture()
def owner(client) -> tuple[str, str]:
    return _signup(client, "owner")

@pytest.fixture()
def seeded_project(client, owner) -> dict:
    owner_jwt, _ = owner
    r = client.post("/projects", json={"name": f"seeded-{uuid.uuid4().hex[:6]}"}, headers=_auth(owner_jwt))
    assert r.status_code == 201, r.text
    project = r.json()

    r = client.post(f"/projects/{project['id']}/boards", json={"name": "todo"}, headers=_auth(owner_jwt))
    assert r.status_code == 201, r.text
    project["board_id"] = r.json()["id"]
    return project
