import os

# settings are read at import time, so these must be set before the app loads
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["AUTO_CREATE_TABLES"] = "false"

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from task_manager.auth.passwords import hash_password
from task_manager.db import get_db
from task_manager.main import create_app
from task_manager.models.base import Base
from task_manager.models.label import Label
from task_manager.models.task_status import TaskStatus
from task_manager.models.user import User

PASSWORD = "qwerty123"

@pytest.fixture()
def db_session() -> Session:
    # fresh in-memory db per test
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session: Session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()

@pytest.fixture()
def client(db_session: Session) -> TestClient:
    app = create_app()

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)

def make_user(db: Session, email: str | None = None, password: str = PASSWORD) -> User:
    u = User(
        email=email or f"user_{uuid.uuid4().hex[:8]}@example.com",
        first_name="Test",
        last_name="User",
        password_hash=hash_password(password),
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return u

def login(client, email: str, password: str = PASSWORD) -> str:
    r = client.post("/api/login", json={"username": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["token"]

def auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

@pytest.fixture()
def user(db_session: Session) -> User:
    return make_user(db_session, "test@example.com")

@pytest.fixture()
def headers(client, user: User) -> dict[str, str]:
    return auth(login(client, user.email))

@pytest.fixture()
def draft(db_session: Session) -> TaskStatus:
    s = TaskStatus(name="Draft", slug="draft")
    db_session.add(s)
    db_session.commit()
    db_session.refresh(s)
    return s

@pytest.fixture()
def labels(db_session: Session) -> list[Label]:
    rows = [Label(name="feature"), Label(name="bug")]
    db_session.add_all(rows)
    db_session.commit()
    for r in rows:
        db_session.refresh(r)
    return rows
