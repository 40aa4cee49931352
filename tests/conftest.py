import os

# Must be set before the app (and its settings) are imported
os.environ["ENV"] = "testing"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["PLATFORM"] = "production"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator

from main import app
from core.config import get_settings
from core.database import Base
from models.users import User
from utils.deps import get_db
from utils.hashing import get_password_hash

TEST_PASSWORD = "TestPassword123!"

# SYNC SQLite for testing (matches sync service layer)
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False}
)

TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """
    Creates a fresh, empty database for each test.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
async def client(session: Session):
    """
    HTTP client bound to the app, with the database dependency pointed at
    the test session.
    """
    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def override_settings():
    """
    Swap selected settings for the duration of a test, e.g.
    ``override_settings(PLATFORM="dev")``.
    """
    def _override(**changes):
        patched = get_settings().model_copy(update=changes)
        app.dependency_overrides[get_settings] = lambda: patched
        return patched

    yield _override
    app.dependency_overrides.pop(get_settings, None)


@pytest.fixture
def registered_user(session: Session) -> User:
    user = User(
        email="chirper@example.com",
        hashed_password=get_password_hash(TEST_PASSWORD),
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
async def login_tokens(client, registered_user) -> dict:
    response = await client.post("/api/login", json={
        "email": registered_user.email,
        "password": TEST_PASSWORD
    })
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def auth_headers(login_tokens) -> dict:
    return {"Authorization": f"Bearer {login_tokens['token']}"}
