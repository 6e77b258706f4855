import os

os.environ.setdefault("DATABASE_URL", "sqlite://")


import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import jobboard.models  # noqa: F401
from jobboard.core.rate_limiter import rate_limiter
from jobboard.core.security import generate_id
from jobboard.database import Base, build_engine, get_db
from jobboard.dependencies import (
    get_current_active_user,
    get_current_admin,
    get_current_user,
    get_optional_user,
    require_employer,
    require_job_seeker,
)
from jobboard.main import app
from jobboard.models.employer_profile import EmployerProfile
from jobboard.models.types import UserRole
from jobboard.models.user import User
from tests.factories import StubUser


@pytest.fixture
def seeker_user() -> StubUser:
    return StubUser(id="seeker-1", email="seeker@example.com")


@pytest.fixture
def employer_user() -> StubUser:
    return StubUser(id="employer-1", email="hr@acme.example", role=UserRole.EMPLOYER)


@pytest.fixture
def admin_user() -> StubUser:
    return StubUser(id="admin-1", email="admin@example.com", is_admin=True)


def _db_override():
    yield object()


def _client_for(user: StubUser):
    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: user
    app.dependency_overrides[get_current_active_user] = lambda: user
    app.dependency_overrides[get_optional_user] = lambda: user
    return TestClient(app)


@pytest.fixture
def anon_client():
    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_optional_user] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeker_client(seeker_user: StubUser):
    client = _client_for(seeker_user)
    app.dependency_overrides[require_job_seeker] = lambda: seeker_user
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def employer_client(employer_user: StubUser):
    client = _client_for(employer_user)
    app.dependency_overrides[require_employer] = lambda: employer_user
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(admin_user: StubUser):
    client = _client_for(admin_user)
    app.dependency_overrides[get_current_admin] = lambda: admin_user
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.fixture
def db_session():
    """Fresh in-memory SQLite database per test."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def make_user(db_session):
    """Insert a user row directly, skipping password hashing."""

    def _make(email: str, role: UserRole = UserRole.JOB_SEEKER, company_name: str | None = None) -> User:
        user = User(id=generate_id(), email=email, password_hash="not-a-real-hash", role=role)
        db_session.add(user)
        if role == UserRole.EMPLOYER:
            db_session.add(
                EmployerProfile(
                    id=generate_id(),
                    user_id=user.id,
                    company_name=company_name or f"Company for {email}",
                    official_email=email,
                )
            )
        db_session.commit()
        return user

    return _make
