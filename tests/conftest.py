"""
Shared fixtures: an in-memory SQLite database per test, a TestClient wired to
it, and factories for users and jobs.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import quickjob.db.models  # noqa: F401
from quickjob.core.auth_dependency import get_db
from quickjob.core.rate_limit import reset_rate_limits
from quickjob.core.security import create_access_token, hash_password
from quickjob.db.base import Base
from quickjob.db.models.job import Job
from quickjob.db.models.user import User
from quickjob.db.session import enable_sqlite_foreign_keys
from quickjob.main import app

TEST_PASSWORD = "testpass123"

# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
event.listen(test_engine, "connect", enable_sqlite_foreign_keys)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session")
def password_hash():
    """bcrypt is slow; hash the shared test password once."""
    return hash_password(TEST_PASSWORD)


@pytest.fixture(autouse=True)
def setup_db():
    """Create and drop tables for each test."""
    Base.metadata.create_all(bind=test_engine)
    reset_rate_limits()
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db():
    """Provide a database session for tests."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    """Create test client."""
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db, password_hash):
    counter = {"n": 0}

    def _make_user(role="candidate", plan="free", email=None, **fields):
        counter["n"] += 1
        user = User(
            email=email or f"{role}{counter['n']}@example.ci",
            password_hash=password_hash,
            role=role,
            subscription_plan=plan,
            applications_created_count=fields.pop("applications_created_count", 0),
            jobs_published=fields.pop("jobs_published", 0),
            **fields
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_job(db):
    def _make_job(recruiter, **fields):
        values = {
            "title": "Livreur à moto",
            "description": "Livraison de colis à Cocody",
            "category": "livraison",
            "amount": 15000,
            "location": "Abidjan",
            "commune": "Cocody",
            "contact_phone": "+2250700000001",
            "contact_whatsapp": "+2250700000002",
            "status": "open",
        }
        values.update(fields)
        job = Job(recruiter_id=recruiter.id, **values)
        db.add(job)
        db.commit()
        db.refresh(job)
        return job

    return _make_job


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': user.email})}"}


@pytest.fixture
def headers():
    return auth_headers
