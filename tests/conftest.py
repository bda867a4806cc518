import pytest
import os
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from hrms.database import Base, get_db
from hrms.main import app
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Clean database session for each test function.

    Services commit and roll back on their own, so isolation comes from
    emptying every table afterwards rather than from an outer transaction.
    """
    session = TestingSessionLocal()

    yield session

    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def admin_user(db_session):
    """Bootstrap Admin account without an employee profile."""
    from hrms.core.enums import UserRole
    from hrms.services import auth as auth_service

    return auth_service.create_account(db_session, "admin", "AdminPassword123!", UserRole.ADMIN)


@pytest.fixture(scope="function")
def hr_user(db_session):
    from hrms.core.enums import UserRole
    from hrms.services import auth as auth_service

    return auth_service.create_account(db_session, "hr.officer", "HrPassword123!", UserRole.HR)


@pytest.fixture(scope="function")
def make_employee(db_session):
    """Factory creating an employee (and its login) through the service layer."""
    from hrms.services import employee_service

    counter = {"n": 0}

    def _make(first_name="John", last_name="Doe", **overrides):
        counter["n"] += 1
        data = {
            "first_name": first_name,
            "last_name": last_name,
            "email": f"{first_name.lower()}.{last_name.lower()}{counter['n']}@example.com",
            "date_of_joining": date(2024, 1, 2),
        }
        data.update(overrides)
        return employee_service.create_employee(db_session, data)
    return _make


@pytest.fixture(scope="function")
def employee(make_employee):
    return make_employee().employee


@pytest.fixture(scope="function")
def get_token():
    """Helper fixture to create access tokens for a user."""
    from hrms.services.auth import create_access_token

    def _get_token(user):
        return create_access_token(data={"sub": str(user.id), "role": user.role.value})
    return _get_token


@pytest.fixture(scope="function")
def auth_headers(get_token):
    def _headers(user):
        return {"Authorization": f"Bearer {get_token(user)}"}
    return _headers


@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
