# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Set test environment before importing app
os.environ["SALESCRM_DATABASE_URL"] = "sqlite:///./test.db"

from salescrm.api.deps import get_db
from salescrm.config import settings
from salescrm.main import app
from salescrm.models import User, UserRole
from salescrm.models.base import Base
from salescrm.rbac.policy import default_permissions
from salescrm.services import auth_service

# Test database setup
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(db_session):
    """Open extra sessions on the test database, e.g. one per thread."""
    return TestingSessionLocal


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    """Factory for persisted users with their role's default permissions."""

    def _make_user(
        name: str,
        role: UserRole,
        admin: User | None = None,
        creator: User | None = None,
        **kwargs,
    ) -> User:
        user = User(
            name=name,
            email=f"{name.lower()}@example.com",
            role=role,
            permissions=kwargs.pop("permissions", default_permissions(role)),
            created_by_id=creator.id if creator else None,
            created_by_admin_id=admin.id if admin else None,
            **kwargs,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def developer(make_user) -> User:
    """Create a developer."""
    return make_user("Dev", UserRole.DEVELOPER)


@pytest.fixture
def admin_user(make_user, developer) -> User:
    """Create an admin created by the developer."""
    return make_user("Alice", UserRole.ADMIN, creator=developer)


@pytest.fixture
def employee(make_user, admin_user) -> User:
    """Create an employee belonging to admin_user."""
    return make_user("Eve", UserRole.EMPLOYEE, admin=admin_user, creator=admin_user)


@pytest.fixture
def login(client, db_session):
    """Switch the test client to a user's session."""

    def _login(user: User) -> TestClient:
        token = auth_service.create_session(db_session, user.id)
        client.cookies.set(settings.session_cookie_name, token)
        return client

    return _login
