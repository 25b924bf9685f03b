# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from app import app
from database import Base, get_db
from validators import RegistrationForm


@pytest.fixture(scope="function")
def engine():
    """In-memory SQLite engine shared across threads, with the accounts table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(scope="function")
def override_db(session_factory):
    """Point the app's get_db dependency at the test engine."""

    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(override_db):
    # Not used as a context manager, so the startup hook never touches the real database.
    return TestClient(app)


@pytest.fixture
def alice_form():
    return RegistrationForm(
        username="alice1",
        password="Passw0rd",
        confirm_password="Passw0rd",
        first_name="Alice",
        last_name="Smith",
        email="alice@example.com",
    )


@pytest.fixture
def alice_body():
    return {
        "username": "alice1",
        "password": "Passw0rd",
        "confirmPassword": "Passw0rd",
        "firstName": "Alice",
        "lastName": "Smith",
        "email": "alice@example.com",
        "skills": "[]",
    }
