import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine
from sqlmodel.pool import StaticPool

import rotatarr.models.library  # noqa: F401 registers the user_shows table
from rotatarr.core.database import get_session
from rotatarr.main import app
from rotatarr.providers import register_service
from rotatarr.providers.catalog import DEFAULT_SERVICES


@pytest.fixture
def session():
    """In-memory SQLite session shared across threads for the test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session):
    """TestClient whose routes use the in-memory session."""
    app.dependency_overrides[get_session] = lambda: session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def default_services():
    for service in DEFAULT_SERVICES:
        register_service(service)
    return DEFAULT_SERVICES
