"""Pytest configuration and shared fixtures."""

import random

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from rota.domain.models import Base
from rota.domain.roster import Week


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )


@pytest.fixture
def week():
    return Week(("Mon", "Tue", "Wed", "Thu", "Fri"))


@pytest.fixture
def rng():
    """Seeded random source so runs are reproducible."""
    return random.Random(42)


@pytest.fixture
def db_session():
    """Create in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
