"""
Shared fixtures for the source parser test suite.

Provides: stub reference resolvers and an in-memory reference cache database.
Dependencies: pytest, sqlalchemy
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import models  # noqa: F401
from database.session import Base
from verifiers.reference_resolver import ReferenceLookupError, StaticReferenceResolver


class FailingResolver:
    """Resolver whose registry is always unavailable."""

    def __init__(self, exc: Exception | None = None):
        self.exc = exc or ReferenceLookupError("Registry lookup failed: connection refused")
        self.calls = []

    def resolve(self, reference):
        self.calls.append(reference)
        raise self.exc


@pytest.fixture
def static_resolver():
    return StaticReferenceResolver(
        {
            "IEC 60050-151": "https://webstore.iec.ch/publication/160",
            "JCGM VIM": "https://www.bipm.org/en/committees/jc/jcgm/publications",
        }
    )


@pytest.fixture
def failing_resolver():
    return FailingResolver()


@pytest.fixture
def failing_resolver_factory():
    return FailingResolver


@pytest.fixture
def session_factory():
    """Session factory bound to a fresh in-memory SQLite reference cache."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    yield factory
    engine.dispose()
