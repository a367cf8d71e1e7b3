import os

# Must be set before pawsocial.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pawsocial import models  # noqa: F401
from pawsocial.database import Base, configure_sqlite
from pawsocial.models.account import Account


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    configure_sqlite(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_account(db):
    def _make(account_id: str, role: str = "user") -> str:
        db.add(Account(id=account_id, role=role, display_name=account_id.title()))
        db.commit()
        return account_id

    return _make


@pytest.fixture
def people(make_account):
    """Five ordinary accounts: alice, bob, carol, dave, erin."""
    return [make_account(name) for name in ("alice", "bob", "carol", "dave", "erin")]


@pytest.fixture
def file_session_factory(tmp_path):
    """
    File-backed database with its own connection per session, so sessions
    in different threads really interleave.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'pawsocial-test.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    configure_sqlite(engine)
    Base.metadata.create_all(bind=engine)

    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    seed = factory()
    seed.add_all([Account(id=name) for name in ("alice", "bob", "carol")])
    seed.commit()
    seed.close()

    yield factory
    engine.dispose()
