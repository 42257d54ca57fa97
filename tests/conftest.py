"""
Pytest configuration and fixtures.

This file is automatically loaded by pytest and provides
shared fixtures for all tests.
"""

from datetime import date

import pytest
from sqlalchemy.orm import sessionmaker

from bcds.config import Settings
from bcds.db.models import Base, Player
from bcds.db.session import get_engine
from bcds.memberships.store import DBMembershipStore
from bcds.players.aliases import track_alias
from bcds.players.identity import PlayerIdentityService
from bcds.players.records import ImportRecord
from bcds.players.store import DBPlayerStore


@pytest.fixture
def test_engine():
    """
    Create a test database engine.

    Uses SQLite in-memory, one fresh database per test. get_engine()
    installs the SAVEPOINT handling the identity service relies on.
    """
    engine = get_engine(Settings(database_url="sqlite:///:memory:"))
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(test_engine):
    """Create a database session for a test."""
    Session = sessionmaker(bind=test_engine)
    session = Session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def player_store(db_session):
    return DBPlayerStore(db_session)


@pytest.fixture
def membership_store(db_session):
    return DBMembershipStore(db_session)


@pytest.fixture
def identity_service(player_store):
    return PlayerIdentityService(player_store)


@pytest.fixture
def add_player(db_session):
    """Factory fixture: store a player and return it (flushed, with an id)."""

    def _add(full_name: str, aliases: tuple[str, ...] = (), **fields) -> Player:
        player = Player(full_name=full_name, **fields)
        db_session.add(player)
        for alias in aliases:
            track_alias(player, alias, source="test")
        db_session.flush()
        return player

    return _add


def _make_record(full_name: str = "john smith", **fields) -> ImportRecord:
    defaults = dict(
        confirmation_code=f"CODE-{full_name}-{fields.get('registry_number')}",
        valid_from=date(2024, 3, 1),
        valid_until=date(2024, 12, 31),
    )
    defaults.update(fields)
    return ImportRecord(full_name=full_name, **defaults)


@pytest.fixture
def make_record():
    """Factory fixture: ImportRecord with a throwaway payment and 2024 membership year."""
    return _make_record
