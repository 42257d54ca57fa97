"""
Database module for the BCDS membership tracker.

Provides SQLAlchemy ORM models and session management.

Usage:
    from bcds.db import get_session, Player, Membership

    with get_session() as session:
        players = session.query(Player).all()
"""

from bcds.db.models import (
    Base,
    Membership,
    Payment,
    Player,
    PlayerAlias,
)
from bcds.db.session import SessionLocal, get_engine, get_session

__all__ = [
    # Base
    "Base",
    # Models
    "Player",
    "PlayerAlias",
    "Payment",
    "Membership",
    # Session
    "get_session",
    "get_engine",
    "SessionLocal",
]
