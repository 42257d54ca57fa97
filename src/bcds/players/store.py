"""
Player registry storage.

PlayerStore is the interface the identity service reconciles against.
DBPlayerStore implements it on a SQLAlchemy session. Every save flushes,
so a player created or renamed by one sheet row is visible to the next
row of the same import.
"""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from typing import Optional, Protocol

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bcds.db.models import Player, PlayerAlias
from bcds.players.aliases import normalize_name
from bcds.players.errors import IdentityConflict

logger = logging.getLogger(__name__)


class PlayerStore(Protocol):
    """Lookup and persistence primitives for stored players."""

    def find_by_registry_number(self, number: str) -> Optional[Player]:
        ...

    def find_by_exact_name(self, name: str) -> list[Player]:
        ...

    def find_by_name_or_alias_substring(self, text: str) -> list[Player]:
        ...

    def save(self, player: Player) -> Player:
        ...

    def savepoint(self) -> AbstractContextManager:
        ...


class DBPlayerStore:
    """Player store backed by the database."""

    def __init__(self, session: Session):
        self.session = session

    def find_by_registry_number(self, number: str) -> Optional[Player]:
        return (
            self.session.query(Player)
            .filter(Player.registry_number == number)
            .first()
        )

    def find_by_exact_name(self, name: str) -> list[Player]:
        """All players whose full_name is exactly name (after normalization)."""
        return (
            self.session.query(Player)
            .filter(Player.full_name == normalize_name(name))
            .order_by(Player.id)
            .all()
        )

    def find_by_name_or_alias_substring(self, text: str) -> list[Player]:
        """
        All players whose full_name or any alias contains text.

        Case-insensitive. This is a coarse net: "fred roberts" also catches
        "fred robertson". Callers validate hits with is_known_as().
        """
        needle = normalize_name(text)
        if not needle:
            return []

        alias_hit = Player.aliases.any(
            func.lower(PlayerAlias.alias).contains(needle, autoescape=True)
        )
        return (
            self.session.query(Player)
            .filter(
                or_(
                    func.lower(Player.full_name).contains(needle, autoescape=True),
                    alias_hit,
                )
            )
            .order_by(Player.id)
            .all()
        )

    def save(self, player: Player) -> Player:
        """
        Add or update a player and flush it to the database.

        Raises:
            IdentityConflict: If the player's PDGA number already belongs
                to another player
        """
        # A failed flush expires the player, so read what the error needs first
        registry_number = player.registry_number
        full_name = player.full_name

        self.session.add(player)
        try:
            self.session.flush()
        except IntegrityError as e:
            if "registry_number" not in str(e.orig):
                raise
            logger.warning(
                "FIX ==> PDGA number %s is already attached to another player (saving '%s')",
                registry_number, full_name,
            )
            raise IdentityConflict(
                f"PDGA number {registry_number} already belongs to another player",
                registry_number=registry_number,
            ) from e
        return player

    def savepoint(self) -> AbstractContextManager:
        """
        Open a savepoint. Leaving the block with an exception rolls back
        everything flushed inside it.
        """
        return self.session.begin_nested()
