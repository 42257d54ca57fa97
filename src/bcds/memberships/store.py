"""Membership interval and payment storage."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from sqlalchemy.orm import Session

from bcds.db.models import Membership, Payment


class MembershipStore(Protocol):
    """Queries the membership evaluator and import driver rely on."""

    def interval_covering(self, player_id: int, on_date: date) -> Optional[Membership]:
        ...

    def add_interval(
        self,
        player_id: int,
        valid_from: date,
        valid_until: date,
        payment: Optional[Payment] = None,
    ) -> Membership:
        ...

    def intervals_for_player(self, player_id: int) -> list[Membership]:
        ...

    def confirmation_code_exists(self, confirmation_code: str) -> bool:
        ...


class DBMembershipStore:
    """Membership store backed by the database."""

    def __init__(self, session: Session):
        self.session = session

    def interval_covering(self, player_id: int, on_date: date) -> Optional[Membership]:
        """Any interval of the player that includes on_date (both ends inclusive)."""
        return (
            self.session.query(Membership)
            .filter(
                Membership.player_id == player_id,
                Membership.valid_from <= on_date,
                Membership.valid_until >= on_date,
            )
            .order_by(Membership.valid_from)
            .first()
        )

    def add_interval(
        self,
        player_id: int,
        valid_from: date,
        valid_until: date,
        payment: Optional[Payment] = None,
    ) -> Membership:
        if valid_until < valid_from:
            raise ValueError(
                f"Membership interval ends before it starts: {valid_from} -> {valid_until}"
            )
        membership = Membership(
            player_id=player_id,
            valid_from=valid_from,
            valid_until=valid_until,
            payment=payment,
        )
        self.session.add(membership)
        self.session.flush()
        return membership

    def intervals_for_player(self, player_id: int) -> list[Membership]:
        """Membership history for a player, oldest first."""
        return (
            self.session.query(Membership)
            .filter(Membership.player_id == player_id)
            .order_by(Membership.valid_from)
            .all()
        )

    def confirmation_code_exists(self, confirmation_code: str) -> bool:
        return self.session.get(Payment, confirmation_code) is not None
