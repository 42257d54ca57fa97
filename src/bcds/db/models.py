"""
SQLAlchemy ORM models for the BCDS membership tracker.

The schema is built around a canonical player identity: each real player
has one record, however many spellings of their name turn up in the
membership sheet or on PDGA event pages.

Key design decisions:
- A player's PDGA number is optional but unique when present
- Alternate names live in player_aliases, in discovery order
- Names are stored lower-cased; comparisons never depend on display casing
- A membership is a closed date range paid for by exactly one payment
- Payments are keyed by the confirmation code from the sheet, which makes
  re-importing the same sheet a no-op

Tables:
- players: Canonical player records
- player_aliases: Alternate names observed for a player
- payments: Raw payment rows from the membership sheet
- memberships: Validity intervals per player
"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


# =============================================================================
# Player Models
# =============================================================================

class Player(Base):
    """
    Canonical player record.

    full_name is the name the player was first seen with. Every other
    spelling we have observed is kept in aliases, never replacing full_name.
    """
    __tablename__ = "players"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Stored normalized (lower-cased, single spaces)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)

    # PDGA number. Authoritative once attached.
    registry_number: Mapped[Optional[str]] = mapped_column(
        String(20), unique=True, nullable=True
    )

    birth_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Contact details (weak identity signals, they drift over time)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Metadata
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    aliases: Mapped[list["PlayerAlias"]] = relationship(
        back_populates="player",
        cascade="all, delete-orphan",
        order_by="PlayerAlias.id",
    )
    memberships: Mapped[list["Membership"]] = relationship(
        back_populates="player",
        order_by="Membership.valid_from",
    )

    __table_args__ = (
        Index("idx_players_full_name", "full_name"),
    )

    @property
    def alias_names(self) -> list[str]:
        """Alternate names in the order they were discovered."""
        return [alias.alias for alias in self.aliases]

    def __repr__(self) -> str:
        return (
            f"<Player(id={self.id}, name='{self.full_name}', "
            f"pdga={self.registry_number})>"
        )


class PlayerAlias(Base):
    """
    An alternate name a player has been seen with.

    Players enter tournaments and buy memberships under different names
    (nicknames, married names, typos). Each distinct spelling is kept
    once per player.
    """
    __tablename__ = "player_aliases"

    id: Mapped[int] = mapped_column(primary_key=True)
    player_id: Mapped[int] = mapped_column(ForeignKey("players.id", ondelete="CASCADE"))

    # Stored lower-cased for case-insensitive matching
    alias: Mapped[str] = mapped_column(String(255), nullable=False)

    # Where the alias was first seen ('sheet', 'pdga')
    source: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    player: Mapped["Player"] = relationship(back_populates="aliases")

    __table_args__ = (
        UniqueConstraint("player_id", "alias", name="uq_player_alias"),
        Index("idx_player_aliases_alias", "alias"),
    )

    def __repr__(self) -> str:
        return f"<PlayerAlias(alias='{self.alias}', source='{self.source}')>"


# =============================================================================
# Membership Models
# =============================================================================

class Payment(Base):
    """
    A membership payment as recorded in the membership sheet.

    The confirmation code is issued by the payment processor and is the
    idempotency key for imports. Amounts are kept as the text found in the
    sheet; nothing here checks them.
    """
    __tablename__ = "payments"

    confirmation_code: Mapped[str] = mapped_column(String(100), primary_key=True)

    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    transaction_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    amount: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    source: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    detail: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<Payment(code='{self.confirmation_code}', date={self.transaction_date})>"


class Membership(Base):
    """
    A closed validity interval [valid_from, valid_until] for one player.

    Created once per reconciled payment and never modified afterwards.
    Intervals for the same player may overlap (the sheet occasionally
    contains duplicate submissions) or leave gaps.
    """
    __tablename__ = "memberships"

    id: Mapped[int] = mapped_column(primary_key=True)
    player_id: Mapped[int] = mapped_column(
        ForeignKey("players.id", ondelete="CASCADE"), nullable=False
    )

    valid_from: Mapped[date] = mapped_column(Date, nullable=False)
    valid_until: Mapped[date] = mapped_column(Date, nullable=False)

    payment_confirmation_code: Mapped[Optional[str]] = mapped_column(
        ForeignKey("payments.confirmation_code"), unique=True, nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    player: Mapped["Player"] = relationship(back_populates="memberships")
    payment: Mapped[Optional["Payment"]] = relationship()

    __table_args__ = (
        Index("idx_memberships_player_range", "player_id", "valid_from", "valid_until"),
    )

    def __repr__(self) -> str:
        return (
            f"<Membership(player_id={self.player_id}, "
            f"{self.valid_from} -> {self.valid_until})>"
        )
