"""
Membership import service: turns parsed sheet rows into memberships.

For each record, in sheet order:
1. Skip it if its payment confirmation code was imported before
2. Resolve the player with the identity service
3. Store the payment and the membership interval it bought

A row that contradicts a stored player is logged and skipped; the rest
of the sheet is still imported. Each row runs in its own savepoint, so a
refused row leaves nothing behind and an aborted run keeps the rows
already done.

Usage:
    from bcds.services.membership_import import import_memberships

    parsed = parse_rows(rows)
    with get_session() as session:
        stats = import_memberships(
            session,
            parsed.records,
            PlayerIdentityService(DBPlayerStore(session)),
            DBMembershipStore(session),
        )
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence

from sqlalchemy.orm import Session

from bcds.config import settings
from bcds.db.models import Payment
from bcds.memberships.store import MembershipStore
from bcds.players.errors import IdentityConflict
from bcds.players.identity import PlayerIdentityService
from bcds.players.records import ImportRecord
from bcds.sheet.parser import parse_rows

logger = logging.getLogger(__name__)


@dataclass
class MembershipImportStats:
    """Statistics from a membership import run."""
    total_records: int = 0
    memberships_created: int = 0
    skipped_already_imported: int = 0
    skipped_conflict: int = 0
    errors: list[str] = field(default_factory=list)

    def summary(self) -> str:
        """Return a human-readable summary of the import."""
        lines = [
            "Membership import complete:",
            f"  Total records processed:   {self.total_records}",
            f"  Memberships created:       {self.memberships_created}",
            f"  Skipped (already imported): {self.skipped_already_imported}",
            f"  Skipped (identity conflict): {self.skipped_conflict}",
        ]
        if self.errors:
            lines.append(f"  Errors: {len(self.errors)}")
            for err in self.errors[:5]:
                lines.append(f"    - {err}")
            if len(self.errors) > 5:
                lines.append(f"    ... and {len(self.errors) - 5} more")
        return "\n".join(lines)


class ImportThrottle:
    """
    Limits how often the membership sheet is re-imported.

    Every membership query triggers a refresh of the sheet; within the
    latency window the previous import is considered fresh enough.
    """

    def __init__(self, latency_seconds: Optional[float] = None):
        if latency_seconds is None:
            latency_seconds = settings.sheet_reload_latency_seconds
        self.latency_seconds = latency_seconds
        self.last_load: Optional[float] = None

    def ready(self, now: Optional[float] = None) -> bool:
        """True if enough time has passed since the last import."""
        if self.last_load is None:
            return True
        now = time.monotonic() if now is None else now
        return now >= self.last_load + self.latency_seconds

    def mark_loaded(self, now: Optional[float] = None) -> None:
        self.last_load = time.monotonic() if now is None else now


def _payment_from_record(record: ImportRecord) -> Payment:
    return Payment(
        confirmation_code=record.confirmation_code,
        name=record.payment_name,
        address=record.payment_address,
        email=record.payment_email,
        transaction_date=record.transaction_date,
        amount=record.payment_amount,
        source=record.payment_source,
        detail=record.payment_detail,
    )


def import_memberships(
    session: Session,
    records: Iterable[ImportRecord],
    identity_service: PlayerIdentityService,
    membership_store: MembershipStore,
) -> MembershipImportStats:
    """
    Import parsed sheet records as memberships.

    Commits are left to the caller.

    Args:
        session: SQLAlchemy database session
        records: Parsed sheet records, in sheet order
        identity_service: Resolves each record to a player
        membership_store: Where payments and intervals are written

    Returns:
        MembershipImportStats with counts of what happened
    """
    stats = MembershipImportStats()

    for record in records:
        stats.total_records += 1

        if membership_store.confirmation_code_exists(record.confirmation_code):
            stats.skipped_already_imported += 1
            continue

        try:
            with session.begin_nested():
                player = identity_service.resolve_from_import(record)
                membership_store.add_interval(
                    player.id,
                    record.valid_from,
                    record.valid_until,
                    payment=_payment_from_record(record),
                )
        except IdentityConflict as e:
            error_msg = f"row {record.row_number} ({record.full_name}): {e}"
            stats.skipped_conflict += 1
            stats.errors.append(error_msg)
            logger.error("Could not find a matching player for %s. Skipping", error_msg)
            continue

        stats.memberships_created += 1
        logger.debug(
            "Membership %s -> %s recorded for player %s",
            record.valid_from, record.valid_until, player.id,
        )

    logger.info(stats.summary())
    return stats


def reload_memberships(
    session: Session,
    load_rows: Callable[[], Iterable[Sequence[Optional[str]]]],
    throttle: ImportThrottle,
    identity_service: PlayerIdentityService,
    membership_store: MembershipStore,
) -> Optional[MembershipImportStats]:
    """
    Re-read the membership sheet and import it, unless it was loaded recently.

    Args:
        session: SQLAlchemy database session
        load_rows: Returns the sheet rows, header first
        throttle: Tracks when the sheet was last loaded
        identity_service: Resolves each record to a player
        membership_store: Where payments and intervals are written

    Returns:
        Import stats, or None if the reload was skipped
    """
    if not throttle.ready():
        logger.info("Reload requested within %ss of the last one. No reload performed.",
                    throttle.latency_seconds)
        return None

    parsed = parse_rows(load_rows())
    stats = import_memberships(session, parsed.records, identity_service, membership_store)
    throttle.mark_loaded()
    return stats
