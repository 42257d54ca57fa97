"""
Player identity service for reconciling incoming records with stored players.

This is the core of the membership tracker. Every sheet row and every
tournament roster entry goes through here to become a stored player (or,
when the evidence is contradictory, to be refused).

The matching strategy prioritizes reliability:
1. Exact PDGA number - authoritative once attached to a player
2. Exact name, ranked by birth date / PDGA number / email / address
   (sheet rows only)
3. Name or alias, validated, and only when exactly one player qualifies
   (tournament rosters only)
4. Otherwise a new player - unless the only evidence is a bare name from a
   roster, which never grows the registry

A wrong merge silently corrupts a player's membership history, so
ambiguity is reported rather than guessed away.
"""

import logging
from typing import Optional

from bcds.db.models import Player
from bcds.players.aliases import is_known_as, normalize_name, track_alias
from bcds.players.errors import AmbiguousMatch, IdentityConflict
from bcds.players.records import ExternalPlayerRef, ImportRecord
from bcds.players.scoring import score_candidate
from bcds.players.store import PlayerStore

logger = logging.getLogger(__name__)

SOURCE_SHEET = "sheet"
SOURCE_PDGA = "pdga"


class PlayerIdentityService:
    """
    Service for resolving player identity across the sheet and PDGA.

    Records must be resolved one at a time, in source order: a later row
    may depend on a player or alias created by an earlier one.

    Usage:
        service = PlayerIdentityService(DBPlayerStore(session))

        try:
            player = service.resolve_from_import(record)
        except IdentityConflict:
            # skip this row, keep going
            ...

        player = service.resolve_from_external_ref(
            ExternalPlayerRef(name="ted moens", registry_number="89924")
        )
        if player is None:
            # unknown or ambiguous
            ...
    """

    def __init__(self, store: PlayerStore):
        """
        Initialize the identity service.

        Args:
            store: Player registry to reconcile against
        """
        self.store = store

    # =========================================================================
    # Main Public Methods
    # =========================================================================

    def resolve_from_import(self, record: ImportRecord) -> Player:
        """
        Find, update or create the player a sheet row refers to.

        Nothing is persisted if the record is refused.

        Args:
            record: Parsed membership sheet row

        Returns:
            The existing (possibly updated) or newly created player

        Raises:
            IdentityConflict: If the row contradicts a stored player on a
                hard signal, or would give its PDGA number to a second player
        """
        name = normalize_name(record.full_name)
        if not name:
            raise ValueError(f"Import record {record!r} has no player name")

        with self.store.savepoint():
            return self._resolve_import(record, name)

    def resolve_from_external_ref(self, ref: ExternalPlayerRef) -> Optional[Player]:
        """
        Find the player a tournament roster entry refers to.

        Only adds aliases and attaches PDGA numbers, never edits contact
        details. Creates a player only when the entry carries a PDGA number
        nobody has.

        Args:
            ref: Roster entry (name and optional PDGA number)

        Returns:
            The player, or None if unknown or ambiguous

        Raises:
            IdentityConflict: If another writer attached the same PDGA
                number in the meantime
        """
        name = normalize_name(ref.name)

        with self.store.savepoint():
            if ref.registry_number:
                return self._resolve_numbered_ref(name, ref.registry_number)

            if not name:
                return None
            try:
                return self._find_single_known_as(name)
            except AmbiguousMatch as e:
                logger.info("Roster name is ambiguous, treating as unknown: %s", e)
                return None

    # =========================================================================
    # Sheet Records
    # =========================================================================

    def _resolve_import(self, record: ImportRecord, name: str) -> Player:
        # Strategy 1: PDGA number
        if record.registry_number:
            player = self.store.find_by_registry_number(record.registry_number)
            if player is not None:
                self._check_birth_date(player, record)
                if track_alias(player, name, source=SOURCE_SHEET):
                    logger.info(
                        "Adding alias '%s' to player %s ('%s')",
                        name, player.id, player.full_name,
                    )
                self._backfill(player, record)
                return self.store.save(player)

        # Strategy 2: exact name, best scoring candidate
        candidates = self.store.find_by_exact_name(name)
        best = self._pick_best_candidate(candidates, record)
        if best is not None:
            if record.registry_number and not best.registry_number:
                best.registry_number = record.registry_number
                logger.info(
                    "Adding PDGA number %s to player %s ('%s')",
                    record.registry_number, best.id, best.full_name,
                )
            self._backfill(best, record)
            return self.store.save(best)

        # Strategy 3: new player
        player = Player(
            full_name=name,
            registry_number=record.registry_number,
            birth_date=record.birth_date,
            email=record.email,
            address=record.address,
            city=record.city,
        )
        player = self.store.save(player)
        logger.info(
            "Created player %s ('%s', pdga=%s) from sheet row %s",
            player.id, player.full_name, player.registry_number, record.row_number,
        )
        return player

    def _check_birth_date(self, player: Player, record: ImportRecord) -> None:
        if record.birth_date and player.birth_date and record.birth_date != player.birth_date:
            logger.warning(
                "FIX ==> PDGA number %s has dob %s in the sheet but %s in the db",
                record.registry_number, record.birth_date, player.birth_date,
            )
            raise IdentityConflict(
                f"PDGA number {record.registry_number} has birth date "
                f"{record.birth_date} in the sheet but {player.birth_date} on record",
                registry_number=record.registry_number,
            )

    def _pick_best_candidate(
        self, candidates: list[Player], record: ImportRecord
    ) -> Optional[Player]:
        """
        Return the highest scoring candidate, or None if none scores above 0.

        Ties go to the first candidate in store order.
        """
        best: Optional[Player] = None
        best_score = 0
        for candidate in candidates:
            score = score_candidate(candidate, record)
            if score > best_score:
                best_score = score
                best = candidate
        return best

    def _backfill(self, player: Player, record: ImportRecord) -> None:
        """Copy fields the player is missing from the record."""
        if record.birth_date and not player.birth_date:
            player.birth_date = record.birth_date
        if record.email and not player.email:
            player.email = record.email
        if record.address and not player.address:
            player.address = record.address
        if record.city and not player.city:
            player.city = record.city

    # =========================================================================
    # Roster Entries
    # =========================================================================

    def _resolve_numbered_ref(self, name: str, registry_number: str) -> Optional[Player]:
        player = self.store.find_by_registry_number(registry_number)
        if player is not None:
            if track_alias(player, name, source=SOURCE_PDGA):
                player = self.store.save(player)
                logger.info(
                    "Adding alias '%s' to player %s ('%s')",
                    name, player.id, player.full_name,
                )
            return player

        if not name:
            return None

        # Only a player without a PDGA number can take this one
        try:
            player = self._find_single_known_as(name, unnumbered_only=True)
        except AmbiguousMatch as e:
            logger.info("Roster name is ambiguous, treating as unknown: %s", e)
            return None

        if player is not None:
            player.registry_number = registry_number
            player = self.store.save(player)
            logger.info(
                "Adding PDGA number %s to player %s ('%s')",
                registry_number, player.id, player.full_name,
            )
            return player

        # A valid name + PDGA number pair is trustworthy enough to seed a player
        player = self.store.save(Player(full_name=name, registry_number=registry_number))
        logger.info(
            "Created player %s ('%s', pdga=%s) from PDGA data",
            player.id, player.full_name, registry_number,
        )
        return player

    def _find_single_known_as(
        self, name: str, unnumbered_only: bool = False
    ) -> Optional[Player]:
        """
        Find the one player known by name (full name or alias).

        Args:
            name: Normalized name to look for
            unnumbered_only: Ignore players that already have a PDGA number

        Returns:
            The player, or None if nobody is known by that name

        Raises:
            AmbiguousMatch: If more than one player is known by that name
        """
        hits = self.store.find_by_name_or_alias_substring(name)
        matches = [p for p in hits if is_known_as(p, name)]
        if unnumbered_only:
            matches = [p for p in matches if not p.registry_number]

        if len(matches) > 1:
            raise AmbiguousMatch(name, [p.id for p in matches])
        if matches:
            return matches[0]
        return None
