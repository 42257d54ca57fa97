"""
Player lookup by first name, last name and PDGA number.

This is the lookup behind "is this person a member?" questions asked by
tournament directors. Unlike the import path it never creates or edits a
player, and it refuses to guess: a name that fits several players raises
AmbiguousMatch.
"""

import logging
from datetime import date
from typing import Optional

from bcds.db.models import Membership, Player
from bcds.memberships.status import MembershipState, membership_state
from bcds.memberships.store import MembershipStore
from bcds.players.aliases import normalize_name
from bcds.players.errors import AmbiguousMatch, IdentityConflict
from bcds.players.store import PlayerStore

logger = logging.getLogger(__name__)


def find_player(
    store: PlayerStore,
    first_name: Optional[str],
    last_name: Optional[str],
    registry_number: Optional[str] = None,
) -> Optional[Player]:
    """
    Find a stored player by name and optional PDGA number.

    With a PDGA number, the player holding it wins, provided the last name
    appears in their name or one of their aliases. Otherwise players are
    matched on the exact full name, ignoring any whose PDGA number differs
    from the one given.

    Returns:
        The player, or None if nobody matches

    Raises:
        IdentityConflict: If the PDGA number belongs to someone with a
            different last name
        AmbiguousMatch: If several players match the name
    """
    last = normalize_name(last_name)

    if registry_number:
        player = store.find_by_registry_number(registry_number)
        if player is not None:
            names = [player.full_name, *player.alias_names]
            if last and not any(last in name for name in names):
                logger.warning(
                    "FIX? ==> Attempted match of '%s %s' with PDGA number %s ('%s')",
                    first_name, last_name, registry_number, player.full_name,
                )
                raise IdentityConflict(
                    f"PDGA number {registry_number} is known, but '{last_name}' "
                    f"is not in the name we have for the player",
                    registry_number=registry_number,
                )
            return player

    full_name = normalize_name(f"{first_name or ''} {last_name or ''}")
    if not full_name:
        return None

    players = [
        p for p in store.find_by_exact_name(full_name)
        if not registry_number or p.registry_number in (None, registry_number)
    ]
    if len(players) > 1:
        logger.warning(
            "FIX? ==> Multiple matches on '%s': %s",
            full_name,
            ", ".join(
                f"id={p.id} dob={p.birth_date} pdga={p.registry_number}" for p in players
            ),
        )
        raise AmbiguousMatch(full_name, [p.id for p in players])
    return players[0] if players else None


def check_membership(
    player_store: PlayerStore,
    membership_store: MembershipStore,
    first_name: Optional[str],
    last_name: Optional[str],
    registry_number: Optional[str] = None,
    on_date: Optional[date] = None,
) -> MembershipState:
    """Membership state of the player matching the given name/number."""
    player = find_player(player_store, first_name, last_name, registry_number)
    return membership_state(player, on_date, store=membership_store)


def get_memberships(
    player_store: PlayerStore,
    membership_store: MembershipStore,
    first_name: Optional[str],
    last_name: Optional[str],
    registry_number: Optional[str] = None,
) -> list[Membership]:
    """Membership history (oldest first) of the matching player, or []."""
    player = find_player(player_store, first_name, last_name, registry_number)
    if player is None:
        return []
    return membership_store.intervals_for_player(player.id)
