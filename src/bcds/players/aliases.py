"""
Player name normalization and alias tracking.

Disc golfers register under different spellings of their name over the
years:
- Sheet: "Fred  Roberts" (double space, typed by hand)
- PDGA: "Freddie Roberts"
- Sheet, after a name change: "Fred Roberts-Lee"

A player keeps the name we first saw as full_name and collects every other
spelling as an alias. These helpers decide whether a player is already
known by a name, and record new names. They never touch the database;
the identity service persists the player afterwards.
"""

from typing import Optional

from bcds.db.models import Player, PlayerAlias


def normalize_name(name: Optional[str]) -> str:
    """
    Normalize a player name for storage and comparison.

    Lower-cases, trims, and collapses runs of whitespace.

    Examples:
        >>> normalize_name("  Ted   MOENS ")
        'ted moens'
        >>> normalize_name(None)
        ''
    """
    if not name:
        return ""
    return " ".join(name.lower().split())


def is_known_as(player: Player, candidate_name: str) -> bool:
    """
    Check whether a player goes by candidate_name.

    True if the name equals the player's full_name or one of its aliases,
    ignoring case and spacing. Whole entries only: a player with the alias
    "fred robertson" is not known as "fred roberts". Database substring
    searches return such near misses, so their hits must pass through here.
    """
    candidate = normalize_name(candidate_name)
    if not candidate:
        return False
    if candidate == normalize_name(player.full_name):
        return True
    return any(candidate == normalize_name(alias) for alias in player.alias_names)


def track_alias(player: Player, candidate_name: str, source: Optional[str] = None) -> bool:
    """
    Remember candidate_name as an alias of player.

    Does nothing if the name is the player's full_name or an existing
    alias. Existing aliases are never removed or reordered.

    Args:
        player: Player to update (in memory only)
        candidate_name: Name the player was seen with
        source: Where the name was seen ('sheet', 'pdga')

    Returns:
        True if a new alias was added
    """
    candidate = normalize_name(candidate_name)
    if not candidate or is_known_as(player, candidate):
        return False

    player.aliases.append(PlayerAlias(alias=candidate, source=source))
    return True
