"""Exceptions raised while reconciling player identities."""

from typing import Optional


class IdentityError(Exception):
    """Base class for player identity failures."""
    pass


class IdentityConflict(IdentityError):
    """
    An incoming record contradicts a stored player on a hard signal.

    Raised when a PDGA number matches a stored player whose birth date
    differs from the record's, or when persisting a player would give a
    PDGA number to a second player. Not retryable: batch callers skip the
    record and carry on with the next one.
    """

    def __init__(self, message: str, registry_number: Optional[str] = None):
        super().__init__(message)
        self.registry_number = registry_number


class AmbiguousMatch(IdentityError):
    """
    A name matched several players and nothing tells them apart.

    Raised to callers of the first/last name lookup. The tournament roster
    path catches it and treats the player as unknown.
    """

    def __init__(self, name: str, player_ids: list[int]):
        super().__init__(
            f"'{name}' matches {len(player_ids)} players: {player_ids}"
        )
        self.name = name
        self.player_ids = player_ids
