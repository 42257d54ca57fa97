"""
Membership module.

Answers "was this player a club member on this date?" from the validity
intervals written by the sheet import.
"""

from bcds.memberships.status import MembershipState, membership_state, membership_year
from bcds.memberships.store import DBMembershipStore, MembershipStore

__all__ = [
    "DBMembershipStore",
    "MembershipState",
    "MembershipStore",
    "membership_state",
    "membership_year",
]
