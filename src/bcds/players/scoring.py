"""
Candidate scoring for name-based player matching.

When a sheet row has no PDGA number we know (or none at all), we fall back
to every stored player with exactly the same name. Common names collide,
so each candidate is scored on the remaining identity signals and the
best one wins.

Scoring (the name already matches, worth 1 point):
- Birth date on both sides: different day disqualifies, same day +1000
- PDGA number on both sides and different: disqualifies; otherwise +100
- Email on both sides and equal: +20
- Address on both sides and equal: +10

Only birth date and PDGA number can disqualify. Emails and addresses
change when people move, so a mismatch there is no evidence against.
"""

import logging
from typing import Optional

from bcds.db.models import Player
from bcds.players.aliases import normalize_name
from bcds.players.records import ImportRecord

logger = logging.getLogger(__name__)

DISQUALIFIED = -1_000_000

NAME_MATCH_SCORE = 1
BIRTH_DATE_MATCH_SCORE = 1000
REGISTRY_NUMBER_SCORE = 100
EMAIL_MATCH_SCORE = 20
ADDRESS_MATCH_SCORE = 10


def _same_text(a: Optional[str], b: Optional[str]) -> bool:
    return normalize_name(a) == normalize_name(b)


def score_candidate(stored: Player, record: ImportRecord) -> int:
    """
    Score how well a stored player matches an incoming sheet record.

    Pure function: neither argument is modified.

    Returns:
        A positive score for a plausible match (higher is better), or
        DISQUALIFIED if a hard signal contradicts the record
    """
    score = NAME_MATCH_SCORE

    if stored.birth_date and record.birth_date:
        if stored.birth_date != record.birth_date:
            logger.debug(
                "FIX? ==> %s has dob %s in the sheet but %s in the db",
                stored.full_name, record.birth_date, stored.birth_date,
            )
            return DISQUALIFIED
        score += BIRTH_DATE_MATCH_SCORE

    if (
        stored.registry_number
        and record.registry_number
        and stored.registry_number != record.registry_number
    ):
        logger.debug(
            "FIX? ==> %s has pdga# %s in the sheet but %s in the db",
            stored.full_name, record.registry_number, stored.registry_number,
        )
        return DISQUALIFIED
    score += REGISTRY_NUMBER_SCORE

    if stored.email and record.email:
        if _same_text(stored.email, record.email):
            score += EMAIL_MATCH_SCORE
        else:
            logger.debug(
                "FIX? ==> %s has email %s in the sheet but %s in the db",
                stored.full_name, record.email, stored.email,
            )

    if stored.address and record.address:
        if _same_text(stored.address, record.address):
            score += ADDRESS_MATCH_SCORE
        else:
            logger.debug(
                "FIX? ==> %s has address %s in the sheet but %s in the db",
                stored.full_name, record.address, stored.address,
            )

    return score
