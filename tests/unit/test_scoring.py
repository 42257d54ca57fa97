"""
Unit tests for candidate scoring.
"""

from datetime import date

from bcds.db.models import Player
from bcds.players.scoring import (
    ADDRESS_MATCH_SCORE,
    BIRTH_DATE_MATCH_SCORE,
    DISQUALIFIED,
    EMAIL_MATCH_SCORE,
    NAME_MATCH_SCORE,
    REGISTRY_NUMBER_SCORE,
    score_candidate,
)


def test_name_only_match(make_record):
    stored = Player(full_name="jane doe")
    score = score_candidate(stored, make_record("jane doe"))
    assert score == NAME_MATCH_SCORE + REGISTRY_NUMBER_SCORE


def test_email_breaks_tie_between_namesakes(make_record):
    """Two 'jane doe's: the one with the matching email scores higher."""
    record = make_record("jane doe", email="jane@example.com")
    with_email = Player(full_name="jane doe", email="jane@example.com")
    other = Player(full_name="jane doe", email="doe.j@example.org")

    assert score_candidate(with_email, record) == 121
    assert score_candidate(other, record) == 101


def test_all_signals_agree(make_record):
    stored = Player(
        full_name="jane doe",
        registry_number="4242",
        birth_date=date(1985, 4, 1),
        email="jane@example.com",
        address="1 main st",
    )
    record = make_record(
        "jane doe",
        registry_number="4242",
        birth_date=date(1985, 4, 1),
        email="Jane@Example.com",
        address="1  Main St",
    )
    assert score_candidate(stored, record) == (
        NAME_MATCH_SCORE
        + BIRTH_DATE_MATCH_SCORE
        + REGISTRY_NUMBER_SCORE
        + EMAIL_MATCH_SCORE
        + ADDRESS_MATCH_SCORE
    )


def test_birth_date_mismatch_disqualifies(make_record):
    stored = Player(full_name="bob jones", birth_date=date(1970, 1, 1), email="bob@example.com")
    record = make_record("bob jones", birth_date=date(1985, 6, 6), email="bob@example.com")
    assert score_candidate(stored, record) == DISQUALIFIED


def test_registry_number_mismatch_disqualifies(make_record):
    stored = Player(full_name="bob jones", registry_number="111")
    record = make_record("bob jones", registry_number="222")
    assert score_candidate(stored, record) == DISQUALIFIED


def test_missing_signals_are_not_evidence(make_record):
    """Absent birth date, email or address on either side neither adds nor disqualifies."""
    stored = Player(full_name="bob jones", registry_number="111")
    record = make_record("bob jones", birth_date=date(1985, 6, 6), email="bob@example.com")
    assert score_candidate(stored, record) == NAME_MATCH_SCORE + REGISTRY_NUMBER_SCORE


def test_contact_mismatch_does_not_disqualify(make_record):
    stored = Player(full_name="bob jones", email="old@example.com", address="old road")
    record = make_record("bob jones", email="new@example.com", address="new road")
    assert score_candidate(stored, record) == NAME_MATCH_SCORE + REGISTRY_NUMBER_SCORE


def test_scoring_does_not_modify_inputs(make_record):
    stored = Player(full_name="bob jones")
    record = make_record("bob jones", registry_number="222", email="bob@example.com")
    score_candidate(stored, record)

    assert stored.registry_number is None
    assert stored.email is None
    assert record.registry_number == "222"
