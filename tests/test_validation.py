# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.5", "pytest>=7.0"]
# ///
"""Tests for the roster validation layer.

Validation errors name which parameter failed and what was expected, and
every problem in a roster is reported at once.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from models import Player, PlayerAttributes
from validation import RosterValidationError, ValidationErrorDetail, validate_roster


def player_document(i, **overrides):
    doc = {
        "id": f"player-1-Junior-{i}",
        "name": f"Player {i}",
        "position": "PG",
        "attributes": {field: 50 for field in PlayerAttributes.model_fields},
    }
    doc.update(overrides)
    return doc


def test_valid_roster_returns_players():
    players = validate_roster([player_document(i) for i in range(7)])
    assert len(players) == 7
    assert all(isinstance(p, Player) for p in players)


def test_player_models_pass_through():
    models = [Player.model_validate(player_document(i)) for i in range(5)]
    assert validate_roster(models) == models


def test_too_few_players():
    with pytest.raises(RosterValidationError) as exc_info:
        validate_roster([player_document(i) for i in range(4)], roster="home")
    err = exc_info.value
    assert err.roster == "home"
    assert err.details[0].parameter == "players"
    assert "at least 5" in err.details[0].expected


def test_duplicate_ids():
    docs = [player_document(i) for i in range(5)]
    docs[4]["id"] = docs[0]["id"]
    with pytest.raises(RosterValidationError) as exc_info:
        validate_roster(docs)
    assert exc_info.value.details[0].parameter == "players.id"


def test_bad_rating_names_the_field():
    docs = [player_document(i) for i in range(5)]
    docs[2]["attributes"]["stamina"] = 150
    with pytest.raises(RosterValidationError) as exc_info:
        validate_roster(docs)
    params = [d.parameter for d in exc_info.value.details]
    assert "players[2].attributes.stamina" in params


def test_all_problems_reported():
    docs = [player_document(i) for i in range(5)]
    del docs[0]["name"]
    docs[1]["attributes"]["block"] = -3
    with pytest.raises(RosterValidationError) as exc_info:
        validate_roster(docs)
    params = {d.parameter.split(".")[0] for d in exc_info.value.details}
    assert params == {"players[0]", "players[1]"}


def test_error_is_a_value_error():
    with pytest.raises(ValueError):
        validate_roster([])


def test_error_to_dict():
    err = RosterValidationError([ValidationErrorDetail("players", "at least 5 players", 3)], "away")
    d = err.to_dict()
    assert d["roster"] == "away"
    assert d["errors"] == [{"parameter": "players", "expected": "at least 5 players", "got": "3"}]
    assert "Parameter 'players'" in str(err)
