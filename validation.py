# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.5"]
# ///
"""Roster validation layer.

The simulator trusts its input; callers run rosters through
``validate_roster`` first.  Pydantic validation errors are flattened into
``ValidationErrorDetail`` items naming the parameter that failed and what
was expected, and roster-level checks (lineup size, duplicate ids) are
added on top.
"""

from __future__ import annotations

from typing import Any, Iterable

from pydantic import ValidationError

from models import Player

MIN_ROSTER_SIZE = 5


class ValidationErrorDetail:
    """Container for a structured validation error."""

    def __init__(self, parameter: str, expected: str, got: Any):
        self.parameter = parameter
        self.expected = expected
        self.got = got

    def to_dict(self) -> dict:
        return {
            "parameter": self.parameter,
            "expected": self.expected,
            "got": repr(self.got),
        }

    def __str__(self) -> str:
        return f"Parameter '{self.parameter}': expected {self.expected}, got {self.got!r}"


class RosterValidationError(ValueError):
    """Raised when a roster cannot be handed to the simulator."""

    def __init__(self, details: list[ValidationErrorDetail], roster: str = "roster"):
        self.details = details
        self.roster = roster
        summary = "; ".join(str(d) for d in details[:5])
        if len(details) > 5:
            summary += f"; ... ({len(details) - 5} more)"
        super().__init__(f"Invalid {roster}: {summary}")

    def to_dict(self) -> dict:
        return {
            "roster": self.roster,
            "errors": [d.to_dict() for d in self.details],
        }


def _details_from_pydantic(exc: ValidationError, prefix: str) -> list[ValidationErrorDetail]:
    details = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        details.append(ValidationErrorDetail(
            parameter=f"{prefix}.{loc}" if loc else prefix,
            expected=err.get("msg", "valid value"),
            got=err.get("input"),
        ))
    return details


def validate_roster(records: Iterable[Player | dict[str, Any]], roster: str = "roster",
                    min_size: int = MIN_ROSTER_SIZE) -> list[Player]:
    """Validate a roster for simulation.

    Checks each player record, that at least ``min_size`` players are
    present to field a lineup, and that player ids are unique.

    Raises:
        RosterValidationError: with every problem found, not just the first.
    """
    details: list[ValidationErrorDetail] = []
    players: list[Player] = []
    for i, record in enumerate(records):
        if isinstance(record, Player):
            players.append(record)
            continue
        try:
            players.append(Player.model_validate(record))
        except ValidationError as e:
            details.extend(_details_from_pydantic(e, f"players[{i}]"))

    count = len(players) + len({d.parameter.split(".")[0] for d in details})
    if count < min_size:
        details.append(ValidationErrorDetail(
            parameter="players", expected=f"at least {min_size} players", got=count,
        ))

    seen: set[str] = set()
    for p in players:
        if p.id in seen:
            details.append(ValidationErrorDetail(
                parameter="players.id", expected="unique player ids", got=p.id,
            ))
        seen.add(p.id)

    if details:
        raise RosterValidationError(details, roster)
    return players
