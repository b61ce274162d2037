# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.5"]
# ///
"""Simulate one day of the schedule.

Each match gets its own random source derived from the day seed and the
match id, so a day's results do not depend on the order matches are run.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Collection, Mapping

from config import DEFAULT_CONFIG, SimulationConfig
from events import GameEvent
from models import Player
from simulation import BoxScore, GameSimulator
from validation import validate_roster

logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    match_id: str
    home_team: str
    away_team: str
    home_score: int
    away_score: int
    box_score: BoxScore
    play_by_play: list[GameEvent] | None = None

    @property
    def winner(self) -> str:
        return self.home_team if self.home_score > self.away_score else self.away_team

    def to_dict(self) -> dict:
        d = {
            "matchId": self.match_id,
            "homeTeam": self.home_team,
            "awayTeam": self.away_team,
            "homeScore": self.home_score,
            "awayScore": self.away_score,
            "boxScore": self.box_score.to_dict(),
        }
        if self.play_by_play is not None:
            d["playByPlay"] = [e.to_dict() for e in self.play_by_play]
        return d


@dataclass
class DayResult:
    games: list[GameRecord] = field(default_factory=list)
    rosters: dict[str, list[Player]] = field(default_factory=dict)


def match_rng(seed: int | str, match_id: str) -> random.Random:
    return random.Random(f"{seed}:{match_id}")


def _check_matchups(matchups: Mapping[str, tuple[str, str]], teams: Mapping[str, object]) -> None:
    seen: set[str] = set()
    for match_id, (home, away) in matchups.items():
        if home == away:
            raise ValueError(f"Match {match_id}: team {home} cannot play itself")
        for team_id in (home, away):
            if team_id not in teams:
                raise ValueError(f"Match {match_id}: unknown team {team_id}")
            if team_id in seen:
                raise ValueError(f"Team {team_id} is scheduled more than once on this day")
            seen.add(team_id)


def simulate_day(teams: Mapping[str, list[Player | dict]],
                 matchups: Mapping[str, tuple[str, str]],
                 seed: int | str,
                 play_by_play_for: Collection[str] | None = None,
                 config: SimulationConfig = DEFAULT_CONFIG) -> DayResult:
    """Play every match in ``matchups``.

    Args:
        teams: team id -> roster.
        matchups: match id -> (home team id, away team id).
        seed: day seed; each match derives its own source from it.
        play_by_play_for: team ids whose games keep their play-by-play.

    Returns:
        A DayResult with one GameRecord per match and the updated roster of
        every team that played.  Teams with no game are returned unchanged.

    Raises:
        ValueError: if a team is unknown or scheduled twice.
        RosterValidationError: if a roster cannot field a lineup.
    """
    _check_matchups(matchups, teams)
    followed = set(play_by_play_for or ())
    result = DayResult(rosters={tid: list(roster) for tid, roster in teams.items()})

    for match_id, (home_id, away_id) in matchups.items():
        home = validate_roster(teams[home_id], roster=f"team {home_id}")
        away = validate_roster(teams[away_id], roster=f"team {away_id}")

        sim = GameSimulator(rng=match_rng(seed, match_id), config=config)
        game = sim.simulate_game(home, away, home_name=home_id, away_name=away_id)

        result.rosters[home_id] = game.updated_home_players
        result.rosters[away_id] = game.updated_away_players
        keep_plays = home_id in followed or away_id in followed
        result.games.append(GameRecord(
            match_id=match_id,
            home_team=home_id,
            away_team=away_id,
            home_score=game.home_score,
            away_score=game.away_score,
            box_score=game.box_score,
            play_by_play=game.play_by_play if keep_plays else None,
        ))

    logger.info("Simulated %d games for seed %s", len(result.games), seed)
    return result
