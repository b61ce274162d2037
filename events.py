# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.5"]
# ///
"""Play-by-play event records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config import DEFAULT_CONFIG, SimulationConfig
from probability import ShotType


class Side(str, Enum):
    HOME = "home"
    AWAY = "away"

    @property
    def other(self) -> Side:
        return Side.AWAY if self is Side.HOME else Side.HOME


class Action(str, Enum):
    DRIBBLE = "dribbles"
    PASS = "passes"
    MAKE = "makes"
    MISS = "misses"
    STEAL = "steals from"
    INTERCEPTION = "intercepts pass from"
    REBOUND = "rebounds"
    INBOUND = "inbounds"
    SHOT_CLOCK_VIOLATION = "shot clock violation"


@dataclass(frozen=True)
class GameEvent:
    """One atomic occurrence in a game.

    For steals and interceptions ``player`` is the defender who took the
    ball and ``defender`` is the player who lost it; ``team`` is always the
    side credited with the event.
    """
    player: str
    player_id: str
    action: Action
    team: Side
    points_scored: int = 0
    receiver: str = ""
    receiver_id: str = ""
    defender: str = ""
    defender_id: str = ""
    shot_type: Optional[ShotType] = None
    outlet_to: str = ""
    home_on_court: tuple[str, ...] = ()
    away_on_court: tuple[str, ...] = ()
    contested: tuple[float, ...] = ()
    time: str = ""

    @property
    def is_turnover(self) -> bool:
        return self.action in (Action.STEAL, Action.INTERCEPTION, Action.SHOT_CLOCK_VIOLATION)

    def action_text(self) -> str:
        """Action label as shown in the play-by-play, e.g. 'makes threePointer'."""
        if self.action in (Action.MAKE, Action.MISS) and self.shot_type is not None:
            return f"{self.action.value} {self.shot_type.value}"
        if self.action is Action.REBOUND and self.outlet_to:
            return f"rebounds and passes to {self.outlet_to}"
        return self.action.value

    def describe(self) -> str:
        text = self.action_text()
        if self.action is Action.SHOT_CLOCK_VIOLATION:
            return f"Shot clock violation on {self.player}"
        if self.action in (Action.PASS, Action.INBOUND):
            return f"{self.player} {text} {self.receiver}"
        if self.action in (Action.STEAL, Action.INTERCEPTION):
            return f"{self.player} {text} {self.defender}"
        if self.action in (Action.MAKE, Action.MISS) and self.defender:
            return f"{self.player} {text} over {self.defender}"
        return f"{self.player} {text}"

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "player": self.player,
            "playerId": self.player_id,
            "action": self.action_text(),
            "receiver": self.receiver,
            "defender": self.defender,
            "team": self.team.value,
            "pointsScored": self.points_scored,
            "homePlayersOnCourt": list(self.home_on_court),
            "awayPlayersOnCourt": list(self.away_on_court),
            "contestedPercentages": {str(slot): pct for slot, pct in enumerate(self.contested)},
        }


def event_seconds(event: GameEvent, config: SimulationConfig = DEFAULT_CONFIG) -> int:
    """Simulated seconds an event takes off the game clock."""
    if event.action is Action.PASS:
        return config.pass_seconds
    if event.action is Action.INBOUND:
        return config.inbound_seconds
    return config.action_seconds


def format_game_time(seconds: int) -> str:
    """Format elapsed seconds as M:SS."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"
