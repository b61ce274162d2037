# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.5"]
# ///
"""Basketball game simulation engine.

Runs a 40-minute game as a sequence of possessions between two five-man
lineups, producing a play-by-play log, a box score, and season stats
folded forward for both full rosters.

All randomness comes from an injected source for deterministic replay.
"""

from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Iterable, Sequence

from box_score import BoxScorePlayer, merge_season_stats, new_box_score, team_score
from config import DEFAULT_CONFIG, SimulationConfig
from events import Action, GameEvent, Side, event_seconds, format_game_time
from models import Player
from possession import Possession, PossessionResult, PossessionState, find_slot, run_possession
from probability import RandomSource, contested_percentages

logger = logging.getLogger(__name__)

LINEUP_SIZE = 5


# ---------------------------------------------------------------------------
# Load sample team data
# ---------------------------------------------------------------------------

_TEAMS_PATH = Path(__file__).resolve().parent / "data" / "sample_teams.json"


def load_teams(path: Path | None = None) -> dict:
    """Load the home/away sample teams from JSON."""
    p = path or _TEAMS_PATH
    with open(p) as f:
        return json.load(f)


def coerce_roster(records: Iterable[Player | dict[str, Any]]) -> list[Player]:
    """Accept Player models or stored player documents."""
    return [r if isinstance(r, Player) else Player.model_validate(r) for r in records]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass
class TeamBox:
    name: str
    score: int
    players: list[BoxScorePlayer]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "score": self.score,
            "players": [p.to_dict() for p in self.players],
        }


@dataclass
class BoxScore:
    home: TeamBox
    away: TeamBox

    def to_dict(self) -> dict:
        return {"homeTeam": self.home.to_dict(), "awayTeam": self.away.to_dict()}


@dataclass
class PossessionLog:
    """Summary of one possession, for auditing a finished game."""
    side: Side
    outcome: PossessionState
    points: int
    start_clock: int
    end_clock: int


@dataclass
class SimulationResult:
    box_score: BoxScore
    play_by_play: list[GameEvent]
    updated_home_players: list[Player]
    updated_away_players: list[Player]
    possessions: list[PossessionLog] = field(default_factory=list)
    seed: int | None = None

    @property
    def home_score(self) -> int:
        return self.box_score.home.score

    @property
    def away_score(self) -> int:
        return self.box_score.away.score

    def to_dict(self) -> dict:
        """Document form handed to the persistence layer."""
        return {
            "boxScore": self.box_score.to_dict(),
            "playByPlay": [e.to_dict() for e in self.play_by_play],
            "updatedHomePlayers": [p.to_document() for p in self.updated_home_players],
            "updatedAwayPlayers": [p.to_document() for p in self.updated_away_players],
        }


# ---------------------------------------------------------------------------
# Simulation engine
# ---------------------------------------------------------------------------

class GameSimulator:
    """Possession loop over a game clock.

    Each call to ``simulate_game`` works on its own copies of the rosters
    and its own box score, so one simulator can be reused and separate
    simulators can run independent games side by side.
    """

    def __init__(self, seed: int | None = None, rng: RandomSource | None = None,
                 config: SimulationConfig = DEFAULT_CONFIG):
        if rng is None:
            if seed is None:
                seed = random.randint(0, 2**31 - 1)
            rng = random.Random(seed)
        self.seed = seed
        self.rng = rng
        self.config = config

    def _inbound(self, side: Side, inbounding: Sequence[Player], defending: Sequence[Player],
                 contested: Sequence[float]) -> GameEvent:
        """Scored-on team's SF (slot 2) inbounds to its PG (slot 0)."""
        passer = inbounding[find_slot(inbounding, "SF", 2)]
        receiver = inbounding[find_slot(inbounding, "PG", 0)]
        inbounding_names = tuple(p.name for p in inbounding)
        defending_names = tuple(p.name for p in defending)
        home, away = (
            (inbounding_names, defending_names) if side is Side.HOME
            else (defending_names, inbounding_names)
        )
        return GameEvent(
            player=passer.name,
            player_id=passer.id,
            action=Action.INBOUND,
            team=side,
            receiver=receiver.name,
            receiver_id=receiver.id,
            home_on_court=home,
            away_on_court=away,
            contested=tuple(contested),
        )

    def simulate_game(self, home_players: Iterable[Player | dict],
                      away_players: Iterable[Player | dict],
                      home_name: str = "Home Team",
                      away_name: str = "Away Team") -> SimulationResult:
        """Simulate one game between two rosters.

        Only the first five players of each roster take the floor; the rest
        are carried through to the stat merge.
        """
        cfg = self.config
        home_roster = coerce_roster(home_players)
        away_roster = coerce_roster(away_players)
        starters = {
            Side.HOME: home_roster[:LINEUP_SIZE],
            Side.AWAY: away_roster[:LINEUP_SIZE],
        }
        box = {side: new_box_score(players) for side, players in starters.items()}

        play_by_play: list[GameEvent] = []
        possessions: list[PossessionLog] = []
        clock = 0
        side = Side.HOME if self.rng.random() < 0.5 else Side.AWAY
        last_outcome: PossessionState | None = None

        while clock < cfg.game_length:
            offense, defense = starters[side], starters[side.other]
            contested = contested_percentages(offense, defense, self.rng, cfg.contest_stddev)
            start_clock = clock

            # The ball stays with the team that was just scored on.
            if last_outcome is PossessionState.SHOT_MADE:
                inbound = self._inbound(side, offense, defense, contested)
                play_by_play.append(replace(inbound, time=format_game_time(clock)))
                clock += event_seconds(inbound, cfg)

            possession = Possession(
                side=side,
                offense=offense,
                defense=defense,
                offense_box=box[side],
                defense_box=box[side.other],
                contested=contested,
                rng=self.rng,
                config=cfg,
            )
            result: PossessionResult = run_possession(possession)
            for event in result.events:
                play_by_play.append(replace(event, time=format_game_time(clock)))
                clock += event_seconds(event, cfg)

            possessions.append(PossessionLog(
                side=side, outcome=result.outcome, points=result.points,
                start_clock=start_clock, end_clock=clock,
            ))
            last_outcome = result.outcome
            side = side.other

        minutes = cfg.game_length // 60
        for lines in box.values():
            for line in lines:
                line.minutes = minutes

        box_score = BoxScore(
            home=TeamBox(name=home_name, score=team_score(box[Side.HOME]), players=box[Side.HOME]),
            away=TeamBox(name=away_name, score=team_score(box[Side.AWAY]), players=box[Side.AWAY]),
        )
        logger.info(
            "Final: %s %d - %s %d (%d possessions, %d events)",
            home_name, box_score.home.score, away_name, box_score.away.score,
            len(possessions), len(play_by_play),
        )
        return SimulationResult(
            box_score=box_score,
            play_by_play=play_by_play,
            updated_home_players=merge_season_stats(home_roster, box[Side.HOME]),
            updated_away_players=merge_season_stats(away_roster, box[Side.AWAY]),
            possessions=possessions,
            seed=self.seed,
        )


def simulate_game(home_players: Iterable[Player | dict], away_players: Iterable[Player | dict],
                  rng: RandomSource | None = None, seed: int | None = None,
                  config: SimulationConfig = DEFAULT_CONFIG) -> SimulationResult:
    """Convenience wrapper: one game with a fresh simulator."""
    return GameSimulator(seed=seed, rng=rng, config=config).simulate_game(home_players, away_players)


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

def format_box_score(result: SimulationResult) -> str:
    """Generate a formatted box score string."""
    lines = []
    box = result.box_score

    lines.append("=" * 72)
    lines.append("FINAL BOX SCORE")
    lines.append("=" * 72)
    lines.append(f"{box.away.name:<24} {box.away.score:>4}")
    lines.append(f"{box.home.name:<24} {box.home.score:>4}")
    if result.seed is not None:
        lines.append(f"Seed: {result.seed}")

    for team in (box.away, box.home):
        lines.append(f"\n{team.name}:")
        lines.append(
            f"  {'Name':<22} {'Pos':<4} {'MIN':>3} {'PTS':>4} {'REB':>4} {'AST':>4} "
            f"{'STL':>4} {'BLK':>4} {'FG':>6} {'3PT':>6}"
        )
        lines.append(f"  {'-'*22} {'-'*4} {'-'*3} {'-'*4} {'-'*4} {'-'*4} {'-'*4} {'-'*4} {'-'*6} {'-'*6}")
        for p in team.players:
            fg = f"{p.fgm}-{p.fga}"
            tp = f"{p.tpm}-{p.tpa}"
            lines.append(
                f"  {p.name:<22} {p.position:<4} {p.minutes:>3} {p.points:>4} {p.rebounds:>4} "
                f"{p.assists:>4} {p.steals:>4} {p.blocks:>4} {fg:>6} {tp:>6}"
            )

    return "\n".join(lines)


def format_play_by_play(result: SimulationResult) -> str:
    return "\n".join(f"{e.time:>6}  [{e.team.value}] {e.describe()}" for e in result.play_by_play)
