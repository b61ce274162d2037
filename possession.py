# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.5"]
# ///
"""Possession state machine.

A possession starts in OPENING (forced dribbles and an optional forced
pass, no shooting), moves to FREE_PLAY (shoot / pass / dribble each tick),
visits REBOUND after every miss, and ends in one of the terminal states.
Each non-terminal state has a transition function that mutates the
possession's working set and returns the events it produced plus the next
state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Sequence

from box_score import BoxScorePlayer
from config import DEFAULT_CONFIG, SimulationConfig
from events import Action, GameEvent, Side
from models import Player
from probability import (
    RandomSource,
    ShotType,
    court_position,
    dribble_steal_probability,
    make_probability,
    pass_probability,
    pass_steal_probability,
    select_defender,
    select_rebounder,
    select_receiver,
    shoot_probability,
    shooting_attribute,
    shot_type_for,
)

logger = logging.getLogger(__name__)


class PossessionState(str, Enum):
    OPENING = "opening"
    FREE_PLAY = "free_play"
    REBOUND = "rebound"
    SHOT_MADE = "shot_made"
    DEFENSIVE_REBOUND = "defensive_rebound"
    TURNOVER = "turnover"
    SHOT_CLOCK_VIOLATION = "shot_clock_violation"

    @property
    def is_terminal(self) -> bool:
        return self in (
            PossessionState.SHOT_MADE,
            PossessionState.DEFENSIVE_REBOUND,
            PossessionState.TURNOVER,
            PossessionState.SHOT_CLOCK_VIOLATION,
        )


def find_slot(players: Sequence[Player], position: str, fallback: int) -> int:
    """Slot of the first player at ``position`` (case-insensitive), else ``fallback``."""
    wanted = position.lower()
    for slot, p in enumerate(players):
        if p.position.lower() == wanted:
            return slot
    return min(fallback, len(players) - 1)


@dataclass
class Possession:
    """Working set for one possession of the ball."""
    side: Side
    offense: Sequence[Player]
    defense: Sequence[Player]
    offense_box: list[BoxScorePlayer]
    defense_box: list[BoxScorePlayer]
    contested: Sequence[float]
    rng: RandomSource
    config: SimulationConfig = DEFAULT_CONFIG
    ball_handler: int = field(init=False)
    shot_clock: int = field(init=False)
    last_passer: int | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.ball_handler = find_slot(self.offense, "PG", 0)
        self.shot_clock = self.config.shot_clock

    def event(self, actor: Player, action: Action, *, team: Side | None = None,
              **kwargs) -> GameEvent:
        """Build an event stamped with both lineups and this possession's contests."""
        offense_names = tuple(p.name for p in self.offense)
        defense_names = tuple(p.name for p in self.defense)
        home, away = (
            (offense_names, defense_names) if self.side is Side.HOME
            else (defense_names, offense_names)
        )
        return GameEvent(
            player=actor.name,
            player_id=actor.id,
            action=action,
            team=team or self.side,
            home_on_court=home,
            away_on_court=away,
            contested=tuple(self.contested),
            **kwargs,
        )


@dataclass(frozen=True)
class Transition:
    events: tuple[GameEvent, ...]
    next_state: PossessionState


@dataclass
class PossessionResult:
    side: Side
    events: list[GameEvent]
    outcome: PossessionState

    @property
    def points(self) -> int:
        return sum(e.points_scored for e in self.events)


# ---------------------------------------------------------------------------
# Shared actions
# ---------------------------------------------------------------------------

def _steal(p: Possession, defender_slot: int, victim: Player, action: Action) -> GameEvent:
    p.defense_box[defender_slot].steals += 1
    defender = p.defense[defender_slot]
    return p.event(defender, action, team=p.side.other,
                   defender=victim.name, defender_id=victim.id)


def _tick(p: Possession, events: list[GameEvent], seconds: int) -> Transition:
    """Run ``seconds`` off the shot clock; a non-positive clock is a violation."""
    p.shot_clock -= seconds
    if p.shot_clock <= 0:
        handler = p.offense[p.ball_handler]
        events.append(p.event(handler, Action.SHOT_CLOCK_VIOLATION))
        return Transition(tuple(events), PossessionState.SHOT_CLOCK_VIOLATION)
    return Transition(tuple(events), PossessionState.FREE_PLAY)


def _dribble(p: Possession, steal_divisor: float) -> GameEvent:
    handler = p.offense[p.ball_handler]
    d_slot = select_defender(p.defense, handler, p.rng)
    defender = p.defense[d_slot]
    if p.rng.random() < dribble_steal_probability(defender, handler, steal_divisor):
        return _steal(p, d_slot, handler, Action.STEAL)
    return p.event(handler, Action.DRIBBLE, defender=defender.name, defender_id=defender.id)


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

def opening_step(p: Possession) -> Transition:
    """Forced dribbles, then a forced pass if fewer than the threshold were taken.

    Opening actions run the game clock only; the shot clock starts with free play.
    """
    cfg = p.config
    events: list[GameEvent] = []
    dribbles = min(int(p.rng.random() * (cfg.max_opening_dribbles + 1)), cfg.max_opening_dribbles)
    for _ in range(dribbles):
        event = _dribble(p, cfg.opening_steal_divisor)
        events.append(event)
        if event.action is Action.STEAL:
            return Transition(tuple(events), PossessionState.TURNOVER)

    if dribbles < cfg.opening_pass_threshold:
        passer_slot = p.ball_handler
        passer = p.offense[passer_slot]
        receiver_slot = select_receiver(p.offense, passer_slot, p.rng)
        receiver = p.offense[receiver_slot]
        events.append(p.event(passer, Action.PASS, receiver=receiver.name, receiver_id=receiver.id))
        p.last_passer = passer_slot
        p.ball_handler = receiver_slot

    return Transition(tuple(events), PossessionState.FREE_PLAY)


def _shoot(p: Possession, shot_type: ShotType) -> Transition:
    cfg = p.config
    slot = p.ball_handler
    shooter = p.offense[slot]
    d_slot = select_defender(p.defense, shooter, p.rng)
    defender = p.defense[d_slot]
    prob = make_probability(
        shooting_attribute(shooter.attributes, shot_type), p.contested[slot],
        shot_type, cfg.three_point_factor,
    )
    made = p.rng.random() < prob
    points = p.offense_box[slot].record_shot(shot_type, made)

    if made:
        assisted = p.rng.random() < cfg.assist_chance
        if assisted and p.last_passer is not None and p.last_passer != slot:
            p.offense_box[p.last_passer].assists += 1
        if p.rng.random() < cfg.block_chance:
            p.defense_box[d_slot].blocks += 1

    event = p.event(
        shooter, Action.MAKE if made else Action.MISS,
        points_scored=points, shot_type=shot_type,
        defender=defender.name, defender_id=defender.id,
    )
    next_state = PossessionState.SHOT_MADE if made else PossessionState.REBOUND
    return Transition((event,), next_state)


def _pass(p: Possession) -> Transition:
    cfg = p.config
    passer_slot = p.ball_handler
    passer = p.offense[passer_slot]
    receiver_slot = select_receiver(p.offense, passer_slot, p.rng)
    receiver = p.offense[receiver_slot]
    r_def_slot = select_defender(p.defense, receiver, p.rng)
    receiver_defender = p.defense[r_def_slot]
    if p.rng.random() < pass_steal_probability(receiver_defender, passer, cfg.steal_divisor):
        event = _steal(p, r_def_slot, passer, Action.INTERCEPTION)
        return Transition((event,), PossessionState.TURNOVER)

    event = p.event(
        passer, Action.PASS, receiver=receiver.name, receiver_id=receiver.id,
        defender=receiver_defender.name, defender_id=receiver_defender.id,
    )
    p.last_passer = passer_slot
    p.ball_handler = receiver_slot
    return _tick(p, [event], cfg.pass_seconds)


def free_play_step(p: Possession) -> Transition:
    """The ball-handler shoots, passes, or dribbles."""
    cfg = p.config
    handler = p.offense[p.ball_handler]
    shot_type = shot_type_for(court_position(handler, p.rng))
    contested = p.contested[p.ball_handler]
    if p.rng.random() < shoot_probability(handler, shot_type, contested, cfg.shoot_baseline):
        return _shoot(p, shot_type)
    if p.rng.random() < pass_probability(handler):
        return _pass(p)
    event = _dribble(p, cfg.steal_divisor)
    if event.action is Action.STEAL:
        return Transition((event,), PossessionState.TURNOVER)
    return _tick(p, [event], cfg.action_seconds)


def rebound_step(p: Possession) -> Transition:
    """Resolve a missed shot across all ten players."""
    is_offensive, slot = select_rebounder(p.offense, p.defense, p.rng)
    if is_offensive:
        p.offense_box[slot].offensive_rebounds += 1
        rebounder = p.offense[slot]
        p.ball_handler = slot
        p.last_passer = None
        p.shot_clock = p.config.offensive_rebound_shot_clock
        return Transition((p.event(rebounder, Action.REBOUND),), PossessionState.FREE_PLAY)

    p.defense_box[slot].defensive_rebounds += 1
    rebounder = p.defense[slot]
    outlet = ""
    if rebounder.position.lower() != "pg":
        pg_slot = find_slot(p.defense, "PG", 0)
        if pg_slot != slot:
            outlet = p.defense[pg_slot].name
    event = p.event(rebounder, Action.REBOUND, team=p.side.other, outlet_to=outlet)
    return Transition((event,), PossessionState.DEFENSIVE_REBOUND)


TRANSITIONS: dict[PossessionState, Callable[[Possession], Transition]] = {
    PossessionState.OPENING: opening_step,
    PossessionState.FREE_PLAY: free_play_step,
    PossessionState.REBOUND: rebound_step,
}


def run_possession(p: Possession) -> PossessionResult:
    """Drive the state machine from OPENING to a terminal state."""
    state = PossessionState.OPENING
    events: list[GameEvent] = []
    while not state.is_terminal:
        transition = TRANSITIONS[state](p)
        events.extend(transition.events)
        state = transition.next_state
        if len(events) > p.config.max_possession_events:
            raise RuntimeError(
                f"Possession exceeded {p.config.max_possession_events} events "
                f"without ending; the random source never resolves it"
            )
    logger.debug("%s possession: %d events, %s", p.side.value, len(events), state.value)
    return PossessionResult(side=p.side, events=events, outcome=state)
