# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.5", "pytest>=7.0"]
# ///
"""Tests for the possession state machine, driven by scripted random draws."""

import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from box_score import new_box_score
from config import SimulationConfig
from events import Action, Side
from models import Player, PlayerAttributes
from possession import (
    Possession,
    PossessionState,
    find_slot,
    free_play_step,
    opening_step,
    rebound_step,
    run_possession,
)
from probability import ShotType


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class ScriptedSource(random.Random):
    """Hands out a fixed sequence of random() draws; gauss() returns the mean."""

    def __init__(self, draws):
        super().__init__(0)
        self.draws = list(draws)

    def random(self):
        if not self.draws:
            raise AssertionError("possession asked for more draws than scripted")
        return self.draws.pop(0)

    def gauss(self, mu, sigma):
        return mu


class MidpointSource(random.Random):
    def random(self):
        return 0.5

    def gauss(self, mu, sigma):
        return mu


def make_player(name, position, **ratings):
    attrs = {field: 50.0 for field in PlayerAttributes.model_fields}
    attrs.update(ratings)
    return Player(id=f"id-{name}", name=name, position=position, attributes=PlayerAttributes(**attrs))


def lineup(prefix):
    return [make_player(f"{prefix}{pos}", pos) for pos in ("PG", "SG", "SF", "PF", "C")]


def make_possession(rng, side=Side.HOME, config=None):
    offense, defense = lineup("O"), lineup("D")
    return Possession(
        side=side,
        offense=offense,
        defense=defense,
        offense_box=new_box_score(offense),
        defense_box=new_box_score(defense),
        contested=[0.5] * 5,
        rng=rng,
        config=config or SimulationConfig(),
    )


# ===========================================================================
# Setup
# ===========================================================================

def test_possession_starts_with_point_guard():
    p = make_possession(MidpointSource())
    assert p.ball_handler == 0
    assert p.shot_clock == 30
    assert p.last_passer is None


def test_find_slot_is_case_insensitive():
    players = lineup("X")
    assert find_slot(players, "pf", 0) == 3


def test_find_slot_fallback_clamped_to_lineup():
    players = [make_player("A", "N/A"), make_player("B", "N/A")]
    assert find_slot(players, "SF", 2) == 1


def test_terminal_states():
    assert not PossessionState.OPENING.is_terminal
    assert not PossessionState.FREE_PLAY.is_terminal
    assert not PossessionState.REBOUND.is_terminal
    assert PossessionState.SHOT_MADE.is_terminal
    assert PossessionState.TURNOVER.is_terminal


# ===========================================================================
# Opening sequence
# ===========================================================================

def test_opening_steal_ends_possession():
    p = make_possession(ScriptedSource([0.99, 0.0]))
    t = opening_step(p)
    assert t.next_state is PossessionState.TURNOVER
    assert len(t.events) == 1
    steal = t.events[0]
    assert steal.action is Action.STEAL
    assert steal.player == "DPG"
    assert steal.defender == "OPG"
    assert steal.team is Side.AWAY
    assert p.defense_box[0].steals == 1


def test_opening_dribbles_without_pass():
    p = make_possession(ScriptedSource([0.5, 0.5, 0.5, 0.5]))
    t = opening_step(p)
    assert [e.action for e in t.events] == [Action.DRIBBLE] * 3
    assert t.next_state is PossessionState.FREE_PLAY
    assert p.shot_clock == 30
    assert p.ball_handler == 0


def test_opening_forced_pass_after_few_dribbles():
    p = make_possession(ScriptedSource([0.0, 0.0]))
    t = opening_step(p)
    assert [e.action for e in t.events] == [Action.PASS]
    assert t.events[0].receiver == "OSG"
    assert p.ball_handler == 1
    assert p.last_passer == 0
    assert p.shot_clock == 30
    assert t.next_state is PossessionState.FREE_PLAY


def test_free_play_starts_with_full_shot_clock():
    p = make_possession(MidpointSource())
    opening_step(p)
    assert p.shot_clock == 30
    t = free_play_step(p)
    assert [e.action for e in t.events] == [Action.DRIBBLE]
    assert p.shot_clock == 28


# ===========================================================================
# Free play
# ===========================================================================

def test_assisted_and_blocked_make():
    # dribbles=0, receiver SG, mid-range zone, shoot, make, assist, block
    p = make_possession(ScriptedSource([0.0, 0.0, 0.5, 0.0, 0.0, 0.0, 0.0]))
    result = run_possession(p)
    assert result.outcome is PossessionState.SHOT_MADE
    make = result.events[-1]
    assert make.action is Action.MAKE
    assert make.shot_type is ShotType.MID_RANGE
    assert make.points_scored == 2
    assert make.defender == "DSG"
    assert result.points == 2
    assert p.offense_box[1].points == 2
    assert (p.offense_box[1].fgm, p.offense_box[1].fga) == (1, 1)
    assert p.offense_box[0].assists == 1
    assert p.defense_box[1].blocks == 1


def test_unassisted_make_without_passer():
    # three opening dribbles, then a make with no prior pass
    p = make_possession(ScriptedSource([0.5, 0.5, 0.5, 0.5, 0.5, 0.0, 0.0, 0.0, 0.99]))
    result = run_possession(p)
    assert result.outcome is PossessionState.SHOT_MADE
    assert sum(line.assists for line in p.offense_box) == 0
    assert sum(line.blocks for line in p.defense_box) == 0


def test_three_pointer_counts_attempts():
    p = make_possession(ScriptedSource([0.99, 0.0, 0.99]))
    p.ball_handler = 0
    t = free_play_step(p)
    miss = t.events[0]
    assert miss.action is Action.MISS
    assert miss.shot_type is ShotType.THREE_POINTER
    assert t.next_state is PossessionState.REBOUND
    assert (p.offense_box[0].tpa, p.offense_box[0].fga, p.offense_box[0].tpm) == (1, 1, 0)


def test_interception_on_free_play_pass():
    # zone, no shot, pass, receiver SG, steal
    p = make_possession(ScriptedSource([0.5, 0.99, 0.0, 0.0, 0.0]))
    t = free_play_step(p)
    assert t.next_state is PossessionState.TURNOVER
    event = t.events[0]
    assert event.action is Action.INTERCEPTION
    assert event.player == "DSG"
    assert event.defender == "OPG"
    assert event.team is Side.AWAY
    assert p.defense_box[1].steals == 1


def test_shot_clock_violation():
    p = make_possession(MidpointSource())
    p.shot_clock = 2
    t = free_play_step(p)
    assert [e.action for e in t.events] == [Action.DRIBBLE, Action.SHOT_CLOCK_VIOLATION]
    assert t.next_state is PossessionState.SHOT_CLOCK_VIOLATION
    assert t.events[-1].points_scored == 0


# ===========================================================================
# Rebounds
# ===========================================================================

def test_offensive_rebound_resets_shot_clock():
    p = make_possession(ScriptedSource([0.0]))
    p.shot_clock = 4
    p.ball_handler = 3
    p.last_passer = 1
    t = rebound_step(p)
    assert t.next_state is PossessionState.FREE_PLAY
    assert t.events[0].action is Action.REBOUND
    assert t.events[0].team is Side.HOME
    assert p.shot_clock == 20
    assert p.ball_handler == 0
    assert p.last_passer is None
    assert p.offense_box[0].offensive_rebounds == 1


def test_defensive_rebound_outlets_to_point_guard():
    p = make_possession(ScriptedSource([0.999]))
    t = rebound_step(p)
    assert t.next_state is PossessionState.DEFENSIVE_REBOUND
    event = t.events[0]
    assert event.player == "DC"
    assert event.team is Side.AWAY
    assert event.outlet_to == "DPG"
    assert event.action_text() == "rebounds and passes to DPG"
    assert p.defense_box[4].defensive_rebounds == 1


def test_rebound_event_carries_contests():
    p = make_possession(ScriptedSource([0.999]))
    t = rebound_step(p)
    assert t.events[0].contested == (0.5,) * 5


# ===========================================================================
# Whole possessions
# ===========================================================================

def test_midpoint_possession_runs_out_the_shot_clock():
    p = make_possession(MidpointSource())
    result = run_possession(p)
    assert result.outcome is PossessionState.SHOT_CLOCK_VIOLATION
    # three opening dribbles leave the shot clock at 30 for fifteen more
    assert len(result.events) == 19
    assert [e.action for e in result.events[:-1]] == [Action.DRIBBLE] * 18
    assert result.points == 0


def test_events_show_lineups_by_side():
    p = make_possession(MidpointSource(), side=Side.AWAY)
    result = run_possession(p)
    event = result.events[0]
    assert event.away_on_court == ("OPG", "OSG", "OSF", "OPF", "OC")
    assert event.home_on_court == ("DPG", "DSG", "DSF", "DPF", "DC")


def test_runaway_possession_raises():
    p = make_possession(MidpointSource(), config=SimulationConfig(max_possession_events=5))
    with pytest.raises(RuntimeError):
        run_possession(p)
