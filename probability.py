# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.5"]
# ///
"""Decision model for the game simulator.

Turns player ratings into action choices and outcomes.  Every function that
draws takes the random source explicitly; nothing here touches the global
``random`` state, so a seeded or scripted source replays a game exactly.

A random source is anything with ``random() -> float in [0, 1)`` and
``gauss(mu, sigma) -> float``; ``random.Random`` qualifies.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol, Sequence, TypeVar

from models import Player, PlayerAttributes

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource(Protocol):
    def random(self) -> float: ...

    def gauss(self, mu: float, sigma: float) -> float: ...


class CourtPosition(str, Enum):
    CLOSE = "closeRange"
    MID = "midRange"
    THREE = "threePointRange"


class ShotType(str, Enum):
    LAYUP = "layup"
    MID_RANGE = "midRange"
    THREE_POINTER = "threePointer"

    @property
    def points(self) -> int:
        return 3 if self is ShotType.THREE_POINTER else 2


# Cumulative (close, mid) cutoffs per position; the remainder is the
# three-point zone.
_COURT_POSITION_CUTOFFS: dict[str, tuple[float, float]] = {
    "c": (0.80, 0.90),
    "pf": (0.60, 0.80),
    "sf": (0.40, 0.70),
    "sg": (0.20, 0.60),
    "pg": (0.10, 0.55),
}
_DEFAULT_CUTOFFS = (0.33, 0.66)

_SHOT_TYPE_FOR_ZONE = {
    CourtPosition.CLOSE: ShotType.LAYUP,
    CourtPosition.MID: ShotType.MID_RANGE,
    CourtPosition.THREE: ShotType.THREE_POINTER,
}

REBOUND_POSITION_MULTIPLIER: dict[str, int] = {
    "pg": 1,
    "sg": 2,
    "sf": 3,
    "pf": 4,
    "c": 5,
}


def _clamp(v: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, v))


# ---------------------------------------------------------------------------
# Weighted random selection
# ---------------------------------------------------------------------------

def weighted_index(weights: Sequence[float], rng: RandomSource) -> int:
    """Pick an index with probability proportional to its weight.

    Draws uniformly over the total weight and returns the first index whose
    cumulative weight meets or exceeds the draw.  The last index is the
    fallback when floating-point rounding leaves the draw above every
    cumulative sum.
    """
    if not weights:
        raise ValueError("weighted_index requires at least one candidate")
    if any(w < 0 for w in weights):
        raise ValueError(f"weights must be non-negative, got {list(weights)}")
    draw = rng.random() * sum(weights)
    cumulative = 0.0
    for i, w in enumerate(weights):
        cumulative += w
        if cumulative >= draw:
            return i
    return len(weights) - 1


def weighted_choice(items: Sequence[T], weights: Sequence[float], rng: RandomSource) -> T:
    """Pick one of ``items`` using the parallel ``weights``."""
    if len(items) != len(weights):
        raise ValueError(f"{len(items)} items but {len(weights)} weights")
    return items[weighted_index(weights, rng)]


# ---------------------------------------------------------------------------
# Contest and shot selection
# ---------------------------------------------------------------------------

def contested_mean(offender: Player, defender: Player) -> float:
    """Expected defensive pressure of ``defender`` on ``offender``."""
    quickness = defender.attributes.defensive_quickness
    denom = offender.attributes.create_space + quickness
    if denom <= 0:
        return 0.5
    return quickness / denom


def contested_percentages(offense: Sequence[Player], defense: Sequence[Player],
                          rng: RandomSource, stddev: float = 0.2) -> list[float]:
    """Contested percentage for each offensive slot against the same-slot defender.

    Drawn from Normal(mean, stddev) and clamped to [0, 1].
    """
    return [
        _clamp(rng.gauss(contested_mean(off, dfn), stddev))
        for off, dfn in zip(offense, defense)
    ]


def court_position(player: Player, rng: RandomSource) -> CourtPosition:
    """Sample where on the floor a player is looking to shoot from."""
    close_cut, mid_cut = _COURT_POSITION_CUTOFFS.get(player.position.lower(), _DEFAULT_CUTOFFS)
    roll = rng.random()
    if roll < close_cut:
        return CourtPosition.CLOSE
    if roll < mid_cut:
        return CourtPosition.MID
    return CourtPosition.THREE


def shot_type_for(zone: CourtPosition) -> ShotType:
    return _SHOT_TYPE_FOR_ZONE[zone]


def shooting_attribute(attributes: PlayerAttributes, shot_type: ShotType) -> float:
    if shot_type is ShotType.LAYUP:
        return attributes.close_range
    if shot_type is ShotType.MID_RANGE:
        return attributes.mid_range
    return attributes.three_point


def raw_make_probability(attribute: float, contested: float) -> float:
    """Shooter's own estimate of a make, used only for shot selection."""
    return (attribute / 100) / (contested + 1)


def shoot_probability(player: Player, shot_type: ShotType, contested: float,
                      baseline: float = 0.3) -> float:
    """Willingness to shoot: shotIQ blends the make estimate with a flat baseline."""
    iq = player.attributes.shot_iq / 100
    raw = raw_make_probability(shooting_attribute(player.attributes, shot_type), contested)
    return iq * raw + (1 - iq) * baseline


def pass_probability(player: Player) -> float:
    """Chance a non-shooting ball-handler passes rather than dribbles."""
    passing = player.attributes.passing
    total = passing + player.attributes.dribbling
    if total <= 0:
        return 0.5
    return passing / total


def make_probability(attribute: float, contested: float, shot_type: ShotType,
                     three_point_factor: float = 2 / 3) -> float:
    """Final make probability; threes are scaled by ``three_point_factor``."""
    skill = attribute / 100
    if contested + skill <= 0:
        return 0.0
    prob = skill / (contested + skill)
    if shot_type is ShotType.THREE_POINTER:
        prob *= three_point_factor
    return prob


# ---------------------------------------------------------------------------
# Turnovers
# ---------------------------------------------------------------------------

def dribble_steal_probability(defender: Player, ball_handler: Player,
                              divisor: float = 1000.0) -> float:
    """Chance ``defender`` strips ``ball_handler`` on one dribble."""
    return defender.attributes.dribble_steal / divisor / (1 + ball_handler.attributes.dribbling / 100)


def pass_steal_probability(receiver_defender: Player, passer: Player,
                           divisor: float = 1000.0) -> float:
    """Chance the receiver's defender jumps the pass."""
    return receiver_defender.attributes.pass_steal / divisor / (1 + passer.attributes.passing / 100)


# ---------------------------------------------------------------------------
# Matchups
# ---------------------------------------------------------------------------

def select_defender(defense: Sequence[Player], player: Player, rng: RandomSource) -> int:
    """Slot of the defender guarding ``player``.

    The defender at the same position label wins; otherwise pick by
    block + defensive quickness.
    """
    for slot, candidate in enumerate(defense):
        if candidate.position == player.position:
            return slot
    weights = [p.attributes.block + p.attributes.defensive_quickness for p in defense]
    return weighted_index(weights, rng)


def select_receiver(offense: Sequence[Player], passer_slot: int, rng: RandomSource) -> int:
    """Slot of the teammate receiving a pass from ``passer_slot``."""
    slots = [s for s in range(len(offense)) if s != passer_slot]
    if not slots:
        raise ValueError("a pass needs at least one teammate")
    weights = [
        a.shot_iq + a.close_range + a.mid_range + a.three_point
        for a in (offense[s].attributes for s in slots)
    ]
    return slots[weighted_index(weights, rng)]


def rebound_multiplier(player: Player) -> int:
    mult = REBOUND_POSITION_MULTIPLIER.get(player.position.lower())
    if mult is None:
        logger.warning("No rebound multiplier for position %r (%s); using 1",
                       player.position, player.name)
        return 1
    return mult


def rebound_weights(offense: Sequence[Player], defense: Sequence[Player]) -> list[float]:
    """Weights for all ten players: offense first, then defense."""
    return (
        [p.attributes.offensive_rebounding * rebound_multiplier(p) for p in offense]
        + [2 * p.attributes.defensive_rebounding * rebound_multiplier(p) for p in defense]
    )


def select_rebounder(offense: Sequence[Player], defense: Sequence[Player],
                     rng: RandomSource) -> tuple[bool, int]:
    """Resolve a missed shot.

    Returns (is_offensive, slot) for the player who grabs the board.
    """
    idx = weighted_index(rebound_weights(offense, defense), rng)
    if idx < len(offense):
        return True, idx
    return False, idx - len(offense)
