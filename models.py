# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.5"]
# ///
"""Data models for players, recruits and college programs.

Python fields are snake_case.  The stored document form uses camelCase
(``threePoint``, ``gamesPlayed``, ``classYear`` ...); both spellings are
accepted on input and ``to_document()`` emits the camelCase form.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Position(str, Enum):
    PG = "PG"
    SG = "SG"
    SF = "SF"
    PF = "PF"
    C = "C"


class ClassYear(str, Enum):
    FRESHMAN = "Freshman"
    SOPHOMORE = "Sophomore"
    JUNIOR = "Junior"
    SENIOR = "Senior"


STARTING_POSITIONS: tuple[str, ...] = tuple(p.value for p in Position)
BENCH_POSITIONS: tuple[str, ...] = tuple(f"b{p.value}" for p in Position)
RESERVE_POSITION = "N/A"

CLASS_ORDER: tuple[ClassYear, ...] = (
    ClassYear.FRESHMAN, ClassYear.SOPHOMORE, ClassYear.JUNIOR, ClassYear.SENIOR,
)


def next_class_year(year: ClassYear) -> ClassYear | None:
    """Return the class a player advances to, or None after Senior."""
    idx = CLASS_ORDER.index(year)
    if idx + 1 < len(CLASS_ORDER):
        return CLASS_ORDER[idx + 1]
    return None


class _Document(BaseModel):
    """Base for records that round-trip through the document store."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


# ---------------------------------------------------------------------------
# Player data models
# ---------------------------------------------------------------------------

def _rating(description: str):
    return Field(ge=0.0, le=100.0, description=description)


class PlayerAttributes(_Document):
    """The 17 skill ratings (0-100) that drive the simulator."""
    three_point: float = _rating("Three-point shooting")
    mid_range: float = _rating("Mid-range shooting")
    close_range: float = _rating("Finishing at the rim")
    free_throw: float = _rating("Free-throw shooting")
    pass_steal: float = _rating("Jumping passing lanes")
    dribble_steal: float = _rating("Picking the ball-handler")
    block: float = _rating("Shot blocking")
    passing: float = _rating("Passing accuracy")
    dribbling: float = _rating("Ball security")
    offensive_rebounding: float = _rating("Offensive rebounding")
    defensive_rebounding: float = _rating("Defensive rebounding")
    defensive_foul: float = _rating("Defending without fouling")
    shot_iq: float = Field(ge=0.0, le=100.0, alias="shotIQ", description="Shot selection")
    passing_iq: float = Field(ge=0.0, le=100.0, alias="passingIQ", description="Court vision")
    create_space: float = _rating("Getting open")
    defensive_quickness: float = _rating("Staying in front")
    stamina: float = _rating("Conditioning")

    def total(self) -> float:
        return sum(self.model_dump().values())


class PlayerStats(_Document):
    """Cumulative season counting stats."""
    games_played: int = Field(default=0, ge=0)
    points: int = Field(default=0, ge=0)
    rebounds: int = Field(default=0, ge=0)
    assists: int = Field(default=0, ge=0)
    steals: int = Field(default=0, ge=0)
    blocks: int = Field(default=0, ge=0)
    fgm: int = Field(default=0, ge=0)
    fga: int = Field(default=0, ge=0)
    tpm: int = Field(default=0, ge=0)
    tpa: int = Field(default=0, ge=0)
    ftm: int = Field(default=0, ge=0)
    fta: int = Field(default=0, ge=0)


class Player(_Document):
    """A rated player on a college roster or in a recruit pool."""
    id: str = Field(min_length=1)
    name: str
    class_year: ClassYear = ClassYear.FRESHMAN
    height: float = Field(default=72.0, ge=0.0, description="Height in inches")
    position: str = ""
    attributes: PlayerAttributes
    stats: PlayerStats = Field(default_factory=PlayerStats)
    total_attributes: Optional[float] = None


# ---------------------------------------------------------------------------
# Recruiting
# ---------------------------------------------------------------------------

class RecruitingInfo(_Document):
    """One college program's interest in a prospect."""
    team_id: str
    points: float = Field(default=0.0, ge=0.0)
    offered_scholarship: bool = False


class RecruitDate(_Document):
    year: Literal["Junior", "Senior"] = "Junior"
    day: int = Field(default=4, ge=1)


class Recruit(Player):
    """A high-school prospect."""
    recruiting_info: list[RecruitingInfo] = Field(default_factory=list)
    committed: bool = False
    team_committed_to: str = ""
    recruit_date: RecruitDate = Field(default_factory=RecruitDate)


class RecruitingAction(_Document):
    """Points (and optionally a scholarship) a program spends on a prospect."""
    player_id: str = Field(min_length=1)
    points: float = Field(default=0.0, ge=0.0)
    offered_scholarship: bool = False


class TeamRecord(_Document):
    """A college program: roster plus recruiting ledger."""
    players: list[Player] = Field(default_factory=list)
    recruiting_points: float = 150.0
    pending_recruiting_actions: list[RecruitingAction] = Field(default_factory=list)
    my_recruits: list[RecruitingAction] = Field(default_factory=list)
    junior_commits: list[str] = Field(default_factory=list)
    senior_commits: list[str] = Field(default_factory=list)
