# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.5"]
# ///
"""Randomized builders for college teams and high-school recruit pools.

Usage::

    import random
    from generator import generate_league

    teams, pools = generate_league(num_teams=64, rng=random.Random(7))

Ratings are drawn uniformly from [0, 75) and then boosted by class year.
Every roster is ordered so the five best players by total rating come
first (sorted PG..C by height), then five backups, then reserves; the
simulator fields slots 0-4.
"""

from __future__ import annotations

import logging
import random
from typing import Sequence

from models import (
    BENCH_POSITIONS,
    CLASS_ORDER,
    RESERVE_POSITION,
    STARTING_POSITIONS,
    ClassYear,
    Player,
    PlayerAttributes,
    Recruit,
    RecruitDate,
    TeamRecord,
)

logger = logging.getLogger(__name__)

FIRST_NAMES = ["Michael", "LeBron", "Kobe", "Stephen", "Kevin", "Shaquille", "Tim", "Magic", "Larry", "Kareem"]
LAST_NAMES = ["Jordan", "James", "Bryant", "Curry", "Durant", "O'Neal", "Duncan", "Johnson", "Bird", "Abdul-Jabbar"]

PLAYERS_PER_CLASS = 3
BASE_RATING_MAX = 75.0
COLLEGE_RATING_BONUS = 16.0
CLASS_RATING_BONUS = {
    ClassYear.FRESHMAN: 0.0,
    ClassYear.SOPHOMORE: 4.0,
    ClassYear.JUNIOR: 8.0,
    ClassYear.SENIOR: 12.0,
}
# High-school prospects grow three inches per class year.
CLASS_HEIGHT_BONUS = {
    ClassYear.FRESHMAN: 0.0,
    ClassYear.SOPHOMORE: 3.0,
    ClassYear.JUNIOR: 6.0,
    ClassYear.SENIOR: 9.0,
}
COLLEGE_HEIGHT_RANGE = (68, 87)
RECRUIT_HEIGHT_MEAN = 68.0
RECRUIT_HEIGHT_SD = 3.0
RECRUIT_HEIGHT_RANGE = (60.0, 91.0)
WEEKLY_RECRUITING_POINTS = 150.0


def random_name(rng: random.Random) -> str:
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"


def random_attributes(rng: random.Random, bonus: float = 0.0) -> PlayerAttributes:
    """Draw all 17 ratings from U(0, 75), add ``bonus``, cap at 100."""
    fields = PlayerAttributes.model_fields
    return PlayerAttributes(**{
        name: min(rng.random() * BASE_RATING_MAX + bonus, 100.0) for name in fields
    })


def recruit_day(rng: random.Random) -> int:
    """Recruit days fall on 3k + 1 for k in 1..10."""
    return rng.randint(1, 10) * 3 + 1


def recruit_height(rng: random.Random, class_year: ClassYear = ClassYear.FRESHMAN) -> int:
    lo, hi = RECRUIT_HEIGHT_RANGE
    height = rng.gauss(RECRUIT_HEIGHT_MEAN, RECRUIT_HEIGHT_SD) + CLASS_HEIGHT_BONUS[class_year]
    return round(max(lo, min(hi, height)))


def assign_positions(players: Sequence[Player]) -> list[Player]:
    """Order a roster and label positions.

    The top five by total rating start (shortest to tallest: PG, SG, SF, PF,
    C), the next five back them up (bPG..bC), the rest are N/A.  Returns new
    Player copies with ``total_attributes`` filled in.
    """
    rated = [
        p.model_copy(update={"total_attributes": p.attributes.total()})
        for p in players
    ]
    rated.sort(key=lambda p: p.total_attributes, reverse=True)
    starters = sorted(rated[:5], key=lambda p: p.height)
    backups = sorted(rated[5:10], key=lambda p: p.height)
    extras = rated[10:]

    ordered: list[Player] = []
    for labels, group in ((STARTING_POSITIONS, starters), (BENCH_POSITIONS, backups)):
        for label, p in zip(labels, group):
            ordered.append(p.model_copy(update={"position": label}))
    ordered.extend(p.model_copy(update={"position": RESERVE_POSITION}) for p in extras)
    return ordered


def generate_college_player(team_id: str, class_year: ClassYear, index: int,
                            rng: random.Random) -> Player:
    lo, hi = COLLEGE_HEIGHT_RANGE
    return Player(
        id=f"player-{team_id}-{class_year.value}-{index}",
        name=random_name(rng),
        class_year=class_year,
        height=rng.randint(lo, hi),
        attributes=random_attributes(rng, COLLEGE_RATING_BONUS + CLASS_RATING_BONUS[class_year]),
    )


def generate_recruit(pool_id: str, class_year: ClassYear, index: int,
                     rng: random.Random) -> Recruit:
    year = "Junior" if rng.random() < 0.5 else "Senior"
    if class_year is ClassYear.SENIOR:
        year = "Senior"
    return Recruit(
        id=f"hs-player-{pool_id}-{class_year.value}-{index}",
        name=random_name(rng),
        class_year=class_year,
        height=recruit_height(rng, class_year),
        attributes=random_attributes(rng, CLASS_RATING_BONUS[class_year]),
        recruit_date=RecruitDate(year=year, day=recruit_day(rng)),
    )


def generate_team(team_id: str, rng: random.Random) -> TeamRecord:
    """A college program with three players per class year."""
    players = [
        generate_college_player(team_id, year, i, rng)
        for year in CLASS_ORDER
        for i in range(PLAYERS_PER_CLASS)
    ]
    return TeamRecord(players=assign_positions(players), recruiting_points=WEEKLY_RECRUITING_POINTS)


def generate_recruit_pool(pool_id: str, rng: random.Random) -> list[Recruit]:
    """A high-school team of prospects, three per class year."""
    recruits = [
        generate_recruit(pool_id, year, i, rng)
        for year in CLASS_ORDER
        for i in range(PLAYERS_PER_CLASS)
    ]
    return assign_positions(recruits)


def generate_league(num_teams: int = 64, rng: random.Random | None = None
                    ) -> tuple[dict[str, TeamRecord], dict[str, list[Recruit]]]:
    """Build ``num_teams`` college programs and one recruit pool per program.

    Team ids are "1".."N"; each pool shares its team's id.
    """
    rng = rng or random.Random()
    team_ids = [str(i + 1) for i in range(num_teams)]
    teams = {tid: generate_team(tid, rng) for tid in team_ids}
    pools = {tid: generate_recruit_pool(tid, rng) for tid in team_ids}
    logger.info("Generated %d teams and %d recruit pools", len(teams), len(pools))
    return teams, pools
