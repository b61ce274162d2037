# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.5"]
# ///
"""Season rollover: age every player one class year.

Order of operations:

1. Uncommitted senior prospects are placed with a random program that has
   fewer than three commitments.
2. Recruit pools: seniors leave, everyone else advances a class, improves,
   and grows; three new freshmen join each pool.
3. College programs: seniors graduate, everyone else advances and
   improves (rising sophomores also grow), senior commits join as
   freshmen, junior commits become next season's senior commits, the
   recruiting ledger follows renamed prospects, and positions are
   reassigned so the best five start.
"""

from __future__ import annotations

import logging
import random
from typing import Mapping, Sequence

from generator import (
    PLAYERS_PER_CLASS,
    assign_positions,
    random_attributes,
    random_name,
    recruit_day,
    recruit_height,
)
from models import ClassYear, Player, PlayerAttributes, Recruit, RecruitDate, TeamRecord, next_class_year

logger = logging.getLogger(__name__)

MAX_COMMITS = 3
MAX_RATING_GAIN = 8.0
MAX_HEIGHT_GAIN = 5.0
MAX_HEIGHT = 91.0


def improve(attributes: PlayerAttributes, rng: random.Random) -> PlayerAttributes:
    """Every rating gains U(0, 8), capped at 100."""
    gains = {
        name: min(value + rng.random() * MAX_RATING_GAIN, 100.0)
        for name, value in attributes.model_dump().items()
    }
    return PlayerAttributes(**gains)


def grow(height: float, rng: random.Random) -> float:
    return min(height + rng.random() * MAX_HEIGHT_GAIN, MAX_HEIGHT)


def renamed_id(player_id: str, class_index: int, class_year: ClassYear) -> str:
    """Swap the class-year component of a generated id."""
    parts = player_id.split("-")
    if len(parts) > class_index:
        parts[class_index] = class_year.value
    return "-".join(parts)


def place_uncommitted_seniors(teams: Mapping[str, TeamRecord], pools: Mapping[str, list[Recruit]],
                              rng: random.Random) -> None:
    """Commit every unsigned senior prospect to a program with room."""
    for pool in pools.values():
        for recruit in pool:
            if recruit.class_year is not ClassYear.SENIOR or recruit.committed:
                continue
            open_teams = [
                tid for tid, t in teams.items()
                if len(t.junior_commits) + len(t.senior_commits) < MAX_COMMITS
            ]
            if not open_teams:
                logger.warning("No program has room for %s (%s)", recruit.name, recruit.id)
                continue
            team_id = rng.choice(open_teams)
            recruit.committed = True
            recruit.team_committed_to = team_id
            teams[team_id].senior_commits.append(recruit.id)


def new_freshman(pool_id: str, index: int, rng: random.Random) -> Recruit:
    return Recruit(
        id=f"hs-player-{pool_id}-{ClassYear.FRESHMAN.value}-{index}",
        name=random_name(rng),
        class_year=ClassYear.FRESHMAN,
        height=recruit_height(rng),
        attributes=random_attributes(rng),
        recruit_date=RecruitDate(year="Junior", day=recruit_day(rng)),
    )


def age_pool(pool_id: str, recruits: Sequence[Recruit], rng: random.Random,
             id_changes: dict[str, str]) -> list[Recruit]:
    """Advance a recruit pool one year and add a freshman class."""
    aged: list[Recruit] = []
    for recruit in recruits:
        year = next_class_year(recruit.class_year)
        if year is None:
            continue
        new_id = renamed_id(recruit.id, 3, year)
        id_changes[recruit.id] = new_id
        aged.append(recruit.model_copy(update={
            "id": new_id,
            "class_year": year,
            "attributes": improve(recruit.attributes, rng),
            "height": grow(recruit.height, rng),
        }))
    aged.extend(new_freshman(pool_id, i + 1, rng) for i in range(PLAYERS_PER_CLASS))
    return aged


def age_roster(players: Sequence[Player], rng: random.Random) -> list[Player]:
    aged: list[Player] = []
    for player in players:
        year = next_class_year(player.class_year)
        if year is None:
            continue
        update = {
            "id": renamed_id(player.id, 2, year),
            "class_year": year,
            "attributes": improve(player.attributes, rng),
        }
        if year is ClassYear.SOPHOMORE:
            update["height"] = grow(player.height, rng)
        aged.append(player.model_copy(update=update))
    return aged


def enroll(team_id: str, recruit: Recruit, index: int, rng: random.Random) -> Player:
    """Turn a committed prospect into a college freshman."""
    return Player(
        id=f"player-{team_id}-{ClassYear.FRESHMAN.value}-{index}",
        name=recruit.name,
        class_year=ClassYear.FRESHMAN,
        height=grow(recruit.height, rng),
        attributes=improve(recruit.attributes, rng),
        stats=recruit.stats.model_copy(),
    )


def perform_rollover(teams: Mapping[str, TeamRecord], pools: Mapping[str, Sequence[Recruit]],
                     rng: random.Random | None = None,
                     ) -> tuple[dict[str, TeamRecord], dict[str, list[Recruit]]]:
    """Run the end-of-season rollover.

    Returns new (teams, pools) mappings; the inputs are not modified.
    """
    rng = rng or random.Random()
    new_teams = {tid: t.model_copy(deep=True) for tid, t in teams.items()}
    new_pools = {pid: [r.model_copy(deep=True) for r in rs] for pid, rs in pools.items()}

    place_uncommitted_seniors(new_teams, new_pools, rng)
    recruits_by_id = {r.id: r for rs in new_pools.values() for r in rs}

    id_changes: dict[str, str] = {}
    new_pools = {pid: age_pool(pid, rs, rng, id_changes) for pid, rs in new_pools.items()}

    graduated = enrolled = 0
    for team_id, team in new_teams.items():
        roster = age_roster(team.players, rng)
        graduated += len(team.players) - len(roster)

        for n, recruit_id in enumerate(team.senior_commits, start=1):
            recruit = recruits_by_id.get(recruit_id)
            if recruit is None:
                logger.warning("Team %s senior commit %s not found in any pool", team_id, recruit_id)
                continue
            roster.append(enroll(team_id, recruit, n, rng))
            enrolled += 1

        team.players = assign_positions(roster)
        team.senior_commits = [id_changes.get(rid, rid) for rid in team.junior_commits]
        team.junior_commits = []
        team.my_recruits = [
            action.model_copy(update={"player_id": id_changes[action.player_id]})
            for action in team.my_recruits
            if action.player_id in id_changes
        ]

    logger.info("Rollover: %d graduated, %d enrolled as freshmen", graduated, enrolled)
    return new_teams, new_pools
