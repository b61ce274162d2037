# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.5"]
# ///
"""Recruiting-point bookkeeping.

Programs queue recruiting actions during the week (points plus an optional
scholarship offer).  ``process_recruiting_day`` applies every queued
action to the program's ledger and the prospect's recruiting info, resets
the weekly budget, and commits prospects whose recruit day has come.

Prospect ids look like ``hs-player-<pool>-<class>-<n>``; the pool id is
read from the third component.
"""

from __future__ import annotations

import logging
import random
from typing import Mapping, Sequence

from generator import WEEKLY_RECRUITING_POINTS
from models import ClassYear, Recruit, RecruitingAction, RecruitingInfo, TeamRecord

logger = logging.getLogger(__name__)


class RecruitingError(ValueError):
    """Raised for a recruiting action a program is not allowed to take."""


def pool_id_for(player_id: str) -> str | None:
    """Recruit pool a prospect id belongs to, or None if the id is malformed."""
    parts = player_id.split("-")
    if len(parts) < 3 or parts[0] != "hs":
        return None
    return parts[2]


def points_spent(team: TeamRecord) -> float:
    return sum(a.points for a in team.pending_recruiting_actions)


def queue_action(team: TeamRecord, action: RecruitingAction) -> TeamRecord:
    """Return a copy of ``team`` with ``action`` queued.

    Raises:
        RecruitingError: if the action spends no points and offers nothing,
            or spends more than the program has left this week.
    """
    if action.points <= 0 and not action.offered_scholarship:
        raise RecruitingError(f"Action on {action.player_id} spends no points and offers nothing")
    remaining = team.recruiting_points - points_spent(team)
    if action.points > remaining:
        raise RecruitingError(
            f"Action on {action.player_id} spends {action.points:g} points, "
            f"only {remaining:g} remaining this week"
        )
    pending = [*team.pending_recruiting_actions, action]
    return team.model_copy(update={"pending_recruiting_actions": pending}, deep=True)


def _merge_action(ledger: list[RecruitingAction], action: RecruitingAction) -> None:
    for entry in ledger:
        if entry.player_id == action.player_id:
            entry.points += action.points
            entry.offered_scholarship = entry.offered_scholarship or action.offered_scholarship
            return
    ledger.append(action.model_copy())


def _record_interest(recruit: Recruit, team_id: str, action: RecruitingAction) -> None:
    for info in recruit.recruiting_info:
        if info.team_id == team_id:
            info.points += action.points
            info.offered_scholarship = info.offered_scholarship or action.offered_scholarship
            return
    recruit.recruiting_info.append(RecruitingInfo(
        team_id=team_id, points=action.points, offered_scholarship=action.offered_scholarship,
    ))


def scholarship_offers(recruit: Recruit) -> list[str]:
    return [info.team_id for info in recruit.recruiting_info if info.offered_scholarship]


def process_recruiting_day(teams: Mapping[str, TeamRecord],
                           pools: Mapping[str, Sequence[Recruit]],
                           current_day: int,
                           rng: random.Random | None = None,
                           ) -> tuple[dict[str, TeamRecord], dict[str, list[Recruit]]]:
    """Apply queued recruiting actions and resolve today's commitments.

    Returns new (teams, pools) mappings; the inputs are not modified.
    """
    rng = rng or random.Random()
    new_teams = {tid: t.model_copy(deep=True) for tid, t in teams.items()}
    new_pools = {pid: [r.model_copy(deep=True) for r in recruits] for pid, recruits in pools.items()}
    by_id = {r.id: r for recruits in new_pools.values() for r in recruits}

    for team_id, team in new_teams.items():
        for action in team.pending_recruiting_actions:
            recruit = by_id.get(action.player_id)
            if recruit is None or pool_id_for(action.player_id) not in new_pools:
                logger.warning("Team %s recruited unknown prospect %s; skipping",
                               team_id, action.player_id)
                continue
            _merge_action(team.my_recruits, action)
            _record_interest(recruit, team_id, action)
        team.pending_recruiting_actions = []
        team.recruiting_points = WEEKLY_RECRUITING_POINTS

    commits = 0
    for recruit in by_id.values():
        if recruit.committed or recruit.recruit_date.day != current_day:
            continue
        offers = [tid for tid in scholarship_offers(recruit) if tid in new_teams]
        if not offers:
            continue
        team_id = rng.choice(offers)
        recruit.committed = True
        recruit.team_committed_to = team_id
        team = new_teams[team_id]
        if recruit.class_year is ClassYear.JUNIOR:
            team.junior_commits.append(recruit.id)
        elif recruit.class_year is ClassYear.SENIOR:
            team.senior_commits.append(recruit.id)
        commits += 1
        logger.debug("%s (%s) commits to team %s", recruit.name, recruit.id, team_id)

    logger.info("Recruiting day %d: %d commitments", current_day, commits)
    return new_teams, new_pools
