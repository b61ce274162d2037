# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.5", "pytest>=7.0"]
# ///
"""Tests for team, recruit pool and league generation."""

import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from generator import (
    assign_positions,
    generate_college_player,
    generate_league,
    generate_recruit_pool,
    generate_team,
    recruit_day,
)
from models import BENCH_POSITIONS, STARTING_POSITIONS, ClassYear, Player, PlayerAttributes


def make_player(pid, height, rating):
    attrs = PlayerAttributes(**{field: rating for field in PlayerAttributes.model_fields})
    return Player(id=pid, name=pid, height=height, attributes=attrs)


class TestAssignPositions:
    def test_best_five_start_ordered_by_height(self):
        players = [make_player(f"p{i}", height=90 - i, rating=10 + i * 5) for i in range(12)]
        ordered = assign_positions(players)
        assert [p.position for p in ordered[:5]] == list(STARTING_POSITIONS)
        assert {p.id for p in ordered[:5]} == {"p7", "p8", "p9", "p10", "p11"}
        heights = [p.height for p in ordered[:5]]
        assert heights == sorted(heights)

    def test_bench_and_reserves(self):
        players = [make_player(f"p{i}", height=75, rating=i) for i in range(12)]
        ordered = assign_positions(players)
        assert [p.position for p in ordered[5:10]] == list(BENCH_POSITIONS)
        assert [p.position for p in ordered[10:]] == ["N/A", "N/A"]
        assert {p.id for p in ordered[10:]} == {"p0", "p1"}

    def test_totals_filled_in(self):
        ordered = assign_positions([make_player("p", 70, 20.0)])
        assert ordered[0].total_attributes == 20.0 * 17
        assert ordered[0].position == "PG"

    def test_inputs_untouched(self):
        players = [make_player("p", 70, 20.0)]
        assign_positions(players)
        assert players[0].position == ""
        assert players[0].total_attributes is None


def test_college_player():
    rng = random.Random(1)
    p = generate_college_player("7", ClassYear.SENIOR, 2, rng)
    assert p.id == "player-7-Senior-2"
    assert p.class_year is ClassYear.SENIOR
    assert 68 <= p.height <= 87
    for value in p.attributes.model_dump().values():
        assert 28.0 <= value <= 100.0


def test_team_shape():
    team = generate_team("3", random.Random(2))
    assert len(team.players) == 12
    assert team.recruiting_points == 150
    classes = [p.class_year for p in team.players]
    for year in ClassYear:
        assert classes.count(year) == 3
    totals = [p.total_attributes for p in team.players]
    assert min(totals[:5]) >= max(totals[5:])


def test_recruit_pool_shape():
    pool = generate_recruit_pool("5", random.Random(3))
    assert len(pool) == 12
    for r in pool:
        assert r.id.startswith("hs-player-5-")
        assert r.id.split("-")[3] == r.class_year.value
        assert 60 <= r.height <= 91
        assert r.recruit_date.day in {3 * k + 1 for k in range(1, 11)}
        if r.class_year is ClassYear.SENIOR:
            assert r.recruit_date.year == "Senior"
        assert not r.committed


def test_recruit_day_values():
    rng = random.Random(4)
    days = {recruit_day(rng) for _ in range(500)}
    assert days == {4, 7, 10, 13, 16, 19, 22, 25, 28, 31}


def test_league():
    teams, pools = generate_league(num_teams=4, rng=random.Random(5))
    assert list(teams) == ["1", "2", "3", "4"]
    assert list(pools) == ["1", "2", "3", "4"]


def test_league_deterministic():
    a_teams, _ = generate_league(num_teams=2, rng=random.Random(6))
    b_teams, _ = generate_league(num_teams=2, rng=random.Random(6))
    assert a_teams["1"].to_document() == b_teams["1"].to_document()
