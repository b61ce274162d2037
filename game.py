# /// script
# requires-python = ">=3.12"
# dependencies = [
#     "pydantic>=2.5",
# ]
# ///
"""Basketball game simulator -- main entry point.

Run with:  uv run game.py                 # simulate the sample matchup
           uv run game.py --seed 42       # set random seed (or HOOPS_SEED)
           uv run game.py --teams my.json # use another home/away team file
           uv run game.py --verbose       # also print the play-by-play
           uv run game.py --json          # print the result document as JSON
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from config import get_log_level, get_seed
from simulation import GameSimulator, format_box_score, format_play_by_play, load_teams
from validation import RosterValidationError, validate_roster

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Simulate a basketball game between two rosters."
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed for a reproducible game (default: HOOPS_SEED or random).",
    )
    parser.add_argument(
        "--teams", type=Path, default=None, metavar="PATH",
        help="JSON file with 'home' and 'away' teams (default: data/sample_teams.json).",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Print the play-by-play after the box score.",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print the full result document as JSON instead of tables.",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=get_log_level(),
        format="%(levelname)s: %(message)s",
    )

    try:
        seed = args.seed if args.seed is not None else get_seed()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        data = load_teams(args.teams)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error loading teams: {e}", file=sys.stderr)
        return 1

    try:
        home, away = data["home"], data["away"]
        home_players = validate_roster(home.get("players", []), roster="home")
        away_players = validate_roster(away.get("players", []), roster="away")
    except KeyError as e:
        print(f"Error: team file is missing {e}", file=sys.stderr)
        return 1
    except RosterValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sim = GameSimulator(seed=seed)
    logger.debug("Simulating with seed %s", sim.seed)
    result = sim.simulate_game(
        home_players, away_players,
        home_name=home.get("team_name", "Home Team"),
        away_name=away.get("team_name", "Away Team"),
    )

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    if args.verbose:
        print(format_play_by_play(result))
        print()
    print(format_box_score(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
