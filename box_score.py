# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.5"]
# ///
"""Per-game box score lines and the season stat merge.

Box score lines are keyed by roster slot (0-4), never by player name, so two
starters sharing a name cannot collide.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from models import Player, PlayerStats
from probability import ShotType


@dataclass
class BoxScorePlayer:
    """One starter's counting stats for a single game."""
    slot: int
    player_id: str
    name: str
    position: str = ""
    minutes: int = 0
    points: int = 0
    offensive_rebounds: int = 0
    defensive_rebounds: int = 0
    assists: int = 0
    steals: int = 0
    blocks: int = 0
    fgm: int = 0
    fga: int = 0
    tpm: int = 0
    tpa: int = 0
    ftm: int = 0
    fta: int = 0

    @property
    def rebounds(self) -> int:
        return self.offensive_rebounds + self.defensive_rebounds

    def record_shot(self, shot_type: ShotType, made: bool) -> int:
        """Record a field-goal attempt and return the points it scored."""
        self.fga += 1
        is_three = shot_type is ShotType.THREE_POINTER
        if is_three:
            self.tpa += 1
        if not made:
            return 0
        self.fgm += 1
        if is_three:
            self.tpm += 1
        points = shot_type.points
        self.points += points
        return points

    def to_dict(self) -> dict:
        return {
            "slot": self.slot,
            "playerId": self.player_id,
            "name": self.name,
            "position": self.position,
            "minutes": self.minutes,
            "points": self.points,
            "offensiveRebounds": self.offensive_rebounds,
            "defensiveRebounds": self.defensive_rebounds,
            "assists": self.assists,
            "steals": self.steals,
            "blocks": self.blocks,
            "fgm": self.fgm,
            "fga": self.fga,
            "tpm": self.tpm,
            "tpa": self.tpa,
            "ftm": self.ftm,
            "fta": self.fta,
        }


def new_box_score(starters: Sequence[Player]) -> list[BoxScorePlayer]:
    """Allocate a zeroed line for each starter, in slot order."""
    return [
        BoxScorePlayer(slot=i, player_id=p.id, name=p.name, position=p.position)
        for i, p in enumerate(starters)
    ]


def team_score(lines: Sequence[BoxScorePlayer]) -> int:
    return sum(line.points for line in lines)


def _merged_stats(stats: PlayerStats, line: BoxScorePlayer) -> PlayerStats:
    return PlayerStats(
        games_played=stats.games_played + 1,
        points=stats.points + line.points,
        rebounds=stats.rebounds + line.rebounds,
        assists=stats.assists + line.assists,
        steals=stats.steals + line.steals,
        blocks=stats.blocks + line.blocks,
        fgm=stats.fgm + line.fgm,
        fga=stats.fga + line.fga,
        tpm=stats.tpm + line.tpm,
        tpa=stats.tpa + line.tpa,
        ftm=stats.ftm + line.ftm,
        fta=stats.fta + line.fta,
    )


def merge_season_stats(roster: Sequence[Player], lines: Sequence[BoxScorePlayer]) -> list[Player]:
    """Fold a finished game into season stats for the whole roster.

    Starters (slots covered by ``lines``) get their full box line added;
    bench players only get a game played.  Returns new Player copies.

    Raises:
        ValueError: if a box line does not belong to the player in its slot.
    """
    by_slot = {line.slot: line for line in lines}
    updated: list[Player] = []
    for slot, player in enumerate(roster):
        line = by_slot.get(slot)
        if line is not None:
            if line.player_id != player.id:
                raise ValueError(
                    f"Box score slot {slot} belongs to {line.player_id!r}, "
                    f"roster has {player.id!r}"
                )
            stats = _merged_stats(player.stats, line)
        else:
            stats = player.stats.model_copy(update={"games_played": player.stats.games_played + 1})
        updated.append(player.model_copy(update={"stats": stats}, deep=True))
    return updated
