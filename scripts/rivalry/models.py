"""Immutable records produced by the pipeline.

Kill is built once per valid log row. Everything else is assembled by
ranking.build_report() and never mutated afterwards.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from rivalry.constants import PLACEHOLDER_NAME


@dataclass(frozen=True)
class Kill:
    killer_name: str
    victim_name: str
    killer_faction: str
    victim_faction: str
    distance: int
    weapon: str
    timestamp: datetime
    is_npc_kill: bool = False


@dataclass(frozen=True)
class PlayerStats:
    name: str
    faction: str
    kills: int
    deaths: int
    kd: float
    net: int

    @classmethod
    def placeholder(cls, faction):
        """Zero-valued entry for a faction with nobody on the leaderboard."""
        return cls(PLACEHOLDER_NAME, faction, 0, 0, 0.0, 0)


@dataclass(frozen=True)
class WeaponStat:
    name: str
    count: int


@dataclass(frozen=True)
class DailyKills:
    date: str
    counts: Tuple[Tuple[str, int], ...]

    def kills_for(self, faction):
        return dict(self.counts).get(faction, 0)


@dataclass(frozen=True)
class NemesisPair:
    """Head-to-head record; player1 always sorts before player2."""

    player1: str
    player2: str
    player1_kills: int
    player2_kills: int
    player1_faction: str
    player2_faction: str
    total: int


@dataclass(frozen=True)
class LongestKill:
    distance: int
    killer_name: str
    victim_name: str
    weapon: str

    @classmethod
    def placeholder(cls):
        return cls(0, PLACEHOLDER_NAME, PLACEHOLDER_NAME, PLACEHOLDER_NAME)


@dataclass(frozen=True)
class RivalryReport:
    factions: Tuple[str, str]
    faction_kills: Tuple[Tuple[str, int], ...]
    faction_kd: Tuple[Tuple[str, float], ...]
    total_kills: int
    total_players: int
    average_distance: int
    longest_kill: LongestKill
    top_killers: Tuple[PlayerStats, ...]
    leaderboard: Tuple[PlayerStats, ...]
    weapons: Tuple[WeaponStat, ...]
    nemesis_pairs: Tuple[NemesisPair, ...]
    kills_over_time: Tuple[DailyKills, ...]
    distance_leaderboard: Tuple[Kill, ...]
    recent_kills: Tuple[Kill, ...]

    def kills_for(self, faction):
        return dict(self.faction_kills).get(faction, 0)

    def kd_for(self, faction):
        return dict(self.faction_kd).get(faction, 0.0)

    def top_killer_for(self, faction):
        for player in self.top_killers:
            if player.faction == faction:
                return player
        return PlayerStats.placeholder(faction)

    def to_dict(self):
        """Plain JSON-ready dict for the rendering side."""
        data = asdict(self)
        data["faction_kills"] = dict(self.faction_kills)
        data["faction_kd"] = dict(self.faction_kd)
        data["kills_over_time"] = [
            {"date": day.date, **dict(day.counts)} for day in self.kills_over_time
        ]
        for key in ("distance_leaderboard", "recent_kills"):
            for kill in data[key]:
                kill["timestamp"] = kill["timestamp"].isoformat()
        return data


@dataclass(frozen=True)
class PipelineResult:
    report: Optional[RivalryReport] = None
    error: Optional[str] = None
    skipped: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self):
        return self.report is not None and self.error is None
