"""Ranking & derivation: turn aggregation totals into a RivalryReport.

Every sort here is stable, so entries tied on the sort key keep the order
in which the fold first saw them. That keeps reports reproducible.
"""

from decimal import Decimal, ROUND_HALF_UP

from rivalry.constants import TOP_WEAPONS, TOP_NEMESIS_PAIRS, TOP_DISTANCE_KILLS, RECENT_KILLS
from rivalry.models import (
    DailyKills, NemesisPair, PlayerStats, RivalryReport, WeaponStat,
)


def round_half_up(value, places=0):
    """Round exact halves away from zero (0.125 → 0.13, 2.5 → 3)."""
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded) if places else int(rounded)


def calculate_kd(kills, deaths):
    """Kills per death, rounded half-up to 2 places. Zero deaths → kills."""
    if deaths == 0:
        return float(kills)
    return round_half_up(kills / deaths, 2)


def build_leaderboard(players):
    """Active players sorted by kills desc, then deaths asc."""
    board = []
    for p in players.values():
        if p["kills"] == 0 and p["deaths"] == 0:
            continue
        board.append(PlayerStats(
            name=p["name"],
            faction=p["faction"],
            kills=p["kills"],
            deaths=p["deaths"],
            kd=calculate_kd(p["kills"], p["deaths"]),
            net=p["kills"] - p["deaths"],
        ))
    board.sort(key=lambda p: (-p.kills, p.deaths))
    return board


def top_killer(leaderboard, faction):
    """Best-ranked leaderboard entry for a faction, or a zero placeholder."""
    for player in leaderboard:
        if player.faction == faction:
            return player
    return PlayerStats.placeholder(faction)


def rank_weapons(weapons, limit=TOP_WEAPONS):
    ranked = sorted(weapons.items(), key=lambda x: x[1], reverse=True)
    return [WeaponStat(name, count) for name, count in ranked[:limit]]


def rank_nemesis_pairs(pairs, limit=TOP_NEMESIS_PAIRS):
    ranked = sorted(pairs.values(), key=lambda p: p["total"], reverse=True)
    return [NemesisPair(**p) for p in ranked[:limit]]


def build_time_series(days, factions):
    """Days in ascending order. Days without kills are simply absent."""
    series = []
    for date_key in sorted(days):
        counts = days[date_key]
        series.append(DailyKills(date_key, tuple((f, counts[f]) for f in factions)))
    return series


def recent_kills(kills, limit=RECENT_KILLS):
    return sorted(kills, key=lambda k: k.timestamp, reverse=True)[:limit]


def distance_leaderboard(kills, limit=TOP_DISTANCE_KILLS):
    """Longest kills first; equal distances listed most recent first."""
    by_time = sorted(kills, key=lambda k: k.timestamp, reverse=True)
    return sorted(by_time, key=lambda k: k.distance, reverse=True)[:limit]


def build_report(totals, roster):
    """Assemble the final immutable report from aggregation totals."""
    factions = roster.factions
    faction_kills = totals["faction_kills"]
    total_kills = sum(faction_kills.values())

    faction_kd = tuple(
        (f, calculate_kd(faction_kills[f], faction_kills[roster.opponent_of(f)]))
        for f in factions
    )
    average_distance = round_half_up(totals["distance_sum"] / total_kills) if total_kills > 0 else 0

    leaderboard = build_leaderboard(totals["players"])
    kills = totals["kills"]

    return RivalryReport(
        factions=factions,
        faction_kills=tuple((f, faction_kills[f]) for f in factions),
        faction_kd=faction_kd,
        total_kills=total_kills,
        total_players=len(leaderboard),
        average_distance=average_distance,
        longest_kill=totals["longest_kill"],
        top_killers=tuple(top_killer(leaderboard, f) for f in factions),
        leaderboard=tuple(leaderboard),
        weapons=tuple(rank_weapons(totals["weapons"])),
        nemesis_pairs=tuple(rank_nemesis_pairs(totals["pairs"])),
        kills_over_time=tuple(build_time_series(totals["days"], factions)),
        distance_leaderboard=tuple(distance_leaderboard(kills)),
        recent_kills=tuple(recent_kills(kills)),
    )
