"""Aggregation: fold filtered kills into running totals.

The accumulator is a plain dict of records keyed by stable identifiers
(player name, weapon name, UTC date, canonical pair). add_kill() upserts
every record one event touches. No I/O, no side effects outside the
accumulator.
"""

from collections import defaultdict

from rivalry.models import LongestKill


def new_totals(roster):
    """Empty accumulator for one pipeline pass."""
    factions = roster.factions
    return {
        "factions": factions,
        "faction_kills": {f: 0 for f in factions},
        "players": {},
        "weapons": defaultdict(int),
        "distance_sum": 0,
        "longest_kill": LongestKill.placeholder(),
        "days": {},
        "pairs": {},
        "kills": [],
    }


def _utf16_order(name):
    return name.encode("utf-16-be")


def pair_key(a, b):
    """Canonical key for a head-to-head pair: names in UTF-16 code unit order."""
    return (a, b) if _utf16_order(a) <= _utf16_order(b) else (b, a)


def _upsert_player(players, name, faction):
    if name not in players:
        players[name] = {"name": name, "faction": faction, "kills": 0, "deaths": 0}
    return players[name]


def _upsert_day(days, date_key, factions):
    if date_key not in days:
        days[date_key] = {f: 0 for f in factions}
    return days[date_key]


def _upsert_pair(pairs, key, killer, victim, killer_faction, victim_faction):
    if key not in pairs:
        factions = {killer: killer_faction, victim: victim_faction}
        pairs[key] = {
            "player1": key[0], "player2": key[1],
            "player1_kills": 0, "player2_kills": 0,
            "player1_faction": factions[key[0]],
            "player2_faction": factions[key[1]],
            "total": 0,
        }
    return pairs[key]


def add_kill(totals, kill):
    """Account for one in-scope kill."""
    totals["faction_kills"][kill.killer_faction] += 1

    players = totals["players"]
    _upsert_player(players, kill.killer_name, kill.killer_faction)["kills"] += 1
    _upsert_player(players, kill.victim_name, kill.victim_faction)["deaths"] += 1

    totals["weapons"][kill.weapon] += 1

    totals["distance_sum"] += kill.distance
    # Strictly greater, so the first kill at a given max distance keeps the record
    if kill.distance > totals["longest_kill"].distance:
        totals["longest_kill"] = LongestKill(
            kill.distance, kill.killer_name, kill.victim_name, kill.weapon,
        )

    date_key = kill.timestamp.date().isoformat()
    _upsert_day(totals["days"], date_key, totals["factions"])[kill.killer_faction] += 1

    key = pair_key(kill.killer_name, kill.victim_name)
    pair = _upsert_pair(
        totals["pairs"], key,
        kill.killer_name, kill.victim_name,
        kill.killer_faction, kill.victim_faction,
    )
    if pair["player1"] == kill.killer_name:
        pair["player1_kills"] += 1
    else:
        pair["player2_kills"] += 1
    pair["total"] += 1

    totals["kills"].append(kill)
    return totals


def aggregate_kills(kills, roster):
    """Fold an iterable of rivalry kills into a fresh accumulator."""
    totals = new_totals(roster)
    for kill in kills:
        add_kill(totals, kill)
    return totals
