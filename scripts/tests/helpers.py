"""Shared test factories for pipeline tests.

Provides factory functions for building raw kill_log.csv rows, whole logs,
Kill records and synthetic rosters with sensible defaults and easy overrides.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

# Add scripts/ to path so we can import rivalry
SCRIPTS_DIR = Path(__file__).resolve().parent.parent
if str(SCRIPTS_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPTS_DIR))

from rivalry.models import Kill
from rivalry.roster import Roster

HEADER = "id,server,sector,killer,victim,distance,weapon,timestamp"

FACTION_A = "Red"
FACTION_B = "Blue"

ROSTER_MEMBERS = {
    "Alice": FACTION_A,
    "Anna": FACTION_A,
    "Arthur": FACTION_A,
    "Bob": FACTION_B,
    "Bella": FACTION_B,
    "Bruno": FACTION_B,
}


# ─── Roster Factory ──────────────────────────────────────────────

def make_roster(**extra):
    """Two-faction roster (Red: Alice/Anna/Arthur, Blue: Bob/Bella/Bruno).

    Extra kwargs add or override members: make_roster(Carl="Red").
    """
    members = dict(ROSTER_MEMBERS)
    members.update(extra)
    return Roster(members, (FACTION_A, FACTION_B))


# ─── Raw Row Factory ─────────────────────────────────────────────

def make_row(killer="Alice", victim="Bob", distance="150m", weapon="Rifle",
             timestamp="2024-01-01T10:00:00Z", prefix=("1", "srv", "A1")):
    """Build one raw kill_log.csv line. Names are quoted like the game export."""
    fields = list(prefix) + [f'"{killer}"', f'"{victim}"', distance, weapon, timestamp]
    return ",".join(fields)


def make_log(*rows, header=HEADER):
    """Join rows under a header line."""
    return "\n".join([header] + list(rows)) + "\n"


def make_rows(n, killer="Alice", victim="Bob", day=1, **overrides):
    """N identical rows, one minute apart on 2024-01-<day>."""
    return [
        make_row(killer=killer, victim=victim,
                 timestamp=f"2024-01-{day:02d}T10:{i % 60:02d}:00Z", **overrides)
        for i in range(n)
    ]


# ─── Kill Factory ────────────────────────────────────────────────

def make_kill(**overrides):
    """Build a Kill as clean_row() would. Factions follow the test roster."""
    killer = overrides.get("killer_name", "Alice")
    victim = overrides.get("victim_name", "Bob")
    kill = {
        "killer_name": killer,
        "victim_name": victim,
        "killer_faction": ROSTER_MEMBERS.get(killer, "No Clan"),
        "victim_faction": ROSTER_MEMBERS.get(victim, "No Clan"),
        "distance": 150,
        "weapon": "Rifle",
        "timestamp": datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc),
        "is_npc_kill": False,
    }
    kill.update(overrides)
    return Kill(**kill)
