"""Pipeline constants: paths, S3 config, default roster, limits."""

import os
from pathlib import Path

# ─── Paths ──────────────────────────────────────────────────────

SCRIPT_DIR = Path(__file__).resolve().parent.parent  # scripts/
PROJECT_DIR = SCRIPT_DIR.parent
DATA_DIR = PROJECT_DIR / "data"
REPORT_FILE = "report.json"
RECENT_LOGS = DATA_DIR / "recent_logs.json"

# Optional roster CSV (Name,Faction), used instead of DEFAULT_ROSTER when
# present and no --roster is given
ROSTER_CSV = PROJECT_DIR / "roster.csv"

# ─── AWS / S3 ───────────────────────────────────────────────────

S3_SCHEME = "s3://"
S3_REGION = os.environ.get("AWS_DEFAULT_REGION", "us-east-2")

# ─── Factions ───────────────────────────────────────────────────

FACTION_TDB = "TDB"
FACTION_CDC = "Clan do Carrale"
TRACKED_FACTIONS = (FACTION_TDB, FACTION_CDC)

# Label for anyone not on the roster
UNAFFILIATED = "No Clan"

DEFAULT_ROSTER = {
    "TDB Bibakillbr": FACTION_TDB,
    "TDB Emiza": FACTION_TDB,
    "TDB GLA": FACTION_TDB,
    "TDB LC": FACTION_TDB,
    "TDB La Vendetta 2": FACTION_TDB,
    "TDB Sensei": FACTION_TDB,
    "TDB Wilso Waldo": FACTION_TDB,
    "TDBfantasma": FACTION_TDB,
    "Kowalski": FACTION_TDB,
    "DGэЯмΑИØ": FACTION_TDB,
    "InimigoDoCarrale": FACTION_TDB,
    "P2Kid": FACTION_CDC,
    "Mewtwo": FACTION_CDC,
    "BRUTÃO": FACTION_CDC,
    "Carrale": FACTION_CDC,
    "Chineisinho": FACTION_CDC,
    "RATAO": FACTION_CDC,
    "Sabugador": FACTION_CDC,
    "21": FACTION_CDC,
    "Lubi": FACTION_CDC,
}

# ─── Log Format ─────────────────────────────────────────────────

# Positional columns in kill_log.csv (0-2 are not used)
MIN_COLUMNS = 8
COL_KILLER = 3
COL_VICTIM = 4
COL_DISTANCE = 5
COL_WEAPON = 6
COL_TIMESTAMP = 7

# Emoji some players carry in their names
DECORATIVE_GLYPHS = ("😎", "😭")

DISTANCE_SUFFIX = "m"
NPC_PREFIX = "NPC "
UNKNOWN_WEAPON = "Unknown"
PLACEHOLDER_NAME = "N/A"

# ─── Thresholds & Configuration ─────────────────────────────────

TOP_WEAPONS = 10
TOP_NEMESIS_PAIRS = 10
TOP_DISTANCE_KILLS = 10
RECENT_KILLS = 30

# Recently-used logs kept in the history file
RECENT_LIMIT = 5
