"""Row parsing: turn raw kill_log.csv lines into Kill records.

clean_row() is the gatekeeper: it returns None for anything that can't be
read as a kill and, when given a skip_log, records why.
"""

import csv
import re
from datetime import datetime, timezone

from rivalry.constants import (
    MIN_COLUMNS, COL_KILLER, COL_VICTIM, COL_DISTANCE, COL_WEAPON, COL_TIMESTAMP,
    DECORATIVE_GLYPHS, DISTANCE_SUFFIX, NPC_PREFIX, UNKNOWN_WEAPON,
)
from rivalry.models import Kill

_LEADING_INT = re.compile(r"\s*(\d+)")


def normalize_name(name):
    """Strip decorative emoji and surrounding whitespace from a player name."""
    if not name:
        return ""
    for glyph in DECORATIVE_GLYPHS:
        name = name.replace(glyph, "")
    return name.strip()


def parse_distance(raw):
    """Parse '150m' into 150. Anything unreadable counts as 0."""
    if not raw:
        return 0
    match = _LEADING_INT.match(raw.replace(DISTANCE_SUFFIX, "", 1))
    if not match:
        return 0
    return int(match.group(1))


def parse_timestamp(raw):
    """Parse an ISO-8601 timestamp into an aware UTC datetime, or None."""
    if not raw:
        return None
    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def split_row(line):
    """Split one CSV line into fields. Quoted fields are unwrapped."""
    return next(csv.reader([line]), [])


def clean_row(line, roster, skip_log=None):
    """Parse one raw log line into a Kill. Returns None if invalid."""

    def skip(reason):
        if skip_log is not None:
            skip_log.append(reason)
        return None

    try:
        columns = split_row(line)
    except csv.Error:
        return skip("csv_error")

    if len(columns) < MIN_COLUMNS:
        return skip("too_few_columns")

    timestamp = parse_timestamp(columns[COL_TIMESTAMP])
    if timestamp is None:
        return skip("bad_timestamp")

    killer = normalize_name(columns[COL_KILLER])
    victim = normalize_name(columns[COL_VICTIM])
    if not killer or not victim:
        return skip("empty_name")

    return Kill(
        killer_name=killer,
        victim_name=victim,
        killer_faction=roster.faction_of(killer),
        victim_faction=roster.faction_of(victim),
        distance=parse_distance(columns[COL_DISTANCE]),
        weapon=columns[COL_WEAPON].strip() or UNKNOWN_WEAPON,
        timestamp=timestamp,
        is_npc_kill=killer.startswith(NPC_PREFIX),
    )


def iter_kills(raw_text, roster, skip_log=None):
    """Yield a Kill for every valid data line. The first line is the header."""
    lines = raw_text.splitlines()
    for line in lines[1:]:
        if not line.strip():
            continue
        kill = clean_row(line, roster, skip_log=skip_log)
        if kill is not None:
            yield kill
