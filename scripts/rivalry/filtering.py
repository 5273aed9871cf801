"""Event filtering: time range and rivalry eligibility."""

from rivalry.cleaning import parse_timestamp


def parse_bound(value):
    """Parse an optional filter bound. Empty means unbounded on that side."""
    if value is None:
        return None
    if not str(value).strip():
        return None
    dt = parse_timestamp(str(value))
    if dt is None:
        raise ValueError(f"Invalid date filter: {value!r}")
    return dt


def in_time_range(kill, start=None, end=None):
    """Both bounds are inclusive; either may be None."""
    if start is not None and kill.timestamp < start:
        return False
    if end is not None and kill.timestamp > end:
        return False
    return True


def is_rivalry_kill(kill, roster):
    """A non-NPC kill between the two tracked factions, in either direction."""
    if kill.is_npc_kill:
        return False
    a, b = roster.factions
    return (kill.killer_faction, kill.victim_faction) in ((a, b), (b, a))


def filter_kills(kills, roster, start=None, end=None):
    """Keep only rivalry kills inside the time range."""
    for kill in kills:
        if not in_time_range(kill, start, end):
            continue
        if not is_rivalry_kill(kill, roster):
            continue
        yield kill
