"""I/O operations: log reading (local/S3), roster CSV, JSON writing, log history."""

import csv
import json
import sys
from datetime import datetime, timezone
from pathlib import Path

from rivalry.constants import (
    DATA_DIR, RECENT_LOGS, RECENT_LIMIT, ROSTER_CSV, S3_SCHEME, S3_REGION,
)
from rivalry.cleaning import normalize_name
from rivalry.roster import Roster


# ─── AWS / S3 ───────────────────────────────────────────────────

def get_s3_client():
    """Create an S3 client with retry-friendly config."""
    try:
        import boto3
        from botocore.config import Config
    except ImportError:
        print("Error: boto3 is required for s3:// logs. Install with: pip install boto3")
        sys.exit(1)

    config = Config(
        retries={"max_attempts": 10, "mode": "adaptive"},
        read_timeout=120,
        connect_timeout=10,
    )
    return boto3.client("s3", region_name=S3_REGION, config=config)


def split_s3_uri(uri):
    """'s3://bucket/path/kill_log.csv' → ('bucket', 'path/kill_log.csv')."""
    if not uri.startswith(S3_SCHEME):
        raise ValueError(f"Not an S3 URI: {uri}")
    bucket, _, key = uri[len(S3_SCHEME):].partition("/")
    if not bucket or not key:
        raise ValueError(f"S3 URI needs a bucket and a key: {uri}")
    return bucket, key


def fetch_s3_log(uri, client=None):
    """Download a kill log from S3 and return its text."""
    bucket, key = split_s3_uri(uri)
    client = client or get_s3_client()
    response = client.get_object(Bucket=bucket, Key=key)
    body = response["Body"].read()
    return body.decode("utf-8-sig")


# ─── Log Files ──────────────────────────────────────────────────

def log_name(source):
    """Display name for a log source (the file name, for both paths and URIs)."""
    return str(source).rstrip("/").rsplit("/", 1)[-1]


def read_log(source, s3_client=None):
    """Read a kill log from a local path or an s3:// URI."""
    source = str(source)
    if source.startswith(S3_SCHEME):
        return fetch_s3_log(source, client=s3_client)
    with open(source, "r", encoding="utf-8-sig") as f:
        return f.read()


# ─── Reference Data (CSVs) ──────────────────────────────────────

def load_roster_csv(path=ROSTER_CSV):
    """Load the faction roster from a Name,Faction CSV.

    The file must name exactly two factions, tracked in first-seen order;
    anything else raises ValueError. Falls back to the built-in roster if
    the file is missing.
    """
    path = Path(path)
    if not path.exists():
        print(f"  Warning: {path} not found, using built-in roster")
        return Roster.default()

    members = {}
    factions = []
    with open(path, "r", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        for row in reader:
            name = normalize_name(row.get("Name", ""))
            faction = (row.get("Faction") or "").strip()
            if not name or not faction:
                continue
            members[name] = faction
            if faction not in factions:
                factions.append(faction)

    roster = Roster(members, factions)
    print(f"  Loaded {len(roster)} players from {path.name}")
    return roster


# ─── JSON Writers ────────────────────────────────────────────────

def _json_default(obj):
    if isinstance(obj, datetime):
        return obj.isoformat()
    return str(obj)


def write_json(filename, data, compact=False):
    """Write data to a JSON file in the data directory."""
    path = DATA_DIR / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        if compact:
            json.dump(data, f, separators=(",", ":"), ensure_ascii=False, default=_json_default)
        else:
            json.dump(data, f, indent=2, ensure_ascii=False, default=_json_default)
    size_kb = path.stat().st_size / 1024
    print(f"  Wrote {path.name} ({size_kb:.0f} KB)")
    return path


# ─── Recently-Used Logs ──────────────────────────────────────────

def load_recent_logs(path=None):
    """Load the recently-used log history, newest first."""
    path = Path(path or RECENT_LOGS)
    if not path.exists():
        return []

    try:
        with open(path, "r", encoding="utf-8") as f:
            entries = json.load(f)
        if not isinstance(entries, list):
            raise ValueError("history is not a list")
        if not all(isinstance(e, dict) and "name" in e and "content" in e for e in entries):
            raise ValueError("history entry missing name/content")
        return entries
    except (json.JSONDecodeError, ValueError):
        print(f"  Warning: {path.name} is corrupt, clearing log history")
        path.unlink()
        return []


def save_recent_logs(entries, path=None):
    path = Path(path or RECENT_LOGS)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(entries, f, ensure_ascii=False, separators=(",", ":"))


def remember_log(name, content, path=None):
    """Put a log at the top of the history, replacing any entry with the same name."""
    entry = {
        "name": name,
        "content": content,
        "uploaded_at": datetime.now(timezone.utc).isoformat(),
    }
    entries = [e for e in load_recent_logs(path) if e["name"] != name]
    entries = [entry] + entries
    entries = entries[:RECENT_LIMIT]
    save_recent_logs(entries, path)
    return entries


def delete_recent_log(index, path=None):
    """Drop one history entry by position. Returns the removed entry."""
    entries = load_recent_logs(path)
    if not 0 <= index < len(entries):
        raise IndexError(f"No recent log at position {index}")
    removed = entries.pop(index)
    save_recent_logs(entries, path)
    return removed


def forget_recent_logs(path=None):
    """Delete the whole history file."""
    path = Path(path or RECENT_LOGS)
    if path.exists():
        path.unlink()
