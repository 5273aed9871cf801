"""Generate a short rivalry summary from the latest report for Discord notifications."""

import json
import sys
from pathlib import Path

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
REPORT_PATH = DATA_DIR / "report.json"


def load_report(path=None):
    """Load the report written by rivalry-report. Returns None if missing."""
    path = Path(path or REPORT_PATH)
    if not path.exists():
        return None
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def build_summary(report):
    """Build a summary dict from a report dict."""
    factions = report.get("factions", [])
    if not report.get("total_kills"):
        return {"factions": factions, "total_kills": 0}

    kills = report["faction_kills"]
    kd = report["faction_kd"]
    leader = max(factions, key=lambda f: kills.get(f, 0))
    if kills.get(factions[0], 0) == kills.get(factions[1], 0):
        leader = None

    nemesis = report["nemesis_pairs"][0] if report.get("nemesis_pairs") else None
    days = report.get("kills_over_time", [])

    return {
        "factions": factions,
        "total_kills": report["total_kills"],
        "total_players": report.get("total_players", 0),
        "kills": {f: kills.get(f, 0) for f in factions},
        "kd": {f: kd.get(f, 0) for f in factions},
        "leader": leader,
        "top_killers": [
            {"name": p["name"], "faction": p["faction"], "kills": p["kills"]}
            for p in report.get("top_killers", [])
        ],
        "longest_kill": report.get("longest_kill"),
        "avg_distance": report.get("average_distance", 0),
        "nemesis": nemesis,
        "last_day": days[-1]["date"] if days else None,
    }


def format_discord_message(summary):
    """Format the summary as a Discord embed-style message."""
    factions = summary["factions"]
    if summary["total_kills"] == 0:
        return f"**Rivalry Update**\nNo kills between {' and '.join(factions)} in this log."

    lines = [
        "**Rivalry Update**" + (f" (through {summary['last_day']})" if summary.get("last_day") else ""),
        "",
        f"**{summary['total_kills']}** rivalry kills across **{summary['total_players']}** players",
    ]
    for f in factions:
        lines.append(f"{f}: **{summary['kills'][f]}** kills (K/D {summary['kd'][f]:.2f})")
    if summary["leader"]:
        lines.append(f"Leading: **{summary['leader']}**")
    else:
        lines.append("Dead even.")

    lines.append("")
    lines.append("**Top Killers**")
    for p in summary["top_killers"]:
        lines.append(f"{p['faction']}: {p['name']} - {p['kills']} kills")

    longest = summary.get("longest_kill")
    if longest and longest["distance"] > 0:
        lines.append("")
        lines.append(
            f"Longest kill: **{longest['distance']}m** by {longest['killer_name']} "
            f"on {longest['victim_name']} ({longest['weapon']})"
        )
    lines.append(f"Avg kill distance: {summary['avg_distance']}m")

    nemesis = summary.get("nemesis")
    if nemesis:
        lines.append(
            f"Fiercest duel: {nemesis['player1']} {nemesis['player1_kills']} x "
            f"{nemesis['player2_kills']} {nemesis['player2']}"
        )

    return "\n".join(lines)


def main():
    report = load_report()
    if report is None:
        print(f"No report at {REPORT_PATH}. Run rivalry-report first.")
        return 1
    summary = build_summary(report)
    message = format_discord_message(summary)

    # Write to file for the workflow to read
    output_path = Path(__file__).resolve().parent / "daily_summary.txt"
    output_path.write_text(message, encoding="utf-8")
    print(message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
