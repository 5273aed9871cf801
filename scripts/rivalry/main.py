"""Pipeline orchestration: run_pipeline and the rivalry-report entry point."""

import sys
from collections import Counter

from rivalry.constants import REPORT_FILE, ROSTER_CSV
from rivalry.roster import Roster
from rivalry.cleaning import iter_kills
from rivalry.filtering import parse_bound, filter_kills
from rivalry.aggregation import aggregate_kills
from rivalry.ranking import build_report
from rivalry.models import PipelineResult
from rivalry.io_helpers import (
    read_log, log_name, load_roster_csv, write_json,
    load_recent_logs, remember_log, delete_recent_log, forget_recent_logs,
)

EMPTY_LOG_ERROR = "Log file is empty or unreadable."


def run_pipeline(raw_text, start=None, end=None, roster=None):
    """Parse, filter, aggregate and rank one kill log.

    Each call starts from the raw text and returns a new PipelineResult.
    Bad rows are skipped and counted in result.skipped; anything that stops
    the whole pass comes back as result.error with no report.
    """
    if not raw_text or not raw_text.strip():
        return PipelineResult(error=EMPTY_LOG_ERROR)

    if roster is None:
        roster = Roster.default()
    skip_log = []
    try:
        start_dt = parse_bound(start)
        end_dt = parse_bound(end)
        kills = iter_kills(raw_text, roster, skip_log=skip_log)
        in_scope = filter_kills(kills, roster, start_dt, end_dt)
        totals = aggregate_kills(in_scope, roster)
        report = build_report(totals, roster)
    except Exception as e:
        return PipelineResult(
            error=f"Failed to analyse kill log: {e}",
            skipped=tuple(skip_log),
        )
    return PipelineResult(report=report, skipped=tuple(skip_log))


def print_recent(entries):
    if not entries:
        print("  (no recent logs)")
        return
    for i, entry in enumerate(entries):
        print(f"  [{i}] {entry['name']}  (loaded {entry.get('uploaded_at', '?')})")


def print_skips(skipped):
    if not skipped:
        return
    skip_counts = Counter(skipped)
    for reason, count in sorted(skip_counts.items(), key=lambda x: -x[1]):
        print(f"    {reason}: {count}")


def main(argv=None):
    import argparse
    parser = argparse.ArgumentParser(description="SCUM Rivalry Report")
    parser.add_argument("log", nargs="?",
                        help="kill_log.csv path or s3://bucket/key (default: most recent log)")
    parser.add_argument("--start", default="", help="ISO-8601 start bound (inclusive)")
    parser.add_argument("--end", default="", help="ISO-8601 end bound (inclusive)")
    parser.add_argument("--roster", help="Name,Faction CSV (default: roster.csv if present, else built-in roster)")
    parser.add_argument("--output", default=REPORT_FILE, help="Report file name under data/")
    parser.add_argument("--recent", type=int, default=0,
                        help="Use the Nth most recent log when no LOG is given")
    parser.add_argument("--list-recent", action="store_true", help="List recent logs and exit")
    parser.add_argument("--delete-recent", type=int, metavar="N",
                        help="Remove the Nth recent log and exit")
    parser.add_argument("--forget-recent", action="store_true", help="Clear the log history and exit")
    parser.add_argument("--no-history", action="store_true",
                        help="Don't record LOG in the recent-log history")
    args = parser.parse_args(argv)

    if args.forget_recent:
        forget_recent_logs()
        print("Log history cleared.")
        return 0
    if args.delete_recent is not None:
        try:
            removed = delete_recent_log(args.delete_recent)
        except IndexError as e:
            print(f"Error: {e}")
            return 1
        print(f"Removed {removed['name']} from log history.")
        return 0
    if args.list_recent:
        print("Recent logs:")
        print_recent(load_recent_logs())
        return 0

    print("SCUM Rivalry Report")
    print("=" * 50)

    # Step 1: Load the log
    print("\n[1/4] Loading kill log...")
    if args.log:
        try:
            raw_text = read_log(args.log)
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: Failed to read log file: {e}")
            return 1
        name = log_name(args.log)
        if not args.no_history and raw_text.strip():
            remember_log(name, raw_text)
    else:
        recent = load_recent_logs()
        if not 0 <= args.recent < len(recent):
            print("Error: no log given and no matching recent log. Pass a kill_log.csv path.")
            return 1
        name = recent[args.recent]["name"]
        raw_text = recent[args.recent]["content"]
    print(f"  Using {name}")

    # Step 2: Roster
    print("\n[2/4] Loading roster...")
    roster_path = args.roster or (ROSTER_CSV if ROSTER_CSV.exists() else None)
    if roster_path:
        try:
            roster = load_roster_csv(roster_path)
        except ValueError as e:
            print(f"Error: Invalid roster file: {e}")
            return 1
    else:
        roster = Roster.default()
        print(f"  Built-in roster: {len(roster)} players")

    # Step 3: Aggregate
    print("\n[3/4] Aggregating kills...")
    if args.start or args.end:
        print(f"  Date filter: {args.start or '-'} → {args.end or '-'}")
    result = run_pipeline(raw_text, args.start, args.end, roster=roster)
    if not result.ok:
        print(f"Error: {result.error}")
        return 1
    report = result.report
    print(f"  {report.total_kills} rivalry kills, {report.total_players} players, "
          f"skipped {len(result.skipped)} rows")
    print_skips(result.skipped)

    # Step 4: Write
    print("\n[4/4] Writing report...")
    write_json(args.output, report.to_dict())

    summary = ", ".join(f"{f} {report.kills_for(f)}" for f in report.factions)
    print(f"\nDone! {summary} → data/{args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
