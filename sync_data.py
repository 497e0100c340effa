#!/usr/bin/env python3
"""
Sync ballots and death dates from remote sources.

Usage:
    python sync_data.py                          # Sync ballots of the default session
    python sync_data.py votes --session=15       # Sync ballots of a specific session
    python sync_data.py votes --dry-run          # Fetch and resolve, write nothing
    python sync_data.py deceased                 # Sync death dates from the knowledge graph
    python sync_data.py deceased --close-mandates
    python sync_data.py votes --if-stale=6      # Skip if the session synced less than 6h ago (default 24h)
    python sync_data.py mandates                 # Close current mandates of deceased persons
    python sync_data.py --stats                  # Show current database stats
    python sync_data.py --validate [--session=N] # Check data integrity
"""

import sys
from datetime import timedelta

import duckdb

from app.repositories import close_db
from etl import deceased_stats, sync_deceased, sync_votes, update_deceased_mandates, votes_stats
from etl.validation import validate_session
from settings import DB_PATH, DEFAULT_SESSION
from settings.logging import setup_logging

SEPARATOR = "=" * 50
MAX_LISTED = 15
DEFAULT_STALE_HOURS = 24


def render_progress(percent: int, message: str, width: int = 30) -> None:
    """Progress callback: one bar per report."""
    filled = round(percent * width / 100)
    print(f"[{'█' * filled}{'░' * (width - filled)}] {percent}% {message}")


def print_list(title: str, items: list[str], limit: int = MAX_LISTED):
    if not items:
        return
    print(f"\n{title} ({len(items)}):")
    for item in items[:limit]:
        print(f"  - {item}")
    if len(items) > limit:
        print(f"  ... and {len(items) - limit} more")


def run_stats():
    """Print current database stats."""
    stats = votes_stats()
    print("\n" + SEPARATOR)
    print("Current database stats")
    print(SEPARATOR)
    print(f"  Ballots: {stats['ballots']:,}")
    print(f"  Votes: {stats['votes']:,}")
    for s in stats["sessions"]:
        print(f"    - session {s['session']}: {s['count']:,} ballots")
    for position, count in stats["by_position"].items():
        print(f"    - {position}: {count:,}")

    deceased = deceased_stats()
    print(f"\n  Persons: {deceased['total']:,} ({deceased['deceased']:,} deceased)")
    print(f"  Deceased with a current mandate: {deceased['deceased_with_current_mandate']:,}")

    for run in stats["last_runs"]:
        print(f"\n  {run['source_key']}: {run['last_sync_at']:%Y-%m-%d %H:%M} ({run['item_count']} items)")
    print(SEPARATOR + "\n")
    close_db()


def run_validation(session: int) -> bool:
    """Validate one session."""
    conn = duckdb.connect(DB_PATH, read_only=True)
    result = validate_session(conn, session)
    conn.close()

    status = "✅" if result["valid"] else "❌"
    print(f"\nSession {session} {status}")
    print(f"  Ballots: {result['stats']['ballots']:,}")
    print(f"  Votes: {result['stats']['votes']:,}")
    print(f"  Coverage: {result['stats']['coverage_pct']}%")
    for issue in result["issues"]:
        print(f"  ⚠️  {issue}")
    return result["valid"]


def print_result(result, counters: dict[str, int]):
    print("\n" + SEPARATOR)
    print("Sync Results:")
    print(SEPARATOR)
    if result.skipped:
        print("Status: ⏭️  SKIPPED (synced recently)")
        print(SEPARATOR)
        return
    print(f"Status: {'✅ SUCCESS' if result.success else '❌ FAILED'}{' (dry run)' if result.dry_run else ''}")
    print(f"Duration: {result.duration:.2f}s")
    for label, value in counters.items():
        print(f"{label}: {value:,}")
    print_list("Voters not found", getattr(result, "unresolved_voters", []))
    print_list("⚠️  Errors", result.errors, limit=10)
    print(SEPARATOR)


def parse_session(args: list[str]) -> int:
    for a in args:
        if a.startswith("--session="):
            value = a.split("=", 1)[1]
            if not value.isdigit() or int(value) < 1:
                print(f"Invalid session number: {value}")
                sys.exit(1)
            return int(value)
    return DEFAULT_SESSION


def parse_min_interval(args: list[str]) -> timedelta | None:
    """--if-stale[=HOURS]: only sync when the last run is older than HOURS (24 by default)."""
    for a in args:
        if a == "--if-stale":
            return timedelta(hours=DEFAULT_STALE_HOURS)
        if a.startswith("--if-stale="):
            value = a.split("=", 1)[1]
            if not value.isdigit():
                print(f"Invalid number of hours: {value}")
                sys.exit(1)
            return timedelta(hours=int(value))
    return None


def main():
    args = sys.argv[1:]

    if "--help" in args or "-h" in args:
        print(__doc__)
        return

    if "--stats" in args:
        setup_logging(level="WARNING", to_file=False)
        run_stats()
        return

    session = parse_session(args)

    if "--validate" in args:
        setup_logging(level="WARNING", to_file=False)
        sys.exit(0 if run_validation(session) else 1)

    dry_run = "--dry-run" in args
    min_interval = parse_min_interval(args)
    commands = [a for a in args if not a.startswith("-")]
    command = commands[0] if commands else "votes"

    if command == "votes":
        logger = setup_logging(level="INFO", to_file=True, job="votes")
        logger.info("Session: {} | Mode: {}", session, "DRY RUN (no changes)" if dry_run else "LIVE")
        result = sync_votes(session=session, dry_run=dry_run, on_progress=render_progress, min_interval=min_interval)
        print_result(
            result,
            {
                "Ballots created": result.ballots_created,
                "Ballots updated": result.ballots_updated,
                "Votes written": result.votes_written,
            },
        )
    elif command == "deceased":
        logger = setup_logging(level="INFO", to_file=True, job="deceased")
        logger.info("Mode: {}", "DRY RUN (no changes)" if dry_run else "LIVE")
        result = sync_deceased(
            dry_run=dry_run,
            close_mandates="--close-mandates" in args,
            min_interval=min_interval,
        )
        print_result(
            result,
            {
                "Checked": result.checked,
                "Death dates added": result.updated,
                "Mandates closed": result.mandates_closed,
            },
        )
    elif command == "mandates":
        logger = setup_logging(level="INFO", to_file=True, job="mandates")
        closed = update_deceased_mandates()
        logger.info("Mandates closed: {}", closed)
        return
    else:
        print(__doc__)
        sys.exit(1)

    sys.exit(0 if result.success else 1)


if __name__ == "__main__":
    main()
