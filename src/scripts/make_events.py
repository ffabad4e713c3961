#!/usr/bin/env python3
"""
Turn one day's form answers into GET Bus calendar events.

Builds the events the form would create and, unless --dry-run is given,
replaces the events already on the calendar for that day.

Usage:
    uv run python src/scripts/make_events.py "Have a run" 1203 Tomorrow
    uv run python src/scripts/make_events.py "On show" 6:30 14:00 Today --dry-run
    uv run python src/scripts/make_events.py "Day off!" Tomorrow
"""

import argparse
import asyncio
import sys
import traceback
from functools import partial
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import BID_REPORT_PATH
from models.events import Event
from services.bid_report import load_runs_from_file
from services.calendar import sync_events
from services.email import send_error_email
from services.events import make_events


def describe_event(event: Event) -> str:
    """One-line summary of an event for console output."""
    if event.kind == "timed":
        start = event.start_time.strftime("%a %b %d %H:%M")
        end = event.end_time.strftime("%a %b %d %H:%M")
        return f"{event.title}: {start} - {end}"
    return f"{event.title}: {event.date.strftime('%a %b %d')} (all day)"


async def main(responses: list[str], bid_report: Path, dry_run: bool = False):
    """Main entry point."""
    try:
        details: list[tuple[str, str]] = []
        events = list(
            make_events(
                responses,
                load_runs=partial(load_runs_from_file, bid_report),
                details=details,
            )
        )

        if not events:
            print("No events to add.")
            return

        print(f"\nBuilt {len(events)} event(s):")
        for event in events:
            print(f"  {describe_event(event)}")

        if dry_run:
            print("\nDry run: calendar not changed.")
            return

        print("\nUpdating calendar...")
        result = await sync_events(events)
        print(f"Deleted {result.deleted} event(s), created {result.created} event(s)")

        print("\nDone!")

    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        await send_error_email(e, responses)
        raise


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Create calendar events for a day's assignment"
    )
    parser.add_argument(
        "responses",
        nargs="+",
        help="Form answers in question order, starting with the category",
    )
    parser.add_argument(
        "--bid-report",
        type=Path,
        default=BID_REPORT_PATH,
        help=f"Post Bid Report spreadsheet (.xlsx or .numbers). Defaults to {BID_REPORT_PATH}",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the events without touching the calendar",
    )
    args = parser.parse_args()

    try:
        asyncio.run(main(args.responses, args.bid_report, args.dry_run))
    except Exception:
        sys.exit(1)
