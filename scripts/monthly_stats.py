#!/usr/bin/env python3
"""
Monthly chess.com stats for a player.

Fetches every monthly archive for the player and prints time played,
game count and win/loss/draw record per month, plus overall totals.

Usage:
    python scripts/monthly_stats.py USERNAME [OPTIONS]

Examples:
    python scripts/monthly_stats.py magnuscarlsen
    python scripts/monthly_stats.py hikaru --csv data/hikaru.csv
    python scripts/monthly_stats.py hikaru --html data/hikaru.html --chart data/hikaru.png
"""

import argparse
import sys
from pathlib import Path

import requests

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from chess_stats import (
    compute_totals,
    export_csv,
    format_duration,
    render_activity_chart,
    render_report,
    sort_newest_first,
    summarize_all_months,
)


def print_table(summaries, totals) -> None:
    """Print summaries as a fixed-width table with an Overall row."""
    print(f"\n{'Month':<10} {'Time Played':>14} {'Games':>7} {'Record (W/L/D)':>16}")
    print("-" * 50)
    for s in summaries:
        print(f"{s.archive_month:<10} {format_duration(s.total_seconds):>14} {s.game_count:>7} {s.record:>16}")
    print("-" * 50)
    print(f"{'Overall':<10} {format_duration(totals.total_seconds):>14} {totals.game_count:>7} {totals.record:>16}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Monthly time played and results for a chess.com player",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python scripts/monthly_stats.py magnuscarlsen
    python scripts/monthly_stats.py hikaru --csv data/hikaru.csv
    python scripts/monthly_stats.py hikaru --html data/hikaru.html
        """,
    )
    parser.add_argument("username", help="Chess.com username")
    parser.add_argument("--csv", type=Path, default=None,
                        help="Write the monthly table to this CSV file")
    parser.add_argument("--html", type=Path, default=None,
                        help="Write an HTML report to this file")
    parser.add_argument("--chart", type=Path, default=None,
                        help="Save the activity chart to this image file")
    parser.add_argument("--workers", type=int, default=None,
                        help="Concurrent archive fetches (default: 8)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Print each month as it is summarized")

    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username:
        return 0

    print("Fetching archives...")
    try:
        summaries = summarize_all_months(
            username,
            max_workers=args.workers,
            verbose=args.verbose,
        )
    except (requests.RequestException, ValueError) as e:
        print(f"Error fetching archives: {e}")
        return 1

    if not summaries:
        print(f"No archives found for {username}.")
        return 0

    count = len(summaries)
    print(f"Loaded {count} month{'' if count == 1 else 's'} for {username}.")

    summaries = sort_newest_first(summaries)
    totals = compute_totals(summaries)
    print_table(summaries, totals)

    if args.csv:
        path = export_csv(summaries, args.csv, username=username)
        print(f"CSV saved to: {path}")
    if args.chart:
        render_activity_chart(summaries, args.chart)
        print(f"Chart saved to: {args.chart}")
    if args.html:
        render_report(summaries, username, args.html)
        print(f"HTML report saved to: {args.html}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
