"""
Tabular export of monthly summaries.

Formats durations for display and writes summaries to CSV (via pandas)
with a final "Overall" row.
"""

import re
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from .summary import AggregateTotals, MonthlySummary, compute_totals


CSV_HEADER = ["Month", "Time Played", "Games", "Record (W/L/D)"]


def pluralize(value, unit: str) -> str:
    """"1 hour", "2 hours", "0 minutes"."""
    return f"{value} {unit}{'' if value == 1 else 's'}"


def format_duration(total_seconds) -> str:
    """
    Human readable play time.

    Under an hour shows whole minutes; otherwise hours rounded to one
    decimal place ("1 hour", "2.5 hours").
    """
    total_minutes = int(total_seconds // 60)
    if total_minutes < 60:
        return pluralize(total_minutes, "minute")

    # Half rounds up
    rounded_hours = int(total_seconds / 3600 * 10 + 0.5) / 10
    if rounded_hours.is_integer():
        return pluralize(int(rounded_hours), "hour")
    return pluralize(rounded_hours, "hour")


def summaries_to_dataframe(summaries: Sequence[MonthlySummary]) -> pd.DataFrame:
    """One row per month with raw counts plus derived hours/minutes."""
    columns = [
        "archive_url", "archive_month", "total_seconds",
        "game_count", "wins", "losses", "draws", "hours", "minutes",
    ]
    rows = [
        {**summary.to_dict(), "hours": summary.hours, "minutes": summary.minutes}
        for summary in summaries
    ]
    return pd.DataFrame(rows, columns=columns)


def build_csv_rows(
    summaries: Sequence[MonthlySummary],
    totals: Optional[AggregateTotals] = None,
) -> list[list]:
    """
    Rows of the exported table, header first and "Overall" last.

    Args:
        summaries: Monthly summaries in display order.
        totals: Precomputed totals (computed from summaries if omitted).
    """
    if totals is None:
        totals = compute_totals(summaries)

    rows = [CSV_HEADER]
    for summary in summaries:
        rows.append([
            summary.archive_month,
            format_duration(summary.total_seconds),
            summary.game_count,
            summary.record,
        ])
    rows.append([
        "Overall",
        format_duration(totals.total_seconds),
        totals.game_count,
        totals.record,
    ])
    return rows


def safe_filename(username: Optional[str]) -> str:
    """Default CSV file name for a player."""
    safe_username = re.sub(r"[^\w.-]", "_", username or "player")
    return f"chess-stats-{safe_username}.csv"


def export_csv(
    summaries: Sequence[MonthlySummary],
    path: Optional[str | Path] = None,
    username: Optional[str] = None,
) -> Optional[Path]:
    """
    Write summaries to a CSV file.

    The file is UTF-8 with a byte order mark and CRLF line endings so
    that spreadsheet applications open it cleanly.

    Args:
        summaries: Monthly summaries in display order.
        path: Output file (default: chess-stats-{username}.csv).
        username: Used for the default file name.

    Returns:
        Path written, or None if there was nothing to export.
    """
    if not summaries:
        return None

    output_path = Path(path) if path else Path(safe_filename(username))
    output_path.parent.mkdir(parents=True, exist_ok=True)

    rows = build_csv_rows(summaries)
    frame = pd.DataFrame(rows[1:], columns=rows[0])
    frame.to_csv(output_path, index=False, encoding="utf-8-sig", lineterminator="\r\n")
    return output_path
