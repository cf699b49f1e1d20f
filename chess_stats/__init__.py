"""
Monthly time-played and win/loss/draw statistics for chess.com players.
"""

from .games import (
    NotFound,
    RequestFailed,
    fetch_archive_games,
    fetch_archives,
    fetch_json,
)
from .records import (
    ExtractedFields,
    Outcome,
    elapsed_seconds,
    extract_fields,
    extract_tag,
    game_elapsed_seconds,
    outcome_from_fields,
    parse_clock_time,
    player_outcome,
)
from .summary import (
    AggregateTotals,
    MonthlySummary,
    archive_month_key,
    compute_totals,
    most_recent_summary,
    sort_newest_first,
    summarize_all_months,
    summarize_month,
)
from .export import (
    build_csv_rows,
    export_csv,
    format_duration,
    pluralize,
    summaries_to_dataframe,
)
from .visualization import (
    activity_series,
    render_activity_chart,
    render_report,
)

__version__ = "0.1.0"
