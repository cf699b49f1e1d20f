"""
Charts and HTML report for monthly summaries.

Each rendering call owns its own matplotlib Figure, so repeated renders
never share chart state.
"""

import io
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Environment, FileSystemLoader
from matplotlib.figure import Figure

from .export import format_duration
from .summary import MonthlySummary, compute_totals, sort_newest_first


TEMPLATE_DIR = Path(__file__).parent / "templates"
REPORT_TEMPLATE = "monthly_stats.html.jinja2"

# Colors as used by the results page
COLORS = {
    'line': '#3b82f6',
    'fill': '#3b82f6',
    'text': '#cccccc',
    'grid': '#ffffff',
    'background': '#111827',
}

ACTIVITY_MONTHS = 12


def activity_series(
    summaries: Sequence[MonthlySummary],
    months: int = ACTIVITY_MONTHS,
) -> tuple[list[str], list[int]]:
    """
    Labels and game counts for the activity chart.

    Args:
        summaries: Monthly summaries in any order.
        months: How many of the most recent months to include.

    Returns:
        (month labels, game counts), oldest month first.
    """
    recent = sort_newest_first(summaries)[:months]
    recent.reverse()
    return [s.archive_month for s in recent], [s.game_count for s in recent]


def render_activity_chart(
    summaries: Sequence[MonthlySummary],
    output_path: Optional[str | Path] = None,
    months: int = ACTIVITY_MONTHS,
) -> Figure:
    """
    Line chart of games played over the most recent months.

    Args:
        summaries: Monthly summaries in any order.
        output_path: If given, the chart is also saved there (format from suffix).
        months: Number of recent months to plot.

    Returns:
        The matplotlib Figure.
    """
    labels, counts = activity_series(summaries, months)

    fig = Figure(figsize=(10, 4))
    fig.patch.set_facecolor(COLORS['background'])
    ax = fig.add_subplot()
    ax.set_facecolor(COLORS['background'])

    positions = list(range(len(labels)))
    ax.plot(positions, counts, color=COLORS['line'], marker='o')
    ax.fill_between(positions, counts, color=COLORS['fill'], alpha=0.1)

    ax.set_title(f"Games Played (Last {months} Months)", color='white')
    ax.set_xticks(positions)
    ax.set_xticklabels(labels, rotation=45, ha='right')
    ax.tick_params(axis='x', colors=COLORS['text'])
    ax.tick_params(axis='y', colors=COLORS['text'], labelsize=14)
    ax.set_ylim(bottom=0)
    ax.grid(axis='y', color=COLORS['grid'], alpha=0.1)
    ax.grid(axis='x', visible=False)
    for spine in ax.spines.values():
        spine.set_visible(False)
    fig.tight_layout()

    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, facecolor=fig.get_facecolor())

    return fig


def chart_svg(summaries: Sequence[MonthlySummary], months: int = ACTIVITY_MONTHS) -> str:
    """Activity chart as an inline SVG string."""
    fig = render_activity_chart(summaries, months=months)
    buffer = io.StringIO()
    fig.savefig(buffer, format='svg', facecolor=fig.get_facecolor())
    return buffer.getvalue()


def render_report(
    summaries: Sequence[MonthlySummary],
    username: str,
    output_path: Optional[str | Path] = None,
) -> str:
    """
    Render the monthly stats HTML page using the Jinja2 template.

    Args:
        summaries: Monthly summaries in any order.
        username: Player the summaries belong to.
        output_path: If given, the HTML is written there.

    Returns:
        The rendered HTML.
    """
    ordered = sort_newest_first(summaries)
    totals = compute_totals(ordered)

    env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)), autoescape=True)
    template = env.get_template(REPORT_TEMPLATE)

    html = template.render(
        username=username,
        generated=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        totals={
            "time": format_duration(totals.total_seconds),
            "games": totals.game_count,
            "record": totals.record,
        },
        rows=[
            {
                "month": s.archive_month,
                "time": format_duration(s.total_seconds),
                "games": s.game_count,
                "record": s.record,
            }
            for s in ordered
        ],
        chart=chart_svg(ordered) if ordered else None,
    )

    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")

    return html
