"""
Monthly archive summaries for a chess.com player.

Reduces each monthly archive to a MonthlySummary (time played, game count,
win/loss/draw record) and gathers summaries across all of a player's
archives, fetching months concurrently.
"""

import os
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import asdict, dataclass
from typing import Callable, Iterable, Optional

from .games import fetch_archives, fetch_archive_games
from .records import Outcome, Seconds, elapsed_seconds, extract_fields, outcome_from_fields


DEFAULT_MAX_WORKERS = int(os.getenv("CHESS_STATS_MAX_WORKERS", "8"))

# Archive URLs end in ".../games/YYYY/MM"
MONTH_KEY_LENGTH = 7


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class MonthlySummary:
    """Aggregated statistics for one monthly archive."""

    archive_url: str
    archive_month: str  # "YYYY/MM"
    total_seconds: Seconds
    game_count: int  # Games with PGN text; includes UNKNOWN outcomes
    wins: int
    losses: int
    draws: int

    @property
    def hours(self) -> int:
        return int(self.total_seconds // 3600)

    @property
    def minutes(self) -> int:
        return int((self.total_seconds % 3600) // 60)

    @property
    def record(self) -> str:
        return f"{self.wins}/{self.losses}/{self.draws}"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class AggregateTotals:
    """Sums of all monthly summaries."""

    total_seconds: Seconds = 0
    game_count: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0

    @property
    def record(self) -> str:
        return f"{self.wins}/{self.losses}/{self.draws}"


# =============================================================================
# Summaries
# =============================================================================

def archive_month_key(archive_url: str) -> str:
    """Month key of an archive: the trailing "YYYY/MM" of its URL."""
    return archive_url[-MONTH_KEY_LENGTH:]


def summarize_month(games: Iterable[dict], username: str, archive_url: str) -> MonthlySummary:
    """
    Summarize one month of games for a player.

    Games without PGN text are skipped and not counted at all. Games the
    player cannot be matched to, or without a usable result, are counted
    in game_count but in none of wins/losses/draws.

    Args:
        games: Game dictionaries from the chess.com API.
        username: The player whose record to compute.
        archive_url: URL of the archive the games came from.

    Returns:
        MonthlySummary for the archive.
    """
    total_seconds = 0
    game_count = 0
    tally = {Outcome.WIN: 0, Outcome.LOSS: 0, Outcome.DRAW: 0}

    for game in games:
        if not game or not game.get("pgn"):
            continue
        game_count += 1
        fields = extract_fields(game)
        total_seconds += elapsed_seconds(fields.start_time, fields.end_time)

        outcome = outcome_from_fields(fields, username)
        if outcome in tally:
            tally[outcome] += 1

    return MonthlySummary(
        archive_url=archive_url,
        archive_month=archive_month_key(archive_url),
        total_seconds=total_seconds,
        game_count=game_count,
        wins=tally[Outcome.WIN],
        losses=tally[Outcome.LOSS],
        draws=tally[Outcome.DRAW],
    )


def summarize_all_months(
    username: str,
    list_archives: Callable[[str], list[str]] = fetch_archives,
    fetch_games: Callable[[str], list[dict]] = fetch_archive_games,
    max_workers: Optional[int] = None,
    verbose: bool = False,
) -> list[MonthlySummary]:
    """
    Summarize every monthly archive of a player.

    Months are fetched and summarized concurrently. The result keeps the
    order returned by list_archives. As soon as any fetch fails, that
    exception propagates, months still pending are cancelled and no
    summaries are returned.

    Args:
        username: Chess.com username.
        list_archives: Returns the player's archive URLs.
        fetch_games: Returns the games of one archive URL.
        max_workers: Thread pool size (default: CHESS_STATS_MAX_WORKERS or 8).
        verbose: Print one line per summarized month.

    Returns:
        List of MonthlySummary, empty if the player has no archives.
    """
    archive_urls = list(list_archives(username) or [])
    if not archive_urls:
        return []

    def summarize(archive_url: str) -> MonthlySummary:
        summary = summarize_month(fetch_games(archive_url) or [], username, archive_url)
        if verbose:
            print(f"  {summary.archive_month}: {summary.game_count} games")
        return summary

    workers = min(max_workers or DEFAULT_MAX_WORKERS, len(archive_urls))
    executor = ThreadPoolExecutor(max_workers=workers)
    try:
        futures = [executor.submit(summarize, url) for url in archive_urls]
        done, _ = wait(futures, return_when=FIRST_EXCEPTION)
        for future in futures:
            if future in done and future.exception() is not None:
                raise future.exception()
        return [future.result() for future in futures]
    finally:
        # In-flight fetches finish on their own; their results are dropped
        executor.shutdown(wait=False, cancel_futures=True)


def most_recent_summary(username: str, **kwargs) -> Optional[MonthlySummary]:
    """
    Summary of the player's latest archive.

    Keyword arguments are passed through to summarize_all_months().

    Returns:
        The last summary in archive order, or None if there are no archives.
    """
    summaries = summarize_all_months(username, **kwargs)
    if not summaries:
        return None
    return summaries[-1]


def sort_newest_first(summaries: Iterable[MonthlySummary]) -> list[MonthlySummary]:
    """Order summaries by month, most recent first."""
    return sorted(summaries, key=lambda s: s.archive_month, reverse=True)


def compute_totals(summaries: Iterable[MonthlySummary]) -> AggregateTotals:
    """Add up time, games and results over all summaries."""
    totals = AggregateTotals()
    for summary in summaries:
        totals.total_seconds += summary.total_seconds
        totals.game_count += summary.game_count
        totals.wins += summary.wins
        totals.losses += summary.losses
        totals.draws += summary.draws
    return totals
