"""
Per-game metadata extraction from chess.com game records.

Reads the bracketed PGN header tags of a single game and turns them into:
- The participants and declared result
- The wall-clock time the game took (StartTime/EndTime tags)
- The outcome from a given player's perspective

Malformed or missing data never raises: it degrades to None, 0 seconds
or Outcome.UNKNOWN so that monthly aggregation can carry on.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


SECONDS_PER_DAY = 24 * 60 * 60

# Declared results we know how to attribute
WHITE_WINS = "1-0"
BLACK_WINS = "0-1"
DRAWN = "1/2-1/2"
RESULT_CODES = (WHITE_WINS, BLACK_WINS, DRAWN)

Seconds = Union[int, float]

# Plain ASCII decimal, as found in StartTime/EndTime tags
NUMBER_PATTERN = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*", re.ASCII)


class Outcome(Enum):
    """Result of one game from the queried player's side of the board."""
    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"
    UNKNOWN = "unknown"  # Player not found in game, or no usable result


@dataclass
class ExtractedFields:
    """Header fields pulled out of one game's PGN."""
    white: Optional[str]
    black: Optional[str]
    start_time: Optional[Seconds]  # Seconds since midnight
    end_time: Optional[Seconds]
    result: Optional[str]  # One of RESULT_CODES, else None


# =============================================================================
# Tag and clock parsing
# =============================================================================

def extract_tag(pgn: str, tag_name: str) -> Optional[str]:
    """
    Find a PGN header tag value.

    Only tags of the form [TagName "value"] at the start of a line are
    matched. The tag name is case-sensitive and the first match wins.

    Args:
        pgn: PGN text of a single game.
        tag_name: Header name, e.g. "White" or "StartTime".

    Returns:
        The tag value, or None if the tag is absent or empty.
    """
    if not pgn:
        return None
    pattern = re.compile(rf'^\[{re.escape(tag_name)} "([^"]+)"\]', re.MULTILINE)
    match = pattern.search(pgn)
    return match.group(1) if match else None


def _parse_number(text: str) -> Optional[Seconds]:
    if not NUMBER_PATTERN.fullmatch(text):
        return None
    text = text.strip()
    if text.lstrip("+-").isdigit():
        return int(text)
    return float(text)


def parse_clock_time(value: Optional[str]) -> Optional[Seconds]:
    """
    Parse an "H:MM:SS" clock string to seconds since midnight.

    Components are not range-checked, so "25:61:61" still converts.

    Args:
        value: Clock string such as "10:30:00".

    Returns:
        Seconds, or None if the value is missing, does not have exactly
        three components, or any component is not numeric.
    """
    if not value:
        return None

    parts = value.split(":")
    if len(parts) != 3:
        return None

    numbers = [_parse_number(part) for part in parts]
    if any(number is None for number in numbers):
        return None

    hours, minutes, seconds = numbers
    return hours * 3600 + minutes * 60 + seconds


def elapsed_seconds(start: Optional[Seconds], end: Optional[Seconds]) -> Seconds:
    """
    Seconds between two clock readings of the same or the following day.

    Games that cross midnight (end < start) wrap around. A game that starts
    and ends at the identical time counts as 0 seconds.

    Returns:
        Value in [0, 86400), or 0 when either reading is missing.
    """
    if start is None or end is None:
        return 0
    return ((end - start) + SECONDS_PER_DAY) % SECONDS_PER_DAY


# =============================================================================
# Game-level extraction
# =============================================================================

def _structured_username(game: dict, color: str) -> Optional[str]:
    side = game.get(color) or {}
    if not isinstance(side, dict):
        return None
    return side.get("username") or None


def extract_fields(game: dict) -> ExtractedFields:
    """
    Extract participants, clock times and result from a chess.com game.

    The White/Black PGN tags take precedence over the structured
    white.username/black.username fields.

    Args:
        game: Game dictionary from the chess.com API.

    Returns:
        ExtractedFields for the game.
    """
    pgn = game.get("pgn") or ""

    result = extract_tag(pgn, "Result")
    if result not in RESULT_CODES:
        result = None

    return ExtractedFields(
        white=extract_tag(pgn, "White") or _structured_username(game, "white"),
        black=extract_tag(pgn, "Black") or _structured_username(game, "black"),
        start_time=parse_clock_time(extract_tag(pgn, "StartTime")),
        end_time=parse_clock_time(extract_tag(pgn, "EndTime")),
        result=result,
    )


def game_elapsed_seconds(game: dict) -> Seconds:
    """Time the game took according to its StartTime/EndTime tags."""
    fields = extract_fields(game)
    return elapsed_seconds(fields.start_time, fields.end_time)


def player_outcome(game: dict, username: str) -> Outcome:
    """
    Classify a game as win/loss/draw for the given player.

    Username comparison is case-insensitive.

    Args:
        game: Game dictionary from the chess.com API.
        username: The player whose perspective to take.

    Returns:
        Outcome. UNKNOWN when the player is on neither side or the game
        has no recognizable result.
    """
    if not username or not game.get("pgn"):
        return Outcome.UNKNOWN
    return outcome_from_fields(extract_fields(game), username)


def outcome_from_fields(fields: ExtractedFields, username: str) -> Outcome:
    """Outcome for a player given already extracted header fields."""
    if not username:
        return Outcome.UNKNOWN

    player = username.lower()
    is_white = fields.white is not None and fields.white.lower() == player
    is_black = fields.black is not None and fields.black.lower() == player
    if not is_white and not is_black:
        return Outcome.UNKNOWN

    if fields.result == WHITE_WINS:
        return Outcome.WIN if is_white else Outcome.LOSS
    if fields.result == BLACK_WINS:
        return Outcome.WIN if is_black else Outcome.LOSS
    if fields.result == DRAWN:
        return Outcome.DRAW
    return Outcome.UNKNOWN
