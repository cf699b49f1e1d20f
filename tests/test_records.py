"""
Tests for per-game record extraction.

Tests verify that:
1. PGN header tags are found only at line starts, first match wins
2. Clock strings parse to seconds, malformed ones to None
3. Elapsed time wraps around midnight and never goes negative
4. Outcomes are resolved from the queried player's side, case-insensitively

Run with: pytest tests/test_records.py -v
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from chess_stats.records import (
    ExtractedFields,
    Outcome,
    SECONDS_PER_DAY,
    elapsed_seconds,
    extract_fields,
    extract_tag,
    game_elapsed_seconds,
    outcome_from_fields,
    parse_clock_time,
    player_outcome,
)


# =============================================================================
# Test Games
# =============================================================================

ALICE_BEATS_BOB = (
    '[Event "Live Chess"]\n'
    '[Site "Chess.com"]\n'
    '[White "alice"]\n'
    '[Black "bob"]\n'
    '[Result "1-0"]\n'
    '[StartTime "10:00:00"]\n'
    '[EndTime "10:30:00"]\n'
    '\n'
    '1. e4 e5 2. Qh5 Nc6 3. Bc4 Nf6 4. Qxf7# 1-0\n'
)


def game_with(pgn: str, white: str | None = None, black: str | None = None) -> dict:
    game = {"pgn": pgn}
    if white is not None:
        game["white"] = {"username": white}
    if black is not None:
        game["black"] = {"username": black}
    return game


# =============================================================================
# Tests for extract_tag
# =============================================================================

class TestExtractTag:
    """Tests for locating PGN header tags."""

    def test_finds_tag_value(self):
        assert extract_tag(ALICE_BEATS_BOB, "White") == "alice"
        assert extract_tag(ALICE_BEATS_BOB, "Result") == "1-0"

    def test_missing_tag_is_none(self):
        assert extract_tag(ALICE_BEATS_BOB, "ECO") is None

    def test_tag_name_is_case_sensitive(self):
        assert extract_tag(ALICE_BEATS_BOB, "white") is None

    def test_first_match_wins(self):
        pgn = '[White "first"]\n[White "second"]\n'
        assert extract_tag(pgn, "White") == "first"

    def test_tag_must_start_a_line(self):
        """A tag-like string inside move comments is ignored."""
        pgn = '[Event "x"]\n\n1. e4 {[White "fake"]} e5\n'
        assert extract_tag(pgn, "White") is None

    def test_prefix_of_longer_tag_does_not_match(self):
        """WhiteElo must not satisfy a lookup for White."""
        pgn = '[WhiteElo "1500"]\n'
        assert extract_tag(pgn, "White") is None

    def test_metacharacters_in_tag_name_are_escaped(self):
        """Regex metacharacters are matched literally."""
        pgn = '[Te.st "literal"]\n[Teast "other"]\n'
        assert extract_tag(pgn, "Te.st") == "literal"
        assert extract_tag('[Teast "other"]\n', "Te.st") is None
        assert extract_tag('[A+B "plus"]\n', "A+B") == "plus"

    def test_empty_value_is_none(self):
        assert extract_tag('[White ""]\n', "White") is None

    def test_empty_pgn_is_none(self):
        assert extract_tag("", "White") is None

    def test_crlf_line_endings(self):
        pgn = '[White "alice"]\r\n[Black "bob"]\r\n'
        assert extract_tag(pgn, "Black") == "bob"


# =============================================================================
# Tests for parse_clock_time
# =============================================================================

class TestParseClockTime:
    """Tests for H:MM:SS clock parsing."""

    def test_parses_hours_minutes_seconds(self):
        assert parse_clock_time("10:30:15") == 10 * 3600 + 30 * 60 + 15

    def test_midnight_is_zero(self):
        assert parse_clock_time("00:00:00") == 0

    def test_two_components_is_invalid(self):
        assert parse_clock_time("12:00") is None

    def test_four_components_is_invalid(self):
        assert parse_clock_time("1:2:3:4") is None

    @pytest.mark.parametrize("value", ["aa:00:00", "10:xx:00", "10:00:", "nan:00:00", "inf:00:00"])
    def test_non_numeric_component_is_invalid(self, value):
        assert parse_clock_time(value) is None

    @pytest.mark.parametrize("value", ["1_0:00:00", "\u0661\u0660:00:00", "10:00:\uff10\uff10"])
    def test_only_ascii_decimal_components(self, value):
        """Underscored or non-ASCII digits are not numbers in clock tags."""
        assert parse_clock_time(value) is None

    def test_signed_and_exponent_components(self):
        assert parse_clock_time("+1:-1:1e1") == 3600 - 60 + 10.0

    def test_missing_value_is_invalid(self):
        assert parse_clock_time(None) is None
        assert parse_clock_time("") is None

    def test_out_of_range_components_still_convert(self):
        """No bounds checks: 25:61:61 is plain arithmetic."""
        assert parse_clock_time("25:61:61") == 25 * 3600 + 61 * 60 + 61

    def test_fractional_seconds(self):
        assert parse_clock_time("0:00:01.5") == 1.5


# =============================================================================
# Tests for elapsed_seconds
# =============================================================================

class TestElapsedSeconds:
    """Tests for day-rollover elapsed time."""

    def test_same_day(self):
        assert elapsed_seconds(36000, 37800) == 1800

    def test_cross_midnight_wraps(self):
        start = parse_clock_time("23:50:00")
        end = parse_clock_time("00:10:00")
        assert elapsed_seconds(start, end) == 1200

    def test_identical_times_are_zero(self):
        assert elapsed_seconds(5000, 5000) == 0

    def test_missing_start_or_end_is_zero(self):
        assert elapsed_seconds(None, 100) == 0
        assert elapsed_seconds(100, None) == 0
        assert elapsed_seconds(None, None) == 0

    def test_malformed_value_contributes_zero(self):
        assert elapsed_seconds(parse_clock_time("12:00"), parse_clock_time("13:00:00")) == 0

    @pytest.mark.parametrize("start,end", [
        (0, 0),
        (0, 86399),
        (86399, 0),
        (43200, 43199),
        (3600, 7200),
        (80000, 100),
    ])
    def test_result_stays_within_one_day(self, start, end):
        result = elapsed_seconds(start, end)
        assert 0 <= result < SECONDS_PER_DAY
        assert result == (end - start) % SECONDS_PER_DAY

    def test_out_of_range_readings_never_negative(self):
        """Readings above one day still wrap into range."""
        start = parse_clock_time("30:00:00")
        end = parse_clock_time("01:00:00")
        assert 0 <= elapsed_seconds(start, end) < SECONDS_PER_DAY


# =============================================================================
# Tests for extract_fields
# =============================================================================

class TestExtractFields:
    """Tests for whole-game field extraction."""

    def test_reads_all_fields(self):
        fields = extract_fields(game_with(ALICE_BEATS_BOB))
        assert fields == ExtractedFields(
            white="alice",
            black="bob",
            start_time=36000,
            end_time=37800,
            result="1-0",
        )

    def test_tags_take_precedence_over_structured_fields(self):
        fields = extract_fields(game_with(ALICE_BEATS_BOB, white="carol", black="dave"))
        assert fields.white == "alice"
        assert fields.black == "bob"

    def test_structured_fields_used_when_tags_missing(self, pgn_factory):
        pgn = pgn_factory(Result="0-1")
        fields = extract_fields(game_with(pgn, white="carol", black="dave"))
        assert fields.white == "carol"
        assert fields.black == "dave"

    def test_unrecognized_result_is_none(self, pgn_factory):
        fields = extract_fields(game_with(pgn_factory(Result="*")))
        assert fields.result is None

    def test_game_without_pgn(self):
        fields = extract_fields({"white": {"username": "alice"}})
        assert fields.white == "alice"
        assert fields.black is None
        assert fields.result is None
        assert fields.start_time is None

    def test_game_elapsed_seconds(self):
        assert game_elapsed_seconds(game_with(ALICE_BEATS_BOB)) == 1800


# =============================================================================
# Tests for player_outcome
# =============================================================================

class TestPlayerOutcome:
    """Tests for outcome classification from the player's side."""

    def test_loser_sees_loss(self):
        assert player_outcome(game_with(ALICE_BEATS_BOB), "bob") == Outcome.LOSS

    def test_winner_sees_win(self):
        assert player_outcome(game_with(ALICE_BEATS_BOB), "alice") == Outcome.WIN

    def test_black_win(self, pgn_factory):
        game = game_with(pgn_factory(White="alice", Black="bob", Result="0-1"))
        assert player_outcome(game, "bob") == Outcome.WIN
        assert player_outcome(game, "alice") == Outcome.LOSS

    def test_draw_for_white(self, pgn_factory):
        game = game_with(pgn_factory(White="alice", Black="bob", Result="1/2-1/2"))
        assert player_outcome(game, "alice") == Outcome.DRAW
        assert player_outcome(game, "bob") == Outcome.DRAW

    def test_unknown_player(self):
        assert player_outcome(game_with(ALICE_BEATS_BOB), "carol") == Outcome.UNKNOWN

    def test_case_insensitive_username(self, pgn_factory):
        game = game_with(pgn_factory(White="Magnus", Black="hikaru", Result="1-0"))
        assert player_outcome(game, "magnus") == Outcome.WIN
        assert player_outcome(game, "MAGNUS") == Outcome.WIN
        assert player_outcome(game, "Hikaru") == Outcome.LOSS

    def test_structured_username_match(self, pgn_factory):
        game = game_with(pgn_factory(Result="1-0"), white="Alice", black="bob")
        assert player_outcome(game, "alice") == Outcome.WIN

    def test_missing_result_is_unknown(self, pgn_factory):
        game = game_with(pgn_factory(White="alice", Black="bob"))
        assert player_outcome(game, "alice") == Outcome.UNKNOWN

    def test_unrecognized_result_is_unknown(self, pgn_factory):
        game = game_with(pgn_factory(White="alice", Black="bob", Result="*"))
        assert player_outcome(game, "alice") == Outcome.UNKNOWN

    def test_missing_pgn_is_unknown(self):
        assert player_outcome({"white": {"username": "alice"}}, "alice") == Outcome.UNKNOWN

    def test_empty_username_is_unknown(self):
        assert player_outcome(game_with(ALICE_BEATS_BOB), "") == Outcome.UNKNOWN

    def test_outcome_from_extracted_fields(self):
        fields = ExtractedFields(white="Alice", black="bob", start_time=None, end_time=None, result="0-1")
        assert outcome_from_fields(fields, "alice") == Outcome.LOSS
        assert outcome_from_fields(fields, "BOB") == Outcome.WIN
        assert outcome_from_fields(fields, "") == Outcome.UNKNOWN
