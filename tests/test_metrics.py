"""Tests for vegam.core.metrics – WPM and accuracy."""

from __future__ import annotations

import pytest

from vegam.core.metrics import SessionMetrics, compute, round_half_up


# ---------------------------------------------------------------------------
# round_half_up
# ---------------------------------------------------------------------------

class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, expected",
        [(0.0, 0), (0.4, 0), (0.5, 1), (1.2, 1), (2.5, 3), (66.666, 67), (99.5, 100)],
    )
    def test_values(self, value, expected):
        assert round_half_up(value) == expected

    def test_negative_ties_away_from_zero(self):
        assert round_half_up(-2.5) == -3


# ---------------------------------------------------------------------------
# compute – WPM
# ---------------------------------------------------------------------------

class TestWpm:
    @pytest.mark.parametrize("chars, errors", [(0, 0), (10, 0), (50, 7)])
    def test_zero_elapsed_gives_zero(self, chars, errors):
        assert compute(0, chars, errors).wpm == 0

    def test_one_minute_of_fifty_chars(self):
        assert compute(60, 50, 0).wpm == 10

    def test_half_minute(self):
        # (3 / 5) / 0.5 = 1.2
        assert compute(30, 3, 0).wpm == 1

    def test_rounds_half_up(self):
        # (25 / 5) / (120 / 60) = 2.5
        assert compute(120, 25, 0).wpm == 3

    def test_errors_do_not_change_wpm(self):
        assert compute(60, 100, 30).wpm == compute(60, 100, 0).wpm


# ---------------------------------------------------------------------------
# compute – accuracy
# ---------------------------------------------------------------------------

class TestAccuracy:
    def test_nothing_typed_is_full_accuracy(self):
        assert compute(30, 0, 0).accuracy == 100

    def test_perfect(self):
        assert compute(10, 20, 0).accuracy == 100

    def test_one_of_three_wrong(self):
        assert compute(60, 3, 1).accuracy == 67

    def test_all_wrong(self):
        assert compute(60, 4, 4).accuracy == 0

    def test_clamped_at_zero(self):
        assert compute(60, 2, 5).accuracy == 0

    def test_rounds_half_up(self):
        # 7 / 8 = 87.5%
        assert compute(60, 8, 1).accuracy == 88


class TestValidation:
    @pytest.mark.parametrize("args", [(-1, 0, 0), (0, -1, 0), (0, 0, -1)])
    def test_negative_inputs_rejected(self, args):
        with pytest.raises(ValueError):
            compute(*args)


# ---------------------------------------------------------------------------
# SessionMetrics
# ---------------------------------------------------------------------------

class TestSessionMetrics:
    def test_fields(self):
        m = compute(30, 3, 0)
        assert m == SessionMetrics(elapsed_seconds=30, total_characters=3, error_count=0, wpm=1, accuracy=100)

    def test_words(self):
        assert compute(60, 12, 0).words == 2
        assert compute(60, 13, 0).words == 3

    def test_frozen(self):
        m = compute(60, 10, 0)
        with pytest.raises(AttributeError):
            m.wpm = 99
