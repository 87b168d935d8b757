"""Unit tests for trust_oracle.scoring.rounding."""
from __future__ import annotations

import pytest

from trust_oracle.scoring.rounding import clamp, round_half_away


class TestRoundHalfAway:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (180.5, 181),
            (2.5, 3),
            (0.5, 1),
            (-2.5, -3),
            (63.75, 64),
            (131.25, 131),
            (0.49, 0),
            (149.9999, 150),
            (0.0, 0),
        ],
    )
    def test_rounding(self, value: float, expected: int) -> None:
        assert round_half_away(value) == expected

    def test_returns_int(self) -> None:
        assert isinstance(round_half_away(1.2), int)


class TestClamp:
    def test_within_range(self) -> None:
        assert clamp(42, 150) == 42

    def test_above_ceiling(self) -> None:
        assert clamp(151, 150) == 150

    def test_below_zero(self) -> None:
        assert clamp(-3, 150) == 0
