"""Tests for Mythic+ score coercion."""

import math

import pytest

from guttakrutt.shared.utils import coerce_score


class TestCoerceScore:
    """Tests for coerce_score()."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (673.312, 673),
            ("673.312", 673),
            (672.5, 673),
            (2450, 2450),
            (" 1999.7 ", 2000),
        ],
    )
    def test_numbers_round_to_nearest(self, value, expected):
        assert coerce_score(value) == expected

    @pytest.mark.parametrize(
        "value",
        [None, "n/a", "", -12.5, 0, math.nan, math.inf, True, [], {}],
    )
    def test_unusable_values_become_zero(self, value):
        assert coerce_score(value) == 0
