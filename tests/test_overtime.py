"""Tests for the regular/extra split."""

import pytest

from timeclock.engine import InvalidInterval, split


class TestSplit:
    """Tests for split."""

    def test_within_threshold_is_all_regular(self):
        regular, extra = split(2.0, 5.0)

        assert regular == 5.0
        assert extra == 0.0

    def test_exactly_reaching_threshold(self):
        regular, extra = split(6.0, 2.0)

        assert regular == 2.0
        assert extra == 0.0

    def test_straddling_threshold(self):
        regular, extra = split(6.0, 4.0)

        assert regular == 2.0
        assert extra == 2.0

    def test_threshold_already_exhausted(self):
        regular, extra = split(8.0, 3.0)

        assert regular == 0.0
        assert extra == 3.0

    def test_prior_above_threshold(self):
        regular, extra = split(9.5, 1.0)

        assert regular == 0.0
        assert extra == 1.0

    def test_single_long_interval(self):
        regular, extra = split(0.0, 10.25)

        assert regular == 8.0
        assert extra == 2.25

    def test_custom_threshold(self):
        regular, extra = split(5.0, 3.0, threshold=7.0)

        assert regular == 2.0
        assert extra == 1.0

    def test_zero_interval(self):
        assert split(3.0, 0.0) == (0.0, 0.0)

    def test_negative_interval_rejected(self):
        with pytest.raises(InvalidInterval):
            split(0.0, -1.0)

    @pytest.mark.parametrize(
        "prior,interval",
        [(0.0, 0.1), (3.3, 4.7), (7.9, 0.2), (8.0, 1.0), (12.0, 0.5), (1.234, 9.876)],
    )
    def test_parts_sum_to_interval(self, prior, interval):
        regular, extra = split(prior, interval)

        assert regular >= 0.0
        assert extra >= 0.0
        assert regular + extra == pytest.approx(interval, abs=1e-9)
        if prior >= 8.0:
            assert regular == 0.0
        elif prior + interval <= 8.0:
            assert extra == 0.0
        else:
            assert regular == pytest.approx(8.0 - prior)
