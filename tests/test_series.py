from datetime import date

import pytest

from fx_compare_dashboard.indicators.series import DECIMATION_STRIDE, align, decimate, merge_latest
from fx_compare_dashboard.models import CombinedPoint, RatePoint

from tests.conftest import make_series


D1 = date(2024, 3, 11)


class TestMergeLatest:
    def test_appends_strictly_newer_point(self):
        history = make_series(D1, [4.00, 4.01, 4.02])
        latest = RatePoint(date=date(2024, 3, 14), rate=4.05)

        merged = merge_latest(history, latest)

        assert len(merged) == len(history) + 1
        assert merged[:-1] == history
        assert merged[-1] == latest

    def test_same_day_point_not_appended(self):
        history = make_series(D1, [4.00, 4.01, 4.02])
        latest = RatePoint(date=history[-1].date, rate=9.99)

        assert merge_latest(history, latest) is history

    def test_older_point_not_appended(self):
        history = make_series(D1, [4.00, 4.01, 4.02])
        latest = RatePoint(date=D1, rate=4.00)

        assert merge_latest(history, latest) is history

    def test_missing_latest(self):
        history = make_series(D1, [4.00])
        assert merge_latest(history, None) is history

    def test_empty_history_ignores_latest(self):
        latest = RatePoint(date=D1, rate=4.00)
        assert merge_latest((), latest) == ()


class TestAlign:
    def test_inner_join_in_first_series_order(self):
        a = (
            RatePoint(date(2024, 3, 11), 4.00),
            RatePoint(date(2024, 3, 12), 4.01),
            RatePoint(date(2024, 3, 14), 4.03),
        )
        b = (
            RatePoint(date(2024, 3, 12), 3.61),
            RatePoint(date(2024, 3, 13), 3.62),
            RatePoint(date(2024, 3, 14), 3.63),
        )

        result = align(a, b)

        assert result == (
            CombinedPoint(date(2024, 3, 12), 4.01, 3.61),
            CombinedPoint(date(2024, 3, 14), 4.03, 3.63),
        )
        assert len(result) <= min(len(a), len(b))
        assert {p.date for p in result} == {p.date for p in a} & {p.date for p in b}

    def test_disjoint_calendars_give_empty_result(self):
        a = make_series(date(2024, 3, 1), [1.0, 1.1, 1.2], step=2)
        b = make_series(date(2024, 3, 2), [2.0, 2.1, 2.2], step=2)
        assert align(a, b) == ()

    def test_empty_side(self):
        a = make_series(D1, [4.00, 4.01])
        assert align(a, ()) == ()
        assert align((), a) == ()


class TestDecimate:
    @pytest.mark.parametrize("n", [1, 2, 3, 4, 7, 10])
    def test_keeps_last_and_halves_length(self, n):
        seq = list(range(n))
        result = decimate(seq)

        assert result[-1] == seq[-1]
        assert len(result) == (n + 1) // 2

    def test_anchored_on_last_element(self):
        assert decimate([0, 1, 2]) == (0, 2)
        assert decimate([0, 1, 2, 3]) == (1, 3)

    def test_empty(self):
        assert decimate([]) == ()

    def test_custom_stride(self):
        assert decimate(list(range(7)), stride=3) == (0, 3, 6)
        assert decimate([0, 1, 2], stride=1) == (0, 1, 2)

    def test_invalid_stride(self):
        with pytest.raises(ValueError):
            decimate([1, 2, 3], stride=0)

    def test_default_stride_is_two_days(self):
        assert DECIMATION_STRIDE == 2
