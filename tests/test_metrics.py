"""Unit tests for the rating and earnings formulas."""

from datetime import date

import pytest

import metrics
from entities import CourierFactors, CourierType
from errors import DateRangeError

REFERENCE_FACTORS = {
    CourierType.FOOT: CourierFactors(cost=2, rate=3),
    CourierType.BIKE: CourierFactors(cost=3, rate=2),
    CourierType.AUTO: CourierFactors(cost=4, rate=1),
}


class TestEarnings:
    """Test suite for metrics.earnings."""

    def test_auto_earnings_are_linear_in_costs(self):
        assert metrics.earnings([5, 10, 15], CourierType.AUTO, REFERENCE_FACTORS) == 120

    def test_each_type_uses_its_cost_factor(self):
        assert metrics.earnings([100], CourierType.FOOT, REFERENCE_FACTORS) == 200
        assert metrics.earnings([100], CourierType.BIKE, REFERENCE_FACTORS) == 300

    def test_empty_costs(self):
        assert metrics.earnings([], CourierType.BIKE, REFERENCE_FACTORS) == 0

    def test_custom_factor_table(self):
        factors = dict(REFERENCE_FACTORS)
        factors[CourierType.AUTO] = CourierFactors(cost=10, rate=1)
        assert metrics.earnings([1, 2], CourierType.AUTO, factors) == 30


class TestRating:
    """Test suite for metrics.rating."""

    def test_auto_rating_rounds_down(self):
        # 3 / 24 * 1 = 0.125
        assert metrics.rating(3, '2023-05-01', '2023-05-02', CourierType.AUTO, REFERENCE_FACTORS) == 0

    def test_bike_rating_rounds_up(self):
        # 7 / 24 * 2 = 0.583
        assert metrics.rating(7, '2023-05-01', '2023-05-02', CourierType.BIKE, REFERENCE_FACTORS) == 1

    def test_foot_rating_over_several_days(self):
        # 96 / 72 * 3 = 4
        assert metrics.rating(96, '2023-05-01', '2023-05-04', CourierType.FOOT, REFERENCE_FACTORS) == 4

    def test_half_is_rounded_away_from_zero(self):
        # 12 / 24 * 1 = 0.5, round() would give 0
        assert metrics.rating(12, '2023-05-01', '2023-05-02', CourierType.AUTO, REFERENCE_FACTORS) == 1
        # 60 / 24 * 1 = 2.5, round() would give 2
        assert metrics.rating(60, '2023-05-01', '2023-05-02', CourierType.AUTO, REFERENCE_FACTORS) == 3

    def test_accepts_dates(self):
        assert metrics.rating(7, date(2023, 5, 1), date(2023, 5, 2), CourierType.BIKE, REFERENCE_FACTORS) == 1

    @pytest.mark.parametrize('start_date,end_date', [
        ('2023-13-01', '2023-05-02'),
        ('2023-05-01', 'yesterday'),
        ('01.05.2023', '2023-05-02'),
        ('', '2023-05-02'),
    ])
    def test_malformed_dates(self, start_date, end_date):
        with pytest.raises(DateRangeError):
            metrics.rating(1, start_date, end_date, CourierType.AUTO, REFERENCE_FACTORS)

    def test_zero_length_window(self):
        with pytest.raises(DateRangeError):
            metrics.rating(1, '2023-05-01', '2023-05-01', CourierType.AUTO, REFERENCE_FACTORS)


@pytest.mark.parametrize('value,expected', [(0.5, 1), (1.49, 1), (2.5, 3), (-0.5, -1), (-1.5, -2), (0.0, 0)])
def test_round_half_away_from_zero(value, expected):
    assert metrics.round_half_away_from_zero(value) == expected


def test_default_factors_come_from_config():
    # reference deployment factors
    assert metrics.earnings([5, 10, 15], CourierType.AUTO) == 120
    assert metrics.rating(7, '2023-05-01', '2023-05-02', CourierType.BIKE) == 1


@pytest.mark.parametrize('value', ['2023-5-1', '2023-05-1', '23-05-01', '2023-05-01 ', None])
def test_parse_date_requires_zero_padded_fields(value):
    with pytest.raises(DateRangeError):
        metrics.parse_date(value)


def test_parse_date():
    assert metrics.parse_date('2023-05-01') == date(2023, 5, 1)
