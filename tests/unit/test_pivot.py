"""
Unit Tests - Pivot and Growth
"""
from decimal import Decimal

import pytest

from retail_insights.analytics.exceptions import ArithmeticOverflow, EmptyResultError
from retail_insights.analytics.growth import compute_growth, select_max_growth
from retail_insights.analytics.models import AggregateRow, PivotRow
from retail_insights.analytics.pivot import pivot


def yearly(period, year, value: str) -> AggregateRow:
    return AggregateRow(key=(period, year), measures={"sales": Decimal(value)})


def wide(period, a: str, b: str) -> PivotRow:
    return PivotRow(period=period, values={2022: Decimal(a), 2023: Decimal(b)})


class TestPivot:
    """Tests for pivot"""

    def test_zero_fill(self):
        """A period missing in one year shows 0 for it"""
        rows = [yearly("Chairs", 2022, "10.00"), yearly("Tables", 2023, "20.00")]

        result = pivot(rows, "sales", (2022, 2023))

        assert [(r.period, r.value(2022), r.value(2023)) for r in result] == [
            ("Chairs", Decimal("10.00"), Decimal("0.00")),
            ("Tables", Decimal("0.00"), Decimal("20.00")),
        ]

    def test_other_years_ignored(self):
        """Rows outside the target years do not contribute"""
        rows = [
            yearly("Chairs", 2021, "999.00"),
            yearly("Chairs", 2022, "10.00"),
            yearly("Chairs", 2023, "15.00"),
        ]

        result = pivot(rows, "sales", (2022, 2023))

        assert result[0].value(2022) == Decimal("10.00")
        assert result[0].value(2023) == Decimal("15.00")

    def test_period_only_in_other_years_kept_as_zero(self):
        """A period without target-year rows still yields an all-zero row"""
        result = pivot([yearly("Binders", 2021, "60.00")], "sales", (2022, 2023))

        assert len(result) == 1
        assert result[0].value(2022) == result[0].value(2023) == Decimal("0")

    def test_ordered_by_period(self):
        """Output is sorted by period"""
        rows = [yearly(11, 2022, "1.00"), yearly(1, 2023, "2.00"), yearly(6, 2022, "3.00")]

        assert [r.period for r in pivot(rows, "sales", (2022, 2023))] == [1, 6, 11]

    def test_duplicate_keys_are_summed(self):
        """Several rows for one (period, year) add up"""
        rows = [yearly(1, 2022, "1.10"), yearly(1, 2022, "2.20")]

        assert pivot(rows, "sales", (2022, 2023))[0].value(2022) == Decimal("3.30")

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("1.005", "1.01"),
            ("-1.005", "-1.01"),
            ("2.004", "2.00"),
            ("7", "7.00"),
        ],
    )
    def test_rounds_half_up(self, value, expected):
        """Values are rounded half away from zero to two places"""
        result = pivot([yearly(1, 2022, value)], "sales", (2022, 2023))

        rounded = result[0].value(2022)
        assert rounded == Decimal(expected)
        assert rounded.as_tuple().exponent == -2

    def test_custom_places(self):
        """Output scale follows places"""
        result = pivot([yearly(1, 2022, "1.25")], "sales", (2022, 2023), places=1)

        assert result[0].value(2022) == Decimal("1.3")

    def test_empty_input(self):
        """No rows, no periods"""
        assert pivot([], "sales", (2022, 2023)) == []

    def test_overflow_is_reported(self):
        """Summing past the precision raises instead of rounding"""
        rows = [yearly(1, 2022, "999.99"), yearly(1, 2022, "1.00")]

        with pytest.raises(ArithmeticOverflow):
            pivot(rows, "sales", (2022, 2023), precision=5)

    @pytest.mark.parametrize("years", [(), (2022, 2022)])
    def test_invalid_years(self, years):
        """Target years must be distinct and non-empty"""
        with pytest.raises(ValueError):
            pivot([yearly(1, 2022, "1.00")], "sales", years)


class TestGrowth:
    """Tests for compute_growth and select_max_growth"""

    def test_growth_is_b_minus_a(self):
        """Positive and negative deltas"""
        result = compute_growth([wide("Tables", "-50.00", "30.00"), wide("Phones", "50.00", "40.00")], 2022, 2023)

        assert {g.period: g.growth for g in result} == {
            "Tables": Decimal("80.00"),
            "Phones": Decimal("-10.00"),
        }

    def test_sorted_by_growth_descending(self):
        """Highest growth first"""
        rows = [wide("A", "0", "1"), wide("B", "0", "5"), wide("C", "0", "-2")]

        assert [g.period for g in compute_growth(rows, 2022, 2023)] == ["B", "A", "C"]

    def test_ties_by_period(self):
        """Equal growth keeps period order"""
        rows = [wide("Tables", "0", "10"), wide("Chairs", "5", "15")]

        assert [g.period for g in compute_growth(rows, 2022, 2023)] == ["Chairs", "Tables"]

    def test_exposes_both_values(self):
        """GrowthRow carries the compared values"""
        g = compute_growth([wide("Paper", "5.25", "7.75")], 2022, 2023)[0]

        assert (g.value_a, g.value_b, g.growth) == (Decimal("5.25"), Decimal("7.75"), Decimal("2.50"))

    def test_overflow_is_reported(self):
        """A difference needing more digits than the precision raises"""
        rows = [wide("Tables", "-999.99", "999.99")]

        with pytest.raises(ArithmeticOverflow):
            compute_growth(rows, 2022, 2023, precision=5)

    def test_within_precision(self):
        """Differences that fit the precision are exact"""
        rows = [wide("Tables", "-499.99", "499.99")]

        assert compute_growth(rows, 2022, 2023, precision=5)[0].growth == Decimal("999.98")

    def test_same_year_rejected(self):
        """Growth needs two different years"""
        with pytest.raises(ValueError):
            compute_growth([wide("A", "1", "2")], 2022, 2022)

    def test_select_max(self):
        """Tables grows by 50.00 and wins over Chairs"""
        rows = [wide("Tables", "100.00", "150.00"), wide("Chairs", "80.00", "90.00")]

        leader = select_max_growth(rows, 2022, 2023)

        assert leader.period == "Tables"
        assert leader.growth == Decimal("50.00")

    def test_select_max_tie(self):
        """Alphabetically first period wins a tie"""
        rows = [wide("Tables", "0", "10"), wide("Chairs", "0", "10")]

        assert select_max_growth(rows, 2022, 2023).period == "Chairs"

    def test_select_max_empty(self):
        """No rows raises EmptyResultError"""
        with pytest.raises(EmptyResultError):
            select_max_growth([], 2022, 2023)
