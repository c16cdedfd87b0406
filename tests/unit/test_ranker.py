"""
Unit Tests - Ranker
"""
from decimal import Decimal

import pytest

from retail_insights.analytics.models import AggregateRow
from retail_insights.analytics.ranker import RankEquals, TopK, key_parts, rank, whole_table


def agg(region: str, product: str, sales: str) -> AggregateRow:
    return AggregateRow(key=(region, product), measures={"sales": Decimal(sales)})


@pytest.fixture
def regional_sales():
    return [
        agg("West", "P1", "100.00"),
        agg("East", "P2", "50.00"),
        agg("West", "P3", "300.00"),
        agg("East", "P4", "75.00"),
        agg("West", "P5", "200.00"),
        agg("East", "P6", "10.00"),
    ]


class TestRank:
    """Tests for rank"""

    def test_top_k_per_partition(self, regional_sales):
        """Top 2 of every region, ordered by region then rank"""
        result = rank(regional_sales, key_parts(0), "sales", TopK(2))

        assert [(r.partition, r.key[1], r.rank) for r in result] == [
            (("East",), "P4", 1),
            (("East",), "P2", 2),
            (("West",), "P3", 1),
            (("West",), "P5", 2),
        ]

    def test_rank_monotonicity(self, regional_sales):
        """Within a partition, measures never increase with rank"""
        result = rank(regional_sales, key_parts(0), "sales", TopK(10))

        for region in ("East", "West"):
            values = [r["sales"] for r in result if r.partition == (region,)]
            assert values == sorted(values, reverse=True)

    def test_fewer_rows_than_k(self, regional_sales):
        """A small partition is not padded"""
        result = rank(regional_sales, key_parts(0), "sales", TopK(5))
        east = [r for r in result if r.partition == ("East",)]

        assert [r.rank for r in east] == [1, 2, 3]

    def test_rank_equals_one(self, regional_sales):
        """Only the leader of each partition is kept"""
        result = rank(regional_sales, key_parts(0), "sales", RankEquals(1))

        assert [(r.key, r.rank) for r in result] == [(("East", "P4"), 1), (("West", "P3"), 1)]

    def test_rank_equals_other(self, regional_sales):
        """Any single rank can be selected"""
        result = rank(regional_sales, key_parts(0), "sales", RankEquals(3))

        assert [r.key for r in result] == [("East", "P6"), ("West", "P1")]

    def test_ties_broken_by_key(self):
        """Equal measures are ordered by key ascending"""
        rows = [agg("West", "P9", "100.00"), agg("West", "P1", "100.00"), agg("West", "P5", "100.00")]

        result = rank(rows, key_parts(0), "sales", TopK(3))

        assert [r.key[1] for r in result] == ["P1", "P5", "P9"]
        assert [r.rank for r in result] == [1, 2, 3]

    def test_ties_independent_of_input_order(self):
        """Reversed input ranks identically"""
        rows = [agg("West", "P9", "100.00"), agg("West", "P1", "100.00"), agg("West", "P5", "50.00")]

        forward = rank(rows, key_parts(0), "sales", TopK(3))
        backward = rank(list(reversed(rows)), key_parts(0), "sales", TopK(3))

        assert forward == backward

    def test_whole_table(self, regional_sales):
        """Global ranking across every row"""
        result = rank(regional_sales, whole_table, "sales", TopK(3))

        assert [r.key[1] for r in result] == ["P3", "P5", "P1"]
        assert all(r.partition == () for r in result)

    def test_ascending(self, regional_sales):
        """Smallest first when descending is off"""
        result = rank(regional_sales, whole_table, "sales", TopK(2), descending=False)

        assert [r.key[1] for r in result] == ["P6", "P2"]

    def test_empty_input(self):
        """Nothing to rank"""
        assert rank([], whole_table, "sales", TopK(5)) == []


class TestLimitPolicies:
    """Tests for TopK and RankEquals"""

    @pytest.mark.parametrize("k", [0, -1])
    def test_top_k_must_be_positive(self, k):
        """k below 1 is rejected"""
        with pytest.raises(ValueError):
            TopK(k)

    def test_rank_equals_must_be_positive(self):
        """rank below 1 is rejected"""
        with pytest.raises(ValueError):
            RankEquals(0)

    def test_keeps(self):
        """Policies select the expected ranks"""
        assert TopK(2).keeps(2) and not TopK(2).keeps(3)
        assert RankEquals(1).keeps(1) and not RankEquals(1).keeps(2)
