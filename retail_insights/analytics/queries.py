"""
Business Reports

The fixed set of questions answered over the order-lines fact table. Each
report is a pure function of the rows and its parameters, composed from the
aggregate, rank, pivot and growth stages.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import structlog

from retail_insights.config import ReportSettings
from .aggregator import Aggregator, by
from .arithmetic import DEFAULT_PRECISION
from .growth import compute_growth, select_max_growth
from .models import (
    CategoryPeakMonth,
    GrowthRow,
    MonthlySalesComparison,
    OrderLine,
    RegionalTopSeller,
    ReportRow,
    SubCategoryProfitGrowth,
    TopRevenueProduct,
)
from .pivot import pivot
from .ranker import RankEquals, TopK, key_parts, rank, whole_table

logger = structlog.get_logger(__name__)

DEFAULT_YEARS = (2022, 2023)


def _year_pair(years: Sequence[int]) -> Tuple[int, int]:
    if len(years) != 2 or years[0] == years[1]:
        raise ValueError(f"Exactly two distinct years are required, got {list(years)}")
    return int(years[0]), int(years[1])


def top_revenue_products(
    rows: Iterable[OrderLine],
    limit: int = 10,
    precision: int = DEFAULT_PRECISION,
) -> List[TopRevenueProduct]:
    """Products with the highest total sales, keyed by (product_id, category)"""
    aggregates = Aggregator(precision).aggregate(
        rows,
        by("product_id", "category"),
        {"total_profit": "profit", "total_sales": "sale_price"},
    )
    ranked = rank(aggregates, whole_table, "total_sales", TopK(limit))
    return [
        TopRevenueProduct(
            product_id=r.key[0],
            category=r.key[1],
            total_profit=r["total_profit"],
            total_sales=r["total_sales"],
        )
        for r in ranked
    ]


def top_sellers_by_region(
    rows: Iterable[OrderLine],
    limit: int = 5,
    precision: int = DEFAULT_PRECISION,
) -> List[RegionalTopSeller]:
    """Highest-selling products of every region, ordered by region then rank"""
    aggregates = Aggregator(precision).aggregate(
        rows,
        by("region", "product_id"),
        {"sales": "sale_price"},
    )
    ranked = rank(aggregates, key_parts(0), "sales", TopK(limit))
    return [
        RegionalTopSeller(region=r.key[0], product_id=r.key[1], sales=r["sales"], rank=r.rank)
        for r in ranked
    ]


def monthly_sales_comparison(
    rows: Iterable[OrderLine],
    years: Sequence[int] = DEFAULT_YEARS,
    places: int = 2,
    precision: int = DEFAULT_PRECISION,
) -> List[MonthlySalesComparison]:
    """
    Sales per calendar month in each of two years, e.g. Jan 2022 vs Jan 2023.

    Only rows ordered in one of the two years are considered. Months are
    ordered 1..12; a month without sales in one year shows 0 for it.
    """
    year_a, year_b = _year_pair(years)
    aggregates = Aggregator(precision).aggregate(
        rows,
        by("order_month", "order_year"),
        {"sales": "sale_price"},
        where=lambda row: row.order_year in (year_a, year_b),
    )
    pivoted = pivot(aggregates, "sales", (year_a, year_b), places=places, precision=precision)
    grown = sorted(
        compute_growth(pivoted, year_a, year_b, precision=precision),
        key=lambda g: g.period,
    )
    return [
        MonthlySalesComparison(
            order_month=g.period,
            sales={year_a: g.value_a, year_b: g.value_b},
            growth=g.growth,
        )
        for g in grown
    ]


def category_peak_months(
    rows: Iterable[OrderLine],
    precision: int = DEFAULT_PRECISION,
) -> List[CategoryPeakMonth]:
    """Month (YYYYMM) with the highest sales for each category"""
    aggregates = Aggregator(precision).aggregate(
        rows,
        by("category", "order_year_month"),
        {"sales": "sale_price"},
    )
    ranked = rank(aggregates, key_parts(0), "sales", RankEquals(1))
    return [
        CategoryPeakMonth(category=r.key[0], order_year_month=r.key[1], sales=r["sales"], rank=r.rank)
        for r in ranked
    ]


def _subcategory_profit_pivot(rows, year_a, year_b, places, precision):
    aggregates = Aggregator(precision).aggregate(
        rows,
        by("sub_category", "order_year"),
        {"total_profit": "profit"},
    )
    return pivot(aggregates, "total_profit", (year_a, year_b), places=places, precision=precision)


def _growth_row(g: GrowthRow) -> SubCategoryProfitGrowth:
    return SubCategoryProfitGrowth(
        sub_category=g.period,
        profit={g.year_a: g.value_a, g.year_b: g.value_b},
        profit_growth=g.growth,
    )


def subcategory_profit_growth(
    rows: Iterable[OrderLine],
    years: Sequence[int] = DEFAULT_YEARS,
    places: int = 2,
    precision: int = DEFAULT_PRECISION,
) -> List[SubCategoryProfitGrowth]:
    """Every sub-category's profit growth between two years, highest first"""
    year_a, year_b = _year_pair(years)
    pivoted = _subcategory_profit_pivot(rows, year_a, year_b, places, precision)
    return [_growth_row(g) for g in compute_growth(pivoted, year_a, year_b, precision=precision)]


def top_subcategory_profit_growth(
    rows: Iterable[OrderLine],
    years: Sequence[int] = DEFAULT_YEARS,
    places: int = 2,
    precision: int = DEFAULT_PRECISION,
) -> List[SubCategoryProfitGrowth]:
    """
    Sub-category whose profit grew the most between two years.

    Ties go to the alphabetically first sub-category.

    Raises:
        EmptyResultError: if there are no rows at all
    """
    year_a, year_b = _year_pair(years)
    pivoted = _subcategory_profit_pivot(rows, year_a, year_b, places, precision)
    return [_growth_row(select_max_growth(pivoted, year_a, year_b, precision=precision))]


class ReportEngine:
    """
    Runs the business reports against one fact table snapshot.

    Limits, compared years and precision come from ReportSettings.

    Example:
        engine = ReportEngine(snapshot)
        rows = engine.top_sellers_by_region()
        everything = engine.run_all()
    """

    REPORTS = (
        "top_revenue_products",
        "top_sellers_by_region",
        "monthly_sales_comparison",
        "category_peak_months",
        "top_subcategory_profit_growth",
    )

    def __init__(self, rows: Iterable[OrderLine], settings: Optional[ReportSettings] = None):
        # Materialized so every report can scan the rows again
        self.rows = rows if hasattr(rows, "__len__") else list(rows)
        self.settings = settings or ReportSettings()

    @property
    def precision(self) -> int:
        return self.settings.sum_precision

    def top_revenue_products(self, limit: Optional[int] = None) -> List[TopRevenueProduct]:
        return top_revenue_products(
            self.rows,
            limit=limit if limit is not None else self.settings.top_products_limit,
            precision=self.precision,
        )

    def top_sellers_by_region(self, limit: Optional[int] = None) -> List[RegionalTopSeller]:
        return top_sellers_by_region(
            self.rows,
            limit=limit if limit is not None else self.settings.top_sellers_per_region,
            precision=self.precision,
        )

    def monthly_sales_comparison(self, years: Optional[Sequence[int]] = None) -> List[MonthlySalesComparison]:
        return monthly_sales_comparison(
            self.rows,
            years=years if years is not None else self.settings.year_pair,
            places=self.settings.output_places,
            precision=self.precision,
        )

    def category_peak_months(self) -> List[CategoryPeakMonth]:
        return category_peak_months(self.rows, precision=self.precision)

    def subcategory_profit_growth(self, years: Optional[Sequence[int]] = None) -> List[SubCategoryProfitGrowth]:
        return subcategory_profit_growth(
            self.rows,
            years=years if years is not None else self.settings.year_pair,
            places=self.settings.output_places,
            precision=self.precision,
        )

    def top_subcategory_profit_growth(self, years: Optional[Sequence[int]] = None) -> List[SubCategoryProfitGrowth]:
        return top_subcategory_profit_growth(
            self.rows,
            years=years if years is not None else self.settings.year_pair,
            places=self.settings.output_places,
            precision=self.precision,
        )

    def run(self, report: str, **params) -> List[ReportRow]:
        """Run one report by name"""
        if report not in self.REPORTS and report != "subcategory_profit_growth":
            raise ValueError(f"Unknown report: {report}")

        logger.info("Running report", report=report, rows=len(self.rows), **params)
        result = getattr(self, report)(**params)
        logger.info("Report complete", report=report, result_rows=len(result))
        return result

    def run_all(self) -> Dict[str, List[ReportRow]]:
        """Run the five business reports with their configured parameters"""
        return {name: self.run(name) for name in self.REPORTS}
