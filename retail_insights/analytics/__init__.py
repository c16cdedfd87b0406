"""
Analytics Module
"""
from .aggregator import Aggregator, aggregate, by
from .exceptions import ArithmeticOverflow, EmptyResultError, InvalidInput, ReportError
from .growth import compute_growth, select_max_growth
from .models import (
    AggregateRow,
    CategoryPeakMonth,
    GrowthRow,
    MonthlySalesComparison,
    OrderLine,
    PivotRow,
    RankedRow,
    RegionalTopSeller,
    SubCategoryProfitGrowth,
    TopRevenueProduct,
)
from .pivot import pivot
from .queries import (
    ReportEngine,
    category_peak_months,
    monthly_sales_comparison,
    subcategory_profit_growth,
    top_revenue_products,
    top_sellers_by_region,
    top_subcategory_profit_growth,
)
from .ranker import RankEquals, TopK, key_parts, rank, whole_table

__all__ = [
    "Aggregator",
    "aggregate",
    "by",
    "rank",
    "key_parts",
    "whole_table",
    "TopK",
    "RankEquals",
    "pivot",
    "compute_growth",
    "select_max_growth",
    "ReportEngine",
    "top_revenue_products",
    "top_sellers_by_region",
    "monthly_sales_comparison",
    "category_peak_months",
    "subcategory_profit_growth",
    "top_subcategory_profit_growth",
    "OrderLine",
    "AggregateRow",
    "RankedRow",
    "PivotRow",
    "GrowthRow",
    "TopRevenueProduct",
    "RegionalTopSeller",
    "MonthlySalesComparison",
    "CategoryPeakMonth",
    "SubCategoryProfitGrowth",
    "ReportError",
    "InvalidInput",
    "EmptyResultError",
    "ArithmeticOverflow",
]
