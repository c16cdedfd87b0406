"""
Report API Endpoints

REST API over the fixed business reports. Reports are computed synchronously,
so the handlers are plain functions and run in the threadpool.
"""

from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query
import structlog

from retail_insights.analytics.models import (
    CategoryPeakMonth,
    MonthlySalesComparison,
    RegionalTopSeller,
    SubCategoryProfitGrowth,
    TopRevenueProduct,
)
from retail_insights.analytics.queries import ReportEngine
from retail_insights.serving.api.dependencies import get_engine

router = APIRouter()
logger = structlog.get_logger(__name__)


def _years(year_a: Optional[int], year_b: Optional[int]) -> Optional[Tuple[int, int]]:
    """Both years or neither; None falls back to the configured pair"""
    if year_a is None and year_b is None:
        return None
    if year_a is None or year_b is None:
        raise HTTPException(status_code=422, detail="year_a and year_b must be given together")
    if year_a == year_b:
        raise HTTPException(status_code=422, detail="year_a and year_b must differ")
    return year_a, year_b


@router.get("/top-products", response_model=List[TopRevenueProduct])
def get_top_products(
    limit: Optional[int] = Query(None, ge=1, le=100),
    engine: ReportEngine = Depends(get_engine),
) -> List[TopRevenueProduct]:
    """Products with the highest revenue."""
    return engine.run("top_revenue_products", limit=limit)


@router.get("/top-sellers-by-region", response_model=List[RegionalTopSeller])
def get_top_sellers_by_region(
    limit: Optional[int] = Query(None, ge=1, le=100),
    engine: ReportEngine = Depends(get_engine),
) -> List[RegionalTopSeller]:
    """Highest-selling products in each region."""
    return engine.run("top_sellers_by_region", limit=limit)


@router.get("/monthly-sales", response_model=List[MonthlySalesComparison])
def get_monthly_sales(
    year_a: Optional[int] = None,
    year_b: Optional[int] = None,
    engine: ReportEngine = Depends(get_engine),
) -> List[MonthlySalesComparison]:
    """Month-by-month sales of two years side by side."""
    return engine.run("monthly_sales_comparison", years=_years(year_a, year_b))


@router.get("/category-peak-months", response_model=List[CategoryPeakMonth])
def get_category_peak_months(
    engine: ReportEngine = Depends(get_engine),
) -> List[CategoryPeakMonth]:
    """Best month of every category."""
    return engine.run("category_peak_months")


@router.get("/subcategory-profit-growth", response_model=List[SubCategoryProfitGrowth])
def get_subcategory_profit_growth(
    year_a: Optional[int] = None,
    year_b: Optional[int] = None,
    top_only: bool = True,
    engine: ReportEngine = Depends(get_engine),
) -> List[SubCategoryProfitGrowth]:
    """
    Profit growth by sub-category.

    With top_only (default) only the leader is returned; otherwise every
    sub-category, highest growth first.
    """
    report = "top_subcategory_profit_growth" if top_only else "subcategory_profit_growth"
    return engine.run(report, years=_years(year_a, year_b))
