"""
Report Data Model

Fact rows, the intermediate rows passed between query stages, and the
report rows handed to presentation layers.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .arithmetic import ZERO


# =============================================================================
# FACT ROW
# =============================================================================

class OrderLine(BaseModel):
    """
    One product line within an order.

    Rows are immutable. Amounts are fixed-point decimals with at most two
    decimal places; profit may be negative.
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    order_id: int
    order_date: date
    ship_mode: Optional[str] = None
    segment: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    region: str = Field(min_length=1)
    category: str = Field(min_length=1)
    sub_category: str = Field(min_length=1)
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=0)
    discount: Decimal = Field(decimal_places=2)
    sale_price: Decimal = Field(decimal_places=2)
    profit: Decimal = Field(decimal_places=2)

    @property
    def order_year(self) -> int:
        return self.order_date.year

    @property
    def order_month(self) -> int:
        return self.order_date.month

    @property
    def order_year_month(self) -> str:
        """Calendar month as YYYYMM"""
        return self.order_date.strftime("%Y%m")


# Columns every snapshot must carry
REQUIRED_COLUMNS = [
    "order_id",
    "order_date",
    "region",
    "category",
    "sub_category",
    "product_id",
    "quantity",
    "discount",
    "sale_price",
    "profit",
]

MONEY_COLUMNS = ["discount", "sale_price", "profit"]


# =============================================================================
# INTERMEDIATE ROWS
# =============================================================================

@dataclass(frozen=True)
class AggregateRow:
    """Grouping key plus the summed measures of the rows sharing it"""
    key: Tuple[Any, ...]
    measures: Mapping[str, Decimal]

    def __getitem__(self, measure: str) -> Decimal:
        return self.measures[measure]


@dataclass(frozen=True)
class RankedRow:
    """AggregateRow ranked within its partition (rank 1 = first)"""
    row: AggregateRow
    partition: Tuple[Any, ...]
    rank: int

    @property
    def key(self) -> Tuple[Any, ...]:
        return self.row.key

    def __getitem__(self, measure: str) -> Decimal:
        return self.row[measure]


@dataclass(frozen=True)
class PivotRow:
    """A period with one measure value per target year"""
    period: Any
    values: Mapping[int, Decimal]

    def value(self, year: int) -> Decimal:
        """Measure for `year`, zero when the period had no rows that year"""
        return self.values.get(year, ZERO)


@dataclass(frozen=True)
class GrowthRow:
    """PivotRow with the delta between two of its years"""
    row: PivotRow
    year_a: int
    year_b: int
    growth: Decimal

    @property
    def period(self) -> Any:
        return self.row.period

    @property
    def value_a(self) -> Decimal:
        return self.row.value(self.year_a)

    @property
    def value_b(self) -> Decimal:
        return self.row.value(self.year_b)


# =============================================================================
# REPORT ROWS
# =============================================================================

class ReportRow(BaseModel):
    """Base class for rows returned by the business reports"""

    model_config = ConfigDict(frozen=True)

    def as_record(self) -> Dict[str, Any]:
        """Flat dict using the report's column names"""
        return self.model_dump()


class TopRevenueProduct(ReportRow):
    """Product ranked by total sales"""
    product_id: str
    category: str
    total_profit: Decimal
    total_sales: Decimal


class RegionalTopSeller(ReportRow):
    """Product ranked by sales within its region"""
    region: str
    product_id: str
    sales: Decimal
    rank: int

    def as_record(self) -> Dict[str, Any]:
        return {
            "region": self.region,
            "product_id": self.product_id,
            "sales": self.sales,
            "rn": self.rank,
        }


class MonthlySalesComparison(ReportRow):
    """Sales of one calendar month in each compared year"""
    order_month: int = Field(ge=1, le=12)
    sales: Dict[int, Decimal]
    growth: Decimal

    def as_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {"order_month": self.order_month}
        for year, value in self.sales.items():
            record[f"sales_{year}"] = value
        record["sales_growth"] = self.growth
        return record


class CategoryPeakMonth(ReportRow):
    """Best-selling month of a category"""
    category: str
    order_year_month: str
    sales: Decimal
    rank: int = 1

    def as_record(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "order_year_month": self.order_year_month,
            "sales": self.sales,
            "rn": self.rank,
        }


class SubCategoryProfitGrowth(ReportRow):
    """Profit of a sub-category in each compared year and its growth"""
    sub_category: str
    profit: Dict[int, Decimal]
    profit_growth: Decimal

    def as_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {"sub_category": self.sub_category}
        for year, value in self.profit.items():
            record[f"profit_{year}"] = value
        record["profit_growth"] = self.profit_growth
        return record
