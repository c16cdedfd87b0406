"""
Test Suite Configuration
"""
from datetime import date
from typing import Any, Callable, Dict, List

import polars as pl
import pytest

from retail_insights.analytics.models import OrderLine
from retail_insights.config import ReportSettings, Settings
from retail_insights.ingestion.snapshot import FactTableSnapshot


BASE_LINE: Dict[str, Any] = {
    "order_id": 1,
    "order_date": date(2022, 1, 15),
    "ship_mode": "Standard Class",
    "segment": "Consumer",
    "country": "United States",
    "city": "Henderson",
    "state": "Kentucky",
    "postal_code": "42420",
    "region": "South",
    "category": "Furniture",
    "sub_category": "Chairs",
    "product_id": "FUR-CH-10000454",
    "quantity": 2,
    "discount": "0.00",
    "sale_price": "100.00",
    "profit": "10.00",
}

# (order_id, order_date, region, category, sub_category, product_id, sale_price, profit)
SAMPLE_LINES = [
    (1, date(2022, 1, 10), "East", "Technology", "Phones", "TEC-PH-1", "500.00", "50.00"),
    (2, date(2023, 1, 5), "East", "Technology", "Phones", "TEC-PH-1", "300.00", "40.00"),
    (3, date(2022, 3, 1), "East", "Furniture", "Chairs", "FUR-CH-1", "200.00", "-20.00"),
    (4, date(2023, 3, 15), "East", "Furniture", "Tables", "FUR-TA-1", "150.00", "30.00"),
    (5, date(2023, 11, 20), "West", "Technology", "Copiers", "TEC-CO-1", "1200.00", "400.00"),
    (6, date(2022, 11, 2), "West", "Office Supplies", "Paper", "OFF-PA-1", "20.50", "5.25"),
    (7, date(2023, 11, 3), "West", "Office Supplies", "Paper", "OFF-PA-1", "30.25", "7.75"),
    (8, date(2023, 6, 30), "West", "Furniture", "Chairs", "FUR-CH-1", "250.00", "25.00"),
    (9, date(2022, 6, 1), "South", "Furniture", "Tables", "FUR-TA-1", "400.00", "-50.00"),
    (10, date(2021, 12, 31), "South", "Office Supplies", "Binders", "OFF-BI-1", "60.00", "12.00"),
]


def line_record(**overrides) -> Dict[str, Any]:
    """Raw order-line mapping with sensible defaults"""
    return {**BASE_LINE, **overrides}


@pytest.fixture
def make_record() -> Callable[..., Dict[str, Any]]:
    """Factory for raw order-line mappings"""
    return line_record


@pytest.fixture
def make_line() -> Callable[..., OrderLine]:
    """Factory for validated OrderLines"""
    def factory(**overrides) -> OrderLine:
        return OrderLine.model_validate(line_record(**overrides))
    return factory


@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    """Raw records of the sample fact table"""
    return [
        line_record(
            order_id=order_id,
            order_date=order_date,
            region=region,
            category=category,
            sub_category=sub_category,
            product_id=product_id,
            sale_price=sale_price,
            profit=profit,
        )
        for order_id, order_date, region, category, sub_category, product_id, sale_price, profit in SAMPLE_LINES
    ]


@pytest.fixture
def sample_lines(sample_records) -> List[OrderLine]:
    """Validated order lines of the sample fact table"""
    return [OrderLine.model_validate(r) for r in sample_records]


@pytest.fixture
def sample_snapshot(sample_records) -> FactTableSnapshot:
    """Snapshot of the sample fact table"""
    return FactTableSnapshot.from_records(sample_records, source="sample")


@pytest.fixture
def sample_frame(sample_records) -> pl.DataFrame:
    """Sample fact table as a polars DataFrame"""
    return pl.DataFrame(sample_records)


@pytest.fixture
def sample_csv(tmp_path, sample_frame) -> str:
    """Sample fact table written to a CSV file"""
    path = tmp_path / "orders.csv"
    sample_frame.write_csv(path)
    return str(path)


@pytest.fixture
def report_settings() -> ReportSettings:
    """Report settings with the default parameters"""
    return ReportSettings(comparison_years=[2022, 2023])


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(
        app_env="testing",
        debug=True,
    )
