"""
Command-line interface

Runs the business reports against a cleaned order-lines file and prints
them as a table, JSON or CSV.

Usage:
    retail-insights top-sellers --source data/orders.csv
    retail-insights monthly-sales --years 2022 2023 --output json
    retail-insights all --output csv
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

import polars as pl
import structlog

from retail_insights.analytics.exceptions import ReportError
from retail_insights.analytics.export import jsonable, results_to_frame, results_to_records
from retail_insights.analytics.models import ReportRow
from retail_insights.analytics.queries import ReportEngine
from retail_insights.config import get_settings
from retail_insights.config.logging import configure_logging
from retail_insights.ingestion.snapshot import FactTableSnapshot

logger = structlog.get_logger(__name__)

REPORTS = {
    "top-products": "top_revenue_products",
    "top-sellers": "top_sellers_by_region",
    "monthly-sales": "monthly_sales_comparison",
    "category-peaks": "category_peak_months",
    "subcategory-growth": "top_subcategory_profit_growth",
    "subcategory-growth-all": "subcategory_profit_growth",
}

# Reports run by "all", in presentation order
DEFAULT_REPORTS = [
    "top-products",
    "top-sellers",
    "monthly-sales",
    "category-peaks",
    "subcategory-growth",
]

LIMITED = {"top_revenue_products", "top_sellers_by_region"}
YEARLY = {"monthly_sales_comparison", "subcategory_profit_growth", "top_subcategory_profit_growth"}

EXIT_OK = 0
EXIT_REPORT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="retail-insights",
        description="Business reports over the retail order-lines fact table",
    )
    parser.add_argument("report", choices=sorted(REPORTS) + ["all"], help="Report to run")
    parser.add_argument("--source", help="Cleaned order-lines file (default: DATA_ORDERS_PATH)")
    parser.add_argument("--file-format", choices=["csv", "parquet"], help="Source format (default: from suffix)")
    parser.add_argument(
        "--output",
        choices=["table", "json", "csv"],
        default="table",
        help="Output format (default: table)",
    )
    parser.add_argument("--limit", type=int, help="Rows per ranking (top-products, top-sellers)")
    parser.add_argument("--years", type=int, nargs=2, metavar=("YEAR_A", "YEAR_B"), help="Years to compare")
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    return parser


def _params(report: str, args: argparse.Namespace) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    if report in LIMITED and args.limit is not None:
        params["limit"] = args.limit
    if report in YEARLY and args.years is not None:
        params["years"] = tuple(args.years)
    return params


def render(rows: List[ReportRow], output: str) -> str:
    """Format one report's rows"""
    if output == "json":
        return json.dumps([jsonable(r) for r in results_to_records(rows)], indent=2)

    frame = results_to_frame(rows)
    if output == "csv":
        return frame.write_csv()

    with pl.Config(tbl_rows=-1, tbl_cols=-1, tbl_hide_dataframe_shape=True):
        return str(frame)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, log_format="text")
    settings = get_settings()

    source = args.source or settings.data.orders_path
    names = DEFAULT_REPORTS if args.report == "all" else [args.report]

    try:
        snapshot = FactTableSnapshot.load(source, args.file_format)
        engine = ReportEngine(snapshot, settings.reports)
        results = {name: engine.run(REPORTS[name], **_params(REPORTS[name], args)) for name in names}
    except (ReportError, FileNotFoundError, ValueError) as e:
        logger.error("Report failed", error=str(e), error_type=type(e).__name__)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_REPORT_ERROR

    if args.output == "json" and len(results) > 1:
        print(json.dumps(
            {name: [jsonable(r) for r in results_to_records(rows)] for name, rows in results.items()},
            indent=2,
        ))
        return EXIT_OK

    for name, rows in results.items():
        if len(results) > 1:
            print(f"# {name}")
        print(render(rows, args.output))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
