"""
Report export helpers.

Turns report rows into polars DataFrames or plain JSON-ready records for
presentation layers (CLI, notebooks, files).
"""

from decimal import Decimal
from typing import Any, Dict, Iterable, List

import polars as pl

from .models import ReportRow


def results_to_records(rows: Iterable[ReportRow]) -> List[Dict[str, Any]]:
    """Flatten report rows with the report's column names"""
    return [row.as_record() for row in rows]


def results_to_frame(rows: Iterable[ReportRow]) -> pl.DataFrame:
    """
    Render report rows as a DataFrame.

    Amounts become two-place decimal columns. An empty report yields an
    empty DataFrame.
    """
    records = results_to_records(rows)
    if not records:
        return pl.DataFrame()

    columns: Dict[str, List[Any]] = {name: [r[name] for r in records] for name in records[0]}
    series = []
    for name, values in columns.items():
        if any(isinstance(v, Decimal) for v in values):
            series.append(pl.Series(name, values, dtype=pl.Decimal(precision=38, scale=2)))
        else:
            series.append(pl.Series(name, values))
    return pl.DataFrame(series)


def jsonable(record: Dict[str, Any]) -> Dict[str, Any]:
    """Record with decimals rendered as strings, keeping their exact value"""
    return {k: str(v) if isinstance(v, Decimal) else v for k, v in record.items()}
