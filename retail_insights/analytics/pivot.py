"""
Period Pivot

Reshapes aggregates keyed by (period, year) into one row per period with a
value per target year, like SUM(CASE WHEN year = X THEN v ELSE 0 END).
"""

from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Sequence, Tuple

import structlog

from .arithmetic import DEFAULT_PRECISION, ZERO, guarded, round_half_up
from .models import AggregateRow, PivotRow

logger = structlog.get_logger(__name__)

KeyPart = Callable[[Tuple[Any, ...]], Any]


def _first(key: Tuple[Any, ...]) -> Any:
    return key[0]


def _second(key: Tuple[Any, ...]) -> Any:
    return key[1]


def pivot(
    rows: Iterable[AggregateRow],
    measure: str,
    years: Sequence[int],
    period: KeyPart = _first,
    year: KeyPart = _second,
    places: int = 2,
    precision: int = DEFAULT_PRECISION,
) -> List[PivotRow]:
    """
    Pivot yearly aggregates into wide rows.

    Every period present in the input yields a row, even when none of its
    rows fall in a target year. A (period, year) pair without rows is 0.
    Values are rounded half-up to `places` once, after summation.

    Args:
        rows: Aggregates whose key holds a period and a year
        measure: Measure to spread across the year columns
        years: Target years, in column order
        period: Key -> period (default: first key part)
        year: Key -> year (default: second key part)
        places: Decimal places of the output values

    Returns:
        PivotRows ordered by period
    """
    targets = list(years)
    if not targets or len(set(targets)) != len(targets):
        raise ValueError(f"Pivot years must be distinct and non-empty, got {targets}")

    sums: Dict[Any, Dict[int, Decimal]] = {}
    with guarded(precision):
        for row in rows:
            values = sums.setdefault(period(row.key), {y: ZERO for y in targets})
            row_year = year(row.key)
            if row_year in values:
                values[row_year] = values[row_year] + row[measure]

    pivoted = [
        PivotRow(
            period=p,
            values={y: round_half_up(v, places) for y, v in sums[p].items()},
        )
        for p in sorted(sums)
    ]

    logger.debug("Pivoted periods", periods=len(pivoted), years=targets, measure=measure)
    return pivoted
