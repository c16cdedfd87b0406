"""
Growth Calculator

Year-over-year delta between two pivoted columns.
"""

from operator import attrgetter
from typing import Iterable, List

import structlog

from .arithmetic import DEFAULT_PRECISION, guarded
from .exceptions import EmptyResultError
from .models import GrowthRow, PivotRow

logger = structlog.get_logger(__name__)


def compute_growth(
    rows: Iterable[PivotRow],
    year_a: int,
    year_b: int,
    precision: int = DEFAULT_PRECISION,
) -> List[GrowthRow]:
    """
    Compute growth = value[year_b] - value[year_a] for every row.

    Returns:
        GrowthRows sorted by growth descending, ties by period ascending
    """
    if year_a == year_b:
        raise ValueError("Growth needs two different years")

    with guarded(precision):
        grown = [
            GrowthRow(
                row=row,
                year_a=year_a,
                year_b=year_b,
                growth=row.value(year_b) - row.value(year_a),
            )
            for row in rows
        ]

    grown.sort(key=attrgetter("period"))
    grown.sort(key=attrgetter("growth"), reverse=True)
    return grown


def select_max_growth(
    rows: Iterable[PivotRow],
    year_a: int,
    year_b: int,
    precision: int = DEFAULT_PRECISION,
) -> GrowthRow:
    """
    Row with the highest growth.

    Raises:
        EmptyResultError: if there are no rows to choose from
    """
    grown = compute_growth(rows, year_a, year_b, precision=precision)
    if not grown:
        raise EmptyResultError(f"No rows to compare between {year_a} and {year_b}")

    leader = grown[0]
    logger.debug("Selected highest growth", period=leader.period, growth=str(leader.growth))
    return leader
