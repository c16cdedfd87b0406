"""
Aggregator

Groups fact rows by a key and sums their measures in a single pass.
Partial sums are kept per group and flushed once the input is exhausted, so
rows may come from a fully materialized snapshot or from a generator.
"""

from operator import attrgetter
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

import structlog

from .arithmetic import DEFAULT_PRECISION, ZERO, guarded
from .models import AggregateRow, OrderLine

logger = structlog.get_logger(__name__)

KeyFunc = Callable[[OrderLine], Tuple[Any, ...]]
RowFilter = Callable[[OrderLine], bool]


def by(*fields: str) -> KeyFunc:
    """
    Build a grouping key from OrderLine attributes.

    Example:
        aggregate(rows, by("region", "product_id"), {"sales": "sale_price"})
    """
    if not fields:
        raise ValueError("At least one key field is required")
    getter = attrgetter(*fields)
    if len(fields) == 1:
        return lambda row: (getter(row),)
    return getter


class Aggregator:
    """
    Streaming hash aggregation over order lines.

    Each measure is the exact decimal sum of an OrderLine field across the
    rows that share a key. Keys without rows are never emitted.
    """

    def __init__(self, precision: int = DEFAULT_PRECISION):
        self.precision = precision

    def aggregate(
        self,
        rows: Iterable[OrderLine],
        key: KeyFunc,
        measures: Mapping[str, str],
        where: Optional[RowFilter] = None,
    ) -> List[AggregateRow]:
        """
        Group rows and sum measures.

        Args:
            rows: Order lines, consumed once
            key: Row -> grouping key tuple
            measures: Output measure name -> OrderLine field to sum
            where: Optional filter applied in the same pass

        Returns:
            One AggregateRow per distinct key, in key order

        Raises:
            ArithmeticOverflow: if a sum does not fit the configured precision
        """
        if not measures:
            raise ValueError("At least one measure is required")

        names = list(measures)
        fields = [measures[name] for name in names]
        partials: Dict[Tuple[Any, ...], List[Any]] = {}
        scanned = 0

        with guarded(self.precision):
            for row in rows:
                scanned += 1
                if where is not None and not where(row):
                    continue
                group = key(row)
                sums = partials.get(group)
                if sums is None:
                    sums = partials[group] = [ZERO] * len(fields)
                for i, field in enumerate(fields):
                    sums[i] = sums[i] + getattr(row, field)

        result = [
            AggregateRow(key=group, measures=dict(zip(names, sums)))
            for group, sums in sorted(partials.items(), key=lambda item: item[0])
        ]

        logger.debug(
            "Aggregated rows",
            rows_scanned=scanned,
            groups=len(result),
            measures=names,
        )
        return result


def aggregate(
    rows: Iterable[OrderLine],
    key: KeyFunc,
    measures: Mapping[str, str],
    where: Optional[RowFilter] = None,
    precision: int = DEFAULT_PRECISION,
) -> List[AggregateRow]:
    """Convenience wrapper around Aggregator.aggregate"""
    return Aggregator(precision).aggregate(rows, key, measures, where=where)
