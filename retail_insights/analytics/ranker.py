"""
Ranker

Ranks aggregates within partitions, the way ROW_NUMBER() OVER (PARTITION BY
... ORDER BY ...) does: rows are bucketed by partition in one pass and every
bucket is sorted on its own.

Ties on the ordering measure are broken by the grouping key in ascending
order, so ranks are always 1, 2, 3, ... with no gaps and no shared ranks.
"""

from collections import defaultdict
from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Callable, Dict, Iterable, List, Tuple, Union

import structlog

from .models import AggregateRow, RankedRow

logger = structlog.get_logger(__name__)

PartitionFunc = Callable[[AggregateRow], Tuple[Any, ...]]


def key_parts(*positions: int) -> PartitionFunc:
    """Partition by the given positions of the grouping key"""
    return lambda row: tuple(row.key[i] for i in positions)


def whole_table(row: AggregateRow) -> Tuple[Any, ...]:
    """Single partition holding every row"""
    return ()


@dataclass(frozen=True)
class TopK:
    """Keep ranks 1..k"""
    k: int

    def __post_init__(self):
        if self.k < 1:
            raise ValueError(f"k must be at least 1, got {self.k}")

    @property
    def last_rank(self) -> int:
        return self.k

    def keeps(self, rank: int) -> bool:
        return rank <= self.k


@dataclass(frozen=True)
class RankEquals:
    """Keep exactly one rank, usually the first"""
    rank: int = 1

    def __post_init__(self):
        if self.rank < 1:
            raise ValueError(f"rank must be at least 1, got {self.rank}")

    @property
    def last_rank(self) -> int:
        return self.rank

    def keeps(self, rank: int) -> bool:
        return rank == self.rank


LimitPolicy = Union[TopK, RankEquals]


def rank(
    rows: Iterable[AggregateRow],
    partition: PartitionFunc,
    order_by: str,
    policy: LimitPolicy,
    descending: bool = True,
) -> List[RankedRow]:
    """
    Rank rows within each partition and keep those the policy selects.

    Args:
        rows: Aggregates to rank
        partition: Row -> partition key (use whole_table for a global ranking)
        order_by: Measure that orders each partition
        policy: TopK(k) or RankEquals(n)
        descending: Largest measure first when True

    Returns:
        Kept rows sorted by partition, then by rank
    """
    buckets: Dict[Tuple[Any, ...], List[AggregateRow]] = defaultdict(list)
    for row in rows:
        buckets[partition(row)].append(row)

    ranked: List[RankedRow] = []
    for part in sorted(buckets):
        # Two stable sorts: key order first, so it survives as the tie-break
        ordered = sorted(buckets[part], key=attrgetter("key"))
        ordered.sort(key=lambda r: r[order_by], reverse=descending)

        for position, row in enumerate(ordered[:policy.last_rank], start=1):
            if policy.keeps(position):
                ranked.append(RankedRow(row=row, partition=part, rank=position))

    logger.debug(
        "Ranked partitions",
        partitions=len(buckets),
        rows_kept=len(ranked),
        order_by=order_by,
        policy=repr(policy),
    )
    return ranked
