"""
Fixed-point decimal arithmetic for report measures.

Amounts are decimal.Decimal values with two decimal places. Sums run in a
dedicated context with a bounded number of significant digits and with the
Inexact, Overflow and InvalidOperation signals trapped, so a result that does
not fit is reported instead of being rounded away.
"""

from contextlib import contextmanager
from decimal import (
    ROUND_HALF_UP,
    Context,
    Decimal,
    DecimalException,
    Inexact,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import Iterator

from .exceptions import ArithmeticOverflow

ZERO = Decimal("0")
DEFAULT_PRECISION = 38


def make_context(precision: int = DEFAULT_PRECISION) -> Context:
    """Build the decimal context used for measure arithmetic"""
    return Context(
        prec=precision,
        rounding=ROUND_HALF_UP,
        traps=[Inexact, Overflow, InvalidOperation],
    )


@contextmanager
def guarded(precision: int = DEFAULT_PRECISION) -> Iterator[Context]:
    """
    Run decimal arithmetic in the measure context.

    Raises:
        ArithmeticOverflow: if any operation inside the block is inexact or
            overflows the context
    """
    with localcontext(make_context(precision)) as ctx:
        try:
            yield ctx
        except DecimalException as e:
            raise ArithmeticOverflow(
                f"Decimal arithmetic exceeded {precision} significant digits"
            ) from e


def round_half_up(value: Decimal, places: int = 2) -> Decimal:
    """Round to `places` decimal places, halves away from zero"""
    exponent = Decimal(1).scaleb(-places)
    # quantize may need more digits than the measure context allows
    with localcontext(Context(prec=max(value.adjusted() + places + 2, 28))):
        return value.quantize(exponent, rounding=ROUND_HALF_UP)
