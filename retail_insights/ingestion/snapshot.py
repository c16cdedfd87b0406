"""
Fact Table Snapshot

Read-only, validated collection of order lines that every report runs
against. Snapshots are built from records, from polars or pandas
DataFrames, or from CSV / Parquet files holding the cleaned table.

A snapshot is all-or-nothing: if any row is invalid the whole snapshot is
rejected with InvalidInput.
"""

from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple, Union

import pandas as pd
import polars as pl
import structlog
from pydantic import ValidationError

from retail_insights.analytics.exceptions import InvalidInput
from retail_insights.analytics.models import OrderLine
from retail_insights.quality.validators import ValidationStatus, create_order_lines_validator

logger = structlog.get_logger(__name__)


class FileFormat(str, Enum):
    """Supported file formats"""
    CSV = "csv"
    PARQUET = "parquet"


class FactTableSnapshot:
    """
    Immutable snapshot of the order-lines fact table.

    Iterating a snapshot always yields the same rows in the same order, so
    any number of reports can scan it, concurrently if need be.

    Example:
        snapshot = FactTableSnapshot.load("data/orders.csv")
        engine = ReportEngine(snapshot)
    """

    __slots__ = ("_rows", "source")

    def __init__(self, rows: Iterable[OrderLine] = (), source: Optional[str] = None):
        self._rows: Tuple[OrderLine, ...] = tuple(rows)
        self.source = source

    def __iter__(self) -> Iterator[OrderLine]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __getitem__(self, index: int) -> OrderLine:
        return self._rows[index]

    def __repr__(self) -> str:
        return f"FactTableSnapshot(rows={len(self._rows)}, source={self.source!r})"

    @property
    def rows(self) -> Tuple[OrderLine, ...]:
        return self._rows

    @classmethod
    def from_records(
        cls,
        records: Iterable[Union[OrderLine, Mapping[str, Any]]],
        source: Optional[str] = None,
    ) -> "FactTableSnapshot":
        """
        Build a snapshot from mappings (or ready-made OrderLines).

        Raises:
            InvalidInput: on the first row that fails validation
        """
        rows = []
        for index, record in enumerate(records):
            if isinstance(record, OrderLine):
                rows.append(record)
                continue
            try:
                rows.append(OrderLine.model_validate(record))
            except ValidationError as e:
                errors = e.errors(include_url=False)
                fields = sorted({".".join(str(p) for p in err["loc"]) for err in errors})
                logger.error("Rejected snapshot", row_index=index, fields=fields, source=source)
                raise InvalidInput(
                    f"Row {index} is invalid: {', '.join(fields)}",
                    row_index=index,
                    errors=errors,
                ) from e

        snapshot = cls(rows, source=source)
        logger.info("Snapshot built", rows=len(snapshot), source=source)
        return snapshot

    @classmethod
    def from_frame(
        cls,
        df: Union[pl.DataFrame, pd.DataFrame],
        source: Optional[str] = None,
        validate: bool = True,
    ) -> "FactTableSnapshot":
        """
        Build a snapshot from a polars or pandas DataFrame.

        Frame-level checks (required columns present and non-null,
        non-negative quantity) run first, then every row is parsed.

        Raises:
            InvalidInput: if a frame check fails or a row is invalid
        """
        if isinstance(df, pd.DataFrame):
            df = pl.from_pandas(df)

        if validate:
            result = create_order_lines_validator().validate(df)
            if result.status == ValidationStatus.FAILED:
                messages = [check.message for check in result.errors]
                logger.error("Rejected snapshot", failed_checks=[c.name for c in result.errors], source=source)
                raise InvalidInput(
                    f"Fact table failed validation: {'; '.join(messages)}",
                    errors=[{"check": c.name, "msg": c.message} for c in result.errors],
                )

        return cls.from_records(df.iter_rows(named=True), source=source)

    @classmethod
    def from_csv(cls, path: Union[str, Path], separator: str = ",", encoding: str = "utf-8") -> "FactTableSnapshot":
        """
        Load a cleaned CSV file.

        Every column is read as text, so amounts reach Decimal without a
        float round trip; quantity is cast to an integer column.
        """
        path = Path(path)
        df = pl.read_csv(path, separator=separator, encoding=encoding, infer_schema_length=0)
        if "quantity" in df.columns:
            df = df.with_columns(pl.col("quantity").cast(pl.Int64, strict=False))
        logger.info("Read fact table file", file=str(path), rows=len(df), format=FileFormat.CSV.value)
        return cls.from_frame(df, source=str(path))

    @classmethod
    def from_parquet(cls, path: Union[str, Path]) -> "FactTableSnapshot":
        """Load a cleaned Parquet file"""
        path = Path(path)
        df = pl.read_parquet(path)
        logger.info("Read fact table file", file=str(path), rows=len(df), format=FileFormat.PARQUET.value)
        return cls.from_frame(df, source=str(path))

    @classmethod
    def load(
        cls,
        path: Union[str, Path],
        file_format: Optional[Union[str, FileFormat]] = None,
    ) -> "FactTableSnapshot":
        """
        Load a snapshot from a file.

        Args:
            path: File holding the cleaned order lines
            file_format: csv or parquet; inferred from the suffix when omitted
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        fmt = FileFormat(file_format or path.suffix.lstrip(".").lower())
        readers = {
            FileFormat.CSV: cls.from_csv,
            FileFormat.PARQUET: cls.from_parquet,
        }
        return readers[fmt](path)
