"""Tabular row model and dataset loading.

A Dataset is an immutable header plus ordered rows of string cells. Cells
are looked up by exact, case-sensitive column name.

Example:
    from ontocheck.core.rows import load_dataset

    dataset = load_dataset("animals.csv")
    for row in dataset:
        print(row.line, row.cell("is_a"))
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ontocheck.core.errors import ColumnNotFoundError, DatasetLoadError

logger = logging.getLogger(__name__)

TAB_SUFFIXES = frozenset({".tsv", ".tab"})


@dataclass(frozen=True)
class Header:
    """Ordered, unique column names captured from the first input line."""

    columns: tuple[str, ...]
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[str, int] = {}
        for position, name in enumerate(self.columns):
            if name in index:
                raise DatasetLoadError(
                    f"Duplicate column name '{name}' in header",
                    details={"column": name},
                )
            index[name] = position
        object.__setattr__(self, "_index", index)

    def index_of(self, column: str) -> int:
        """Get the position of a column.

        Raises:
            ColumnNotFoundError: If the column is not in the header
        """
        try:
            return self._index[column]
        except KeyError:
            raise ColumnNotFoundError(column, self.columns) from None

    def __contains__(self, column: object) -> bool:
        return column in self._index

    def __len__(self) -> int:
        return len(self.columns)


@dataclass(frozen=True)
class Row:
    """One data record.

    Attributes:
        header: Header shared by every row of the dataset
        cells: Cell values in header order
        line: 1-based line number in the source (the header is line 1)
    """

    header: Header
    cells: tuple[str, ...]
    line: int

    def cell(self, column: str) -> str:
        """Get the value of a cell by column name."""
        return self.cells[self.header.index_of(column)]


@dataclass(frozen=True)
class Dataset:
    """Header plus rows, immutable once loaded."""

    header: Header
    rows: tuple[Row, ...] = ()
    source: str | None = None

    @classmethod
    def from_records(
        cls,
        header: Sequence[str],
        records: Sequence[Sequence[str]],
        source: str | None = None,
        lines: Sequence[int] | None = None,
    ) -> Dataset:
        """Build a dataset from a header and raw records.

        Args:
            header: Column names
            records: Data records, each with one value per column
            source: Optional description of where the data came from
            lines: Source line of each record (default: 2, 3, ...)

        Raises:
            DatasetLoadError: On duplicate column names or ragged records
        """
        hdr = Header(tuple(header))
        if lines is None:
            lines = range(2, len(records) + 2)
        rows = []
        for line, record in zip(lines, records):
            if len(record) != len(hdr):
                raise DatasetLoadError(
                    f"Line {line} has {len(record)} cells, header has {len(hdr)}",
                    details={"line": line, "cells": len(record), "columns": len(hdr)},
                )
            rows.append(Row(header=hdr, cells=tuple(record), line=line))
        return cls(header=hdr, rows=tuple(rows), source=source)

    def cell(self, row: Row, column: str) -> str:
        """Get the value of one row's cell by column name.

        Column names match exactly and case-sensitively.

        Raises:
            ColumnNotFoundError: If the header has no such column
        """
        return row.cell(column)

    def require_columns(self, *columns: str) -> None:
        """Fail fast if any of the given columns is missing.

        Raises:
            ColumnNotFoundError: For the first missing column
        """
        for column in columns:
            self.header.index_of(column)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)


def infer_delimiter(path: Path) -> str:
    """Pick a delimiter from the file extension."""
    return "\t" if path.suffix.lower() in TAB_SUFFIXES else ","


def load_dataset(path: str | Path, delimiter: str | None = None) -> Dataset:
    """Read a CSV/TSV file. The first line is the header.

    Blank lines are skipped.

    Args:
        path: File to read
        delimiter: Cell delimiter (default: inferred from the extension)

    Returns:
        The loaded Dataset

    Raises:
        DatasetLoadError: If the file cannot be read, is empty, or is ragged
    """
    path = Path(path)
    sep = delimiter or infer_delimiter(path)

    try:
        with path.open(newline="", encoding="utf-8-sig") as f:
            reader = csv.reader(f, delimiter=sep)
            numbered = [(reader.line_num, record) for record in reader if record]
    except OSError as e:
        raise DatasetLoadError(
            f"Cannot read dataset {path}: {e}", details={"path": str(path)}
        ) from e
    except (csv.Error, UnicodeDecodeError) as e:
        raise DatasetLoadError(
            f"Cannot parse dataset {path}: {e}", details={"path": str(path)}
        ) from e

    if not numbered:
        raise DatasetLoadError(f"Dataset {path} has no header line", details={"path": str(path)})

    _, header = numbered[0]
    body = numbered[1:]
    dataset = Dataset.from_records(
        header,
        [record for _, record in body],
        source=str(path),
        lines=[line for line, _ in body],
    )
    logger.info(
        "Loaded dataset %s: %d columns, %d rows", path, len(dataset.header), len(dataset)
    )
    return dataset
