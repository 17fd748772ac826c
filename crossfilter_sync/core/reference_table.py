from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from crossfilter_sync.core.exceptions import ColumnNotFoundError, ConfigError

logger = logging.getLogger(__name__)


class ReferenceTable:
    """
    Authoritative dataset used to map chart selections to record identifiers.

    Includes:
    - Name -> column lookup that fails closed with ColumnNotFoundError
    - Cached string views of columns (selections always arrive as strings)
    - Helpers to build composite key columns for stacked/grouped charts

    The wrapped frame is never mutated; helpers that add columns return a
    new ReferenceTable.
    """

    def __init__(self, frame: pd.DataFrame, name: str = "reference") -> None:
        self.name = name
        self._frame = frame
        self._str_cache: Dict[str, pd.Series] = {}

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------
    @classmethod
    def from_records(
        cls, records: Iterable[Mapping[str, Any]], name: str = "reference"
    ) -> ReferenceTable:
        return cls(pd.DataFrame.from_records(list(records)), name=name)

    @classmethod
    def from_csv(cls, path: Path | str, name: Optional[str] = None) -> ReferenceTable:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found at {path}")

        frame = pd.read_csv(path)
        logger.info(
            "Loaded reference table",
            extra={"path": str(path), "n_rows": len(frame), "n_columns": frame.shape[1]},
        )
        return cls(frame, name=name or path.stem)

    # -------------------------------------------------------------------------
    # Column access
    # -------------------------------------------------------------------------
    @property
    def frame(self) -> pd.DataFrame:
        return self._frame

    @property
    def columns(self) -> List[str]:
        return [str(c) for c in self._frame.columns]

    def __len__(self) -> int:
        return len(self._frame)

    def has_column(self, name: str) -> bool:
        return name in self._frame.columns

    def require_columns(self, *names: str) -> None:
        """
        Validate that every name exists.

        Raises:
            ColumnNotFoundError: listing all missing names at once
        """
        missing = [n for n in names if not self.has_column(n)]
        if missing:
            raise ColumnNotFoundError(missing, self.columns)

    def column(self, name: str) -> pd.Series:
        self.require_columns(name)
        return self._frame[name]

    def string_column(self, name: str) -> pd.Series:
        """
        Column values as strings, cached per column.
        """
        if name not in self._str_cache:
            self._str_cache[name] = self.column(name).astype(str)
        return self._str_cache[name]

    def identifiers(self, identifier_column: str) -> frozenset:
        """All identifier values in the table (the 'everything selected' state)."""
        return frozenset(self.column(identifier_column).tolist())

    # -------------------------------------------------------------------------
    # Composite key columns
    # -------------------------------------------------------------------------
    def with_composite_column(
        self,
        columns: Sequence[str],
        name: Optional[str] = None,
        sep: str = "_",
    ) -> ReferenceTable:
        """
        Return a copy with a composite key column, e.g. cyl=6, gear=4 -> "6_4".

        :param columns: the source columns, in key order
        :param name: name of the new column (default: column names joined with "_")
        :param sep: separator between values
        """
        columns = list(columns)
        if len(columns) < 2:
            raise ConfigError(
                f"A composite key needs at least two columns, got {columns}"
            )
        self.require_columns(*columns)

        key_name = name or "_".join(columns)
        parts = [self._frame[c].astype(str) for c in columns]
        key = parts[0]
        for part in parts[1:]:
            key = key + sep + part

        frame = self._frame.copy()
        frame[key_name] = key
        return ReferenceTable(frame, name=self.name)

    def __repr__(self) -> str:
        return f"ReferenceTable(name={self.name!r}, n_rows={len(self)}, columns={self.columns})"
