from __future__ import annotations

from typing import Iterable, List


class CrossfilterError(Exception):
    """Base exception for all crossfilter_sync errors"""
    pass


class ConfigError(CrossfilterError):
    """Invalid or inconsistent dashboard config or FilterSpec"""
    pass


class ColumnNotFoundError(CrossfilterError, KeyError):
    """
    A column named by the caller (identifier, filter or composite key column)
    does not exist in the reference table.
    """

    def __init__(self, missing: Iterable[str], available: Iterable[str] = ()):
        self.missing: List[str] = list(missing)
        self.available: List[str] = list(available)
        super().__init__(
            f"Column(s) {self.missing} not found in reference table. "
            f"Available columns: {self.available}"
        )

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.args[0]
