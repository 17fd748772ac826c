"""
Core domain layer: reference table, filter spec, selection resolution,
state reduction and the framework-agnostic filter observer
"""

from .exceptions import ColumnNotFoundError, ConfigError, CrossfilterError
from .filter_spec import FilterMode, FilterSpec
from .observer import FilterObserver
from .reducer import reduce_selection
from .reference_table import ReferenceTable
from .resolver import resolve
from .selection_state import SelectionState

__all__ = [
    "ColumnNotFoundError",
    "ConfigError",
    "CrossfilterError",
    "FilterMode",
    "FilterSpec",
    "FilterObserver",
    "ReferenceTable",
    "SelectionState",
    "reduce_selection",
    "resolve",
]
