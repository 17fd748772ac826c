from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from crossfilter_sync.config.model import DashboardConfig
from crossfilter_sync.core.observer import FilterObserver
from crossfilter_sync.core.reference_table import ReferenceTable


@dataclass
class AppContext:
    """
    Holds shared state for the Dash app: the dashboard config, the reference
    table and one FilterObserver per chart. This is passed into layout +
    callback registration functions instead of using module-level globals.
    """
    config: DashboardConfig
    table: ReferenceTable
    observers: Dict[str, FilterObserver] = field(default_factory=dict)

    def all_identifiers(self) -> frozenset:
        return self.table.identifiers(self.config.identifier_column)
