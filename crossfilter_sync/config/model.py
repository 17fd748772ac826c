from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from crossfilter_sync.core.exceptions import ConfigError
from crossfilter_sync.core.filter_spec import FilterSpec

CHART_KINDS = ("scatter", "bar", "stacked_bar")


@dataclass
class ChartBinding:
    """
    Parsed config entry for a single cross-filtering chart.

    - plot_id: id of the dcc.Graph whose selections drive the filter
    - kind: how the demo dashboard draws it ("scatter", "bar", "stacked_bar")
    - filter_spec: how the chart's selection values map to identifiers
    - x / y / color: columns used when drawing the chart
    """
    plot_id: str
    kind: str
    filter_spec: FilterSpec
    title: Optional[str] = None
    x: Optional[str] = None
    y: Optional[str] = None
    color: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Dict[str, Any], index: int) -> ChartBinding:
        plot_id = raw.get("plot_id")
        if not plot_id or not isinstance(plot_id, str):
            raise ConfigError(f"Chart #{index} is missing a 'plot_id'")

        kind = raw.get("kind", "scatter")
        if kind not in CHART_KINDS:
            raise ConfigError(
                f"Chart '{plot_id}' has unknown kind '{kind}'. Expected one of {list(CHART_KINDS)}"
            )

        filter_spec = FilterSpec.from_value(
            raw.get("filter_column"),
            composite_column=raw.get("composite_column"),
        )

        return cls(
            plot_id=plot_id,
            kind=kind,
            filter_spec=filter_spec,
            title=raw.get("title"),
            x=raw.get("x"),
            y=raw.get("y"),
            color=raw.get("color"),
        )


@dataclass(frozen=True)
class CompositeKey:
    """
    A composite key column to build at load time.
    Accepts either ["cyl", "gear"] or {"columns": ["cyl", "gear"], "name": "cyl_gear"}.
    """
    columns: Tuple[str, ...]
    name: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Any) -> CompositeKey:
        if isinstance(raw, dict):
            columns, name = raw.get("columns") or [], raw.get("name")
        else:
            columns, name = raw, None

        if isinstance(columns, str) or len(columns) < 2:
            raise ConfigError(f"Composite key needs at least two columns, got {raw!r}")
        return cls(columns=tuple(columns), name=name)


@dataclass
class DashboardConfig:
    ui_title: str
    data_file: Path
    identifier_column: str
    charts: List[ChartBinding] = field(default_factory=list)
    composite_columns: List[CompositeKey] = field(default_factory=list)
    source_path: Optional[Path] = None

    def chart(self, plot_id: str) -> ChartBinding:
        for binding in self.charts:
            if binding.plot_id == plot_id:
                return binding
        raise KeyError(f"Chart '{plot_id}' not found")
