from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

from crossfilter_sync.config.model import ChartBinding, CompositeKey, DashboardConfig
from crossfilter_sync.core.exceptions import ConfigError
from crossfilter_sync.core.reference_table import ReferenceTable

logger = logging.getLogger(__name__)


def load_dashboard_config(path: Path | str) -> DashboardConfig:
    """
    Load a dashboard config file (JSON).

    Relative `data_file` paths are resolved against the config file's directory.
    """
    path = Path(path)
    logger.info("Loading dashboard config", extra={"config_path": str(path)})

    if not path.is_file():
        raise FileNotFoundError(f"File not found at {path}")

    with path.open() as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Top-level config in {path} must be an object")

    for key in ("data_file", "identifier_column"):
        if not raw.get(key):
            raise ConfigError(f"Missing required key '{key}' in {path}")

    data_file = Path(raw["data_file"])
    if not data_file.is_absolute():
        data_file = (path.parent / data_file).resolve()

    charts: List[ChartBinding] = []
    seen: set[str] = set()
    for idx, raw_chart in enumerate(raw.get("charts", [])):
        binding = ChartBinding.from_raw(raw_chart, index=idx)
        if binding.plot_id in seen:
            raise ConfigError(f"Duplicate plot_id '{binding.plot_id}' in {path}")
        seen.add(binding.plot_id)
        charts.append(binding)

    if not charts:
        logger.warning(f"No charts configured in {path}")

    composite_columns = [
        CompositeKey.from_raw(entry) for entry in raw.get("composite_columns", [])
    ]

    config = DashboardConfig(
        ui_title=raw.get("ui_title", "Cross-filter Dashboard"),
        data_file=data_file,
        identifier_column=raw["identifier_column"],
        charts=charts,
        composite_columns=composite_columns,
        source_path=path,
    )

    logger.info(
        "Dashboard config loaded",
        extra={
            "config_path": str(path),
            "n_charts": len(charts),
            "plot_ids": [c.plot_id for c in charts],
        },
    )
    return config


def load_reference_table(config: DashboardConfig) -> ReferenceTable:
    """
    Read the reference data and build the composite key columns the config
    asks for.
    """
    table = ReferenceTable.from_csv(config.data_file)
    for group in config.composite_columns:
        table = table.with_composite_column(group.columns, name=group.name)

    table.require_columns(config.identifier_column)
    return table
