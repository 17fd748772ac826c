import json
from pathlib import Path

import pandas as pd
import pytest

from crossfilter_sync.config.loader import load_dashboard_config, load_reference_table
from crossfilter_sync.core.exceptions import ConfigError
from crossfilter_sync.core.filter_spec import FilterMode


def _write_config(config_root: Path, raw: dict) -> Path:
    config_root.mkdir(parents=True, exist_ok=True)
    path = config_root / "dashboard.json"
    path.write_text(json.dumps(raw))
    return path


def _write_cars(config_root: Path) -> None:
    config_root.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(
        {
            "car_name": ["Mazda RX4", "Datsun 710", "Hornet 4 Drive"],
            "cyl": [6, 4, 6],
            "gear": [4, 4, 3],
        }
    ).to_csv(config_root / "cars.csv", index=False)


def _base_config() -> dict:
    return {
        "ui_title": "Test Dashboard",
        "data_file": "cars.csv",
        "identifier_column": "car_name",
        "composite_columns": [["cyl", "gear"], {"columns": ["gear", "cyl"], "name": "gc"}],
        "charts": [
            {"plot_id": "scatter", "kind": "scatter", "x": "cyl", "y": "gear"},
            {"plot_id": "gear", "kind": "bar", "filter_column": "gear"},
            {"plot_id": "cyl-gear", "kind": "stacked_bar", "filter_column": ["cyl", "gear"]},
        ],
    }


def test_load_dashboard_config(tmp_path):
    config_root = tmp_path / "config"
    path = _write_config(config_root, _base_config())

    config = load_dashboard_config(path)

    assert config.ui_title == "Test Dashboard"
    assert config.data_file == (config_root / "cars.csv").resolve()
    assert config.identifier_column == "car_name"
    assert [c.plot_id for c in config.charts] == ["scatter", "gear", "cyl-gear"]
    assert config.chart("scatter").filter_spec.mode is FilterMode.DIRECT
    assert config.chart("gear").filter_spec.key_column == "gear"
    assert config.chart("cyl-gear").filter_spec.key_column == "cyl_gear"
    assert config.composite_columns[1].name == "gc"


def test_load_reference_table_builds_composite_columns(tmp_path):
    config_root = tmp_path / "config"
    _write_cars(config_root)
    config = load_dashboard_config(_write_config(config_root, _base_config()))

    table = load_reference_table(config)

    assert list(table.column("cyl_gear")) == ["6_4", "4_4", "6_3"]
    assert list(table.column("gc")) == ["4_6", "4_4", "3_6"]


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_dashboard_config(tmp_path / "missing.json")


def test_missing_required_key(tmp_path):
    raw = _base_config()
    del raw["identifier_column"]

    with pytest.raises(ConfigError, match="identifier_column"):
        load_dashboard_config(_write_config(tmp_path, raw))


def test_duplicate_plot_id(tmp_path):
    raw = _base_config()
    raw["charts"].append({"plot_id": "gear", "kind": "bar", "filter_column": "gear"})

    with pytest.raises(ConfigError, match="Duplicate plot_id 'gear'"):
        load_dashboard_config(_write_config(tmp_path, raw))


def test_unknown_chart_kind(tmp_path):
    raw = _base_config()
    raw["charts"][0]["kind"] = "pie"

    with pytest.raises(ConfigError, match="unknown kind"):
        load_dashboard_config(_write_config(tmp_path, raw))


def test_invalid_json(tmp_path):
    path = tmp_path / "dashboard.json"
    path.write_text("{not json")

    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_dashboard_config(path)


def test_shipped_demo_config_loads():
    root = Path(__file__).resolve().parents[3] / "config"

    config = load_dashboard_config(root / "dashboard.json")
    table = load_reference_table(config)

    assert len(table) == 32
    assert table.has_column("cyl_gear")
