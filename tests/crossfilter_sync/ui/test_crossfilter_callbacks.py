from pathlib import Path

import dash
import pytest
from dash import exceptions

from crossfilter_sync.config.model import DashboardConfig
from crossfilter_sync.core.exceptions import ColumnNotFoundError
from crossfilter_sync.core.filter_spec import FilterSpec
from crossfilter_sync.core.reference_table import ReferenceTable
from crossfilter_sync.core.selection_state import to_store
from crossfilter_sync.ui.callbacks.callbacks_crossfilter import (
    apply_selection,
    register_filter_observer,
    reset_store,
)
from crossfilter_sync.ui.context import AppContext
from crossfilter_sync.ui.ids import IDs

ALL_CARS = ["Datsun 710", "Hornet 4 Drive", "Mazda RX4"]


def _make_table() -> ReferenceTable:
    table = ReferenceTable.from_records(
        [
            {"name": "Mazda RX4", "cyl": 6, "gear": 4},
            {"name": "Datsun 710", "cyl": 4, "gear": 4},
            {"name": "Hornet 4 Drive", "cyl": 6, "gear": 3},
        ]
    )
    return table.with_composite_column(["cyl", "gear"])


def _bar_selection(*values):
    return {"points": [{"x": v, "y": 1, "customdata": [v]} for v in values]}


def test_register_adds_one_callback_per_chart():
    app = dash.Dash(__name__)
    before = len(app.callback_map)

    observer = register_filter_observer(
        app, "gear-plot", _make_table(), "name", filter_spec=FilterSpec.single("gear")
    )

    assert len(app.callback_map) == before + 1
    assert any(k.startswith(f"{IDs.Store.SELECTION_STATE}.data") for k in app.callback_map)
    assert observer.source_id == "gear-plot"
    assert observer.state is None


def test_register_fails_fast_on_missing_column():
    app = dash.Dash(__name__)

    with pytest.raises(ColumnNotFoundError):
        register_filter_observer(
            app, "trim-plot", _make_table(), "name", filter_spec=FilterSpec.single("trim")
        )


def test_apply_selection_single_column():
    app = dash.Dash(__name__)
    observer = register_filter_observer(
        app, "gear-plot", _make_table(), "name", filter_spec=FilterSpec.single("gear")
    )

    new_data = apply_selection(observer, _bar_selection("4"), ALL_CARS)

    assert new_data == ["Datsun 710", "Mazda RX4"]


def test_apply_selection_composite_column():
    app = dash.Dash(__name__)
    observer = register_filter_observer(
        app,
        "cyl-gear-plot",
        _make_table(),
        "name",
        filter_spec=FilterSpec.composite(["cyl", "gear"]),
    )

    new_data = apply_selection(observer, _bar_selection("6_4", "6_3"), ALL_CARS)

    assert new_data == ["Hornet 4 Drive", "Mazda RX4"]


def test_apply_selection_direct_scatter():
    app = dash.Dash(__name__)
    observer = register_filter_observer(app, "scatter", _make_table(), "name")
    payload = {"points": [{"x": 1.0, "y": 2.0, "customdata": ["Datsun 710"]}]}

    assert apply_selection(observer, payload, ["Mazda RX4"]) == []


@pytest.mark.parametrize("payload", [None, {}, {"points": []}])
def test_empty_selection_prevents_update(payload):
    app = dash.Dash(__name__)
    observer = register_filter_observer(
        app, "gear-plot", _make_table(), "name", filter_spec=FilterSpec.single("gear")
    )

    with pytest.raises(exceptions.PreventUpdate):
        apply_selection(observer, payload, ALL_CARS)


def test_resolution_error_propagates():
    table = _make_table()
    app = dash.Dash(__name__)
    observer = register_filter_observer(
        app, "gear-plot", table, "name", filter_spec=FilterSpec.single("gear")
    )
    observer.reference_table = ReferenceTable(table.frame.drop(columns=["gear"]))

    with pytest.raises(ColumnNotFoundError):
        apply_selection(observer, _bar_selection("4"), ALL_CARS)


def _make_ctx(table: ReferenceTable) -> AppContext:
    config = DashboardConfig(
        ui_title="Test Dashboard",
        data_file=Path("cars.csv"),
        identifier_column="name",
    )
    return AppContext(config=config, table=table)


def test_apply_selection_direct_with_integer_identifiers():
    table = ReferenceTable.from_records(
        [
            {"id": 1, "wt": 2.6},
            {"id": 2, "wt": 3.2},
        ]
    )
    app = dash.Dash(__name__)
    observer = register_filter_observer(app, "scatter", table, "id")
    store_data = to_store(table.identifiers("id"))
    payload = {"points": [{"x": 2.6, "y": 1.0, "customdata": [1]}]}

    assert apply_selection(observer, payload, store_data) == [1]


def test_reset_writes_every_identifier_back():
    ctx = _make_ctx(_make_table())

    assert reset_store(ctx, 1) == ALL_CARS


@pytest.mark.parametrize("n_clicks", [None, 0])
def test_reset_without_click_prevents_update(n_clicks):
    ctx = _make_ctx(_make_table())

    with pytest.raises(exceptions.PreventUpdate):
        reset_store(ctx, n_clicks)
