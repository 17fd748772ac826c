from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, Optional

import dash
from dash import Input, Output, State, exceptions

from crossfilter_sync.core.exceptions import CrossfilterError
from crossfilter_sync.core.filter_spec import FilterSpec
from crossfilter_sync.core.observer import FilterObserver
from crossfilter_sync.core.reference_table import ReferenceTable
from crossfilter_sync.core.selection_state import from_store, to_store
from crossfilter_sync.ui.ids import IDs
from crossfilter_sync.ui.selection_payload import extract_selection

if TYPE_CHECKING:
    from crossfilter_sync.ui.context import AppContext

logger = logging.getLogger(__name__)


def apply_selection(
    observer: FilterObserver,
    selected_data: Optional[dict[str, Any]],
    store_data: Any,
) -> List[Any]:
    """
    Pure body of a chart's selection callback: plotly payload + current store
    data -> new store data.

    Raises:
        PreventUpdate: the payload carries no selection (store left untouched)
        ColumnNotFoundError: reference table lost a column the chart needs
    """
    raw_selection = extract_selection(selected_data)
    if not raw_selection:
        raise exceptions.PreventUpdate

    current = from_store(store_data)
    try:
        updated = observer.compute(raw_selection, current)
    except CrossfilterError:
        logger.exception(
            "Cross-filter resolution failed",
            extra={"source_id": observer.source_id, "raw_selection": raw_selection},
        )
        raise

    if updated is None:
        raise exceptions.PreventUpdate
    return to_store(updated)


def reset_store(ctx: AppContext, n_clicks: Optional[int]) -> List[Any]:
    """
    Pure body of the reset button callback: every identifier of the
    reference table goes back into the store.

    Raises:
        PreventUpdate: the button has not been clicked
    """
    if not n_clicks:
        raise exceptions.PreventUpdate
    all_ids = ctx.all_identifiers()
    logger.info("Selection reset", extra={"n_selected": len(all_ids)})
    return to_store(all_ids)


def register_filter_observer(
    app: dash.Dash,
    plot_id: str,
    reference_table: ReferenceTable,
    identifier_column: str,
    store_id: str = IDs.Store.SELECTION_STATE,
    filter_spec: Optional[FilterSpec] = None,
    selection_prop: str = "selectedData",
) -> FilterObserver:
    """
    Bind a dcc.Graph's selections to the shared selection store.

    :param plot_id: id of the dcc.Graph to listen to
    :param reference_table: table used to map selections to identifiers
    :param identifier_column: column holding the canonical record identifier
    :param store_id: id of the dcc.Store holding the selected identifiers
    :param filter_spec: how selection values map to identifiers (default: direct)
    :param selection_prop: graph property carrying the selection
        ("selectedData" for box/lasso, "clickData" for clicks)

    Raises:
        ColumnNotFoundError: immediately, if the spec names a missing column
    """
    observer = FilterObserver(
        reference_table,
        identifier_column,
        state=None,
        filter_spec=filter_spec,
        source_id=plot_id,
    )

    # prevent_initial_call: the first firing on page load is not a selection
    @app.callback(
        Output(store_id, "data", allow_duplicate=True),
        Input(plot_id, selection_prop),
        State(store_id, "data"),
        prevent_initial_call=True,
    )
    def _on_chart_selection(selected_data, store_data):
        return apply_selection(observer, selected_data, store_data)

    logger.info(
        "Registered filter observer",
        extra={
            "plot_id": plot_id,
            "selection_prop": selection_prop,
            "mode": observer.filter_spec.mode.value,
            "key_column": observer.filter_spec.key_column,
        },
    )
    return observer


def register_crossfilter_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # Chart selections -> shared selection store (one per chart)
    # ---------------------------------------------------------
    for binding in ctx.config.charts:
        ctx.observers[binding.plot_id] = register_filter_observer(
            app,
            plot_id=binding.plot_id,
            reference_table=ctx.table,
            identifier_column=ctx.config.identifier_column,
            filter_spec=binding.filter_spec,
        )

    # ---------------------------------------------------------
    # Explicit reset: back to every identifier
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.SELECTION_STATE, "data", allow_duplicate=True),
        Input(IDs.Control.RESET_BTN, "n_clicks"),
        prevent_initial_call=True,
    )
    def reset_selection(n_clicks):
        return reset_store(ctx, n_clicks)
