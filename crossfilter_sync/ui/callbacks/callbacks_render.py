from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import dash
from dash import Input, Output

from crossfilter_sync.core.selection_state import from_store
from crossfilter_sync.ui.figures import build_chart_figure, message_figure
from crossfilter_sync.ui.ids import IDs
from crossfilter_sync.ui.layout import build_selection_table, selection_summary

if TYPE_CHECKING:
    from crossfilter_sync.ui.context import AppContext

logger = logging.getLogger(__name__)


def render_outputs(ctx: AppContext, store_data: Any) -> tuple:
    """
    Everything that reflects the shared selection: one figure per chart,
    the summary line and the table of selected records.
    """
    selected = from_store(store_data)
    n_total = len(ctx.table)

    figures = []
    for binding in ctx.config.charts:
        try:
            figures.append(
                build_chart_figure(ctx.table, ctx.config.identifier_column, binding, selected)
            )
        except Exception:
            logger.exception("Error rendering chart", extra={"plot_id": binding.plot_id})
            figures.append(
                message_figure("Something went wrong while rendering this chart.")
            )

    return (
        *figures,
        selection_summary(len(selected), n_total),
        build_selection_table(ctx, selected),
    )


def register_render_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # Selection store -> charts + summary + table
    # ---------------------------------------------------------
    outputs = [Output(b.plot_id, "figure") for b in ctx.config.charts]
    outputs += [
        Output(IDs.Control.SELECTION_SUMMARY, "children"),
        Output(IDs.Control.SELECTION_TABLE, "children"),
    ]

    @app.callback(*outputs, Input(IDs.Store.SELECTION_STATE, "data"))
    def update_views_from_selection(store_data):
        return render_outputs(ctx, store_data)
