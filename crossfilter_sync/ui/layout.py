from __future__ import annotations

from typing import TYPE_CHECKING, AbstractSet, Hashable, List

import dash_bootstrap_components as dbc
from dash import dash_table, dcc, html

from crossfilter_sync.core.selection_state import to_store
from crossfilter_sync.ui.ids import IDs

if TYPE_CHECKING:
    from crossfilter_sync.ui.context import AppContext


def build_chart_card(plot_id: str, title: str) -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(html.Strong(title), className="p-2"),
            dbc.CardBody(
                dcc.Graph(
                    id=plot_id,
                    style={"height": "380px"},
                    config={"responsive": True, "displaylogo": False},
                ),
            ),
        ],
        className="mb-3",
    )


def build_selection_table(ctx: AppContext, selected: AbstractSet[Hashable]) -> dash_table.DataTable:
    """
    Rows of the reference table that are still selected.
    """
    id_col = ctx.config.identifier_column
    df = ctx.table.frame[ctx.table.column(id_col).isin(list(selected))]

    return dash_table.DataTable(
        data=df.to_dict("records"),
        columns=[{"name": c, "id": c} for c in df.columns],
        style_table={"overflowX": "auto"},
        style_as_list_view=True,
        style_cell={
            "fontSize": "12px",
            "padding": "6px 8px",
            "border": "none",
            "textAlign": "left",
            "whiteSpace": "nowrap",
        },
        style_header={
            "fontWeight": "600",
            "backgroundColor": "#f3f4f6",
            "borderBottom": "1px solid #e5e7eb",
        },
        style_data={"borderBottom": "1px solid #e5e7eb"},
        page_size=15,
        sort_action="native",
    )


def selection_summary(n_selected: int, n_total: int) -> html.Span:
    return html.Span(
        [
            html.Strong("Selected: "),
            f"{n_selected} of {n_total} records",
        ]
    )


def build_layout(ctx: AppContext) -> dbc.Container:
    all_ids = ctx.all_identifiers()

    chart_cols: List[dbc.Col] = [
        dbc.Col(build_chart_card(b.plot_id, b.title or b.plot_id), md=6)
        for b in ctx.config.charts
    ]

    return dbc.Container(
        fluid=True,
        children=[
            dbc.NavbarSimple(brand=ctx.config.ui_title, color="primary", dark=True, className="mb-3"),

            # Shared selection state: starts with every identifier selected
            dcc.Store(id=IDs.Store.SELECTION_STATE, data=to_store(all_ids)),

            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            selection_summary(len(all_ids), len(all_ids)),
                            id=IDs.Control.SELECTION_SUMMARY,
                        ),
                        className="d-flex align-items-center",
                    ),
                    dbc.Col(
                        dbc.Button(
                            "Reset selection",
                            id=IDs.Control.RESET_BTN,
                            color="secondary",
                            size="sm",
                        ),
                        width="auto",
                    ),
                ],
                className="mb-3",
            ),
            dbc.Row(chart_cols, id=IDs.Control.CHARTS_ROW),
            dbc.Card(
                [
                    dbc.CardHeader(html.Strong("Selected records"), className="p-2"),
                    dbc.CardBody(
                        html.Div(
                            build_selection_table(ctx, all_ids),
                            id=IDs.Control.SELECTION_TABLE,
                        )
                    ),
                ],
                className="mb-3",
            ),
        ],
    )
