from __future__ import annotations

import logging
from typing import AbstractSet, Hashable, Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objs as go

from crossfilter_sync.config.model import ChartBinding
from crossfilter_sync.core.filter_spec import FilterMode
from crossfilter_sync.core.reference_table import ReferenceTable

logger = logging.getLogger(__name__)

COUNT_COLUMN = "n_records"
MARGIN = dict(l=40, r=40, t=40, b=40)


# -----------------------------------------------------------------------------
# Helper: Empty/Error Figures
# -----------------------------------------------------------------------------
def message_figure(title: str, details: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    text = title if details is None else f"{title}<br><br>{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=MARGIN)
    return fig


def selected_rows(
    table: ReferenceTable,
    identifier_column: str,
    selected: AbstractSet[Hashable],
) -> pd.DataFrame:
    frame = table.frame
    return frame[table.column(identifier_column).isin(list(selected))]


# -----------------------------------------------------------------------------
# Chart builders
#
# Every chart puts the value its selections resolve against into customdata,
# so `extract_selection` never has to guess from axis positions.
# -----------------------------------------------------------------------------
def scatter_figure(data: pd.DataFrame, binding: ChartBinding, identifier_column: str) -> go.Figure:
    # Direct mode: customdata carries the identifier itself
    fig = px.scatter(
        data,
        x=binding.x,
        y=binding.y,
        color=binding.color,
        custom_data=[identifier_column],
        hover_name=identifier_column,
        title=binding.title,
    )
    fig.update_layout(dragmode="select", margin=MARGIN)
    return fig


def bar_figure(data: pd.DataFrame, binding: ChartBinding) -> go.Figure:
    column = binding.filter_spec.columns[0]
    counts = (
        data.assign(**{column: data[column].astype(str)})
        .groupby(column, sort=True)
        .size()
        .reset_index(name=COUNT_COLUMN)
    )
    fig = px.bar(
        counts,
        x=column,
        y=COUNT_COLUMN,
        custom_data=[column],
        title=binding.title,
    )
    fig.update_xaxes(type="category")
    fig.update_layout(dragmode="select", margin=MARGIN)
    return fig


def stacked_bar_figure(data: pd.DataFrame, binding: ChartBinding) -> go.Figure:
    spec = binding.filter_spec
    x_col, color_col = spec.columns[0], spec.columns[1]
    key_column = spec.key_column

    counts = (
        data.assign(
            **{
                x_col: data[x_col].astype(str),
                color_col: data[color_col].astype(str),
                key_column: data[key_column].astype(str),
            }
        )
        .groupby([x_col, color_col, key_column], sort=True)
        .size()
        .reset_index(name=COUNT_COLUMN)
    )
    fig = px.bar(
        counts,
        x=x_col,
        y=COUNT_COLUMN,
        color=color_col,
        custom_data=[key_column],
        title=binding.title,
    )
    fig.update_xaxes(type="category")
    fig.update_layout(barmode="stack", dragmode="select", margin=MARGIN)
    return fig


def build_chart_figure(
    table: ReferenceTable,
    identifier_column: str,
    binding: ChartBinding,
    selected: AbstractSet[Hashable],
) -> go.Figure:
    """
    Draw a chart from the rows that are still selected.
    """
    data = selected_rows(table, identifier_column, selected)
    if data.empty:
        return message_figure(
            "Nothing selected.",
            "Use 'Reset selection' to start again from all records.",
        )

    mode = binding.filter_spec.mode
    if binding.kind == "scatter":
        if mode is not FilterMode.DIRECT:
            raise ValueError(
                f"Scatter chart '{binding.plot_id}' must select identifiers directly "
                f"(no filter_column), got {binding.filter_spec.columns}"
            )
        return scatter_figure(data, binding, identifier_column)

    if binding.kind == "bar":
        if mode is not FilterMode.SINGLE_COLUMN:
            raise ValueError(f"Bar chart '{binding.plot_id}' needs exactly one filter_column")
        return bar_figure(data, binding)

    if binding.kind == "stacked_bar":
        if mode is not FilterMode.COMPOSITE_COLUMN:
            raise ValueError(f"Stacked bar chart '{binding.plot_id}' needs two filter columns")
        return stacked_bar_figure(data, binding)

    raise ValueError(f"Unknown chart kind '{binding.kind}'")
