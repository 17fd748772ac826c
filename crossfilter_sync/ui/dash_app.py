from __future__ import annotations

import logging
import os
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from crossfilter_sync.config.loader import load_dashboard_config, load_reference_table
from crossfilter_sync.ui.callbacks.callbacks_crossfilter import register_crossfilter_callbacks
from crossfilter_sync.ui.callbacks.callbacks_render import register_render_callbacks
from crossfilter_sync.ui.context import AppContext
from crossfilter_sync.ui.layout import build_layout

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path("config") / "dashboard.json"


def create_dash_app(config_path: Path | str | None = None) -> Dash:
    if config_path is None:
        config_path = os.getenv("CROSSFILTER_CONFIG", str(DEFAULT_CONFIG))
    config_path = Path(config_path)

    # 1) Load Config + reference data
    config = load_dashboard_config(config_path)
    table = load_reference_table(config)

    # 2) App Context
    ctx = AppContext(config=config, table=table)

    app = Dash(__name__, external_stylesheets=[dbc.themes.FLATLY])
    app.title = config.ui_title
    app.layout = build_layout(ctx)

    # Register callbacks (observers validate their columns here)
    register_crossfilter_callbacks(app, ctx)
    register_render_callbacks(app, ctx)

    logger.info(
        "Dash app created",
        extra={
            "config_path": str(config_path),
            "n_rows": len(table),
            "n_charts": len(config.charts),
        },
    )
    return app
