from __future__ import annotations

__all__ = ["IDs"]


class IDs:
    class Store:
        SELECTION_STATE = "selection-state"

    class Control:
        RESET_BTN = "reset-selection-btn"
        SELECTION_SUMMARY = "selection-summary"
        SELECTION_TABLE = "selection-table"

        # Chart graphs use the plot_id from the dashboard config
        CHARTS_ROW = "charts-row"
