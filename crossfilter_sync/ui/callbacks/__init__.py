from .callbacks_crossfilter import (
    apply_selection,
    register_crossfilter_callbacks,
    register_filter_observer,
    reset_store,
)
from .callbacks_render import register_render_callbacks

__all__ = [
    "apply_selection",
    "register_crossfilter_callbacks",
    "register_filter_observer",
    "register_render_callbacks",
    "reset_store",
]
