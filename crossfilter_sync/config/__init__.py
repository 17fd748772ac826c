from .loader import load_dashboard_config, load_reference_table
from .model import ChartBinding, CompositeKey, DashboardConfig

__all__ = [
    "ChartBinding",
    "CompositeKey",
    "DashboardConfig",
    "load_dashboard_config",
    "load_reference_table",
]
