"""
Top-level package for crossfilter_sync.

Chart selections are resolved into record identifiers and intersected into
a shared selection state. Most code should import from submodules such as:
    crossfilter_sync.core
    crossfilter_sync.config
    crossfilter_sync.ui
"""

__all__: list[str] = []
