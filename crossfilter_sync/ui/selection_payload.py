"""
Turn plotly selection payloads (dcc.Graph `selectedData` / `clickData`)
into the raw selection the resolver expects: an ordered list of strings.

Each point contributes one value, taken from the first of:
    customdata (first element if it is a list), pointId / id, x
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

_MISSING = object()


def _point_value(point: Dict[str, Any]) -> Any:
    custom = point.get("customdata", _MISSING)
    if isinstance(custom, (list, tuple)):
        custom = custom[0] if custom else _MISSING
    if custom is not _MISSING and custom is not None:
        return custom

    for key in ("pointId", "id", "x"):
        val = point.get(key)
        if val is not None:
            return val
    return _MISSING


def extract_selection(payload: Optional[Dict[str, Any]]) -> List[str]:
    if not payload or not isinstance(payload, dict):
        return []

    values: List[str] = []
    for point in payload.get("points") or []:
        if not isinstance(point, dict):
            continue
        val = _point_value(point)
        if val is _MISSING:
            continue
        values.append(str(val))

    # keep first-seen order, drop repeats (stacked bars report one point per trace)
    return list(dict.fromkeys(values))
