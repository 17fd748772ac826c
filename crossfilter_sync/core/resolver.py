from __future__ import annotations

import logging
from typing import Hashable, Sequence

from crossfilter_sync.core.filter_spec import FilterMode, FilterSpec
from crossfilter_sync.core.reference_table import ReferenceTable

logger = logging.getLogger(__name__)


def required_columns(filter_spec: FilterSpec, identifier_column: str) -> list[str]:
    """Every reference-table column a resolution with this spec touches."""
    columns = [identifier_column]
    key_column = filter_spec.key_column
    if key_column is not None:
        columns.append(key_column)
    return columns


def resolve(
    raw_selection: Sequence[str],
    filter_spec: FilterSpec,
    reference_table: ReferenceTable,
    identifier_column: str,
) -> frozenset[Hashable]:
    """
    Translate a chart selection into the set of identifiers it implies.

    - direct: the selection values are the identifiers, converted back to
      the identifier column's own type when the table holds them ("1" -> 1)
    - single-column / composite-column: identifiers of every row whose key
      column value (compared as a string) is in the selection

    Callers short-circuit empty selections before calling; an empty selection
    here simply yields an empty set.

    Raises:
        ColumnNotFoundError: if the identifier column or the key column is
            missing from the reference table
    """
    reference_table.require_columns(*required_columns(filter_spec, identifier_column))

    if filter_spec.mode is FilterMode.DIRECT:
        # Selections arrive as strings; map them back onto the identifier
        # values the table holds. Unknown values pass through as given.
        native_by_str = dict(
            zip(
                reference_table.string_column(identifier_column).tolist(),
                reference_table.column(identifier_column).tolist(),
            )
        )
        candidates = frozenset(native_by_str.get(str(v), v) for v in raw_selection)
    else:
        key_column = filter_spec.key_column
        mask = reference_table.string_column(key_column).isin(
            [str(v) for v in raw_selection]
        )
        candidates = frozenset(
            reference_table.column(identifier_column)[mask].tolist()
        )

    logger.debug(
        "Resolved selection",
        extra={
            "mode": filter_spec.mode.value,
            "key_column": filter_spec.key_column,
            "n_selected": len(raw_selection),
            "n_candidates": len(candidates),
        },
    )
    return candidates
