from __future__ import annotations

import logging
from typing import AbstractSet, Hashable, Optional, Sequence

from crossfilter_sync.core.filter_spec import FilterSpec
from crossfilter_sync.core.reducer import reduce_selection
from crossfilter_sync.core.reference_table import ReferenceTable
from crossfilter_sync.core.resolver import required_columns, resolve
from crossfilter_sync.core.selection_state import SelectionState

logger = logging.getLogger(__name__)


class FilterObserver:
    """
    Binds one chart's selection events to a shared SelectionState.

    On every non-empty selection the observer resolves the selection into
    identifiers and replaces the shared state with its intersection with
    those identifiers. Empty selections are ignored: they never clear the
    state. Use SelectionState.reset for that.

    Column names are validated at construction so misconfigured charts fail
    at setup rather than on the first click.
    """

    def __init__(
        self,
        reference_table: ReferenceTable,
        identifier_column: str,
        state: Optional[SelectionState],
        filter_spec: Optional[FilterSpec] = None,
        source_id: str = "chart",
    ) -> None:
        self.reference_table = reference_table
        self.identifier_column = identifier_column
        self.state = state
        self.filter_spec = filter_spec or FilterSpec.direct()
        self.source_id = source_id

        reference_table.require_columns(
            *required_columns(self.filter_spec, identifier_column)
        )

    def compute(
        self,
        raw_selection: Optional[Sequence[str]],
        current: AbstractSet[Hashable],
    ) -> Optional[frozenset]:
        """
        New selection state for a raw selection, or None when the event is a
        no-op (no selection / empty selection).
        """
        if not raw_selection:
            return None

        candidates = resolve(
            raw_selection,
            self.filter_spec,
            self.reference_table,
            self.identifier_column,
        )
        updated = reduce_selection(current, candidates)

        logger.info(
            "Cross-filter selection applied",
            extra={
                "source_id": self.source_id,
                "mode": self.filter_spec.mode.value,
                "n_selected": len(raw_selection),
                "n_candidates": len(candidates),
                "n_before": len(current),
                "n_after": len(updated),
            },
        )
        return updated

    def on_selection(self, raw_selection: Optional[Sequence[str]]) -> bool:
        """
        Handle one selection event against the bound SelectionState.

        :return: True if the state was written, False for a no-op event
        """
        if self.state is None:
            raise RuntimeError(
                f"FilterObserver '{self.source_id}' has no SelectionState bound"
            )

        updated = self.compute(raw_selection, self.state.get())
        if updated is None:
            return False

        self.state.set(updated)
        return True

    def __repr__(self) -> str:
        return (
            f"FilterObserver(source_id={self.source_id!r}, "
            f"mode={self.filter_spec.mode.value!r}, key_column={self.filter_spec.key_column!r})"
        )
