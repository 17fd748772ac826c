from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, Iterable, List, Optional

logger = logging.getLogger(__name__)

Listener = Callable[[frozenset], None]


class SelectionState:
    """
    Shared set of currently selected identifiers.

    The handle is owned by the dashboard and passed to every observer that
    narrows it. Observers only hold a reference; change propagation is left to
    whoever subscribes via `subscribe` (or, under Dash, to the dcc.Store).

    Writes are a single replace of the whole set.
    """

    def __init__(self, initial: Optional[Iterable[Hashable]] = None) -> None:
        self._values: frozenset = frozenset(initial or ())
        self._listeners: List[Listener] = []

    def get(self) -> frozenset:
        return self._values

    def set(self, values: Iterable[Hashable]) -> None:
        self._values = frozenset(values)
        for listener in list(self._listeners):
            listener(self._values)

    def reset(self, values: Iterable[Hashable]) -> None:
        """Explicit reset, e.g. back to every identifier of the reference table."""
        values = frozenset(values)
        logger.info("Selection state reset", extra={"n_selected": len(values)})
        self.set(values)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a change listener; returns a callable that unsubscribes it.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, item: object) -> bool:
        return item in self._values

    # -------------------------------------------------------------------------
    # dcc.Store serialisation
    # -------------------------------------------------------------------------
    def to_store(self) -> List[Any]:
        return to_store(self._values)

    @classmethod
    def from_store(cls, data: Any) -> SelectionState:
        return cls(from_store(data))

    def __repr__(self) -> str:
        return f"SelectionState(n_selected={len(self._values)})"


def to_store(values: Iterable[Hashable]) -> List[Any]:
    """
    JSON-friendly, deterministic representation for a dcc.Store.
    Values are grouped by type and sorted in their own order within a type
    (2 before 10).
    """
    return sorted(values, key=lambda v: (type(v).__name__, v))


def from_store(data: Any) -> frozenset:
    if data is None:
        return frozenset()
    if not isinstance(data, (list, tuple, set, frozenset)):
        raise TypeError(f"Selection store data must be a list, got {type(data).__name__}")
    return frozenset(data)
