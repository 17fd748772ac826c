from __future__ import annotations

from typing import AbstractSet, Hashable


def reduce_selection(
    current: AbstractSet[Hashable],
    candidates: AbstractSet[Hashable],
) -> frozenset[Hashable]:
    """
    Narrow the current selection to the identifiers a chart just selected.

    Intersection only: the result is a subset of both inputs, the operation
    is commutative and applying the same candidates twice changes nothing.
    An empty candidate set collapses the selection to empty.
    """
    return frozenset(current) & frozenset(candidates)
