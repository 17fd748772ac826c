import pytest

from crossfilter_sync.core.selection_state import SelectionState, from_store, to_store


def test_set_replaces_whole_state():
    state = SelectionState(["a", "b"])

    state.set(["c"])

    assert state.get() == {"c"}
    assert "a" not in state
    assert len(state) == 1


def test_listeners_are_notified_and_can_unsubscribe():
    state = SelectionState(["a"])
    seen = []

    unsubscribe = state.subscribe(seen.append)
    state.set(["b"])
    unsubscribe()
    state.set(["c"])

    assert seen == [frozenset({"b"})]


def test_reset():
    state = SelectionState()

    state.reset(["a", "b"])

    assert state.get() == {"a", "b"}


def test_store_roundtrip_is_sorted_list():
    state = SelectionState(["b", "a", "c"])

    data = state.to_store()

    assert data == ["a", "b", "c"]
    assert SelectionState.from_store(data).get() == state.get()


def test_from_store_handles_none_and_rejects_other_shapes():
    assert from_store(None) == frozenset()

    with pytest.raises(TypeError):
        from_store("a")


def test_to_store_mixed_types_is_deterministic():
    assert to_store({2, 1}) == [1, 2]


def test_reset_accepts_single_pass_iterables():
    state = SelectionState()

    state.reset(v for v in ["a", "b"])

    assert state.get() == {"a", "b"}


def test_to_store_sorts_numbers_numerically():
    assert to_store({10, 2, 1}) == [1, 2, 10]
    assert to_store({"b", 10, "a", 2}) == [2, 10, "a", "b"]
