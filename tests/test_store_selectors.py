"""
Tests for selector helpers and the reactive bridge.

Tests:
- create_selector composition and memoization
- SelectorToSubject value holder
"""
import pytest

from pystorecell import SelectorToSubject, create_selector

from .models import TodoState, unfinished_todos


class TestCreateSelector:
    """Composed selectors with last-result memoization."""

    def test_single_selector_without_result_fn(self):
        selector = create_selector(lambda state: len(state.todos))

        assert selector.map(TodoState(todos=["a"], done=[False])) == 1

    def test_combines_inputs(self):
        selector = create_selector(
            lambda state: len(state.todos),
            lambda state: sum(state.done),
            result_fn=lambda total, finished: total - finished,
        )

        assert selector.map(TodoState(todos=["a", "b"], done=[True, False])) == 1

    def test_default_result_is_tuple(self):
        selector = create_selector(lambda state: len(state.todos), lambda state: len(state.done))

        assert selector.map(TodoState()) == (0, 0)

    def test_memoizes_equal_inputs(self):
        calls = []

        def result_fn(todos):
            calls.append(todos)
            return list(todos)

        selector = create_selector(lambda state: tuple(state.todos), result_fn=result_fn)

        first = selector.map(TodoState(todos=["a"], done=[False]))
        second = selector.map(TodoState(todos=["a"], done=[True]))
        selector.map(TodoState(todos=["b"], done=[False]))

        assert first is second
        assert calls == [("a",), ("b",)]

    def test_requires_an_input(self):
        with pytest.raises(ValueError):
            create_selector()


class TestSelectorToSubject:
    """The bridge feeds a BehaviorSubject from the selector's projection."""

    def test_holds_initial_value(self):
        bridge = SelectorToSubject(unfinished_todos, [])

        assert bridge.value == []

    def test_state_change_updates_value(self):
        bridge = SelectorToSubject(unfinished_todos, [])

        bridge.on_state_changed(TodoState(todos=["a", "b"], done=[True, False]))

        assert bridge.value == ["b"]

    def test_subscribers_receive_distinct_values(self):
        received = []
        bridge = SelectorToSubject(lambda state: len(state.todos), 0)
        bridge.subscribe(received.append)

        bridge.on_state_changed(TodoState(todos=["a"], done=[False]))
        bridge.on_state_changed(TodoState(todos=["a"], done=[True]))
        bridge.on_state_changed(TodoState(todos=["a", "b"], done=[True, False]))

        assert received == [0, 1, 2]

    def test_sub_observers_are_notified(self):
        values = []
        bridge = SelectorToSubject(lambda state: len(state.todos), 0)
        bridge.observe_selector(values.append)

        bridge.on_state_changed(TodoState(todos=["a"], done=[False]))

        assert values == [1]

    def test_remove_all_completes_subject(self):
        completed = []
        bridge = SelectorToSubject(lambda state: len(state.todos), 0)
        bridge.subscribe(lambda value: None, on_completed=lambda: completed.append(True))

        bridge.remove_all_selector_observers()
        bridge.on_state_changed(TodoState(todos=["a"], done=[False]))

        assert completed == [True]
        assert bridge.value == 0
