"""
End-to-end scenarios.

Tests:
- Todo list with a derived projection
- Two stores behind one container
"""
from typing import ClassVar

from pystorecell import Reducer, ReducerResult, Store, StoreContainer, create_effect

from .models import (
    Add, CounterState, Increment, SetDone, TodoState, add_todo, increment, set_done, unfinished_todos
)


class AddTodoReducer(Reducer):
    """Example of a reducer implemented as a class."""

    def reduce(self, state, action):
        return ReducerResult(add_todo(state, action))


class TestTodoScenario:
    """Projected unfinished todos follow every dispatch."""

    def test_unfinished_todos(self, log_recorder, full_settings):
        store = (Store.builder()
                 .with_settings(full_settings)
                 .with_initial_state(TodoState(todos=[], done=[]))
                 .register_reducer(Add, AddTodoReducer())
                 .register_reducer(SetDone, set_done)
                 .build())
        unfinished = store.add_selector_subject(False, [], unfinished_todos)

        store.dispatch(Add(todo="Invite friends"))
        store.dispatch(Add(todo="Cook dinner"))
        store.dispatch(SetDone(index=0))

        assert unfinished.value == ["Cook dinner"]
        assert store.state == TodoState(todos=["Invite friends", "Cook dinner"], done=[True, False])
        assert log_recorder.warnings() == []
        assert any("Dispatch action" in message for _, _, message in log_recorder.records)

    def test_history_of_projection(self):
        store = (Store.builder()
                 .with_initial_state(TodoState())
                 .register_reducer(Add, add_todo)
                 .register_reducer(SetDone, set_done)
                 .build())
        history = []
        store.add_selector_callback(True, unfinished_todos, history.append)

        store.dispatch(Add(todo="Invite friends"))
        store.dispatch(Add(todo="Cook dinner"))
        store.dispatch(SetDone(index=0))

        assert history == [
            [],
            ["Invite friends"],
            ["Invite friends", "Cook dinner"],
            ["Cook dinner"],
        ]


class Audit(TodoState):
    pass


class Audited(Add):
    type: ClassVar[str] = "[Audit] Added"


class TestContainerScenario:
    """An effect in one store drives another store through the container."""

    def test_effect_fans_out(self):
        @create_effect
        def audit(state, dispatcher):
            dispatcher.dispatch(Increment())

        todos = (Store.builder()
                 .with_initial_state(TodoState())
                 .register_result_reducer(Add, lambda state, action: ReducerResult(
                     add_todo(state, action), effect=audit()))
                 .build())
        counter = Store.builder().with_initial_state(CounterState()).register_reducer(Increment, increment).build()
        container = StoreContainer.builder().add_store(todos).add_store(counter).build()

        container.dispatch(Add(todo="Invite friends"))
        container.dispatch(Add(todo="Cook dinner"))

        assert todos.state.todos == ["Invite friends", "Cook dinner"]
        assert counter.state.count == 2

    def test_subclassed_action_has_its_own_tag(self):
        audit = (Store.builder()
                 .with_initial_state(Audit())
                 .register_reducer(Audited, add_todo)
                 .build())

        assert audit.dispatch(Add(todo="x")) is False
        assert audit.dispatch(Audited(todo="x")) is True
        assert audit.state.todos == ["x"]
