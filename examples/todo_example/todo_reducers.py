from typing import List

from pystorecell import Reducer, ReducerResult, State, create_effect

from todo_actions import Add, saved


# ====== Model Definition ======
class TodoState(State):
    todos: List[str] = []
    done: List[bool] = []


class StatsState(State):
    saves: int = 0


# ====== Effects ======
@create_effect
def announce_saved(state: TodoState, dispatcher) -> None:
    """模擬儲存完成後通知統計 Store"""
    print(f"Effect: saved {len(state.todos)} todos")
    dispatcher.dispatch(saved())


# ====== Reducers ======
class AddTodoReducer(Reducer):
    """以類別實現的 Reducer，新增待辦事項後觸發 Effect"""

    def reduce(self, state: TodoState, action: Add) -> ReducerResult:
        state.todos.append(action.todo)
        state.done.append(False)
        return ReducerResult(state, effect=announce_saved())


def set_done_handler(state: TodoState, action) -> TodoState:
    done = list(state.done)
    done[action.index] = True
    return state.model_copy(update={"done": done})


def clear_done_handler(state: TodoState, action) -> TodoState:
    keep = [index for index, done in enumerate(state.done) if not done]
    return TodoState(
        todos=[state.todos[index] for index in keep],
        done=[False] * len(keep),
    )


def saved_handler(state: StatsState, action) -> StatsState:
    return StatsState(saves=state.saves + 1)
