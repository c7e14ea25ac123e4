from pystorecell import create_selector

# 定義Selectors
get_todos = lambda state: tuple(state.todos)
get_done = lambda state: tuple(state.done)

get_unfinished = create_selector(
    get_todos, get_done,
    result_fn=lambda todos, done: [todo for todo, finished in zip(todos, done) if not finished],
)
