from pystorecell import LogMode, Store, StoreContainer, StoreSettings, create_store, on

from todo_actions import Add, SetDone, clear_done, saved
from todo_reducers import (
    AddTodoReducer, StatsState, TodoState, clear_done_handler, saved_handler, set_done_handler
)

settings = StoreSettings(log_mode=LogMode.MINIMAL, log_debug=lambda tag, message: print(f"[{tag}] {message}"))

# 創建Store並註冊Reducer
todo_store = (Store.builder()
              .with_settings(settings)
              .with_initial_state(TodoState())
              .register_reducer(Add, AddTodoReducer())
              .register_reducer(SetDone, set_done_handler)
              .register_reducer(clear_done, clear_done_handler)
              .build())

stats_store = create_store(StatsState(), on(saved, saved_handler), settings=settings)

# 組合成單一分發入口
container = StoreContainer.builder().add_store(todo_store).add_store(stats_store).build()
