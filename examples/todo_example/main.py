from todo_actions import Add, SetDone, clear_done
from todo_selectors import get_unfinished
from todo_store import container, stats_store, todo_store

if __name__ == "__main__":
    # 訂閱狀態變化
    get_unfinished.observe_selector(lambda todos: print(f"未完成事項: {todos}"))
    todo_store.add_selector(True, get_unfinished)

    todo_store.select(lambda state: len(state.todos)).subscribe(
        on_next=lambda count: print(f"事項數量: {count}")
    )

    # 分發actions
    print("\n==== 開始測試基本操作 ====")
    container.dispatch(Add(todo="Invite friends"))
    container.dispatch(Add(todo="Cook dinner"))
    container.dispatch(SetDone(index=0))
    container.dispatch(clear_done())

    # 打印最終狀態
    print("\n==== 最終狀態 ====")
    print(todo_store.state)
    print(stats_store.state)

    container.teardown()
