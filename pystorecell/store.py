"""
單一狀態容器 Store 與其建構器。

Store 持有當前狀態、從 Action 標籤到唯一 Reducer 的註冊表、
觀察者管理器以及分發計數器。狀態只能透過分發流程、rehydrate 或 reset 改變。
"""
from typing import Any, Callable, Dict, Generic, Optional, Union

import reactivex
from reactivex import Observable
from reactivex.abc import DisposableBase, ObserverBase, SchedulerBase
from reactivex.disposable import Disposable

from .actions import Action, ActionKey, action_type_of, resolve_action_type
from .dispatch_counter import DispatchCounter
from .errors import StoreError
from .logger import StoreLogger
from .observation import CallbackStateObserver, ObservationManager, Selector, StateObserver
from .reducers import CallbackReducer, Reducer, ReducerResult, StateCallbackReducer
from .settings import DEFAULT_SETTINGS, LogMode, StoreSettings
from .state import snapshot_of
from .store_selectors import CallbackSelector, SelectorToSubject
from .types import Dispatcher, S, V

_BUILD_TOKEN = object()


class Store(Generic[S]):
    """
    狀態容器，管理應用狀態並通知訂閱者狀態變更。

    分發、歸約、提交、通知、後續 Action 的遞迴分發以及 Effect 的執行，
    全部在呼叫 dispatch 的同一個呼叫堆疊中同步完成。

    Store 內部沒有任何同步機制 (只有分發計數器是執行緒安全的)。
    從多個執行緒同時呼叫 dispatch 時，呼叫端必須自行序列化。

    只能透過 StoreBuilder (或 Store.builder() / create_store) 建立。
    """

    def __init__(self, _token: object, initial_state: S, reducers: Dict[str, Reducer[S]],
                 settings: StoreSettings = DEFAULT_SETTINGS):
        if _token is not _BUILD_TOKEN:
            raise StoreError("A Store can only be created with a StoreBuilder", operation="__init__")

        self.settings = settings
        self._log = StoreLogger(settings)
        # 保存初始狀態，供 reset() 使用
        self._initial_state: S = snapshot_of(initial_state)
        self._state: S = snapshot_of(initial_state)
        self._reducers: Dict[str, Reducer[S]] = dict(reducers)
        self._observation: ObservationManager[S] = ObservationManager(self._state, self._log, snapshot=snapshot_of)
        # 加入 StoreContainer 後由容器注入
        self._injected_dispatcher: Optional[Dispatcher] = None
        self._dispatch_counter = DispatchCounter()
        self._torn_down = False

    @staticmethod
    def builder() -> "StoreBuilder":
        return StoreBuilder()

    @property
    def state(self) -> S:
        """
        獲取當前狀態的快照。

        Returns:
            與 Store 內部狀態互不影響的深拷貝。
        """
        return snapshot_of(self._state)

    @property
    def state_name(self) -> str:
        return type(self._state).__name__

    @property
    def dispatch_counter(self) -> DispatchCounter:
        return self._dispatch_counter

    @property
    def reducer_count(self) -> int:
        return len(self._reducers)

    @property
    def is_torn_down(self) -> bool:
        return self._torn_down

    def is_part_of_container(self) -> bool:
        """
        Returns:
            True 表示此 Store 已經被加入某個 StoreContainer
        """
        return self._injected_dispatcher is not None

    def _attach_to_container(self, dispatcher: Dispatcher, counter: DispatchCounter) -> None:
        """僅供 StoreContainer 建構時呼叫。"""
        self._injected_dispatcher = dispatcher
        self._dispatch_counter = counter

    def wants(self, action: Any) -> bool:
        """
        Returns:
            True 表示有已註冊的 Reducer 可以處理傳入的 action
        """
        return action_type_of(action) in self._reducers

    def dispatch(self, action: Action) -> bool:
        """
        將 action 分發給想要它的 Reducer；沒有 Reducer 想要時什麼都不做。

        Args:
            action: 要分發的 Action

        Returns:
            True 表示 action 已被處理，False 表示沒有 Reducer 想要它
        """
        count = self._dispatch_counter.increment_and_get()
        self._log.d(type(self).__name__, LogMode.MINIMAL, f"{self._prefix(count)} Dispatch action: {action!r}")

        reducer = self._reducers.get(action_type_of(action))
        if reducer is None or not reducer.wants(action):
            self._log.d(type(self).__name__, LogMode.FULL,
                        f"{self._prefix(count)} No reducer wants action {action_type_of(action)} -> Skip")
            return False

        self._log.d(type(self).__name__, LogMode.FULL,
                    f"{self._prefix(count)} Found reducer {type(reducer).__name__} for action "
                    f"{action.type}. Start reduction ...")
        result = reducer.reduce_checked(self.state, action)
        self._log.d(type(self).__name__, LogMode.FULL,
                    f"{self._prefix(count)} Finished reduction of action {action.type}")

        self._set_new_state(count, result)
        return True

    def republish(self) -> None:
        """把當前狀態無條件地重新發布給所有觀察者，不推進計數器。"""
        count = self._dispatch_counter.get()
        self._log.d(type(self).__name__, LogMode.FULL, f"{self._prefix(count)} republish current state")
        self._observation.on_state_changed(count, self._state)

    def rehydrate(self, state: S) -> None:
        """
        從外部設定狀態並發布給所有觀察者。

        與當前狀態相等時什麼都不做，連 republish 也不會發生。
        用於把外部保存的狀態放回 Store。

        Args:
            state: 外部提供的新狀態
        """
        count = self._dispatch_counter.increment_and_get()
        self._log.d(type(self).__name__, LogMode.FULL, f"{self._prefix(count)} rehydrate state")
        self._set_new_state(count, ReducerResult(snapshot_of(state)))

    def reset(self) -> None:
        """恢復為建構時提供的初始狀態，與 rehydrate 一樣只在狀態不同時通知。"""
        count = self._dispatch_counter.increment_and_get()
        self._log.d(type(self).__name__, LogMode.FULL, f"{self._prefix(count)} reset to initial state")
        self._set_new_state(count, ReducerResult(snapshot_of(self._initial_state)))

    def teardown(self) -> None:
        """
        拆除此 Store:
        - 拆除觀察 (清空觀察者，並移除所有 Selector 的值觀察者)
        - 呼叫每個 Reducer 的 teardown()
        - 清空 Reducer 註冊表

        可以重複呼叫。
        """
        self._observation.teardown()
        for reducer in self._reducers.values():
            reducer.teardown()
        self._reducers.clear()
        self._torn_down = True

    # ---- 觀察 ----

    def add_state_observer(self, publish_current_immediately: bool,
                           observer: Union[StateObserver[S], Callable[[S], None]]) -> StateObserver[S]:
        """
        註冊狀態觀察者，可以是 StateObserver 實例或回呼函數。

        Args:
            publish_current_immediately: 若為 True，立即以當前狀態呼叫一次觀察者
            observer: StateObserver 或接收狀態的回呼函數

        Returns:
            已註冊的 StateObserver (回呼函數會被包裝成 CallbackStateObserver)
        """
        if not isinstance(observer, StateObserver):
            observer = CallbackStateObserver(observer)
        return self._observation.add_state_observer(publish_current_immediately, observer)

    def add_selector(self, publish_current_immediately: bool, selector: Selector[S, V]) -> Selector[S, V]:
        self._observation.add_state_observer(publish_current_immediately, selector)
        return selector

    def add_selector_callback(self, publish_current_immediately: bool, map_fn: Callable[[S], V],
                              observer: Optional[Callable[[V], None]] = None) -> Selector[S, V]:
        """
        以投影函數建立並註冊一個 Selector。

        Args:
            publish_current_immediately: 若為 True，立即以當前狀態計算並發布一次
            map_fn: 狀態到值的純投影
            observer: 可選的值觀察者

        Returns:
            新建立的 Selector
        """
        selector = CallbackSelector(map_fn)
        if observer is None and publish_current_immediately:
            self._log.w(type(self).__name__, LogMode.MINIMAL,
                        "Adding selector with publish_current_immediately set, but without an observer function -> "
                        "The current state will not be published anywhere by this Selector.")
        if observer is not None:
            selector.observe_selector(observer)
        return self.add_selector(publish_current_immediately, selector)

    def add_selector_subject(self, publish_current_immediately: bool, initial_value: V,
                             map_fn: Callable[[S], V]) -> SelectorToSubject[S, V]:
        """建立並註冊一個把投影值推入 BehaviorSubject 的 Selector。"""
        selector = SelectorToSubject(map_fn, initial_value)
        self.add_selector(publish_current_immediately, selector)
        return selector

    def select(self, map_fn: Callable[[S], V]) -> Observable:
        """
        選擇狀態的一部分進行觀察。

        每次訂閱都會註冊一個專屬的 Selector，訂閱被取消時從 Store 移除。

        Args:
            map_fn: 一個函數，接收整個狀態並返回希望觀察的部分。

        Returns:
            一個可觀察對象，訂閱時立即發出當前值，之後只在值改變時發出。
        """

        def subscribe(observer: ObserverBase, scheduler: Optional[SchedulerBase] = None) -> DisposableBase:
            selector = self.add_selector_subject(False, map_fn(self.state), map_fn)
            subscription = selector.as_observable().subscribe(observer, scheduler=scheduler)

            def dispose() -> None:
                subscription.dispose()
                self.remove_observer(selector)

            return Disposable(dispose)

        return reactivex.create(subscribe)

    def remove_observer(self, observer: StateObserver[S]) -> None:
        self._observation.remove_observer(observer)

    # ---- 內部流程 ----

    def _set_new_state(self, count: int, result: ReducerResult[S]) -> None:
        """處理新狀態出現後的所有步驟：提交與發布、後續 Action、Effect。"""
        if result.has_action_and_effect:
            self._log.w(type(self).__name__, LogMode.FULL,
                        f"{self._prefix(count)} Action and Effect should not be set at the same time. The Effect "
                        f"works on a state captured before the follow up action has been reduced")

        if self._state != result.state:
            self._log.d(type(self).__name__, LogMode.FULL, f"{self._prefix(count)} Store new state")
            self._state = result.state
            self._observation.on_state_changed(count, self._state)
        else:
            self._log.d(type(self).__name__, LogMode.FULL,
                        f"{self._prefix(count)} State has not changed -> Skip notifications")

        if result.action is None and result.effect is None:
            return

        dispatcher = self._resolve_dispatcher(count)
        if result.action is not None:
            self._log.d(type(self).__name__, LogMode.FULL,
                        f"{self._prefix(count)} Follow up action {action_type_of(result.action)} detected "
                        f"-> pass to dispatch")
            dispatcher.dispatch(result.action)
        if result.effect is not None:
            self._log.d(type(self).__name__, LogMode.FULL,
                        f"{self._prefix(count)} Effect {result.effect!r} detected -> start execution")
            result.effect.execute(snapshot_of(result.state), dispatcher, logger=self._log)

    def _resolve_dispatcher(self, count: int) -> Dispatcher:
        if self._injected_dispatcher is not None:
            self._log.d(type(self).__name__, LogMode.FULL,
                        f"{self._prefix(count)} Use injected dispatcher {type(self._injected_dispatcher).__name__}")
            return self._injected_dispatcher
        self._log.d(type(self).__name__, LogMode.FULL, f"{self._prefix(count)} Use current store as dispatcher")
        return self

    def _prefix(self, count: int) -> str:
        return f"{count} - Store for {self.state_name} -"

    def __repr__(self) -> str:
        return f"Store(state={self.state_name}, reducers={list(self._reducers)})"


class StoreBuilder(Generic[S]):
    """
    Store 的建構器。

    用法:
        >>> store = (Store.builder()
        ...          .with_initial_state(TodoState())
        ...          .register_reducer(Add, add_todo)
        ...          .build())
    """

    def __init__(self) -> None:
        self._initial_state: Optional[S] = None
        self._has_initial_state = False
        self._reducers: Dict[str, Reducer[S]] = {}
        self._settings = DEFAULT_SETTINGS
        self._log = StoreLogger(self._settings)

    def with_initial_state(self, initial_state: S) -> "StoreBuilder[S]":
        """
        Args:
            initial_state: 必須提供，否則 build() 會拋出 StoreError
        """
        self._initial_state = initial_state
        self._has_initial_state = True
        return self

    def with_settings(self, settings: StoreSettings) -> "StoreBuilder[S]":
        self._settings = settings
        self._log = StoreLogger(settings)
        return self

    def register_reducer(self, action_key: ActionKey,
                         reducer: Union[Reducer[S], Callable[[S, Any], S]]) -> "StoreBuilder[S]":
        """
        註冊處理 action_key 的 Reducer。

        Args:
            action_key: Action 類別、Action 創建器或標籤字串
            reducer: Reducer 實例，或接收 (state, action) 並返回新狀態的函數

        Returns:
            此建構器，用於鏈式呼叫
        """
        if not isinstance(reducer, Reducer):
            if not callable(reducer):
                raise TypeError(f"Expected a Reducer or a callable, got {reducer!r}")
            reducer = StateCallbackReducer(reducer)
        return self._register(resolve_action_type(action_key), reducer)

    def register_result_reducer(self, action_key: ActionKey,
                                code: Callable[[S, Any], ReducerResult[S]]) -> "StoreBuilder[S]":
        """註冊一個直接返回 ReducerResult 的回呼函數。"""
        return self._register(resolve_action_type(action_key), CallbackReducer(code))

    def _register(self, action_type: str, reducer: Reducer[S]) -> "StoreBuilder[S]":
        # 同一個 Reducer 不能註冊兩次
        if any(registered is reducer for registered in self._reducers.values()):
            self._log.w(type(self).__name__, LogMode.MINIMAL,
                        "Reducer has already been registered -> Skipping registration")
            return self

        # 每種 Action 只能有一個 Reducer
        if action_type in self._reducers:
            self._log.w(type(self).__name__, LogMode.MINIMAL,
                        f"Reducer wants action ({action_type}) that is already wanted by a registered reducer "
                        f"({type(self._reducers[action_type]).__name__}) -> Skipping registration")
            return self

        reducer.bind_action_type(action_type)
        self._reducers[action_type] = reducer
        return self

    def build(self) -> Store[S]:
        """
        Returns:
            建構完成的 Store

        Raises:
            StoreError: 沒有設定初始狀態
        """
        if not self._has_initial_state:
            raise StoreError("InitialState is not set", operation="build")
        return Store(_BUILD_TOKEN, self._initial_state, self._reducers, self._settings)


def create_store(initial_state: S, *handlers, settings: Optional[StoreSettings] = None) -> Store[S]:
    """
    創建一個新的 Store 實例。

    Args:
        initial_state: 初始狀態。
        *handlers: 一系列 (action_key, handler) 元組或使用 on 函式創建的映射。
        settings: 可選的設定。

    Returns:
        Store: 新創建的 Store 實例。
    """
    builder: StoreBuilder[S] = StoreBuilder().with_initial_state(initial_state)
    if settings is not None:
        builder.with_settings(settings)

    for handler in handlers:
        if isinstance(handler, tuple) and len(handler) == 2:
            # 如果 handler 是元組，則解構為 action 類型與處理器
            builder.register_reducer(*handler)
        else:
            for action_type, reducer in handler.items():
                builder.register_reducer(action_type, reducer)
    return builder.build()
