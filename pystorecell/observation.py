"""
狀態觀察模組。

ObservationManager 為單一 Store 維護有序、不重複的觀察者列表，
並記住最後一次發布的狀態，以便新觀察者可以立即收到當前狀態。
"""
from abc import ABC, abstractmethod
from typing import Callable, Generic, List, Optional

from .logger import StoreLogger
from .settings import LogMode
from .types import S, V


class StateObserver(ABC, Generic[S]):
    """在狀態改變時收到通知的觀察者。"""

    @abstractmethod
    def on_state_changed(self, state: S) -> None:
        ...


class CallbackStateObserver(StateObserver[S]):
    """把一個回呼函數包裝成 StateObserver。"""

    def __init__(self, callback: Callable[[S], None]):
        self.callback = callback

    def on_state_changed(self, state: S) -> None:
        self.callback(state)


class Selector(StateObserver[S], Generic[S, V]):
    """
    衍生觀察者：把狀態投影成較窄的值，只向自己的觀察者發布該值。

    對 Store 而言，Selector 與其他 StateObserver 沒有區別。
    """

    def __init__(self) -> None:
        self._observers: List[Callable[[V], None]] = []

    @abstractmethod
    def map(self, state: S) -> V:
        """純投影函數，將狀態映射為要發布的值。"""

    def on_state_changed(self, state: S) -> None:
        self.notify_observers(self.map(state))

    def notify_observers(self, value: V) -> None:
        for observer in list(self._observers):
            observer(value)

    def observe_selector(self, observer: Callable[[V], None]) -> None:
        self._observers.append(observer)

    def remove_all_selector_observers(self) -> None:
        """清除所有值觀察者，不影響此 Selector 本身在 Store 中的註冊。"""
        self._observers.clear()

    @property
    def observer_count(self) -> int:
        return len(self._observers)


class ObservationManager(Generic[S]):
    """
    管理一個 Store 的所有狀態觀察者。

    Args:
        state: 初始狀態，用於註冊時要求立即發布的情況
        logger: 日誌器
        snapshot: 為每個觀察者產生獨立快照的函數，預設直接傳遞同一個物件
    """

    def __init__(self, state: S, logger: Optional[StoreLogger] = None,
                 snapshot: Optional[Callable[[S], S]] = None):
        self._state = state
        self._snapshot = snapshot or (lambda value: value)
        self._observers: List[StateObserver[S]] = []
        self._log = logger or StoreLogger()

    @property
    def observers(self) -> List[StateObserver[S]]:
        return list(self._observers)

    def _contains(self, observer: StateObserver[S]) -> bool:
        return any(registered is observer for registered in self._observers)

    def add_state_observer(self, publish_current_immediately: bool, observer: StateObserver[S]) -> StateObserver[S]:
        """
        註冊觀察者。同一個觀察者只會被註冊一次。

        Args:
            publish_current_immediately: 若為 True，立即以最後已知的狀態呼叫一次觀察者
            observer: 要註冊的 StateObserver (包括 Selector)

        Returns:
            傳入的 observer
        """
        if not self._contains(observer):
            self._observers.append(observer)
        if publish_current_immediately:
            observer.on_state_changed(self._snapshot(self._state))
        return observer

    def remove_observer(self, observer: StateObserver[S]) -> None:
        self._observers = [registered for registered in self._observers if registered is not observer]

    def teardown(self) -> None:
        """
        - 清除所有已註冊 Selector 的值觀察者
        - 清空觀察者列表
        """
        for observer in self._observers:
            if isinstance(observer, Selector):
                observer.remove_all_selector_observers()
        self._observers.clear()

    def on_state_changed(self, dispatch_count: int, state: S) -> None:
        self._state = state
        if not self._observers:
            self._log.d(type(self).__name__, LogMode.FULL,
                        f"{dispatch_count} - No observers present -> Skip notifications")
            return

        self._log.d(type(self).__name__, LogMode.FULL,
                    f"{dispatch_count} - Start notifying {len(self._observers)} observers")
        for observer in list(self._observers):
            observer.on_state_changed(self._snapshot(state))
