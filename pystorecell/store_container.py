"""
多個 Store 的組合。

StoreContainer 把多個互相獨立的 Store 放在同一個分發入口之後，
並成為每個成員 Store 的上層分發器，讓後續 Action 與 Effect 的分發回到容器。
"""
from typing import Any, List, Optional, Tuple

from .dispatch_counter import DispatchCounter
from .errors import StoreError
from .logger import StoreLogger
from .settings import DEFAULT_SETTINGS, LogMode, StoreSettings
from .store import Store

_BUILD_TOKEN = object()


class StoreContainer:
    """
    Store 的有序集合，對外表現為單一的分發器。

    只能透過 StoreContainerBuilder (或 StoreContainer.builder()) 建立。
    """

    def __init__(self, _token: object, stores: List[Store[Any]], settings: StoreSettings = DEFAULT_SETTINGS):
        if _token is not _BUILD_TOKEN:
            raise StoreError("A StoreContainer can only be created with a StoreContainerBuilder",
                             operation="__init__")
        self.settings = settings
        self._log = StoreLogger(settings)
        self._stores: List[Store[Any]] = list(stores)
        self._dispatch_counter = DispatchCounter()

        # 成為成員的上層分發器，並共用同一個計數器
        for store in self._stores:
            store._attach_to_container(self, self._dispatch_counter)

    @staticmethod
    def builder() -> "StoreContainerBuilder":
        return StoreContainerBuilder()

    @property
    def current_dispatch_count(self) -> int:
        return self._dispatch_counter.get()

    @property
    def dispatch_counter(self) -> DispatchCounter:
        return self._dispatch_counter

    @property
    def stores(self) -> Tuple[Store[Any], ...]:
        return tuple(self._stores)

    def wants(self, action: Any) -> bool:
        """
        Returns:
            True 表示至少有一個成員 Store 想要傳入的 action
        """
        return any(store.wants(action) for store in self._stores)

    def dispatch(self, action: Any) -> bool:
        """
        把 action 分發給每一個想要它的成員 Store。

        後續 Action 與 Effect 由各自的 Store 立即處理。

        Returns:
            True 表示至少有一個 Store 成功處理了 action
        """
        was_dispatched = False
        for store in [store for store in self._stores if store.wants(action)]:
            count = self._dispatch_counter.increment_and_get()
            self._log.d(type(self).__name__, LogMode.FULL,
                        f"{count} - Store for {store.state_name} wants action "
                        f"{getattr(action, 'type', type(action).__name__)} -> START dispatching")
            was_dispatched = store.dispatch(action) or was_dispatched
        return was_dispatched

    def teardown(self) -> None:
        """拆除所有成員 Store，並清空成員列表。"""
        for store in self._stores:
            store.teardown()
        self._stores.clear()

    def __repr__(self) -> str:
        return f"StoreContainer(stores={[store.state_name for store in self._stores]})"


class StoreContainerBuilder:
    """StoreContainer 的建構器，依加入順序保存成員 Store。"""

    def __init__(self) -> None:
        self._stores: List[Store[Any]] = []
        self._settings = DEFAULT_SETTINGS
        self._log = StoreLogger(self._settings)

    def with_settings(self, settings: StoreSettings) -> "StoreContainerBuilder":
        self._settings = settings
        self._log = StoreLogger(settings)
        return self

    def add_store(self, store: Store[Any]) -> "StoreContainerBuilder":
        """
        Args:
            store: 要加入的 Store；重複加入或已屬於其他容器的 Store 會被略過

        Returns:
            此建構器，用於鏈式呼叫
        """
        if any(added is store for added in self._stores):
            self._log.w(type(self).__name__, LogMode.MINIMAL,
                        f"Store for {store.state_name} has already been added to the store list -> Skipping add")
        elif store.is_part_of_container():
            self._log.w(type(self).__name__, LogMode.MINIMAL,
                        f"Store for {store.state_name} has already been added to another StoreContainer "
                        f"-> Skipping add")
        else:
            self._stores.append(store)
        return self

    def build(self) -> StoreContainer:
        """
        Returns:
            建構完成的 StoreContainer
        """
        stores: List[Store[Any]] = []
        for store in self._stores:
            # 加入建構器之後才被其他容器取得的 Store
            if store.is_part_of_container():
                self._log.w(type(self).__name__, LogMode.MINIMAL,
                            f"Store for {store.state_name} has been claimed by another StoreContainer "
                            f"-> Skipping add")
                continue
            stores.append(store)

        if not stores:
            self._log.w(type(self).__name__, LogMode.MINIMAL, "No stores set in Builder -> Create empty StoreContainer")
        return StoreContainer(_BUILD_TOKEN, stores, self._settings)
