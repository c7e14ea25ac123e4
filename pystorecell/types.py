"""
PyStoreCell 共用的類型定義。

集中放置泛型參數與協議 (Protocol)，避免模組之間的循環引用。
"""
from typing import Any, Callable, TypeVar

from typing_extensions import Protocol, runtime_checkable

S = TypeVar("S")  # 狀態類型
V = TypeVar("V")  # Selector 投影值類型

# (tag, message) 形式的日誌輸出函數
LogSink = Callable[[str, str], None]


@runtime_checkable
class Dispatcher(Protocol):
    """
    可分發 Action 的能力。

    Store 與 StoreContainer 皆實現此協議，Effect 也透過它繼續分發後續 Action。
    """

    def dispatch(self, action: Any) -> bool:
        ...


@runtime_checkable
class Cloneable(Protocol):
    """具備深拷貝能力、以值比較相等的狀態。"""

    def clone(self) -> Any:
        ...
