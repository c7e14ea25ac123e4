"""
Selector 的便利實現與反應式橋接。

- CallbackSelector: 以投影函數建立 Selector
- create_selector: 組合多個輸入投影並記憶最後一次結果
- SelectorToSubject: 把 Selector 的輸出推入 reactivex 的 BehaviorSubject
"""
from typing import Any, Callable, Optional, Tuple

from reactivex import Observable
from reactivex import operators as ops
from reactivex.abc import DisposableBase
from reactivex.subject import BehaviorSubject

from .observation import Selector
from .types import S, V

_UNSET = object()


class CallbackSelector(Selector[S, V]):
    """以純投影函數建立的 Selector。"""

    def __init__(self, map_fn: Callable[[S], V]):
        super().__init__()
        self.map_fn = map_fn

    def map(self, state: S) -> V:
        return self.map_fn(state)


def create_selector(*selectors: Callable[[Any], Any], result_fn: Optional[Callable[..., Any]] = None) -> CallbackSelector:
    """
    創建一個複合選擇器，輸入值未改變時直接返回上一次的結果

    Args:
        *selectors: 多個輸入選擇器，這些函數會從 state 中提取對應的值
        result_fn: 處理輸出結果的函數，將多個選擇器的輸出進行處理

    Returns:
        可註冊到 Store 的 Selector
    """
    if not selectors:
        raise ValueError("create_selector requires at least one input selector")

    # 只有一個選擇器且沒有 result_fn 時直接使用它
    if result_fn is None and len(selectors) == 1:
        return CallbackSelector(selectors[0])

    # 如果沒有提供 result_fn，預設為返回所有輸入值的函數
    if result_fn is None:
        result_fn = lambda *args: args

    last_inputs: Any = _UNSET
    last_result: Any = None

    def memoized(state: Any) -> Any:
        nonlocal last_inputs, last_result
        inputs: Tuple[Any, ...] = tuple(select(state) for select in selectors)
        if last_inputs is not _UNSET and inputs == last_inputs:
            return last_result
        last_result = result_fn(*inputs)
        last_inputs = inputs
        return last_result

    return CallbackSelector(memoized)


class SelectorToSubject(Selector[S, V]):
    """
    反應式橋接：每次狀態改變都把 map(state) 推入一個 BehaviorSubject，
    讓 reactivex 的消費者可以訂閱最新值。

    Args:
        map_fn: 純投影函數
        initial_value: 在第一次狀態通知之前持有的值
    """

    def __init__(self, map_fn: Callable[[S], V], initial_value: V):
        super().__init__()
        self.map_fn = map_fn
        self._subject: BehaviorSubject = BehaviorSubject(initial_value)

    def map(self, state: S) -> V:
        return self.map_fn(state)

    def on_state_changed(self, state: S) -> None:
        value = self.map(state)
        self._subject.on_next(value)
        self.notify_observers(value)

    @property
    def value(self) -> V:
        """當前持有的值。"""
        return self._subject.value

    def subscribe(self, on_next: Callable[[V], None], **kwargs: Any) -> DisposableBase:
        """訂閱值的變化，訂閱時立即收到當前值。"""
        return self.as_observable().subscribe(on_next=on_next, **kwargs)

    def as_observable(self) -> Observable:
        """只在值改變時發出的 Observable。"""
        return self._subject.pipe(ops.distinct_until_changed())

    def remove_all_selector_observers(self) -> None:
        super().remove_all_selector_observers()
        # 完成 subject，讓所有下游訂閱一併解除
        self._subject.on_completed()
