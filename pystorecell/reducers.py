"""
Reducer 契約與 ReducerResult。

每個 Reducer 只負責一種 Action (以標籤區分)，由 Store 在註冊時綁定。
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Generic, Optional

from .actions import Action, ActionKey, action_type_of, resolve_action_type
from .effects import Effect
from .errors import ReducerError
from .types import S


class ReducerResult(Generic[S]):
    """
    一次 reduce 的完整結果。

    屬性:
        state: reduce 之後的新狀態
        action: 可選的後續 Action，會在新狀態提交後分發
        effect: 可選的一次性副作用，會在後續 Action 處理完之後執行

    action 與 effect 可以同時設定，但 effect 綁定的是後續 Action 執行之前的狀態快照，
    Store 會為此記錄一條警告。
    """
    __slots__ = ('state', 'action', 'effect')

    def __init__(self, state: S, action: Optional[Action] = None, effect: Optional[Effect[S]] = None):
        super().__setattr__('state', state)
        super().__setattr__('action', action)
        super().__setattr__('effect', effect)

    def __setattr__(self, name, value):
        raise AttributeError(f"Cannot modify immutable instance attribute '{name}'")

    @property
    def has_action_and_effect(self) -> bool:
        return self.action is not None and self.effect is not None

    def __eq__(self, other):
        if not isinstance(other, ReducerResult):
            return False
        return (self.state == other.state
                and self.action == other.action
                and self.effect is other.effect)

    def __repr__(self):
        return f"ReducerResult(state={self.state!r}, action={self.action!r}, effect={self.effect!r})"


class Reducer(ABC, Generic[S]):
    """
    處理單一 Action 類型的純轉換。

    子類實現 reduce()；若持有需要釋放的資源，可覆寫 teardown()，
    它會在所屬 Store 執行 teardown() 時被呼叫。
    """

    _action_type: Optional[str] = None

    @property
    def action_type(self) -> Optional[str]:
        """註冊時綁定的 Action 標籤，尚未註冊時為 None。"""
        return self._action_type

    def bind_action_type(self, action_type: str) -> None:
        """僅供 StoreBuilder 在註冊時呼叫。"""
        self._action_type = action_type

    def wants(self, action: Any) -> bool:
        """
        Returns:
            True 表示此 Reducer 可以處理傳入的 action
        """
        return self._action_type is not None and action_type_of(action) == self._action_type

    def reduce_checked(self, state: S, action: Action) -> ReducerResult[S]:
        """
        與 reduce 相同，但先確認 wants(action) 成立。

        Raises:
            ReducerError: Reducer 被要求處理它不想要的 Action
        """
        if not self.wants(action):
            raise ReducerError(
                f"The reducer {type(self).__name__} has not been asked whether it wants the action "
                f"{action!r}. The reduce method has been called illegally",
                reducer_name=type(self).__name__,
                action_type=action_type_of(action),
            )
        return self.reduce(state, action)

    @abstractmethod
    def reduce(self, state: S, action: Any) -> ReducerResult[S]:
        """
        將 state 與 action 歸約為一個 ReducerResult。

        Args:
            state: 當前狀態的獨立副本
            action: 要處理的 Action

        Returns:
            包含新狀態以及可選後續 Action / Effect 的結果
        """

    def teardown(self) -> None:
        pass


class CallbackReducer(Reducer[S]):
    """以回呼函數實現的 Reducer，回呼直接返回 ReducerResult。"""

    def __init__(self, code: Callable[[S, Any], ReducerResult[S]]):
        self.code = code

    def reduce(self, state: S, action: Any) -> ReducerResult[S]:
        return self.code(state, action)


class StateCallbackReducer(CallbackReducer[S]):
    """以回呼函數實現的 Reducer，回呼只返回新狀態，沒有後續 Action 或 Effect。"""

    def __init__(self, code_to_state: Callable[[S, Any], S]):
        self.code_to_state = code_to_state
        super().__init__(lambda state, action: ReducerResult(code_to_state(state, action)))


def on(action_key: ActionKey, handler) -> Dict[str, Any]:
    """
    創建一個 action 類型與處理器的映射。

    Args:
        action_key: Action 類別、Action 創建器函式或 Action 類型字串。
        handler: Reducer 實例，或接收 (state, action) 並返回新狀態的函式。

    Returns:
        一個包含 {action_type: handler} 的字典。
    """
    return {resolve_action_type(action_key): handler}
