"""
狀態基礎類。

State 以 pydantic 模型表示，相等性為值相等；clone() 產生一份與原物件
值相等、但不共享任何參考的深拷貝。
"""
import copy
from typing import Any, TypeVar

from pydantic import BaseModel

from .types import Cloneable

T = TypeVar("T", bound="State")


class State(BaseModel):
    """
    Store 所持有的完整資料。

    子類只需宣告欄位，例如:
        >>> class TodoState(State):
        ...     todos: List[str] = []
        ...     done: List[bool] = []
    """

    def clone(self: T) -> T:
        """返回當前狀態的深拷貝。"""
        return self.model_copy(deep=True)


def snapshot_of(state: Any) -> Any:
    """
    返回狀態的獨立快照。

    具備 clone() 的狀態使用 clone()，其他值以 copy.deepcopy 複製。
    """
    if isinstance(state, Cloneable):
        return state.clone()
    return copy.deepcopy(state)
