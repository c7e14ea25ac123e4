"""
PyStoreCell 的 Action 定義模組。

Action 是描述狀態變更意圖的不可變訊息，本身沒有任何行為。
每個具體的 Action 類別都帶有一個穩定的字串標籤 `type`，
Store 以這個標籤 (而非執行期的類別身分) 找到唯一對應的 Reducer。
"""
import re
from typing import Any, Callable, ClassVar, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from .immutable_utils import to_immutable


class Action(BaseModel):
    """
    所有 Action 的基礎類。

    子類以 pydantic 欄位描述負載，標籤預設為 "<模組>.<類別名>"，
    也可以顯式指定:

        >>> class Add(Action):
        ...     type: ClassVar[str] = "[Todo] Add"
        ...     todo: str
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type: ClassVar[str] = "pystorecell.actions.Action"

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        if "type" not in cls.__dict__:
            cls.type = f"{cls.__module__}.{cls.__qualname__}"


class PayloadAction(Action):
    """
    由 create_action 產生的 Action，負載放在單一的 payload 欄位中。

    dict / list / set 類型的負載會被轉換成 immutables.Map / tuple / frozenset。
    """
    payload: Any = None

    @field_validator("payload", mode="before")
    @classmethod
    def _freeze_payload(cls, value: Any) -> Any:
        return to_immutable(value)

    def __repr__(self) -> str:
        return f"Action(type='{self.type}', payload={self.payload!r})"


ActionKey = Union[str, type, Callable[..., Action]]


def resolve_action_type(key: ActionKey) -> str:
    """
    將 Action 類別、Action 創建器或標籤字串統一轉換為標籤。

    Args:
        key: Action 子類、create_action 返回的創建器，或標籤字串

    Returns:
        Action 的標籤

    Raises:
        TypeError: 無法從 key 取得標籤時
    """
    if isinstance(key, str):
        return key
    if isinstance(key, type) and issubclass(key, Action):
        return key.type
    action_type = getattr(key, "type", None)
    if callable(key) and isinstance(action_type, str):
        return action_type
    raise TypeError(f"Cannot resolve an action type from {key!r}")


def action_type_of(action: Any) -> Optional[str]:
    """返回 Action 實例的標籤，非 Action 物件返回 None。"""
    if isinstance(action, Action):
        return action.type
    return None


def _class_name_for(action_type: str) -> str:
    name = re.sub(r"\W+", "_", action_type).strip("_")
    return name or "PayloadAction"


def create_action(action_type: str, prepare_fn: Optional[Callable[..., Any]] = None) -> Callable[..., PayloadAction]:
    """
    創建一個 Action 生成器函數。

    Args:
        action_type: Action 的類型標識符
        prepare_fn: 可選的預處理函數，用於在創建 Action 前處理輸入參數

    Returns:
        一個可調用的函數，用於生成指定類型的 Action

    範例:
        >>> increment = create_action("[Counter] Increment")
        >>> increment()  # 返回 Action(type="[Counter] Increment", payload=None)
        >>>
        >>> add = create_action("[Counter] Add", lambda amount: amount)
        >>> add(5)  # 返回 Action(type="[Counter] Add", payload=5)
    """
    tag = action_type

    class _CreatedAction(PayloadAction):
        type: ClassVar[str] = tag

    _CreatedAction.__name__ = _CreatedAction.__qualname__ = _class_name_for(action_type)

    def action_creator(*args: Any, **kwargs: Any) -> PayloadAction:
        if prepare_fn:
            return _CreatedAction(payload=prepare_fn(*args, **kwargs))
        elif len(args) == 1 and not kwargs:
            return _CreatedAction(payload=args[0])
        elif args or kwargs:
            payload: Dict[Union[int, str], Any] = dict(zip(range(len(args)), args))
            payload.update(kwargs)
            return _CreatedAction(payload=payload)

        # 無參數，無負載
        return _CreatedAction()

    # 添加 type 屬性以便於識別
    action_creator.type = action_type  # type: ignore[attr-defined]
    action_creator.action_class = _CreatedAction  # type: ignore[attr-defined]

    return action_creator
