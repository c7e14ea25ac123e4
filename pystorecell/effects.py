"""
一次性副作用 (Effect) 模組。

Effect 由 Reducer 透過 ReducerResult 返回，Store 在提交新狀態、
處理完後續 Action 之後執行它。每個 Effect 最多執行一次。
"""
import functools
from typing import Any, Callable, Generic, Optional

from .logger import StoreLogger
from .settings import LogMode
from .types import Dispatcher, S

# 副作用本體：接收 (state, dispatcher)
EffectCode = Callable[[Any, Dispatcher], None]


class Effect(Generic[S]):
    """
    綁定狀態快照與分發能力的一次性副作用。

    Args:
        code: 副作用本體，接收 (state, dispatcher)，不返回任何值；
              可以透過 dispatcher 繼續分發 Action
    """

    def __init__(self, code: EffectCode):
        self.code = code
        self._consumed = False

    @property
    def is_consumed(self) -> bool:
        """False 表示尚未執行；True 表示已執行過，不會再執行。"""
        return self._consumed

    def execute(self, state: S, dispatcher: Dispatcher, logger: Optional[StoreLogger] = None) -> None:
        """
        執行副作用。已執行過的 Effect 只記錄一條警告並略過。

        Args:
            state: 此 Effect 作用的狀態快照
            dispatcher: 用來分發後續 Action 的 Store 或其所屬的 StoreContainer
            logger: 日誌器，未提供時使用預設設定
        """
        logger = logger or StoreLogger()
        if self._consumed:
            logger.w(type(self).__name__, LogMode.MINIMAL, "Effect has already been consumed -> SKIP invocation")
            return

        self.code(state, dispatcher)
        self._consumed = True
        logger.d(type(self).__name__, LogMode.MINIMAL, "Effect successfully consumed")

    def __repr__(self) -> str:
        name = getattr(self.code, "__name__", repr(self.code))
        return f"Effect({name}, consumed={self._consumed})"


def create_effect(effect_fn: EffectCode) -> Callable[[], Effect[S]]:
    """
    將函數包裝成 Effect 工廠，每次呼叫都返回一個尚未執行的新 Effect。

    用法：
      @create_effect
      def notify_saved(state, dispatcher):
          dispatcher.dispatch(Saved())

      return ReducerResult(new_state, effect=notify_saved())
    """

    @functools.wraps(effect_fn)
    def factory() -> Effect[S]:
        return Effect(effect_fn)

    # 標記這個工廠會產生 Effect
    factory.is_effect = True  # type: ignore[attr-defined]
    return factory
