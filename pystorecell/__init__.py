"""
PyStoreCell：以單向資料流管理狀態的核心庫。

Action 描述意圖，Reducer 計算新狀態，Store 提交狀態並通知觀察者，
StoreContainer 把多個 Store 組合成單一的分發入口。
"""

from .errors import PyStoreCellError, ReducerError, StoreError
from .settings import LogMode, StoreSettings
from .logger import StoreLogger
from .state import State, snapshot_of
from .actions import Action, PayloadAction, create_action, resolve_action_type
from .effects import Effect, create_effect
from .reducers import (
    Reducer, ReducerResult, CallbackReducer, StateCallbackReducer, on
)
from .dispatch_counter import DispatchCounter
from .observation import (
    StateObserver, CallbackStateObserver, Selector, ObservationManager
)
from .store_selectors import CallbackSelector, SelectorToSubject, create_selector
from .store import Store, StoreBuilder, create_store
from .store_container import StoreContainer, StoreContainerBuilder
from .immutable_utils import to_immutable, to_dict
from .types import Dispatcher

__version__ = "0.1.0"

# 匯出所有公開 API
__all__ = [
    # Errors
    "PyStoreCellError", "ReducerError", "StoreError",

    # Settings / Logging
    "LogMode", "StoreSettings", "StoreLogger",

    # State / Actions / Effects
    "State", "snapshot_of",
    "Action", "PayloadAction", "create_action", "resolve_action_type",
    "Effect", "create_effect",

    # Reducers
    "Reducer", "ReducerResult", "CallbackReducer", "StateCallbackReducer", "on",

    # Observation
    "DispatchCounter",
    "StateObserver", "CallbackStateObserver", "Selector", "ObservationManager",
    "CallbackSelector", "SelectorToSubject", "create_selector",

    # Store
    "Store", "StoreBuilder", "create_store",
    "StoreContainer", "StoreContainerBuilder",
    "Dispatcher",

    # Immutable Utils
    "to_immutable", "to_dict",
]
