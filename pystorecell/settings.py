"""
PyStoreCell 的設定模組。

設定物件在建構 Store / StoreContainer 時顯式傳入，不存在任何全域可變設定，
因此測試之間不需要重置狀態。
"""
from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .types import LogSink


class LogMode(IntEnum):
    """
    日誌詳細程度，數值越大輸出越多。

    DISABLED: 不輸出任何日誌
    MINIMAL: 只輸出分發入口與註冊衝突等重要訊息
    FULL: 輸出分發流程中的每一個步驟
    """
    DISABLED = 0
    MINIMAL = 1
    FULL = 2


class StoreSettings(BaseModel):
    """
    Store 與 StoreContainer 共用的設定。

    屬性:
        log_mode: 日誌詳細程度
        log_debug: 自訂 debug 日誌輸出，接收 (tag, message)；為 None 時使用 logging 模組
        log_warn: 自訂 warning 日誌輸出，接收 (tag, message)；為 None 時使用 logging 模組
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    log_mode: LogMode = LogMode.MINIMAL
    log_debug: Optional[LogSink] = None
    log_warn: Optional[LogSink] = None


DEFAULT_SETTINGS = StoreSettings()
