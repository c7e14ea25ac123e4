"""
PyStoreCell 內部使用的日誌門面。

每條訊息都帶有一個 LogMode 等級，只有在設定的詳細程度足夠時才會輸出。
"""
import logging
from typing import Optional

from .settings import DEFAULT_SETTINGS, LogMode, StoreSettings

TAG_PREFIX = "pystorecell"


def log_tag(name: str) -> str:
    """產生日誌標籤，同時也是 logging 模組的 logger 名稱。"""
    return f"{TAG_PREFIX}.{name}"


class StoreLogger:
    """
    依照 StoreSettings 決定是否輸出、輸出到哪裡的日誌器。

    Args:
        settings: 日誌設定，未提供時使用預設設定 (MINIMAL，輸出到 logging 模組)
    """

    def __init__(self, settings: Optional[StoreSettings] = None):
        self.settings = settings or DEFAULT_SETTINGS

    def is_allowed(self, level: LogMode) -> bool:
        mode = self.settings.log_mode
        return mode != LogMode.DISABLED and level <= mode

    def d(self, name: str, level: LogMode, message: str) -> None:
        """以 debug 嚴重度輸出。"""
        if not self.is_allowed(level):
            return
        tag = log_tag(name)
        if self.settings.log_debug is not None:
            self.settings.log_debug(tag, message)
        else:
            logging.getLogger(tag).debug(message)

    def w(self, name: str, level: LogMode, message: str) -> None:
        """以 warning 嚴重度輸出。"""
        if not self.is_allowed(level):
            return
        tag = log_tag(name)
        if self.settings.log_warn is not None:
            self.settings.log_warn(tag, message)
        else:
            logging.getLogger(tag).warning(message)
