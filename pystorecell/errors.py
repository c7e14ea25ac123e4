"""
PyStoreCell 錯誤處理模組。

只有違反程式契約的情況才會拋出異常；軟性的註冊衝突一律記錄警告並略過。
"""
from typing import Any, Dict, Optional


class PyStoreCellError(Exception):
    """所有 PyStoreCell 異常的基礎類。"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """將錯誤轉換為字典，方便記錄或回報。"""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class ReducerError(PyStoreCellError):
    """
    與 Reducer 相關的錯誤。

    在 Reducer 不想要 (wants 為 False) 的 Action 上呼叫 reduce 時拋出，
    屬於程式設計錯誤，不應被捕獲後繼續執行。
    """

    def __init__(self, message: str, reducer_name: str, action_type: Optional[str], **kwargs: Any) -> None:
        details = {"reducer_name": reducer_name, "action_type": action_type}
        details.update(kwargs)
        super().__init__(message, details)
        self.reducer_name = reducer_name
        self.action_type = action_type


class StoreError(PyStoreCellError):
    """與 Store / StoreContainer 建構相關的錯誤。"""

    def __init__(self, message: str, operation: str, **kwargs: Any) -> None:
        details = {"operation": operation}
        details.update(kwargs)
        super().__init__(message, details)
        self.operation = operation
