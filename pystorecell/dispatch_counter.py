"""分發計數器，只用來為日誌中的分發週期編號。"""
import threading


class DispatchCounter:
    """
    單調遞增、可在多執行緒間共享的整數序列。

    StoreContainer 建構時會以自己的計數器取代成員 Store 的計數器，
    讓容器與所有成員共用同一個序列。
    """

    def __init__(self, initial: int = 0):
        self._value = initial
        self._lock = threading.Lock()

    def increment_and_get(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def get(self) -> int:
        with self._lock:
            return self._value

    def __repr__(self) -> str:
        return f"DispatchCounter({self.get()})"
