from typing import List, Tuple

import pytest

from pystorecell import LogMode, StoreSettings


class LogRecorder:
    """Collects (severity, tag, message) triples from the settings sinks."""

    def __init__(self):
        self.records: List[Tuple[str, str, str]] = []

    def debug(self, tag: str, message: str) -> None:
        self.records.append(("debug", tag, message))

    def warn(self, tag: str, message: str) -> None:
        self.records.append(("warn", tag, message))

    def warnings(self) -> List[str]:
        return [message for severity, _, message in self.records if severity == "warn"]

    def settings(self, log_mode: LogMode = LogMode.FULL) -> StoreSettings:
        return StoreSettings(log_mode=log_mode, log_debug=self.debug, log_warn=self.warn)


@pytest.fixture
def log_recorder():
    return LogRecorder()


@pytest.fixture
def full_settings(log_recorder):
    return log_recorder.settings(LogMode.FULL)
