# Severity tags. One enum drives both the level guard and the emit call.

from __future__ import annotations
import enum
import logging

TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

class Severity(enum.Enum):
    TRACE = TRACE_LEVEL
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR

    @property
    def level(self) -> int:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "Severity":
        key = name.strip().upper()
        if key == "WARNING":
            key = "WARN"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"unknown severity: {name!r}") from None
