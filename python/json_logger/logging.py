# Logger facade: one JsonLogger per backend logger, one record per statement.

from __future__ import annotations
import logging
from typing import Optional

from .bootstrap import Config, get_config
from .levels import Severity
from .record import JsonLogRecord

class JsonLogger:
    def __init__(self, backend: logging.Logger, config: Optional[Config] = None) -> None:
        self._backend = backend
        self._config = config

    @property
    def name(self) -> str:
        return self._backend.name

    @property
    def backend(self) -> logging.Logger:
        return self._backend

    def is_enabled(self, severity: Severity) -> bool:
        return self._backend.isEnabledFor(severity.level)

    def at(self, severity: Severity) -> JsonLogRecord:
        # config resolved per record so init() after get_logger() still applies
        cfg = self._config if self._config is not None else get_config()
        return JsonLogRecord(self._backend, severity, cfg)

    def trace(self) -> JsonLogRecord: return self.at(Severity.TRACE)
    def debug(self) -> JsonLogRecord: return self.at(Severity.DEBUG)
    def info(self) -> JsonLogRecord: return self.at(Severity.INFO)
    def warn(self) -> JsonLogRecord: return self.at(Severity.WARN)
    def error(self) -> JsonLogRecord: return self.at(Severity.ERROR)

def get_logger(name: Optional[str] = None, config: Optional[Config] = None) -> JsonLogger:
    return JsonLogger(logging.getLogger(name), config)
