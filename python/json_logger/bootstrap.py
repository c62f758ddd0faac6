# Process-wide setup: the record defaults and a stdout handler for the backend.
from __future__ import annotations
import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from .levels import Severity

LEVEL_ENV = "JSON_LOGGER_LEVEL"

@dataclass(frozen=True)
class Config:
    service_name: str = ""
    environment: str = ""
    level: str = "INFO"
    include_level: bool = True
    include_timestamp: bool = True
    timestamp_format: str = "%Y-%m-%dT%H:%M:%SZ"
    include_logger_name: bool = False
    include_thread_name: bool = False
    include_trace_context: bool = True
    stream: Optional[TextIO] = None

class JsonLineFormatter(logging.Formatter):
    """Writes the record message only.

    Exception frames are already in the JSON body, so exc_info and stack_info
    are not appended and every record stays on one line.
    """
    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()

_global_cfg: Config = Config()
_handler: Optional[logging.Handler] = None

def init(
    service_name: str = "",
    environment: str = "",
    level: Optional[str] = None,
    include_level: bool = True,
    include_timestamp: bool = True,
    timestamp_format: str = "%Y-%m-%dT%H:%M:%SZ",
    include_logger_name: bool = False,
    include_thread_name: bool = False,
    include_trace_context: bool = True,
    stream: Optional[TextIO] = None,
) -> Config:
    """Set the global record defaults and route the root logger to stdout.

    ``level`` falls back to ``$JSON_LOGGER_LEVEL``, then INFO. Calling init
    again replaces the handler installed by the previous call.
    """
    global _global_cfg, _handler
    if level is None:
        level = os.getenv(LEVEL_ENV) or "INFO"
    severity = Severity.from_name(level)
    _global_cfg = Config(
        service_name=service_name,
        environment=environment,
        level=severity.name,
        include_level=include_level,
        include_timestamp=include_timestamp,
        timestamp_format=timestamp_format,
        include_logger_name=include_logger_name,
        include_thread_name=include_thread_name,
        include_trace_context=include_trace_context,
        stream=stream,
    )
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    _handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    _handler.setFormatter(JsonLineFormatter())
    root.addHandler(_handler)
    root.setLevel(severity.level)
    return _global_cfg

def get_config() -> Config:
    return _global_cfg

def shutdown() -> None:
    """Flush and detach the handler installed by init()."""
    global _global_cfg, _handler
    if _handler is not None:
        _handler.flush()
        logging.getLogger().removeHandler(_handler)
        _handler = None
    _global_cfg = Config()
