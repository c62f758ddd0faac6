__all__ = [
    "init", "shutdown", "get_config", "Config",
    "get_logger", "JsonLogger", "JsonLogRecord", "Severity", "mdc",
]
__version__ = "0.1.0"

from . import mdc
from .levels import Severity
from .record import JsonLogRecord
from .logging import JsonLogger, get_logger
from .bootstrap import Config, init, shutdown, get_config
