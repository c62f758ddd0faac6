# Fluent JSON record builder. Fields are collected in call order and resolved
# once, in that order, when log() runs.

from __future__ import annotations
import json
import threading
import time
import traceback
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from opentelemetry import trace

from . import mdc
from .bootstrap import Config, get_config
from .levels import Severity

if TYPE_CHECKING:
    import logging

Text = Union[str, Callable[[], str]]
JsonValue = Any

MDC_FIELD = "MDC"

def _qualified_name(exc: BaseException) -> str:
    cls = type(exc)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"

def _describe_one(exc: BaseException) -> str:
    text = str(exc)
    out = f"{_qualified_name(exc)}: {text}" if text else _qualified_name(exc)
    if exc.__traceback__ is not None:
        out += "\n" + "".join(traceback.format_tb(exc.__traceback__)).rstrip("\n")
    return out

def describe_exception(exc: BaseException) -> str:
    """``module.Type: message`` plus traceback frames, then each chained cause."""
    parts = [_describe_one(exc)]
    seen = {id(exc)}
    cur: Optional[BaseException] = exc
    while True:
        cur = cur.__cause__ or (None if cur.__suppress_context__ else cur.__context__)
        if cur is None or id(cur) in seen:
            break
        seen.add(id(cur))
        parts.append("Caused by: " + _describe_one(cur))
    return "\n".join(parts)

def _resolve(value: Any) -> Any:
    return value() if callable(value) else value

class JsonLogRecord:
    """One log statement. Build with chained calls, finish with ``log()``.

    Not thread-safe and not reusable once ``log()`` has run.
    """

    def __init__(self, backend: "logging.Logger", severity: Severity, config: Optional[Config] = None) -> None:
        if config is None:
            config = get_config()
        self._backend = backend
        self._severity = severity
        self._config = config
        self._fields: List[Tuple[str, Callable[[], JsonValue]]] = []
        self._exc: Optional[BaseException] = None

    @property
    def severity(self) -> Severity:
        return self._severity

    def message(self, text: Text) -> "JsonLogRecord":
        return self.field("message", text)

    def field(self, name: str, value: Text) -> "JsonLogRecord":
        self._fields.append((name, lambda: _resolve(value)))
        return self

    def map(self, name: str, mapping: Union[Mapping[str, str], Callable[[], Mapping[str, str]]]) -> "JsonLogRecord":
        self._fields.append((name, lambda: dict(_resolve(mapping))))
        return self

    def list(self, name: str, items: Union[Sequence[str], Callable[[], Sequence[str]]]) -> "JsonLogRecord":
        self._fields.append((name, lambda: [x for x in _resolve(items)]))
        return self

    def json(self, name: str, value: Union[JsonValue, Callable[[], JsonValue]]) -> "JsonLogRecord":
        self._fields.append((name, lambda: _resolve(value)))
        return self

    def exception(self, name: str, exc: BaseException) -> "JsonLogRecord":
        self._exc = exc
        self._fields.append((name, lambda: describe_exception(exc)))
        return self

    def stack(self, name: str = "stacktrace") -> "JsonLogRecord":
        # captured here, not at render time; drop this frame
        frames = "".join(traceback.format_stack()[:-1]).rstrip("\n")
        self._fields.append((name, lambda: frames))
        return self

    def _standard_fields(self) -> Dict[str, Any]:
        cfg = self._config
        out: Dict[str, Any] = {}
        if cfg.include_level:
            out["level"] = self._severity.name
        if cfg.include_timestamp:
            out["ts"] = time.strftime(cfg.timestamp_format, time.gmtime())
        if cfg.include_logger_name:
            out["logger"] = self._backend.name
        if cfg.include_thread_name:
            out["thread"] = threading.current_thread().name
        if cfg.service_name:
            out["service"] = cfg.service_name
        if cfg.environment:
            out["env"] = cfg.environment
        if cfg.include_trace_context:
            sc = trace.get_current_span().get_span_context()
            if sc.is_valid:
                out["trace_id"] = trace.format_trace_id(sc.trace_id)
                out["span_id"] = trace.format_span_id(sc.span_id)
        return out

    def render(self) -> str:
        """Resolve every field and serialize the record. Supplier errors propagate."""
        rec: Dict[str, Any] = {}
        for name, produce in self._fields:
            rec[name] = produce()
        # caller fields win over standard ones
        for key, value in self._standard_fields().items():
            rec.setdefault(key, value)
        context_map = mdc.get_copy()
        if context_map:
            # MDC is reserved while the context is non-empty and always goes last
            rec.pop(MDC_FIELD, None)
            rec[MDC_FIELD] = context_map
        return json.dumps(rec, separators=(",", ":"), ensure_ascii=False, default=str)

    def log(self) -> None:
        level = self._severity.level
        if not self._backend.isEnabledFor(level):
            return
        text = self.render()
        if self._exc is not None:
            self._backend.log(level, text, exc_info=self._exc)
        else:
            self._backend.log(level, text)
