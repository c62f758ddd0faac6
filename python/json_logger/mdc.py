"""Mapped diagnostic context.

The map lives in its own ContextVar, so every thread and asyncio task sees its
own copy and a value put() stays until it is removed or cleared, whatever
OpenTelemetry spans open and close around it. Writes always store a new dict;
snapshots are never mutated after the fact.
"""

from __future__ import annotations
from contextlib import contextmanager
from contextvars import Context, ContextVar
from typing import Dict, Iterator, Optional

_mdc: ContextVar[Dict[str, str]] = ContextVar("json_logger_mdc", default={})

def _current(ctx: Optional[Context] = None) -> Dict[str, str]:
    if ctx is not None:
        return ctx.get(_mdc, {})
    return _mdc.get()

def get_copy(ctx: Optional[Context] = None) -> Dict[str, str]:
    """Snapshot of the diagnostic context (current context unless ``ctx`` is given)."""
    return dict(_current(ctx))

def get(key: str) -> Optional[str]:
    return _current().get(key)

def put(key: str, value: str) -> None:
    _mdc.set({**_current(), key: value})

def remove(key: str) -> None:
    values = dict(_current())
    values.pop(key, None)
    _mdc.set(values)

def clear() -> None:
    _mdc.set({})

@contextmanager
def scoped(**values: str) -> Iterator[Dict[str, str]]:
    """Layer ``values`` over the current map for the duration of the block.

    The map in effect before the block is restored on exit.
    """
    merged = {**_current(), **values}
    token = _mdc.set(merged)
    try:
        yield dict(merged)
    finally:
        _mdc.reset(token)
