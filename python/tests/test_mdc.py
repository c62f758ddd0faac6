import asyncio
import contextvars
import threading

from opentelemetry import trace
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags

from json_logger import mdc

def test_put_get_remove():
    mdc.put("a", "1")
    mdc.put("b", "2")
    assert mdc.get("a") == "1"
    mdc.remove("a")
    assert mdc.get("a") is None
    assert mdc.get_copy() == {"b": "2"}

def test_snapshot_is_detached():
    mdc.put("a", "1")
    snap = mdc.get_copy()
    mdc.put("a", "2")
    snap["x"] = "y"
    assert snap == {"a": "1", "x": "y"}
    assert mdc.get_copy() == {"a": "2"}

def test_scoped_restores_previous():
    mdc.put("outer", "o")
    with mdc.scoped(request_id="r1") as values:
        assert values == {"outer": "o", "request_id": "r1"}
        assert mdc.get("request_id") == "r1"
    assert mdc.get_copy() == {"outer": "o"}

def test_explicit_context():
    mdc.put("k", "v")
    ctx = contextvars.copy_context()
    mdc.clear()
    assert mdc.get_copy() == {}
    assert mdc.get_copy(ctx) == {"k": "v"}

def test_thread_isolation():
    mdc.put("main", "1")
    seen = {}
    def worker():
        mdc.put("worker", "2")
        seen["worker"] = mdc.get_copy()
    t = threading.Thread(target=worker)
    t.start()
    t.join()
    assert seen["worker"]["worker"] == "2"
    assert mdc.get_copy() == {"main": "1"}

def test_task_isolation():
    async def task(tag):
        mdc.put("task", tag)
        await asyncio.sleep(0)
        return mdc.get("task")

    async def main():
        return await asyncio.gather(task("a"), task("b"))

    assert asyncio.run(main()) == ["a", "b"]
    assert mdc.get("task") is None

def test_put_inside_span_survives_span_exit():
    sc = SpanContext(trace_id=0x1, span_id=0x2, is_remote=False, trace_flags=TraceFlags(TraceFlags.SAMPLED))
    with trace.use_span(NonRecordingSpan(sc)):
        mdc.put("user", "u1")
    assert mdc.get("user") == "u1"
