from opentelemetry import trace
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags

from json_logger import get_logger, init, shutdown

def main():
    init(service_name="py-trace")
    sc = SpanContext(trace_id=0xABC, span_id=0xDEF, is_remote=True, trace_flags=TraceFlags(TraceFlags.SAMPLED))
    with trace.use_span(NonRecordingSpan(sc)):
        get_logger("demo.trace").info().message("inside remote span").list("symbols", ["AAPL", "MSFT"]).json("qty", {"AAPL": 10}).log()
    shutdown()

if __name__ == "__main__":
    main()
