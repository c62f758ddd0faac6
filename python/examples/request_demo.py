import time
from uuid import uuid4

from json_logger import get_logger, init, mdc, shutdown

def main():
    init(service_name="py-demo", environment="dev", include_thread_name=True)
    log = get_logger("demo.requests")

    with mdc.scoped(request_id=str(uuid4())):
        log.info().message("handling request").field("route", "/orders").map("headers", {"accept": "application/json"}).log()
        # only evaluated when DEBUG is enabled
        log.debug().message(lambda: f"expensive dump at {time.time()}").log()
        try:
            {}["missing"]
        except KeyError as e:
            log.error().message("lookup failed").exception("error", e).log()

    shutdown()

if __name__ == "__main__":
    main()
