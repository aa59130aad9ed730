from __future__ import annotations
import time
from typing import Callable, Final
from functools import wraps

from prometheus_client import Counter, Gauge, Histogram

# Names are part of the dashboard contract; keep them stable.
MET_REQUESTS: Final = Counter("caltime_api_requests_total", "API requests", ["route"])
REQ_LATENCY: Final = Histogram("caltime_request_seconds", "API request latency", ["route"])
MET_HOST_ERRORS: Final = Counter("caltime_host_errors_total", "Host clock/formatter failures", ["kind"])
MET_VALIDATION: Final = Counter("caltime_validation_errors_total", "Rejected payloads", ["route"])
GAUGE_APP_UP: Final = Gauge("caltime_app_up", "1 if app is running")


def timed(route: str) -> Callable:
    """Count and time a view under a fixed route label."""
    def deco(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            t0 = time.perf_counter()
            MET_REQUESTS.labels(route=route).inc()
            try:
                return fn(*args, **kwargs)
            finally:
                REQ_LATENCY.labels(route=route).observe(time.perf_counter() - t0)
        return wrapper
    return deco


def seed(routes) -> None:
    """Pre-create label sets so the series exist before first traffic."""
    for route in routes:
        MET_REQUESTS.labels(route=route).inc(0)
        REQ_LATENCY.labels(route=route)
        MET_VALIDATION.labels(route=route).inc(0)
    for kind in ("clock", "formatter", "unhandled"):
        MET_HOST_ERRORS.labels(kind=kind).inc(0)
    GAUGE_APP_UP.set(1.0)
