import re
import time

from prometheus_client import Counter, Gauge, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "path"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

REQUESTS_IN_PROGRESS = Gauge(
    "http_requests_in_progress",
    "HTTP requests currently being handled",
    ["method"],
)

# Menu ids are client-visible path segments; collapse them to keep label cardinality flat.
_MENU_ID_SEGMENT = re.compile(r"^/menu/[^/]+$")


def _route_template(path: str) -> str:
    if _MENU_ID_SEGMENT.match(path):
        return "/menu/{menu_id}"
    return path


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        path = _route_template(request.url.path)
        in_progress = REQUESTS_IN_PROGRESS.labels(method=request.method)
        in_progress.inc()
        start = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            in_progress.dec()
        elapsed = time.perf_counter() - start

        REQUEST_COUNT.labels(
            method=request.method,
            path=path,
            status=str(response.status_code),
        ).inc()
        REQUEST_LATENCY.labels(method=request.method, path=path).observe(elapsed)

        return response
