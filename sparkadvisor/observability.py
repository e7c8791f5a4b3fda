"""Structured request logging and in-process metrics for the advisor API."""
import logging
import time
import uuid
from collections import defaultdict, deque

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

_LOG = logging.getLogger(__name__)

# In-process counters (reset on restart)
_request_total: dict[str, int] = defaultdict(int)
_request_duration_sec: deque[float] = deque(maxlen=1000)
_classifications_total: dict[str, int] = defaultdict(int)
_start_time = time.monotonic()


def _observe_request(method: str, path: str, elapsed_sec: float) -> None:
    _request_total[f"{method} {path}"] += 1
    _request_total["_total"] += 1
    _request_duration_sec.append(elapsed_sec)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with X-Request-ID (echoed or generated) and log one line when it completes."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started
        _observe_request(request.method, request.url.path, elapsed)
        _LOG.info(
            "%s %s -> %d", request.method, request.url.path, response.status_code,
            extra={"request_id": request_id, "duration_ms": round(elapsed * 1000, 2)},
        )
        response.headers["X-Request-ID"] = request_id
        return response


def record_classification(category: str) -> None:
    """Count one classification result by category."""
    _classifications_total[category] += 1


def get_metrics_text() -> str:
    """Prometheus-style text for GET /v1/metrics."""
    uptime = time.monotonic() - _start_time
    lines = [
        "# HELP advisor_uptime_seconds Process uptime in seconds.",
        "# TYPE advisor_uptime_seconds gauge",
        f"advisor_uptime_seconds {uptime:.2f}",
        "# HELP advisor_http_requests_total Total HTTP requests by method and path.",
        "# TYPE advisor_http_requests_total counter",
    ]
    for key, count in sorted(_request_total.items()):
        if key == "_total":
            lines.append(f'advisor_http_requests_total{{aggregate="all"}} {count}')
        else:
            method, _, path = key.partition(" ")
            path = path.replace('"', r"\"")
            lines.append(f'advisor_http_requests_total{{method="{method}",path="{path}"}} {count}')
    lines.extend([
        "# HELP advisor_classifications_total Workload classifications by resulting category.",
        "# TYPE advisor_classifications_total counter",
    ])
    for category, count in sorted(_classifications_total.items()):
        lines.append(f'advisor_classifications_total{{category="{category}"}} {count}')
    if _request_duration_sec:
        avg = sum(_request_duration_sec) / len(_request_duration_sec)
        lines.extend([
            "# HELP advisor_http_request_duration_seconds Recent request duration (avg).",
            "# TYPE advisor_http_request_duration_seconds gauge",
            f"advisor_http_request_duration_seconds {avg:.4f}",
        ])
    return "\n".join(lines) + "\n"
