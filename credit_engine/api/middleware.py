"""FastAPI middleware for request tracing and latency metrics"""

import uuid
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from credit_engine.infrastructure.observability.metrics import request_duration_histogram

# Label for requests no route matched, so stray paths cannot grow the label set
UNMATCHED_ROUTE = "unmatched"


def route_template(request: Request) -> str:
    """Path template of the matched route ("/v1/score"), never the raw URL"""
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_ROUTE)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reuse the caller's X-Request-ID or mint one, and echo it back"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Time every request, labelled by route template and status"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        response = await call_next(request)

        request_duration_histogram.labels(
            method=request.method,
            endpoint=route_template(request),
            status=response.status_code,
        ).observe(time.perf_counter() - start_time)

        return response
