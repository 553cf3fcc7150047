import time
from contextlib import contextmanager
from typing import Iterator

from fastapi import FastAPI, Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

REQUEST_LATENCY = Histogram(
    'hoax_http_request_latency_seconds',
    'HTTP request latency of the hoax detection API',
    ['method', 'path', 'status']
)

INFERENCE_TIME = Histogram(
    'hoax_model_inference_seconds',
    'Time spent featurizing and scoring one narrative'
)

PREDICTIONS_COUNT = Counter(
    'hoax_predictions_total',
    'Narratives classified, by verdict',
    ['verdict']
)


@contextmanager
def track_inference() -> Iterator[None]:
    start = time.perf_counter()
    try:
        yield
    finally:
        INFERENCE_TIME.observe(time.perf_counter() - start)


def count_prediction(verdict: str) -> None:
    PREDICTIONS_COUNT.labels(verdict).inc()


def metrics_middleware(app: FastAPI) -> None:
    class LatencyMiddleware(BaseHTTPMiddleware):
        async def dispatch(self, request: Request, call_next):
            start = time.perf_counter()
            response = await call_next(request)
            REQUEST_LATENCY.labels(
                request.method, request.url.path, str(response.status_code)
            ).observe(time.perf_counter() - start)
            return response

    app.add_middleware(LatencyMiddleware)


def mount_metrics_endpoint(app: FastAPI, path: str = '/metrics') -> None:
    @app.get(path, include_in_schema=False)
    async def metrics():
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
