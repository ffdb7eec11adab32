from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "daynote_requests_total",
    "Total HTTP requests processed by DayNote",
    ("method", "path", "status"),
)

REQUEST_LATENCY = Histogram(
    "daynote_request_latency_seconds",
    "HTTP request latency in seconds",
    ("method", "path"),
)

REQUEST_ERRORS = Counter(
    "daynote_request_errors_total",
    "HTTP requests resulting in server errors",
    ("method", "path", "status"),
)

USER_API_COUNTER = Counter(
    "daynote_api_hits_total",
    "API hits per endpoint",
    ("endpoint",),
)

STORAGE_FAILURES = Counter(
    "daynote_storage_failures_total",
    "Failed reads or writes against the document store",
    ("document", "operation"),
)

AI_REQUESTS = Counter(
    "daynote_ai_requests_total",
    "Text generation requests per provider",
    ("provider", "kind", "result"),
)

__all__ = [
    "AI_REQUESTS",
    "REQUEST_COUNT",
    "REQUEST_ERRORS",
    "REQUEST_LATENCY",
    "STORAGE_FAILURES",
    "USER_API_COUNTER",
]
