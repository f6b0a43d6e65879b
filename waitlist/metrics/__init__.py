# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Prometheus metrics for the waitlist service."""
from prometheus_client import Counter, Gauge, Histogram

SIGNUPS_CREATED = Counter(
    "waitlist_signups_created_total", "Waitlist signups stored", ["role"]
)
SIGNUPS_REJECTED = Counter(
    "waitlist_signups_rejected_total", "Waitlist signups rejected", ["reason"]
)
STORAGE_ERRORS = Counter(
    "waitlist_storage_errors_total", "Failed datastore operations", ["operation"]
)
SIGNUPS = Gauge(
    "waitlist_signups", "Current waitlist size by role", ["role"]
)
REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "endpoint", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "HTTP request latency", ["method", "endpoint"]
)
HTTP_ERRORS = Counter(
    "http_errors_total", "Total HTTP errors", ["method", "endpoint", "status"]
)
