"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Outbound calls to the marketplace API
api_requests = Counter(
    'stayfront_api_requests_total',
    'Requests sent to the marketplace API',
    ['method', 'status']  # status: HTTP code, or "network_error"
)

api_latency = Histogram(
    'stayfront_api_request_latency_seconds',
    'Marketplace API request latency',
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0]
)

# Booking flow outcomes
booking_attempts = Counter(
    'stayfront_booking_attempts_total',
    'Booking submissions by outcome',
    ['status']  # success, invalid, unauthenticated, error
)

# Session lifecycle
session_events = Counter(
    'stayfront_session_events_total',
    'Auth token lifecycle events',
    ['event']  # login, register, logout, expired
)

# Listing search cache
cache_operations = Counter(
    'stayfront_cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get; hit/miss
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_api_request(method: str, status: str, duration: float):
    api_requests.labels(method=method, status=status).inc()
    api_latency.observe(duration)

def record_booking_attempt(status: str):
    """Record booking attempt. Status: success, invalid, unauthenticated, error"""
    booking_attempts.labels(status=status).inc()

def record_session_event(event: str):
    session_events.labels(event=event).inc()

def record_cache_operation(operation: str, hit: bool):
    """Record cache operation."""
    result = "hit" if hit else "miss"
    cache_operations.labels(operation=operation, result=result).inc()
