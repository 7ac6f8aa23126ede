"""
Prometheus metrics for OmniSME.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Request workflow metrics
access_requests_submitted_total = Counter(
    "access_requests_submitted_total",
    "Total access requests submitted",
    ["priority"],
)

access_requests_decided_total = Counter(
    "access_requests_decided_total",
    "Total access requests that left PENDING",
    ["outcome"],
)

# License metrics
licenses_granted_total = Counter(
    "licenses_granted_total",
    "Total licenses granted",
    ["source"],
)

licenses_revoked_total = Counter(
    "licenses_revoked_total",
    "Total licenses revoked, returned or removed",
    ["reason"],
)

licenses_status_changes_total = Counter(
    "licenses_status_changes_total",
    "License status transitions other than grant and revoke",
    ["status"],
)

# Cache metrics
cache_hits_total = Counter(
    "cache_hits_total",
    "Total cache hits",
    ["cache_key"],
)

cache_misses_total = Counter(
    "cache_misses_total",
    "Total cache misses",
    ["cache_key"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
