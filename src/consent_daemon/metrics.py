"""
Defines Prometheus metrics for monitoring the consent API.

This module centralizes the definition of all Counter and Histogram metrics
used to track consent string decoding and HTTP request handling.
"""

from prometheus_client import Counter, Histogram

DECODE_REQUESTS = Counter("consent_api_decode_requests_total", "Total consent strings submitted")
SUCCESSFUL_DECODES = Counter("consent_api_successful_decodes_total", "Total successful decodes")
DECODE_ERRORS = Counter(
    "consent_api_decode_errors_total", "Total decode errors by error type", ["error"]
)
DECODE_LATENCY = Histogram(
    "consent_api_decode_latency_seconds", "Time spent decoding a consent string"
)
HTTP_REQUESTS = Counter(
    "consent_api_http_requests_total", "Total HTTP requests", ["method", "endpoint", "status_code"]
)
HTTP_LATENCY = Histogram(
    "consent_api_http_request_latency_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
)
