"""
Contains custom FastAPI middleware for the consent API.

Middleware functions in this module intercept HTTP requests to collect
Prometheus metrics.
"""

import time

from fastapi import Request

from consent_daemon.metrics import HTTP_LATENCY, HTTP_REQUESTS


def endpoint_label(request: Request) -> str:
    """
    Return the route template for a request, including any router prefix.

    Depending on the FastAPI version, the matched route's path may or may not
    carry the prefix given to `include_router`. The template always matches the
    trailing segments of the concrete path, so whatever precedes them is taken
    from the request URL. Requests that matched no route use the raw path.
    """
    path = request.url.path
    route = request.scope.get("route")
    template = getattr(route, "path_format", None) or getattr(route, "path", None)
    if not isinstance(template, str) or not template:
        return path

    depth = template.rstrip("/").count("/")
    segments = path.rstrip("/").split("/")
    if len(segments) <= depth:
        return template
    prefix = "/".join(segments[: len(segments) - depth])
    return prefix + template


async def prometheus_http_middleware(request: Request, call_next):
    """
    FastAPI middleware to record Prometheus metrics for HTTP requests.

    It measures the latency of each request and increments a counter for
    requests, labeled by method, endpoint, and status code. The endpoint label
    is the full matched route template when there is one, so consent strings in
    the path do not create a new label set per request.

    Args:
        request: The incoming FastAPI Request object.
        call_next: A function to call to process the request and get the response.

    Returns:
        The response object from the next handler in the chain.
    """
    start = time.perf_counter()
    response = await call_next(request)
    latency = time.perf_counter() - start

    path = endpoint_label(request)
    method = request.method
    status = response.status_code

    HTTP_REQUESTS.labels(method=method, endpoint=path, status_code=status).inc()
    HTTP_LATENCY.labels(method=method, endpoint=path).observe(latency)
    return response
