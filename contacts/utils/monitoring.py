"""Monitoring utilities leveraging Prometheus client."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

http_requests_total = Counter(
    "contacts_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

http_request_latency_seconds = Histogram(
    "contacts_http_request_latency_seconds",
    "HTTP request latency",
    ["method", "path"],
)

login_attempts_total = Counter(
    "contacts_login_attempts_total",
    "Login attempts by outcome",
    ["outcome"],
)


def observe_request(method: str, path: str, status: int, duration_seconds: float) -> None:
    http_requests_total.labels(method=method, path=path, status=str(status)).inc()
    http_request_latency_seconds.labels(method=method, path=path).observe(duration_seconds)


def observe_login(succeeded: bool) -> None:
    login_attempts_total.labels(outcome="success" if succeeded else "failure").inc()
