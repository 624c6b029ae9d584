# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_LATENCY = Histogram(
    "sessionauth_request_latency_seconds",
    "Request latency",
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10),
)
REQUEST_COUNTER = Counter(
    "sessionauth_requests_total",
    "Number of processed requests",
    labelnames=("endpoint", "status"),
)
AUTH_EVENTS = Counter(
    "sessionauth_auth_events_total",
    "Login and account creation attempts",
    labelnames=("event", "outcome"),
)


def record_auth_event(event: str, *, success: bool) -> None:
    AUTH_EVENTS.labels(event=event, outcome="ok" if success else "rejected").inc()


def observe_request(endpoint: str, status: int, duration: float) -> None:
    REQUEST_LATENCY.observe(duration)
    REQUEST_COUNTER.labels(endpoint=endpoint, status=str(status)).inc()


__all__ = [
    "AUTH_EVENTS",
    "REQUEST_COUNTER",
    "REQUEST_LATENCY",
    "observe_request",
    "record_auth_event",
]
