from __future__ import annotations

import re

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.requests import Request


http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)

ledger_plans_created_total = Counter(
    "ledger_plans_created_total",
    "Total subscription plans created",
)

ledger_subscriptions_created_total = Counter(
    "ledger_subscriptions_created_total",
    "Total subscriptions created through subscribe",
)

ledger_renewals_total = Counter(
    "ledger_renewals_total",
    "Total subscription renewals",
)

ledger_revenue_recorded_total = Counter(
    "ledger_revenue_recorded_total",
    "Revenue added to the running total by source",
    ["source"],
)

ledger_access_checks_total = Counter(
    "ledger_access_checks_total",
    "Service access checks by outcome",
    ["result"],
)

ledger_bulk_operations_total = Counter(
    "ledger_bulk_operations_total",
    "Admin bulk operations by kind",
    ["operation"],
)

ledger_bulk_subscribers_total = Counter(
    "ledger_bulk_subscribers_total",
    "Subscribers touched by admin bulk operations",
    ["operation"],
)

ledger_rejections_total = Counter(
    "ledger_rejections_total",
    "Rejected ledger operations by error",
    ["operation", "error"],
)


_INT_RE = re.compile(r"/\d+\b")


def _sanitize_path(path: str) -> str:
    return _INT_RE.sub("/{id}", path)


def resolve_http_path_label(request: Request) -> str:
    route = request.scope.get("route")
    if route is not None:
        route_path = getattr(route, "path_format", None) or getattr(route, "path", None)
        if isinstance(route_path, str) and route_path:
            return route_path
    return _sanitize_path(request.url.path)


def observe_http_request(method: str, path: str, status: int, duration: float) -> None:
    http_requests_total.labels(method=method, path=path, status=str(status)).inc()
    http_request_duration_seconds.labels(method=method, path=path).observe(duration)


def observe_plan_created() -> None:
    ledger_plans_created_total.inc()


def observe_subscription_created(amount: int) -> None:
    ledger_subscriptions_created_total.inc()
    observe_revenue_recorded("subscribe", amount)


def observe_renewal(amount: int) -> None:
    ledger_renewals_total.inc()
    observe_revenue_recorded("renew", amount)


def observe_revenue_recorded(source: str, amount: int) -> None:
    if amount > 0:
        ledger_revenue_recorded_total.labels(source=source).inc(amount)


def observe_access_check(has_access: bool) -> None:
    ledger_access_checks_total.labels(result="granted" if has_access else "denied").inc()


def observe_bulk_operation(operation: str, subscriber_count: int) -> None:
    ledger_bulk_operations_total.labels(operation=operation).inc()
    if subscriber_count > 0:
        ledger_bulk_subscribers_total.labels(operation=operation).inc(subscriber_count)


def observe_rejection(operation: str, error: str) -> None:
    ledger_rejections_total.labels(operation=operation, error=error).inc()


def generate_metrics_payload() -> bytes:
    return generate_latest()


def metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
