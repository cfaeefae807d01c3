from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from subledger import events
from subledger.core.auth import AuthUser, get_current_user
from subledger.core.clock import FixedClock, get_clock
from subledger.core.config import get_settings
from subledger.core.constants import SECONDS_PER_MONTH
from subledger.core.database import Base, get_db
from subledger.core.exceptions import ALL_ERRORS
from subledger.main import app


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def configure_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    monkeypatch.setenv("OWNER_ID", "owner")
    monkeypatch.setenv("METRICS_ENABLED", "true")
    get_settings.cache_clear()
    events.published_events.clear()
    yield
    get_settings.cache_clear()
    events.published_events.clear()


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(current=100_000)


@pytest.fixture()
def current_user() -> dict[str, AuthUser]:
    return {"user": AuthUser(sub="owner", roles=["user"])}


@pytest.fixture()
def client(
    db_session: Session, clock: FixedClock, current_user: dict[str, AuthUser]
) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    def override_get_current_user() -> AuthUser:
        return current_user["user"]

    def override_get_clock() -> FixedClock:
        return clock

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = override_get_current_user
    app.dependency_overrides[get_clock] = override_get_clock

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _act_as(current_user: dict[str, AuthUser], sub: str, roles: list[str] | None = None) -> None:
    current_user["user"] = AuthUser(sub=sub, roles=roles or ["user"])


def _create_plan(client: TestClient, price: int = 1_500) -> int:
    response = client.post(
        "/plans",
        json={"name": "Basic", "price_per_month": price, "max_users": 2, "features": "hd"},
    )
    assert response.status_code == 201
    return response.json()["id"]


def test_subscription_lifecycle_over_http(
    client: TestClient, clock: FixedClock, current_user: dict[str, AuthUser]
) -> None:
    plan_id = _create_plan(client)
    assert client.get(f"/plans/{plan_id}").json()["name"] == "Basic"
    assert [plan["id"] for plan in client.get("/plans").json()] == [plan_id]

    _act_as(current_user, "alice")
    subscribed = client.post("/subscriptions", json={"plan_id": plan_id, "duration_months": 2})
    assert subscribed.status_code == 201
    assert subscribed.json() == {
        "created": True,
        "end_date": 100_000 + 2 * SECONDS_PER_MONTH,
        "amount_paid": 3_000,
    }

    me = client.get("/subscriptions/me")
    assert me.status_code == 200
    assert me.json()["payment_count"] == 1

    access = client.get("/access/streaming")
    assert access.status_code == 200
    assert access.json() == {"service_name": "streaming", "has_access": True}

    clock.advance(SECONDS_PER_MONTH)
    renewed = client.post("/subscriptions/renew", json={"duration_months": 1})
    assert renewed.status_code == 200
    assert renewed.json()["new_end_date"] == 100_000 + 3 * SECONDS_PER_MONTH

    payments = client.get("/payments/me")
    assert [(p["id"], p["payment_type"]) for p in payments.json()] == [(1, "initial"), (2, "renewal")]
    assert client.get("/payments/2").json()["amount"] == 1_500

    stats = client.get("/stats")
    assert stats.json() == {"total_revenue": 4_500, "active_subscribers": 1}


def test_ledger_errors_use_json_envelope(client: TestClient, current_user: dict[str, AuthUser]) -> None:
    plan_id = _create_plan(client)
    _act_as(current_user, "alice")
    assert client.post("/subscriptions", json={"plan_id": plan_id, "duration_months": 1}).status_code == 201

    duplicate = client.post(
        "/subscriptions",
        json={"plan_id": plan_id, "duration_months": 1},
        headers={"X-Correlation-Id": "corr-dup-1"},
    )
    assert duplicate.status_code == 409
    assert duplicate.headers.get("x-correlation-id") == "corr-dup-1"
    body = duplicate.json()
    assert body["code"] == 106
    assert body["error"] == "AlreadySubscribed"
    assert body["correlation_id"] == "corr-dup-1"


@pytest.mark.parametrize(
    ("method", "path", "payload", "status_code", "code"),
    [
        ("post", "/plans", {"name": "X", "price_per_month": 10, "max_users": 1}, 403, 100),
        ("get", "/plans/77", None, 404, 105),
        ("post", "/subscriptions", {"plan_id": 77, "duration_months": 1}, 404, 105),
        ("post", "/subscriptions/renew", {"duration_months": 1}, 404, 102),
        ("get", "/subscriptions/me", None, 404, 102),
        ("get", "/access/streaming", None, 404, 102),
    ],
)
def test_error_code_to_status_mapping(
    client: TestClient,
    current_user: dict[str, AuthUser],
    method: str,
    path: str,
    payload: dict | None,
    status_code: int,
    code: int,
) -> None:
    _act_as(current_user, "bob")
    response = client.request(method.upper(), path, json=payload)
    assert response.status_code == status_code
    assert response.json()["code"] == code


def test_price_and_payment_validation_map_to_422(client: TestClient, current_user: dict[str, AuthUser]) -> None:
    zero_price = client.post("/plans", json={"name": "Free", "price_per_month": 0, "max_users": 1})
    assert zero_price.status_code == 422
    assert zero_price.json()["code"] == 107

    plan_id = _create_plan(client)
    _act_as(current_user, "alice")
    too_short = client.post("/subscriptions", json={"plan_id": plan_id, "duration_months": 0})
    assert too_short.status_code == 422
    assert too_short.json()["code"] == 104


def test_expired_subscription_is_forbidden(
    client: TestClient, clock: FixedClock, current_user: dict[str, AuthUser]
) -> None:
    plan_id = _create_plan(client)
    _act_as(current_user, "alice")
    client.post("/subscriptions", json={"plan_id": plan_id, "duration_months": 1})

    clock.advance(SECONDS_PER_MONTH + 1)
    response = client.get("/access/streaming")
    assert response.status_code == 403
    assert response.json()["code"] == 103


def test_other_subscribers_payment_is_forbidden(client: TestClient, current_user: dict[str, AuthUser]) -> None:
    plan_id = _create_plan(client)
    _act_as(current_user, "alice")
    client.post("/subscriptions", json={"plan_id": plan_id, "duration_months": 1})

    _act_as(current_user, "bob")
    assert client.get("/payments/1").status_code == 403
    assert client.get("/payments/9").status_code == 404
    assert client.get("/access/entries/alice").status_code == 403

    _act_as(current_user, "owner")
    assert client.get("/payments/1").status_code == 200
    assert len(client.get("/access/entries/alice").json()) == 4


def test_anonymous_caller_is_unauthorized(client: TestClient, current_user: dict[str, AuthUser]) -> None:
    current_user["user"] = AuthUser(sub="anonymous", roles=["guest"])

    assert client.get("/stats").status_code == 401
    assert client.post("/subscriptions", json={"plan_id": 1, "duration_months": 1}).status_code == 401
    assert client.get("/health").status_code == 200


def test_admin_bulk_over_http(client: TestClient, current_user: dict[str, AuthUser]) -> None:
    plan_id = _create_plan(client)

    subscribed = client.post(
        "/admin/bulk",
        json={"operation_type": "bulk-subscribe", "subscribers": ["a", "b"], "plan_id": plan_id, "duration_months": 1},
    )
    assert subscribed.status_code == 200
    assert subscribed.json()["total_revenue_added"] == 3_000
    assert subscribed.json()["new_subscriber_count"] == 2

    typo = client.post(
        "/admin/bulk",
        json={"operation_type": "bulk-renw", "subscribers": ["a"], "plan_id": plan_id, "duration_months": 1},
    )
    assert typo.status_code == 200
    assert typo.json()["operation"] == "analytics-report"
    assert typo.json()["requested_operation"] == "bulk-renw"
    assert typo.json()["total_revenue"] == 3_000

    too_many = client.post(
        "/admin/bulk",
        json={
            "operation_type": "bulk-grant-access",
            "subscribers": [f"user-{index}" for index in range(51)],
            "plan_id": plan_id,
            "duration_months": 1,
        },
    )
    assert too_many.status_code == 422

    empty = client.post(
        "/admin/bulk",
        json={"operation_type": "bulk-grant-access", "subscribers": [], "plan_id": plan_id, "duration_months": 1},
    )
    assert empty.status_code == 422
    assert empty.json()["code"] == 107

    _act_as(current_user, "alice")
    forbidden = client.post(
        "/admin/bulk",
        json={"operation_type": "analytics-report", "subscribers": ["a"], "plan_id": plan_id, "duration_months": 1},
    )
    assert forbidden.status_code == 403
    assert forbidden.json()["code"] == 100


def test_metrics_endpoint_requires_role(client: TestClient, current_user: dict[str, AuthUser]) -> None:
    plan_id = _create_plan(client)
    _act_as(current_user, "alice")
    client.post("/subscriptions", json={"plan_id": plan_id, "duration_months": 1})
    client.post("/subscriptions", json={"plan_id": plan_id, "duration_months": 1})

    assert client.get("/metrics").status_code == 403

    _act_as(current_user, "metrics-admin", ["system.metrics.read"])
    metrics = client.get("/metrics")
    assert metrics.status_code == 200
    body = metrics.text
    assert "http_requests_total" in body
    assert "ledger_subscriptions_created_total" in body
    assert "ledger_rejections_total" in body
    assert 'error="AlreadySubscribed"' in body
    assert 'path="/plans"' in body


def test_me_reports_owner_flag(client: TestClient, current_user: dict[str, AuthUser]) -> None:
    assert client.get("/me").json() == {"sub": "owner", "roles": ["user"], "is_owner": True}

    _act_as(current_user, "alice")
    assert client.get("/me").json()["is_owner"] is False


def test_error_taxonomy_codes_and_statuses() -> None:
    codes = {error.code: error().status_code for error in ALL_ERRORS}

    assert sorted(codes) == list(range(100, 109))
    assert {code for code, status in codes.items() if status == 403} == {100, 103}
    assert {code for code, status in codes.items() if status == 404} == {102, 105}
    assert {code for code, status in codes.items() if status == 409} == {106, 108}
    assert {code for code, status in codes.items() if status == 422} == {101, 104, 107}


def test_request_bounds_are_validated(client: TestClient, current_user: dict[str, AuthUser]) -> None:
    negative_users = client.post("/plans", json={"name": "Bad", "price_per_month": 1_500, "max_users": -1})
    assert negative_users.status_code == 422

    plan_id = _create_plan(client)
    long_id = client.post(
        "/admin/bulk",
        json={"operation_type": "bulk-grant-access", "subscribers": ["x" * 129], "plan_id": plan_id, "duration_months": 1},
    )
    assert long_id.status_code == 422
    blank_id = client.post(
        "/admin/bulk",
        json={"operation_type": "bulk-grant-access", "subscribers": [""], "plan_id": plan_id, "duration_months": 1},
    )
    assert blank_id.status_code == 422
    negative_bulk = client.post(
        "/admin/bulk",
        json={"operation_type": "bulk-renew", "subscribers": ["a"], "plan_id": plan_id, "duration_months": -10},
    )
    assert negative_bulk.status_code == 422

    _act_as(current_user, "alice")
    huge = client.post("/subscriptions", json={"plan_id": plan_id, "duration_months": 10**13})
    assert huge.status_code == 422
    negative = client.post("/subscriptions", json={"plan_id": plan_id, "duration_months": -1})
    assert negative.status_code == 422

    assert client.get("/stats").json() == {"total_revenue": 0, "active_subscribers": 0}
