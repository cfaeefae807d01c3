from contextlib import asynccontextmanager
import logging
from typing import Any

from fastapi import FastAPI
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from subledger import events
from subledger.api.errors import ledger_error_handler
from subledger.api.routes import router as api_router
from subledger.core.config import get_settings
from subledger.core.exceptions import LedgerError
from subledger.logging import configure_logging
from subledger.middleware.correlation_id import CorrelationIdMiddleware
from subledger.middleware.request_logging import RequestLoggingMiddleware
from subledger.otel import get_fastapi_server_request_hook, setup_otel


configure_logging()
logger = logging.getLogger("subledger.lifecycle")
_subscriptions_registered = False


def _on_system_started(envelope: dict[str, Any]) -> None:
    logger.info(
        "system_event",
        extra={"event_type": envelope.get("event_type"), "service": envelope.get("service")},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _subscriptions_registered
    if not _subscriptions_registered:
        events.event_bus.subscribe("system.started", _on_system_started)
        _subscriptions_registered = True
    events.publish({"event_type": "system.started", "service": "api"})
    yield


app = FastAPI(title="Subledger API", version="0.1.0", lifespan=lifespan)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(CorrelationIdMiddleware)
app.add_exception_handler(LedgerError, ledger_error_handler)  # type: ignore[arg-type]
app.include_router(api_router)

settings = get_settings()
if settings.otel_enabled:
    setup_otel("subledger-api", True)

if not getattr(app, "_is_instrumented_by_opentelemetry", False):
    FastAPIInstrumentor().instrument_app(app, server_request_hook=get_fastapi_server_request_hook())
