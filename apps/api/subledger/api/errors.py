from __future__ import annotations

from dataclasses import asdict, dataclass

from fastapi import Request
from fastapi.responses import JSONResponse

from subledger.context import get_correlation_id
from subledger.core.exceptions import LedgerError


@dataclass
class ErrorEnvelope:
    code: int
    error: str
    message: str
    correlation_id: str | None


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    correlation_id = get_correlation_id() or getattr(request.state, "correlation_id", None)
    payload = ErrorEnvelope(
        code=exc.code,
        error=exc.name,
        message=exc.message,
        correlation_id=correlation_id,
    )
    return JSONResponse(status_code=exc.status_code, content=asdict(payload))
