from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status

from subledger.context import get_correlation_id
from subledger.core.auth import AuthUser, get_current_user
from subledger.core.clock import Clock, get_clock
from subledger.platform.security.context import CallContext


def get_call_context(
    request: Request,
    auth_user: AuthUser = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
) -> CallContext:
    if auth_user.is_anonymous:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="authentication required")

    correlation_id = get_correlation_id() or getattr(request.state, "correlation_id", None)
    return CallContext(
        caller_id=auth_user.sub,
        now=clock.now(),
        correlation_id=correlation_id,
        roles=tuple(str(role) for role in auth_user.roles),
    )
