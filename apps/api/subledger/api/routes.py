from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from subledger.business.access.api import router as access_router
from subledger.business.admin.api import router as admin_router
from subledger.business.payments.api import router as payments_router
from subledger.business.plans.api import router as plans_router
from subledger.business.stats.api import router as stats_router
from subledger.business.subscription.api import router as subscriptions_router
from subledger.core.auth import AuthUser, get_current_user
from subledger.core.config import get_settings
from subledger.metrics import generate_metrics_payload, metrics_content_type

router = APIRouter()
router.include_router(plans_router)
router.include_router(subscriptions_router)
router.include_router(access_router)
router.include_router(payments_router)
router.include_router(stats_router)
router.include_router(admin_router)


@router.get("/health", tags=["system"])
def health() -> dict[str, str]:
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.app_env,
    }


@router.get("/me", tags=["auth"])
async def me(user: AuthUser = Depends(get_current_user)) -> dict[str, str | list[str] | bool]:
    return {
        "sub": user.sub,
        "roles": user.roles,
        "is_owner": user.sub == get_settings().owner_id,
    }


@router.get("/metrics", tags=["system"])
def metrics(user: AuthUser = Depends(get_current_user)) -> Response:
    settings = get_settings()
    if not settings.metrics_enabled:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    if "system.metrics.read" not in user.roles:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Missing permission: system.metrics.read")
    return Response(content=generate_metrics_payload(), media_type=metrics_content_type())
