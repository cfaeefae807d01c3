from subledger.business.plans.models import Plan
from subledger.business.plans.schemas import PlanCreate, PlanRead

__all__ = [
    "Plan",
    "PlanCreate",
    "PlanRead",
]
