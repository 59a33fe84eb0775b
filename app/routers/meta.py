from typing import Optional

from fastapi import APIRouter

from app.core import constants
from app.services.entitlements import compute_practice_entitlements, remaining_tests_today

router = APIRouter(prefix="/meta", tags=["meta"])


@router.get("/constants")
def get_constants():
    data = constants.as_dict()
    data["free_plan"] = compute_practice_entitlements(constants.PLAN_CODES.FREE)
    return data


@router.get("/entitlements")
def get_entitlements(plan: Optional[str] = None, used_today: int = 0):
    out = compute_practice_entitlements(plan)
    out["used_today"] = max(0, used_today)
    out["remaining_today"] = remaining_tests_today(plan, used_today)
    return out
