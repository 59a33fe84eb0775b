from typing import Optional

from app.core.constants import PLAN_CODES, SUBSCRIPTION_LIMITS


def compute_practice_entitlements(plan_code: Optional[str]) -> dict:
    """
    Retourne les droits d'entraînement selon le plan.
    None = illimité.
    """
    plan = (plan_code or PLAN_CODES.FREE).strip().lower()

    # Free
    if plan == PLAN_CODES.FREE:
        return {
            "plan_code": PLAN_CODES.FREE,
            "daily_tests_limit": SUBSCRIPTION_LIMITS.FREE_PLAN_DAILY_TESTS,
            "topics_limit": SUBSCRIPTION_LIMITS.FREEMIUM_TOPICS_LIMIT,
        }

    # Abonnés
    return {
        "plan_code": plan,
        "daily_tests_limit": None,
        "topics_limit": None,
    }


def remaining_tests_today(plan_code: Optional[str], used_today: int) -> Optional[int]:
    limit = compute_practice_entitlements(plan_code)["daily_tests_limit"]
    if limit is None:
        return None
    return max(0, limit - max(0, int(used_today or 0)))
