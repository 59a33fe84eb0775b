"""
Constantes d'abonnement et de contenu, figées au chargement du module.
"""
from dataclasses import dataclass, asdict
from typing import Final


@dataclass(frozen=True)
class SubjectIds:
    BIOLOGY: int = 3


@dataclass(frozen=True)
class SubscriptionLimits:
    FREE_PLAN_DAILY_TESTS: int = 5
    FREEMIUM_TOPICS_LIMIT: int = 2


@dataclass(frozen=True)
class PlanCodes:
    FREE: str = "free"


SUBJECT_IDS: Final = SubjectIds()
SUBSCRIPTION_LIMITS: Final = SubscriptionLimits()
PLAN_CODES: Final = PlanCodes()


def as_dict() -> dict:
    return {
        "subject_ids": asdict(SUBJECT_IDS),
        "subscription_limits": asdict(SUBSCRIPTION_LIMITS),
        "plan_codes": asdict(PLAN_CODES),
    }
