from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.rate_limit import RateLimiter
from app.core.security import get_api_key
from app.db.database import get_db
from app.db.query import QueryClient, SqlAlchemyQueryClient
from app.services.cache import CacheService


@lru_cache
def get_cache() -> CacheService:
    """
    Fournit le cache des lookups session/question en dépendance (DI).
    """
    settings = get_settings()
    return CacheService(ttl=settings.CACHE_TTL_SESSION_QUESTION_LOOKUP, max_entries=settings.CACHE_MAX_ENTRIES)


@lru_cache
def get_question_cache() -> CacheService:
    settings = get_settings()
    return CacheService(ttl=settings.CACHE_TTL_QUESTION, max_entries=settings.CACHE_MAX_ENTRIES)


@lru_cache
def get_lookup_rate_limiter() -> RateLimiter:
    return RateLimiter(get_settings().RATE_LIMIT_SESSION_QUESTION_LOOKUP)


def limit_session_question_lookup(
    api_key: str = Depends(get_api_key),
    limiter: RateLimiter = Depends(get_lookup_rate_limiter),
) -> None:
    limiter.check("session-question-lookup", api_key)


def get_query_client(db: Session = Depends(get_db)) -> QueryClient:
    return SqlAlchemyQueryClient(db)
