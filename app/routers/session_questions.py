import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from starlette.status import HTTP_404_NOT_FOUND, HTTP_500_INTERNAL_SERVER_ERROR

from app.core.deps import get_cache, get_query_client, limit_session_question_lookup
from app.core.errors import error_payload
from app.core.security import get_api_key
from app.db.query import QueryClient
from app.schemas.session_question import (
    SessionQuestionError,
    SessionQuestionLookupParams,
    SessionQuestionLookupResponse,
)
from app.services.cache import CacheService, session_question_cache_key
from app.services.session_questions import lookup_session_question

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/session-questions",
    tags=["session-questions"],
    dependencies=[Depends(get_api_key), Depends(limit_session_question_lookup)],
)

UNEXPECTED_ERROR = "An unexpected error occurred while looking up the session question."

_ERROR_RESPONSES = {
    400: {"model": SessionQuestionError},
    401: {"model": SessionQuestionError},
    429: {"description": "Rate limit exceeded (Retry-After header)"},
    404: {"model": SessionQuestionError},
    500: {"model": SessionQuestionError},
}


def _lookup(params: SessionQuestionLookupParams, client: QueryClient, cache: CacheService):
    key = session_question_cache_key(params.session_id, params.question_id)

    try:
        cached = cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for session question lookup (%s)", key)
            return cached

        result = lookup_session_question(client, params)
    except Exception:
        logger.exception("Error looking up session question %s", params.model_dump())
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_payload(UNEXPECTED_ERROR),
        )

    if isinstance(result, SessionQuestionError):
        logger.warning("Session question not found %s", params.model_dump())
        return JSONResponse(status_code=HTTP_404_NOT_FOUND, content=result.to_payload())

    payload = result.model_dump()
    try:
        cache.set(key, payload)
    except Exception as e:
        # le cache est optionnel : la réponse reste valide
        logger.warning("Failed to cache session question lookup result: %s", e)

    logger.debug("Successfully looked up session question %s -> %s", params.model_dump(), payload)
    return payload


@router.get("/lookup", response_model=SessionQuestionLookupResponse, responses=_ERROR_RESPONSES)
def lookup_get(
    session_id: int = Query(..., gt=0),
    question_id: int = Query(..., gt=0),
    client: QueryClient = Depends(get_query_client),
    cache: CacheService = Depends(get_cache),
):
    params = SessionQuestionLookupParams(session_id=session_id, question_id=question_id)
    return _lookup(params, client, cache)


@router.post("/lookup", response_model=SessionQuestionLookupResponse, responses=_ERROR_RESPONSES)
def lookup_post(
    body: SessionQuestionLookupParams,
    client: QueryClient = Depends(get_query_client),
    cache: CacheService = Depends(get_cache),
):
    return _lookup(body, client, cache)
