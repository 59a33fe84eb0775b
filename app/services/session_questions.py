from __future__ import annotations

import logging
from typing import Union

from app.db.models import SessionQuestion
from app.db.query import QueryClient
from app.schemas.session_question import (
    SessionQuestionError,
    SessionQuestionLookupParams,
    SessionQuestionLookupResponse,
)

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Session question not found"

LookupResult = Union[SessionQuestionLookupResponse, SessionQuestionError]


def lookup_session_question(client: QueryClient, params: SessionQuestionLookupParams) -> LookupResult:
    """
    Résout (session_id, question_id) → session_question_id.

    Absence de ligne = SessionQuestionError, jamais une réponse à id nul.
    Les erreurs base de données remontent à l'appelant.
    """
    rows = (
        client.select(session_question_id=SessionQuestion.session_question_id)
        .from_(SessionQuestion)
        .where(
            SessionQuestion.session_id == params.session_id,
            SessionQuestion.question_id == params.question_id,
        )
        .limit(1)
    )

    if not rows:
        return SessionQuestionError(error=NOT_FOUND_MESSAGE)

    sq_id = rows[0].get("session_question_id")
    if sq_id is None:
        logger.warning("session_questions row without id for %s", params.model_dump())
        return SessionQuestionError(error=NOT_FOUND_MESSAGE)

    return SessionQuestionLookupResponse(session_question_id=int(sq_id))
