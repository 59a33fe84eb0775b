from __future__ import annotations

import logging
import re

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.orm import Session
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from app.core.deps import get_question_cache
from app.core.errors import error_payload
from app.db.database import get_db
from app.db.models import Question, Subject, Subtopic, Topic
from app.services.cache import CacheService, question_cache_key

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/questions", tags=["questions"])

# chiffres en tête d'identifiant : "12abc" -> 12
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_question_id(raw: str) -> int | None:
    m = _LEADING_INT.match(raw)
    return int(m.group(1)) if m else None


@router.get("/{question_id}")
def get_question(
    question_id: str,
    db: Session = Depends(get_db),
    cache: CacheService = Depends(get_question_cache),
):
    qid = parse_question_id(question_id)
    if qid is None:
        raise HTTPException(status_code=400, detail="Invalid question ID")

    key = question_cache_key(qid)
    cached = cache.get(key)
    if cached is not None:
        return {**cached, "source": "cache"}

    try:
        row = db.execute(
            select(
                Question.question_id,
                Question.question_text,
                Question.question_type,
                Question.explanation,
                Question.difficulty_level,
                Question.marks,
                Question.negative_marks,
                Question.is_image_based,
                Question.image_url,
                Question.subject_id,
                Question.topic_id,
                Question.subtopic_id,
                Topic.topic_name,
                Subtopic.subtopic_name,
                Subject.subject_name,
            )
            .outerjoin(Topic, Question.topic_id == Topic.topic_id)
            .outerjoin(Subtopic, Question.subtopic_id == Subtopic.subtopic_id)
            .outerjoin(Subject, Question.subject_id == Subject.subject_id)
            .where(Question.question_id == qid, Question.is_active.is_(True))
            .limit(1)
        ).first()
    except Exception:
        logger.exception("Error fetching question %s", qid)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_payload("Failed to fetch question details"),
        )

    if row is None:
        raise HTTPException(status_code=404, detail="Question not found")

    data = dict(row._mapping)
    try:
        cache.set(key, data)
    except Exception as e:
        logger.warning("Failed to cache question %s: %s", qid, e)

    return {**data, "source": "database"}
