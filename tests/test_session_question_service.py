from unittest.mock import Mock

import pytest

from app.db.models import SessionQuestion
from app.db.query import FromStage, LimitStage, QueryClient, WhereStage
from app.schemas.session_question import (
    SessionQuestionError,
    SessionQuestionLookupParams,
    SessionQuestionLookupResponse,
)
from app.services.session_questions import NOT_FOUND_MESSAGE, lookup_session_question
from fakes import FakeQueryClient

PARAMS = SessionQuestionLookupParams(session_id=1, question_id=101)


def test_fake_implements_every_stage():
    fake = FakeQueryClient()
    assert isinstance(fake, QueryClient)
    from_stage = fake.select(x=SessionQuestion.session_question_id)
    assert isinstance(from_stage, FromStage)
    where_stage = from_stage.from_(SessionQuestion)
    assert isinstance(where_stage, WhereStage)
    assert isinstance(where_stage.where(), LimitStage)


def test_empty_result_is_not_found(fake_query):
    fake_query.limit_mock.return_value = []

    result = lookup_session_question(fake_query, PARAMS)

    assert isinstance(result, SessionQuestionError)
    assert result.error == NOT_FOUND_MESSAGE
    assert result.details is None


def test_found_row_surfaces_its_id(fake_query):
    fake_query.limit_mock.return_value = [{"session_question_id": 42}]

    result = lookup_session_question(fake_query, PARAMS)

    assert result == SessionQuestionLookupResponse(session_question_id=42)


def test_null_id_is_never_a_success(fake_query):
    fake_query.limit_mock.return_value = [{"session_question_id": None}]

    result = lookup_session_question(fake_query, PARAMS)

    assert isinstance(result, SessionQuestionError)


def test_query_shape(fake_query):
    fake_query.limit_mock.return_value = [{"session_question_id": 7}]

    lookup_session_question(fake_query, PARAMS)

    assert list(fake_query.selected[0]) == ["session_question_id"]
    assert fake_query.tables == [SessionQuestion]
    assert len(fake_query.criteria[0]) == 2
    fake_query.limit_mock.assert_called_once_with(1)


def test_database_errors_propagate(fake_query):
    fake_query.limit_mock.side_effect = RuntimeError("connection reset")

    with pytest.raises(RuntimeError):
        lookup_session_question(fake_query, PARAMS)


def test_stale_double_fails_loudly():
    chain = FakeQueryClient().select(id=SessionQuestion.session_question_id).from_(SessionQuestion)
    with pytest.raises(AttributeError):
        chain.order_by(SessionQuestion.question_order)


def test_limit_mock_is_observable():
    fake = FakeQueryClient(rows=[{"session_question_id": 3}])
    assert isinstance(fake.limit_mock, Mock)
    assert lookup_session_question(fake, PARAMS).session_question_id == 3
    assert fake.limit_mock.call_count == 1
