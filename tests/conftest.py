from pathlib import Path

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient

# Variables de test (.env.test) avant tout import de l'app
ROOT = Path(__file__).resolve().parent.parent
load_dotenv(ROOT / ".env.test", override=True)

from app.core.config import get_settings  # noqa: E402
from app.core.deps import get_cache, get_lookup_rate_limiter, get_query_client, get_question_cache  # noqa: E402
from app.db.database import Base, get_engine, get_sessionmaker, init_db, reset_engine  # noqa: E402
from app.db.models import PracticeSession, Question, SessionQuestion, Subject, Topic  # noqa: E402
from app.main import create_app  # noqa: E402
from fakes import FakeQueryClient  # noqa: E402

API_KEY_HEADER = {"x-api-key": "test_key"}


def _clear_caches():
    get_settings.cache_clear()
    get_cache.cache_clear()
    get_question_cache.cache_clear()
    get_lookup_rate_limiter.cache_clear()
    reset_engine()


@pytest.fixture(autouse=True)
def _isolated_state():
    """
    Vide les caches (settings, engine, cache applicatif) entre chaque test.
    """
    _clear_caches()
    yield
    _clear_caches()


@pytest.fixture
def api_headers():
    return dict(API_KEY_HEADER)


@pytest.fixture
def db_session():
    init_db()
    db = get_sessionmaker()()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=get_engine())


@pytest.fixture
def seeded_db(db_session):
    """
    Session 10 contenant la question 200 (join id 555) ; la question 999 existe
    mais n'appartient à aucune session.
    """
    db_session.add(Subject(subject_id=3, subject_name="Biology", subject_code="BIO"))
    db_session.add(Topic(topic_id=7, subject_id=3, topic_name="Cell Biology"))
    db_session.add_all(
        [
            Question(
                question_id=200,
                subject_id=3,
                topic_id=7,
                question_type="MultipleChoice",
                question_text="Which organelle is known as the powerhouse of the cell?",
                explanation="Mitochondria produce ATP.",
            ),
            Question(
                question_id=999,
                subject_id=3,
                topic_id=7,
                question_type="MultipleChoice",
                question_text="Which structure controls entry into the cell?",
            ),
            Question(
                question_id=404,
                subject_id=3,
                topic_id=7,
                question_type="MultipleChoice",
                question_text="Retired question",
                is_active=False,
            ),
        ]
    )
    db_session.add(PracticeSession(session_id=10, user_id="user_123", total_questions=1))
    db_session.add(SessionQuestion(session_question_id=555, session_id=10, question_id=200, user_id="user_123"))
    db_session.commit()
    return db_session


@pytest.fixture
def test_client(seeded_db):
    """TestClient branché sur la base SQLite mémoire peuplée."""
    app = create_app()
    with TestClient(app) as client:
        yield client


@pytest.fixture
def fake_query():
    return FakeQueryClient()


@pytest.fixture
def mocked_client(fake_query):
    """
    TestClient dont le client de requête est remplacé par le double :
    aucune base n'est ouverte.
    """
    app = create_app()
    app.dependency_overrides[get_query_client] = lambda: fake_query
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
