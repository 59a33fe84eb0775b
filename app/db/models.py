from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    String,
    DateTime,
    Integer,
    Boolean,
    ForeignKey,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================
# CONTENU (matières / chapitres / questions)
# ============================================================

class Subject(Base):
    __tablename__ = "subjects"

    subject_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    subject_name: Mapped[str] = mapped_column(String(50), nullable=False)
    subject_code: Mapped[str] = mapped_column(String(10), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    topics: Mapped[list["Topic"]] = relationship("Topic", back_populates="subject")


class Topic(Base):
    __tablename__ = "topics"

    topic_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    subject_id: Mapped[int] = mapped_column(ForeignKey("subjects.subject_id"), index=True, nullable=False)
    topic_name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    subject: Mapped["Subject"] = relationship("Subject", back_populates="topics")


class Subtopic(Base):
    __tablename__ = "subtopics"

    subtopic_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    topic_id: Mapped[int] = mapped_column(ForeignKey("topics.topic_id"), index=True, nullable=False)
    subtopic_name: Mapped[str] = mapped_column(String(100), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Question(Base):
    __tablename__ = "questions"

    question_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    subject_id: Mapped[int] = mapped_column(ForeignKey("subjects.subject_id"), index=True, nullable=False)
    topic_id: Mapped[int] = mapped_column(ForeignKey("topics.topic_id"), index=True, nullable=False)
    subtopic_id: Mapped[int | None] = mapped_column(ForeignKey("subtopics.subtopic_id"), nullable=True)

    # MultipleChoice | Matching | MultipleCorrectStatements | AssertionReason | DiagramBased | SequenceOrdering
    question_type: Mapped[str] = mapped_column(String(32), nullable=False)
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    explanation: Mapped[str | None] = mapped_column(Text, nullable=True)
    difficulty_level: Mapped[str] = mapped_column(String(16), default="medium", nullable=False)  # easy|medium|hard

    marks: Mapped[int] = mapped_column(Integer, default=4, nullable=False)
    negative_marks: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    is_image_based: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


# ============================================================
# SESSIONS D'ENTRAÎNEMENT
# ============================================================

class PracticeSession(Base):
    __tablename__ = "practice_sessions"

    session_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)

    session_type: Mapped[str] = mapped_column(String(32), default="Practice", nullable=False)
    subject_id: Mapped[int | None] = mapped_column(ForeignKey("subjects.subject_id"), nullable=True)
    topic_id: Mapped[int | None] = mapped_column(ForeignKey("topics.topic_id"), nullable=True)

    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    total_questions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    questions_attempted: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    questions_correct: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    questions: Mapped[list["SessionQuestion"]] = relationship(
        "SessionQuestion",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class SessionQuestion(Base):
    __tablename__ = "session_questions"
    # une question n'apparaît qu'une fois par session
    __table_args__ = (
        UniqueConstraint("session_id", "question_id", name="uq_session_questions_session_question"),
    )

    session_question_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[int] = mapped_column(
        ForeignKey("practice_sessions.session_id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    question_id: Mapped[int] = mapped_column(ForeignKey("questions.question_id"), index=True, nullable=False)
    user_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)

    question_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    time_spent_seconds: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_bookmarked: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    session: Mapped["PracticeSession"] = relationship("PracticeSession", back_populates="questions")
