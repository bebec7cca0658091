from enum import Enum
from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey, JSON, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from ..database import Base
from ..utils.timeutils import utcnow


class SubmissionStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"
    GRADED = "graded"


class Submission(Base):
    __tablename__ = "submissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    set_id = Column(Integer, ForeignKey("test_sets.id"), nullable=False, index=True)
    attempt = Column(Integer, nullable=False, default=1)
    start_time = Column(DateTime, nullable=True)
    submit_time = Column(DateTime, nullable=True)
    duration_sec = Column(Integer, nullable=True)
    auto_score = Column(Float, nullable=True)
    manual_score = Column(Float, nullable=True)
    total_score = Column(Float, nullable=True)
    status = Column(String(20), nullable=False, default=SubmissionStatus.IN_PROGRESS.value)
    created_at = Column(DateTime, default=utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "set_id", "attempt", name="uix_submission_user_set_attempt"),
    )

    user = relationship("User", back_populates="submissions")
    answers = relationship("Answer", back_populates="submission", cascade="all, delete-orphan")
    result = relationship("TestResult", back_populates="submission", uselist=False)

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "setId": self.set_id,
            "attempt": self.attempt,
            "startTime": self.start_time.isoformat() if self.start_time else None,
            "submitTime": self.submit_time.isoformat() if self.submit_time else None,
            "durationSec": self.duration_sec,
            "autoScore": self.auto_score,
            "manualScore": self.manual_score,
            "totalScore": self.total_score,
            "status": self.status,
        }


class Answer(Base):
    __tablename__ = "answers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    submission_id = Column(Integer, ForeignKey("submissions.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False, index=True)
    answer_data = Column(JSON, nullable=True)
    is_correct = Column(Boolean, nullable=True)
    score = Column(Float, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    __table_args__ = (
        UniqueConstraint("submission_id", "question_id", name="uix_answer_submission_question"),
    )

    submission = relationship("Submission", back_populates="answers")

    def to_dict(self):
        return {
            "questionId": self.question_id,
            "answerData": self.answer_data,
            "isCorrect": self.is_correct,
            "score": self.score,
        }


class UserProgress(Base):
    """답안 저장 이벤트 로그 (append-only)"""
    __tablename__ = "user_progress"

    id = Column(Integer, primary_key=True, autoincrement=True)
    submission_id = Column(Integer, ForeignKey("submissions.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    set_id = Column(Integer, ForeignKey("test_sets.id"), nullable=False)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False)
    is_correct = Column(Boolean, nullable=True)
    time_spent_sec = Column(Integer, nullable=True)
    attempts = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    __table_args__ = (
        Index("ix_user_progress_user_set_question", "user_id", "set_id", "question_id"),
    )
