from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from ..database import Base
from ..utils.timeutils import utcnow

class TestResult(Base):
    __tablename__ = "test_results"
    __test__ = False

    id = Column(Integer, primary_key=True, autoincrement=True)
    submission_id = Column(Integer, ForeignKey("submissions.id", ondelete="CASCADE"), nullable=False, unique=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    set_id = Column(Integer, ForeignKey("test_sets.id"), nullable=False)
    score = Column(Float, nullable=True)
    total_questions = Column(Integer, nullable=True)
    correct_answers = Column(Integer, nullable=True)
    time_spent_sec = Column(Integer, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    __table_args__ = (
        Index("ix_test_results_user_set", "user_id", "set_id"),
    )

    submission = relationship("Submission", back_populates="result")

    def to_dict(self):
        return {
            "id": self.id,
            "submissionId": self.submission_id,
            "userId": self.user_id,
            "setId": self.set_id,
            "score": self.score,
            "totalQuestions": self.total_questions,
            "correctAnswers": self.correct_answers,
            "timeSpentSec": self.time_spent_sec,
            "completedAt": self.completed_at.isoformat() if self.completed_at else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
