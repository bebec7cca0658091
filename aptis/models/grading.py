from sqlalchemy import Column, Integer, DateTime, JSON, ForeignKey, Text, UniqueConstraint
from ..database import Base

class ManualGrading(Base):
    __tablename__ = "manual_gradings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    submission_id = Column(Integer, ForeignKey("submissions.id", ondelete="CASCADE"), nullable=False)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False)
    rubric_id = Column(Integer, nullable=True)
    scores = Column(JSON, nullable=True)
    comment = Column(Text, nullable=True)
    graded_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    graded_at = Column(DateTime, nullable=True)

    __table_args__ = (
        UniqueConstraint("submission_id", "question_id", name="uix_manual_grading_submission_question"),
    )

    def to_dict(self):
        return {
            "submissionId": self.submission_id,
            "questionId": self.question_id,
            "rubricId": self.rubric_id,
            "scores": self.scores,
            "comment": self.comment,
            "gradedBy": self.graded_by,
            "gradedAt": self.graded_at.isoformat() if self.graded_at else None,
        }
