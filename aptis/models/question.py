from enum import Enum
from sqlalchemy import Column, Integer, String, Float, ForeignKey, Text, JSON, DateTime
from sqlalchemy.orm import relationship
from ..database import Base
from ..utils.timeutils import utcnow


class QuestionType(str, Enum):
    MCQ_SINGLE = "mcq_single"
    MCQ_MULTI = "mcq_multi"
    FILL_BLANK = "fill_blank"
    WRITING_PROMPT = "writing_prompt"
    SPEAKING_PROMPT = "speaking_prompt"


# 수동 채점 대상 문항 유형
FREE_RESPONSE_TYPES = (QuestionType.WRITING_PROMPT.value, QuestionType.SPEAKING_PROMPT.value)


class TestSet(Base):
    __tablename__ = "test_sets"
    __test__ = False

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    skill = Column(String(50), nullable=False, default="General")
    time_limit = Column(Integer, nullable=True, default=60)
    status = Column(String(20), nullable=False, default="draft")
    created_at = Column(DateTime, default=utcnow)

    set_questions = relationship("SetQuestion", back_populates="test_set", cascade="all, delete-orphan")


class Question(Base):
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=True)
    skill = Column(String(50), nullable=False)
    type = Column(String(50), nullable=False)
    stem = Column(Text, nullable=False)
    options = Column(JSON, nullable=True)
    answer_key = Column(JSON, nullable=True)
    points = Column(Float, nullable=False, default=1)
    created_at = Column(DateTime, default=utcnow)

    set_questions = relationship("SetQuestion", back_populates="question")

    @property
    def is_free_response(self) -> bool:
        return (self.type or "").lower() in FREE_RESPONSE_TYPES


class SetQuestion(Base):
    """테스트 세트 구성 (섹션/순서/배점 오버라이드)"""
    __tablename__ = "set_questions"

    set_id = Column(Integer, ForeignKey("test_sets.id", ondelete="CASCADE"), primary_key=True)
    question_id = Column(Integer, ForeignKey("questions.id"), primary_key=True)
    section = Column(String(50), nullable=False)
    order = Column(Integer, nullable=False, default=1)
    score = Column(Float, nullable=True)

    test_set = relationship("TestSet", back_populates="set_questions")
    question = relationship("Question", back_populates="set_questions")
