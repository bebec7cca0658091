from pydantic import Field
from datetime import datetime
from typing import Any, Optional
from .base import CamelModel

class PendingSubmission(CamelModel):
    """채점 대기 제출"""
    id: int
    user_id: int
    set_id: int
    attempt: int
    start_time: Optional[datetime] = None
    submit_time: Optional[datetime] = None
    duration_sec: Optional[int] = None
    items: int

class GradingAnswer(CamelModel):
    """채점 화면용 주관식 답안"""
    question_id: int
    title: Optional[str] = None
    skill: str
    type: str
    stem: str
    answer_data: Any = None
    current_score: Optional[float] = None
    comment: Optional[str] = None
    rubric_id: Optional[int] = None
    scores: Any = None

class GradeRequest(CamelModel):
    """채점 요청"""
    submission_id: int
    question_id: int
    manual_score: float = Field(..., ge=0)
    comment: Optional[str] = None
    rubric_id: Optional[int] = None
    scores: Any = None

class GradeResponse(CamelModel):
    message: str

class CompleteResponse(CamelModel):
    message: str
    total_score: float
