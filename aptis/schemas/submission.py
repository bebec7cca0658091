from pydantic import Field
from datetime import datetime
from typing import Any, List, Optional
from .base import CamelModel

class StartSubmissionRequest(CamelModel):
    set_id: int

class StartSubmissionResponse(CamelModel):
    id: int
    attempt: int

class SaveAnswerRequest(CamelModel):
    question_id: int
    answer: Any = Field(...)
    time_spent_sec: Optional[int] = Field(None, ge=0)
    attempts: Optional[int] = Field(None, ge=0)

class ScoreResponse(CamelModel):
    """답안 저장 즉시 채점 결과"""
    is_correct: Optional[bool] = None
    score: Optional[float] = None

class SubmitResponse(CamelModel):
    result_id: int
    score: float
    total_questions: int
    correct_answers: int
    time_spent_sec: Optional[int] = None

class SubmissionData(CamelModel):
    id: int
    user_id: int
    set_id: int
    attempt: int
    start_time: Optional[datetime] = None
    submit_time: Optional[datetime] = None
    duration_sec: Optional[int] = None
    auto_score: Optional[float] = None
    manual_score: Optional[float] = None
    total_score: Optional[float] = None
    status: str

class AnswerData(CamelModel):
    question_id: int
    answer_data: Any = None
    is_correct: Optional[bool] = None
    score: Optional[float] = None

class SubmissionDetailResponse(CamelModel):
    """제출 상세 응답"""
    submission: SubmissionData
    answers: List[AnswerData]
