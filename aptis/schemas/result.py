from datetime import datetime
from typing import Optional
from .base import CamelModel

class TestResultResponse(CamelModel):
    id: int
    submission_id: int
    user_id: int
    set_id: int
    score: Optional[float] = None
    total_questions: Optional[int] = None
    correct_answers: Optional[int] = None
    time_spent_sec: Optional[int] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
