from .user import User
from .question import TestSet, Question, SetQuestion, QuestionType, FREE_RESPONSE_TYPES
from .submission import Submission, Answer, UserProgress, SubmissionStatus
from .grading import ManualGrading
from .result import TestResult

__all__ = [
    "User",
    "TestSet",
    "Question",
    "SetQuestion",
    "QuestionType",
    "FREE_RESPONSE_TYPES",
    "Submission",
    "Answer",
    "UserProgress",
    "SubmissionStatus",
    "ManualGrading",
    "TestResult"
]
