from .auth import router as auth_router
from .submission import router as submission_router
from .grading import router as grading_router

__all__ = [
    'auth_router',
    'submission_router',
    'grading_router'
]
