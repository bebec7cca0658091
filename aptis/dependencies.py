import logging
from fastapi import FastAPI
from aptis.database import init_db
from aptis.services.grading.grading_service import GradingService
from aptis.services.submission.submission_service import SubmissionService

logger = logging.getLogger(__name__)

class Services:
    def __init__(self):
        self.submission_service = SubmissionService()
        self.grading_service = GradingService()

services = Services()

def get_submission_service() -> SubmissionService:
    return services.submission_service

def get_grading_service() -> GradingService:
    return services.grading_service

async def init_app(app: FastAPI):
    """앱 초기화"""
    try:
        await init_db()
        logger.info("Services initialized successfully")
    except Exception as e:
        logger.error(f"Service initialization failed: {str(e)}")
        raise
