from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from aptis import models
from aptis.database import get_db
from aptis.dependencies import get_grading_service
from aptis.services.grading.grading_service import GradingService
from aptis.utils.auth import get_current_admin
from aptis.schemas.grading import (
    PendingSubmission,
    GradingAnswer,
    GradeRequest,
    GradeResponse,
    CompleteResponse
)

router = APIRouter(prefix="/admin", tags=["admin-grading"])
logger = logging.getLogger(__name__)

@router.get("/submissions", response_model=List[PendingSubmission])
async def list_pending_submissions(
    status: Optional[str] = None,
    skill: Optional[str] = None,
    admin: models.User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
    grading_service: GradingService = Depends(get_grading_service)
):
    """채점 대기 제출 목록"""
    try:
        return await grading_service.list_pending(db, status=status, skill=skill)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"채점 대기 목록 조회 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/submissions/{submission_id}/answers", response_model=List[GradingAnswer])
async def get_answers_for_grading(
    submission_id: int,
    admin: models.User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
    grading_service: GradingService = Depends(get_grading_service)
):
    """채점할 주관식 답안 조회"""
    try:
        return await grading_service.get_answers_for_grading(db, submission_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"채점 답안 조회 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

@router.post("/grade", response_model=GradeResponse)
async def grade_answer(
    request: GradeRequest,
    admin: models.User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
    grading_service: GradingService = Depends(get_grading_service)
):
    """주관식 답안 채점"""
    try:
        await grading_service.grade(
            db,
            submission_id=request.submission_id,
            question_id=request.question_id,
            manual_score=request.manual_score,
            comment=request.comment,
            rubric_id=request.rubric_id,
            scores=request.scores,
            graded_by=admin.id
        )
        return GradeResponse(message="graded")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"채점 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

@router.post("/submissions/{submission_id}/complete", response_model=CompleteResponse)
async def complete_grading(
    submission_id: int,
    admin: models.User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
    grading_service: GradingService = Depends(get_grading_service)
):
    """채점 완료"""
    try:
        return await grading_service.complete(db, submission_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"채점 완료 처리 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
