from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from aptis import models
from aptis.database import get_db
from aptis.dependencies import get_submission_service
from aptis.services.submission.submission_service import SubmissionService
from aptis.utils.auth import get_current_user
from aptis.schemas.submission import (
    StartSubmissionRequest,
    StartSubmissionResponse,
    SaveAnswerRequest,
    ScoreResponse,
    SubmitResponse,
    SubmissionDetailResponse
)
from aptis.schemas.result import TestResultResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["submissions"])

@router.post("/submissions/start", response_model=StartSubmissionResponse, status_code=201)
async def start_submission(
    request: StartSubmissionRequest,
    current_user: models.User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    submission_service: SubmissionService = Depends(get_submission_service)
):
    """응시 시작"""
    try:
        return await submission_service.start(db, current_user.id, request.set_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"응시 시작 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

@router.post("/submissions/{submission_id}/answers", response_model=ScoreResponse)
async def save_answer(
    submission_id: int,
    request: SaveAnswerRequest,
    current_user: models.User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    submission_service: SubmissionService = Depends(get_submission_service)
):
    """답안 저장 (즉시 자동 채점)"""
    try:
        scored = await submission_service.save_answer(
            db,
            submission_id=submission_id,
            user_id=current_user.id,
            question_id=request.question_id,
            answer=request.answer,
            time_spent_sec=request.time_spent_sec,
            attempts=request.attempts
        )
        return ScoreResponse(is_correct=scored.is_correct, score=scored.score)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"답안 저장 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

@router.post("/submissions/{submission_id}/submit", response_model=SubmitResponse)
async def submit(
    submission_id: int,
    current_user: models.User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    submission_service: SubmissionService = Depends(get_submission_service)
):
    """응시 제출"""
    try:
        return await submission_service.submit(db, submission_id, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"제출 처리 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/submissions/{submission_id}", response_model=SubmissionDetailResponse)
async def get_submission(
    submission_id: int,
    current_user: models.User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    submission_service: SubmissionService = Depends(get_submission_service)
):
    """제출 상세 조회"""
    try:
        return await submission_service.get_submission_detail(db, submission_id, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"제출 조회 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/results/me", response_model=List[TestResultResponse])
async def get_my_results(
    current_user: models.User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    submission_service: SubmissionService = Depends(get_submission_service)
):
    """내 결과 목록"""
    try:
        return await submission_service.get_my_results(db, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"결과 조회 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
