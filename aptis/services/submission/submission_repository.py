import logging
from typing import Any, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, desc
from aptis import models
from aptis.services.scoring.autoscorer import ScoreResult
from aptis.utils.db_utils import upsert
from aptis.utils.timeutils import utcnow

logger = logging.getLogger(__name__)

class SubmissionRepository:

    async def get_next_attempt_number(
        self,
        db: AsyncSession,
        user_id: int,
        set_id: int
    ) -> int:
        """다음 시도 번호 조회"""
        result = await db.execute(
            select(func.max(models.Submission.attempt))
            .filter_by(user_id=user_id, set_id=set_id)
        )
        current_number = result.scalar() or 0
        return current_number + 1

    async def create_submission(
        self,
        db: AsyncSession,
        user_id: int,
        set_id: int,
        attempt: int
    ) -> models.Submission:
        submission = models.Submission(
            user_id=user_id,
            set_id=set_id,
            attempt=attempt,
            start_time=utcnow(),
            status=models.SubmissionStatus.IN_PROGRESS.value
        )
        db.add(submission)
        await db.flush()
        return submission

    async def upsert_answer(
        self,
        db: AsyncSession,
        submission_id: int,
        question_id: int,
        answer: Any,
        scored: ScoreResult
    ) -> None:
        """(submission, question) 당 하나의 답안만 유지 (재저장 시 덮어쓰기)"""
        await upsert(
            db,
            models.Answer,
            values={
                "submission_id": submission_id,
                "question_id": question_id,
                "answer_data": answer,
                "is_correct": scored.is_correct,
                "score": scored.score,
            },
            conflict_columns=["submission_id", "question_id"],
            update_columns=["answer_data", "is_correct", "score"]
        )

    async def append_progress(
        self,
        db: AsyncSession,
        submission: models.Submission,
        question_id: int,
        is_correct: Optional[bool],
        time_spent_sec: Optional[int] = None,
        attempts: Optional[int] = None
    ) -> models.UserProgress:
        progress = models.UserProgress(
            submission_id=submission.id,
            user_id=submission.user_id,
            set_id=submission.set_id,
            question_id=question_id,
            is_correct=is_correct,
            time_spent_sec=time_spent_sec,
            attempts=attempts
        )
        db.add(progress)
        await db.flush()
        return progress

    async def get_answers(
        self,
        db: AsyncSession,
        submission_id: int
    ) -> List[models.Answer]:
        result = await db.execute(
            select(models.Answer)
            .where(models.Answer.submission_id == submission_id)
            .order_by(models.Answer.question_id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_results_for_user(
        self,
        db: AsyncSession,
        user_id: int,
        limit: int = 50
    ) -> List[models.TestResult]:
        """최근 결과 목록"""
        result = await db.execute(
            select(models.TestResult)
            .where(models.TestResult.user_id == user_id)
            .order_by(desc(models.TestResult.created_at), desc(models.TestResult.id))
            .limit(limit)
        )
        return list(result.scalars().all())
