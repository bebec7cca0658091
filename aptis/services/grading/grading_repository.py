import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, desc, update, and_
from aptis import models
from aptis.utils.db_utils import upsert

logger = logging.getLogger(__name__)

class GradingRepository:

    async def upsert_manual_grading(
        self,
        db: AsyncSession,
        submission_id: int,
        question_id: int,
        graded_at: datetime,
        comment: Optional[str] = None,
        rubric_id: Optional[int] = None,
        scores: Any = None,
        graded_by: Optional[int] = None
    ) -> None:
        """수동 채점 기록 (재채점 시 덮어쓰기)"""
        await upsert(
            db,
            models.ManualGrading,
            values={
                "submission_id": submission_id,
                "question_id": question_id,
                "rubric_id": rubric_id,
                "scores": scores,
                "comment": comment,
                "graded_by": graded_by,
                "graded_at": graded_at,
            },
            conflict_columns=["submission_id", "question_id"],
            update_columns=["rubric_id", "scores", "comment", "graded_by", "graded_at"]
        )

    async def get_manual_grading(
        self,
        db: AsyncSession,
        submission_id: int,
        question_id: int
    ) -> Optional[models.ManualGrading]:
        result = await db.execute(
            select(models.ManualGrading)
            .filter_by(submission_id=submission_id, question_id=question_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_answer(
        self,
        db: AsyncSession,
        submission_id: int,
        question_id: int
    ) -> Optional[models.Answer]:
        result = await db.execute(
            select(models.Answer)
            .filter_by(submission_id=submission_id, question_id=question_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def set_answer_score(
        self,
        db: AsyncSession,
        submission_id: int,
        question_id: int,
        score: float
    ) -> None:
        """수동 점수를 Answer.score에 반영 (집계는 Answer.score 합계를 사용)"""
        await db.execute(
            update(models.Answer)
            .where(
                models.Answer.submission_id == submission_id,
                models.Answer.question_id == question_id
            )
            .values(score=score)
        )

    async def list_pending(
        self,
        db: AsyncSession,
        status: str,
        question_types: Sequence[str]
    ) -> List[Dict[str, Any]]:
        """주관식 답안이 있는 제출 목록 (문항 수 포함)"""
        answer_counts = (
            select(
                models.Answer.submission_id.label("submission_id"),
                func.count(models.Answer.id).label("item_count")
            )
            .join(models.Question, models.Question.id == models.Answer.question_id)
            .where(models.Question.type.in_(list(question_types)))
            .group_by(models.Answer.submission_id)
            .subquery()
        )

        stmt = (
            select(models.Submission, answer_counts.c.item_count)
            .join(answer_counts, answer_counts.c.submission_id == models.Submission.id)
            .where(models.Submission.status == status)
            .order_by(desc(models.Submission.submit_time), desc(models.Submission.id))
        )
        rows = (await db.execute(stmt)).all()

        return [
            {
                "id": submission.id,
                "userId": submission.user_id,
                "setId": submission.set_id,
                "attempt": submission.attempt,
                "startTime": submission.start_time,
                "submitTime": submission.submit_time,
                "durationSec": submission.duration_sec,
                "items": count,
            }
            for submission, count in rows
        ]

    async def get_free_response_answers(
        self,
        db: AsyncSession,
        submission_id: int
    ) -> List[Dict[str, Any]]:
        """채점 화면용 주관식 답안 목록"""
        stmt = (
            select(models.Question, models.Answer, models.ManualGrading)
            .join(models.Answer, models.Answer.question_id == models.Question.id)
            .outerjoin(
                models.ManualGrading,
                and_(
                    models.ManualGrading.submission_id == models.Answer.submission_id,
                    models.ManualGrading.question_id == models.Answer.question_id
                )
            )
            .where(
                models.Answer.submission_id == submission_id,
                models.Question.type.in_(models.FREE_RESPONSE_TYPES)
            )
            .order_by(models.Question.id)
            .execution_options(populate_existing=True)
        )
        rows = (await db.execute(stmt)).all()

        return [
            {
                "questionId": question.id,
                "title": question.title,
                "skill": question.skill,
                "type": question.type,
                "stem": question.stem,
                "answerData": answer.answer_data,
                "currentScore": answer.score,
                "comment": grading.comment if grading else None,
                "rubricId": grading.rubric_id if grading else None,
                "scores": grading.scores if grading else None,
            }
            for question, answer, grading in rows
        ]
