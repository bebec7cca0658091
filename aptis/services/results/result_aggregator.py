"""제출 결과 집계

제출(submit)과 채점 완료(complete) 두 경로가 같은 집계 규칙을 쓰도록
집계와 결과 저장을 이 모듈 한 곳에서만 수행한다.
"""
import logging
from datetime import datetime
from typing import NamedTuple, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from aptis import models
from aptis.services.catalog.question_bank import QuestionBank
from aptis.utils.db_utils import upsert

logger = logging.getLogger(__name__)


class ResultTotals(NamedTuple):
    total_questions: int
    correct_answers: int
    total_score: float
    manual_score: float


class ResultAggregator:
    def __init__(self, question_bank: Optional[QuestionBank] = None):
        self.question_bank = question_bank or QuestionBank()

    async def aggregate(
        self,
        db: AsyncSession,
        set_id: int,
        submission_id: int
    ) -> ResultTotals:
        """문항 수 / 정답 수 / 총점 계산 (점수 null은 0으로 취급)"""
        total_questions = await self.question_bank.count_set_questions(db, set_id)

        correct_result = await db.execute(
            select(func.count(models.Answer.id))
            .where(
                models.Answer.submission_id == submission_id,
                models.Answer.is_correct.is_(True)
            )
        )
        correct_answers = correct_result.scalar() or 0

        score_result = await db.execute(
            select(func.coalesce(func.sum(models.Answer.score), 0))
            .where(models.Answer.submission_id == submission_id)
        )
        total_score = float(score_result.scalar() or 0)

        manual_result = await db.execute(
            select(func.coalesce(func.sum(models.Answer.score), 0))
            .join(models.Question, models.Question.id == models.Answer.question_id)
            .where(
                models.Answer.submission_id == submission_id,
                models.Question.type.in_(models.FREE_RESPONSE_TYPES)
            )
        )
        manual_score = float(manual_result.scalar() or 0)

        totals = ResultTotals(
            total_questions=total_questions,
            correct_answers=correct_answers,
            total_score=total_score,
            manual_score=manual_score
        )
        logger.info(f"제출 {submission_id} 집계: {totals}")
        return totals

    async def save_result(
        self,
        db: AsyncSession,
        submission: models.Submission,
        totals: ResultTotals,
        completed_at: datetime,
        time_spent_sec: Optional[int] = None
    ) -> models.TestResult:
        """제출당 하나의 TestResult를 생성하거나 갱신

        time_spent_sec가 None이면 기존 값을 유지한다.
        """
        values = {
            "submission_id": submission.id,
            "user_id": submission.user_id,
            "set_id": submission.set_id,
            "score": totals.total_score,
            "total_questions": totals.total_questions,
            "correct_answers": totals.correct_answers,
            "time_spent_sec": time_spent_sec,
            "completed_at": completed_at,
        }
        update_columns = ["score", "total_questions", "correct_answers", "completed_at"]
        if time_spent_sec is not None:
            update_columns.append("time_spent_sec")

        await upsert(
            db,
            models.TestResult,
            values=values,
            conflict_columns=["submission_id"],
            update_columns=update_columns
        )

        result = await db.execute(
            select(models.TestResult)
            .where(models.TestResult.submission_id == submission.id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()
