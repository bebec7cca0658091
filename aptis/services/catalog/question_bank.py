import logging
from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from aptis import models

logger = logging.getLogger(__name__)

class QuestionBank:
    """문제 은행 / 세트 구성 조회 (읽기 전용)"""

    async def get_test_set(
        self,
        db: AsyncSession,
        set_id: int
    ) -> Optional[models.TestSet]:
        result = await db.execute(
            select(models.TestSet).where(models.TestSet.id == set_id)
        )
        return result.scalar_one_or_none()

    async def get_question_for_set(
        self,
        db: AsyncSession,
        set_id: int,
        question_id: int
    ) -> Tuple[Optional[models.Question], Optional[models.SetQuestion]]:
        """문항과 해당 세트의 구성 정보(배점 오버라이드) 조회"""
        stmt = (
            select(models.Question, models.SetQuestion)
            .outerjoin(
                models.SetQuestion,
                (models.SetQuestion.question_id == models.Question.id)
                & (models.SetQuestion.set_id == set_id)
            )
            .where(models.Question.id == question_id)
        )
        row = (await db.execute(stmt)).first()
        if row is None:
            return None, None
        return row[0], row[1]

    async def count_set_questions(
        self,
        db: AsyncSession,
        set_id: int
    ) -> int:
        """세트에 매핑된 문항 수"""
        result = await db.execute(
            select(func.count()).select_from(models.SetQuestion)
            .where(models.SetQuestion.set_id == set_id)
        )
        return result.scalar() or 0
