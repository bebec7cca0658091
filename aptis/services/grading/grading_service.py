import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from aptis import models
from aptis.core.exceptions import InvalidStateError, NotFoundError, ValidationError
from aptis.services.base_service import BaseService
from aptis.services.catalog.question_bank import QuestionBank
from aptis.services.grading.grading_repository import GradingRepository
from aptis.services.results.result_aggregator import ResultAggregator
from aptis.utils.timeutils import utcnow

logger = logging.getLogger(__name__)

GRADABLE_STATUSES = (
    models.SubmissionStatus.SUBMITTED.value,
    models.SubmissionStatus.GRADED.value,
)

def question_types_for_skill(skill: Optional[str]) -> List[str]:
    """skill 필터 -> 수동 채점 문항 유형"""
    skill = (skill or "").lower()
    if skill == "speaking":
        return [models.QuestionType.SPEAKING_PROMPT.value]
    if skill == "writing":
        return [models.QuestionType.WRITING_PROMPT.value]
    return list(models.FREE_RESPONSE_TYPES)

class GradingService(BaseService):
    """주관식(쓰기/말하기) 수동 채점"""

    def __init__(
        self,
        repository: Optional[GradingRepository] = None,
        question_bank: Optional[QuestionBank] = None,
        aggregator: Optional[ResultAggregator] = None
    ):
        super().__init__()
        self.repository = repository or GradingRepository()
        self.question_bank = question_bank or QuestionBank()
        self.aggregator = aggregator or ResultAggregator(self.question_bank)

    async def list_pending(
        self,
        db: AsyncSession,
        status: Optional[str] = None,
        skill: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """채점 대기 제출 목록 (status 미지정 시 submitted)"""
        status = status or models.SubmissionStatus.SUBMITTED.value
        valid_statuses = [s.value for s in models.SubmissionStatus]
        if status not in valid_statuses:
            raise ValidationError(f"Invalid status '{status}', expected one of {valid_statuses}")

        items = await self.repository.list_pending(db, status, question_types_for_skill(skill))
        logger.info(f"채점 대기 목록 조회 - status={status}, skill={skill}, {len(items)}건")
        return items

    async def get_answers_for_grading(
        self,
        db: AsyncSession,
        submission_id: int
    ) -> List[Dict[str, Any]]:
        await self._get_submission(db, submission_id)
        return await self.repository.get_free_response_answers(db, submission_id)

    async def grade(
        self,
        db: AsyncSession,
        submission_id: int,
        question_id: int,
        manual_score: float,
        comment: Optional[str] = None,
        rubric_id: Optional[int] = None,
        scores: Any = None,
        graded_by: Optional[int] = None
    ) -> models.ManualGrading:
        """주관식 답안 하나 채점 (제출 상태는 변경하지 않음)"""
        try:
            # 1. 제출 / 문항 / 답안 확인
            submission = await self._get_submission(db, submission_id)
            if submission.status not in GRADABLE_STATUSES:
                raise InvalidStateError("Submission has not been submitted yet")

            question, _ = await self.question_bank.get_question_for_set(
                db, submission.set_id, question_id
            )
            if not question:
                raise NotFoundError("Question not found")
            if not question.is_free_response:
                raise InvalidStateError("Only writing and speaking answers can be graded manually")

            answer = await self.repository.get_answer(db, submission_id, question_id)
            if not answer:
                raise NotFoundError("Answer not found")

            # 2. 수동 채점 기록 upsert
            await self.repository.upsert_manual_grading(
                db,
                submission_id,
                question_id,
                graded_at=utcnow(),
                comment=comment,
                rubric_id=rubric_id,
                scores=scores,
                graded_by=graded_by
            )

            # 3. Answer.score 동기화
            await self.repository.set_answer_score(db, submission_id, question_id, manual_score)
            await db.commit()

            logger.info(f"수동 채점 - 제출 {submission_id}, 문항 {question_id}, 점수 {manual_score}, 채점자 {graded_by}")
            return await self.repository.get_manual_grading(db, submission_id, question_id)

        except Exception:
            await db.rollback()
            raise

    async def complete(
        self,
        db: AsyncSession,
        submission_id: int
    ) -> Dict[str, Any]:
        """채점 완료: 총점 재계산 후 graded 로 전환"""
        try:
            submission = await self._get_submission(db, submission_id)
            if submission.status not in GRADABLE_STATUSES:
                raise InvalidStateError("Submission has not been submitted yet")

            totals = await self.aggregator.aggregate(db, submission.set_id, submission.id)

            submission.status = models.SubmissionStatus.GRADED.value
            submission.total_score = totals.total_score
            submission.manual_score = totals.manual_score

            await self.aggregator.save_result(db, submission, totals, completed_at=utcnow())
            await db.commit()

            logger.info(f"채점 완료 - 제출 {submission_id}, 총점 {totals.total_score}")
            return {"message": "completed", "totalScore": totals.total_score}

        except Exception:
            await db.rollback()
            raise
