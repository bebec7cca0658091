import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from aptis import models
from aptis.core.exceptions import InvalidStateError, NotFoundError
from aptis.services.base_service import BaseService
from aptis.services.catalog.question_bank import QuestionBank
from aptis.services.results.result_aggregator import ResultAggregator
from aptis.services.scoring import autoscorer
from aptis.services.submission.submission_repository import SubmissionRepository
from aptis.utils.timeutils import utcnow, elapsed_seconds

logger = logging.getLogger(__name__)

class SubmissionService(BaseService):
    """응시(제출) 상태 머신: in_progress -> submitted -> graded"""

    def __init__(
        self,
        repository: Optional[SubmissionRepository] = None,
        question_bank: Optional[QuestionBank] = None,
        aggregator: Optional[ResultAggregator] = None
    ):
        super().__init__()
        self.repository = repository or SubmissionRepository()
        self.question_bank = question_bank or QuestionBank()
        self.aggregator = aggregator or ResultAggregator(self.question_bank)

    async def start(
        self,
        db: AsyncSession,
        user_id: int,
        set_id: int
    ) -> Dict[str, int]:
        """새 응시 시작"""
        try:
            test_set = await self.question_bank.get_test_set(db, set_id)
            if not test_set:
                raise NotFoundError("Test set not found")

            attempt = await self.repository.get_next_attempt_number(db, user_id, set_id)
            submission = await self.repository.create_submission(db, user_id, set_id, attempt)
            await db.commit()

            logger.info(f"응시 시작 - 사용자 {user_id}, 세트 {set_id}, 시도 {attempt}, 제출 ID {submission.id}")
            return {"id": submission.id, "attempt": submission.attempt}

        except IntegrityError as e:
            await db.rollback()
            logger.error(f"시도 번호 충돌: {str(e)}")
            raise InvalidStateError("Another attempt was started concurrently, please retry")
        except Exception:
            await db.rollback()
            raise

    async def save_answer(
        self,
        db: AsyncSession,
        submission_id: int,
        user_id: int,
        question_id: int,
        answer: Any,
        time_spent_sec: Optional[int] = None,
        attempts: Optional[int] = None
    ) -> autoscorer.ScoreResult:
        """답안 저장 및 즉시 자동 채점"""
        try:
            # 1. 소유자 / 상태 확인
            submission = await self._get_owned_submission(db, submission_id, user_id)
            if submission.status != models.SubmissionStatus.IN_PROGRESS.value:
                raise InvalidStateError("Submission not in progress")

            # 2. 문항 및 배점 조회
            question, mapping = await self.question_bank.get_question_for_set(
                db, submission.set_id, question_id
            )
            if not question:
                raise NotFoundError("Question not found")
            weight = autoscorer.resolve_weight(mapping.score if mapping else None)

            # 3. 자동 채점
            scored = autoscorer.score(question.type, question.answer_key, answer, weight)

            # 4. 답안 upsert + 진행 로그 추가
            await self.repository.upsert_answer(db, submission.id, question.id, answer, scored)
            await self.repository.append_progress(
                db,
                submission,
                question.id,
                scored.is_correct,
                time_spent_sec=time_spent_sec,
                attempts=attempts
            )
            await db.commit()

            logger.info(f"답안 저장 - 제출 {submission_id}, 문항 {question_id}, 결과 {scored}")
            return scored

        except Exception:
            await db.rollback()
            raise

    async def submit(
        self,
        db: AsyncSession,
        submission_id: int,
        user_id: int
    ) -> Dict[str, Any]:
        """응시 제출 및 결과 집계

        이미 submitted 상태라면 다시 집계하여 덮어쓴다. graded 상태는 되돌릴 수 없으므로 거부한다.
        """
        try:
            submission = await self._get_owned_submission(db, submission_id, user_id)
            if submission.status == models.SubmissionStatus.GRADED.value:
                raise InvalidStateError("Submission already graded")
            if submission.status == models.SubmissionStatus.SUBMITTED.value:
                logger.info(f"제출 {submission_id} 재제출 - 결과를 다시 계산합니다")

            totals = await self.aggregator.aggregate(db, submission.set_id, submission.id)

            now = utcnow()
            duration_sec = elapsed_seconds(submission.start_time, now) if submission.start_time else None

            submission.submit_time = now
            submission.duration_sec = duration_sec
            submission.auto_score = totals.total_score
            submission.total_score = totals.total_score
            submission.status = models.SubmissionStatus.SUBMITTED.value

            result = await self.aggregator.save_result(
                db,
                submission,
                totals,
                completed_at=now,
                time_spent_sec=duration_sec
            )
            await db.commit()

            logger.info(f"제출 완료 - 제출 {submission_id}, 점수 {totals.total_score}, 소요 {duration_sec}초")
            return {
                "resultId": result.id,
                "score": totals.total_score,
                "totalQuestions": totals.total_questions,
                "correctAnswers": totals.correct_answers,
                "timeSpentSec": duration_sec,
            }

        except Exception:
            await db.rollback()
            raise

    async def get_submission_detail(
        self,
        db: AsyncSession,
        submission_id: int,
        user_id: int
    ) -> Dict[str, Any]:
        """본인 제출과 답안 조회"""
        submission = await self._get_owned_submission(db, submission_id, user_id)
        answers = await self.repository.get_answers(db, submission.id)
        return {
            "submission": submission.to_dict(),
            "answers": [answer.to_dict() for answer in answers],
        }

    async def get_my_results(
        self,
        db: AsyncSession,
        user_id: int
    ) -> List[Dict[str, Any]]:
        results = await self.repository.get_results_for_user(
            db, user_id, limit=self.settings.RESULTS_PAGE_SIZE
        )
        return [result.to_dict() for result in results]
