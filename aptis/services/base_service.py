import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from aptis import models
from aptis.core.config import Settings, settings as default_settings
from aptis.core.exceptions import AuthorizationError, NotFoundError

logger = logging.getLogger(__name__)

class BaseService:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    async def _get_submission(
        self,
        db: AsyncSession,
        submission_id: int
    ) -> models.Submission:
        """제출 조회 (없으면 NotFoundError)

        요청마다 DB에서 다시 읽는다.
        """
        result = await db.execute(
            select(models.Submission)
            .where(models.Submission.id == submission_id)
            .execution_options(populate_existing=True)
        )
        submission = result.scalar_one_or_none()
        if not submission:
            raise NotFoundError("Submission not found")
        return submission

    async def _get_owned_submission(
        self,
        db: AsyncSession,
        submission_id: int,
        user_id: int
    ) -> models.Submission:
        """본인 제출만 허용"""
        submission = await self._get_submission(db, submission_id)
        if submission.user_id != user_id:
            logger.warning(f"제출 {submission_id} 소유자 불일치: 요청 사용자 {user_id}")
            raise AuthorizationError("Forbidden")
        return submission
