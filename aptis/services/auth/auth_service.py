from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from aptis import models
from aptis.core.exceptions import AuthenticationError, AuthorizationError
from typing import Optional, Dict
import uuid
import logging
from datetime import datetime
from aptis.utils.session import session_store

logger = logging.getLogger(__name__)

class AuthService:
    @staticmethod
    async def authenticate_user(
        db: AsyncSession,
        username: str,
        password: str
    ) -> Optional[models.User]:
        """사용자 인증"""
        try:
            stmt = select(models.User).where(models.User.username == username)
            result = await db.execute(stmt)
            user = result.scalar_one_or_none()

            if not user or not user.is_active:
                return None

            if user.verify_password(password):
                user.update_last_login()
                await db.commit()
                return user

            return None

        except Exception as e:
            logger.error(f"사용자 인증 중 오류 발생: {str(e)}")
            raise

    @staticmethod
    async def get_user_by_id(
        db: AsyncSession,
        user_id: int
    ) -> Optional[models.User]:
        """사용자 ID로 조회"""
        stmt = select(models.User).where(models.User.id == user_id)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create_session(user: models.User) -> tuple[str, Dict]:
        """세션 생성"""
        session_id = str(uuid.uuid4())
        session_data = {
            "user_id": user.id,
            "role": user.role,
            "created_at": datetime.now().isoformat()
        }

        await session_store.create_session(session_id, session_data)
        return session_id, session_data

    @staticmethod
    async def get_session(session_id: str) -> Optional[Dict]:
        """세션 조회"""
        return await session_store.get_session(session_id)

    @staticmethod
    async def delete_session(session_id: Optional[str]) -> None:
        """세션 삭제 (로그아웃)"""
        if session_id:
            await session_store.delete_session(session_id)

    @staticmethod
    async def get_current_user(
        db: AsyncSession,
        session_id: Optional[str]
    ) -> models.User:
        """현재 로그인한 사용자 조회"""
        if not session_id:
            raise AuthenticationError("Not authenticated")

        session_data = await AuthService.get_session(session_id)
        if not session_data:
            raise AuthenticationError("Session expired")

        user = await AuthService.get_user_by_id(db, session_data["user_id"])
        if not user or not user.is_active:
            # 세션은 있지만 사용자 정보가 없는 경우 세션도 삭제
            await AuthService.delete_session(session_id)
            raise AuthenticationError("User not found")

        return user

    @staticmethod
    async def get_current_admin(
        db: AsyncSession,
        session_id: Optional[str]
    ) -> models.User:
        """현재 로그인한 관리자 조회"""
        user = await AuthService.get_current_user(db, session_id)
        if not user.is_admin:
            raise AuthorizationError("Admin only")
        return user

    @staticmethod
    async def login(
        db: AsyncSession,
        username: str,
        password: str,
    ) -> tuple[models.User, str]:
        """로그인 처리"""
        user = await AuthService.authenticate_user(db, username, password)
        if not user:
            raise AuthenticationError("Invalid username or password")

        session_id, _ = await AuthService.create_session(user)
        logger.info(f"로그인 성공 - 사용자 {user.username} ({user.role})")
        return user, session_id
