from fastapi import Depends
from fastapi.security import APIKeyCookie
from aptis.core.config import settings
from aptis.database import get_db
from aptis.services.auth.auth_service import AuthService
from sqlalchemy.ext.asyncio import AsyncSession
from aptis import models
from typing import Optional

cookie_sec = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)

async def get_current_user(
    session_id: Optional[str] = Depends(cookie_sec),
    db: AsyncSession = Depends(get_db)
) -> models.User:
    """현재 로그인한 사용자 정보 조회"""
    return await AuthService.get_current_user(db, session_id)

async def get_current_admin(
    session_id: Optional[str] = Depends(cookie_sec),
    db: AsyncSession = Depends(get_db)
) -> models.User:
    """관리자 권한 확인"""
    return await AuthService.get_current_admin(db, session_id)
