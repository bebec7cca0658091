from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import logging
from aptis.database import get_db
from aptis import models
from aptis.core.config import settings
from aptis.services.auth.auth_service import AuthService
from aptis.schemas.base import MessageResponse
from aptis.schemas.user import LoginRequest, UserResponse
from aptis.utils.auth import cookie_sec, get_current_user

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)

@router.get("/me", response_model=UserResponse)
async def get_me(current_user: models.User = Depends(get_current_user)):
    """현재 로그인한 사용자 정보 조회"""
    return current_user

@router.post("/login", response_model=UserResponse)
async def login(
    login_data: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """로그인"""
    try:
        user, session_id = await AuthService.login(
            db,
            login_data.username,
            login_data.password
        )

        response.set_cookie(
            key=settings.SESSION_COOKIE_NAME,
            value=session_id,
            httponly=True,
            max_age=settings.SESSION_EXPIRE_HOURS * 3600,
            samesite='lax',
            secure=settings.COOKIE_SECURE
        )
        return user

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"로그인 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    session_id: Optional[str] = Depends(cookie_sec)
):
    """로그아웃"""
    try:
        await AuthService.delete_session(session_id)
        response.delete_cookie(key=settings.SESSION_COOKIE_NAME)
        return {"message": "Logged out successfully"}
    except Exception as e:
        logger.error(f"로그아웃 중 오류 발생: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
