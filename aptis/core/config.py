from pydantic_settings import BaseSettings
from typing import Optional
from functools import lru_cache
from pathlib import Path

# 기본 디렉토리 설정
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    # 기본 경로 설정
    BASE_DIR: Path = BASE_DIR

    # 디버그 / 로깅 설정
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Redis 설정
    REDIS_URL: str = "redis://localhost:6379"
    REDIS_PREFIX: str = "aptis:"

    # 세션 설정 ("redis" 또는 "memory")
    SESSION_BACKEND: str = "redis"
    SESSION_EXPIRE_HOURS: int = 24
    SESSION_COOKIE_NAME: str = "session_id"
    COOKIE_SECURE: bool = False

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "aptis_user"
    POSTGRES_PASSWORD: str = "aptis_password"
    POSTGRES_DB: str = "aptis_db"
    POSTGRES_PORT: str = "5432"
    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    # 결과 조회 설정
    RESULTS_PAGE_SIZE: int = 50

    @property
    def DATABASE_URL(self) -> str:
        if self.SQLALCHEMY_DATABASE_URI:
            return self.SQLALCHEMY_DATABASE_URI
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

@lru_cache()
def get_settings():
    return Settings()

settings = get_settings()
