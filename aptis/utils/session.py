import json
import logging
from typing import Dict, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from aptis.core.config import Settings, settings as default_settings
from aptis.core.session import MemorySessionStore

logger = logging.getLogger(__name__)


class RedisSessionStore:
    """Redis 세션 스토어

    키: ``{prefix}session:{session_id}``, 값: JSON 문자열.
    조회할 때마다 만료 시간을 다시 설정한다 (sliding expiry).
    """

    def __init__(self, client: redis.Redis, prefix: str = "aptis:", expire_seconds: int = 3600):
        self.client = client
        self.prefix = prefix
        self.expire_seconds = expire_seconds

    @classmethod
    def from_settings(cls, config: Settings) -> "RedisSessionStore":
        client = redis.from_url(config.REDIS_URL, encoding="utf-8", decode_responses=True)
        return cls(
            client,
            prefix=config.REDIS_PREFIX,
            expire_seconds=config.SESSION_EXPIRE_HOURS * 3600
        )

    def key_for(self, session_id: str) -> str:
        return f"{self.prefix}session:{session_id}"

    async def create_session(self, session_id: str, data: Dict) -> None:
        try:
            await self.client.set(self.key_for(session_id), json.dumps(data), ex=self.expire_seconds)
        except RedisError as e:
            logger.error(f"Redis 세션 저장 실패 ({session_id}): {str(e)}")
            raise

    async def get_session(self, session_id: str) -> Optional[Dict]:
        # GETEX: 값 조회와 만료 갱신을 한 번에
        try:
            raw = await self.client.getex(self.key_for(session_id), ex=self.expire_seconds)
        except RedisError as e:
            logger.error(f"Redis 세션 조회 실패 ({session_id}): {str(e)}")
            raise
        return json.loads(raw) if raw else None

    async def delete_session(self, session_id: str) -> None:
        await self.client.delete(self.key_for(session_id))

    async def cleanup(self) -> None:
        await self.client.aclose()


def create_session_store(config: Optional[Settings] = None):
    """SESSION_BACKEND 설정에 따라 세션 스토어 선택"""
    config = config or default_settings
    if config.SESSION_BACKEND == "memory":
        logger.info("메모리 세션 스토어 사용")
        return MemorySessionStore(expire_seconds=config.SESSION_EXPIRE_HOURS * 3600)
    logger.info(f"Redis 세션 스토어 사용: {config.REDIS_URL}")
    return RedisSessionStore.from_settings(config)


session_store = create_session_store()
