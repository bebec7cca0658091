from datetime import datetime, timedelta
from typing import Dict, Optional

class MemorySessionStore:
    """프로세스 메모리 세션 스토어 (개발/테스트용)"""

    def __init__(self, expire_seconds: int = 3600):
        self._sessions: Dict[str, dict] = {}
        self._expiry: Dict[str, datetime] = {}
        self.expire_seconds = expire_seconds

    async def create_session(self, session_id: str, data: dict) -> None:
        """세션 생성"""
        self._sessions[session_id] = data
        self._expiry[session_id] = datetime.now() + timedelta(seconds=self.expire_seconds)

    async def get_session(self, session_id: str) -> Optional[dict]:
        """세션 조회"""
        if session_id not in self._sessions:
            return None

        if datetime.now() > self._expiry[session_id]:
            await self.delete_session(session_id)
            return None

        return self._sessions[session_id]

    async def delete_session(self, session_id: str) -> None:
        """세션 삭제"""
        self._sessions.pop(session_id, None)
        self._expiry.pop(session_id, None)

    async def cleanup(self) -> None:
        self._sessions.clear()
        self._expiry.clear()
