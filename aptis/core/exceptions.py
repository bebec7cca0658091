from fastapi import HTTPException


class ValidationError(HTTPException):
    """잘못된 요청 형식"""

    def __init__(self, detail: str = "Invalid request"):
        super().__init__(status_code=400, detail=detail)


class AuthenticationError(HTTPException):
    """로그인 필요 / 세션 만료"""

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(status_code=401, detail=detail)


class AuthorizationError(HTTPException):
    """소유자가 아니거나 관리자 권한 없음"""

    def __init__(self, detail: str = "Forbidden"):
        super().__init__(status_code=403, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=404, detail=detail)


class InvalidStateError(HTTPException):
    """현재 제출 상태에서 허용되지 않는 작업"""

    def __init__(self, detail: str = "Invalid submission state"):
        super().__init__(status_code=400, detail=detail)
