from datetime import datetime, timezone


def utcnow() -> datetime:
    """naive UTC 현재 시각 (DB 저장 기준)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def elapsed_seconds(start: datetime, end: datetime) -> int:
    """두 naive UTC 시각 사이의 경과 초"""
    if start.tzinfo is not None:
        start = start.astimezone(timezone.utc).replace(tzinfo=None)
    if end.tzinfo is not None:
        end = end.astimezone(timezone.utc).replace(tzinfo=None)
    return int((end - start).total_seconds())
