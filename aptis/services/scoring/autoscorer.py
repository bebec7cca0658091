"""문항 유형별 자동 채점

부수 효과 없는 순수 함수. 정답 키가 잘못된 경우에도 예외를 던지지 않고
``ScoreResult(None, None)`` 으로 강등되어 수동 검토 대상으로 남는다.
"""
import logging
from typing import Any, List, NamedTuple, Optional

from aptis.models.question import QuestionType

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT = 1.0


class ScoreResult(NamedTuple):
    is_correct: Optional[bool]
    score: Optional[float]


NOT_GRADABLE = ScoreResult(None, None)


def normalize(value: str) -> str:
    return value.strip().lower()


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    # ["B"] -> "B", ["a", "b"] -> "a,b"
    if isinstance(value, (list, tuple)):
        return ",".join(_as_text(v) for v in value)
    return str(value)


def _as_list(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [_as_text(v) for v in value]
    return []


def resolve_weight(override: Optional[float]) -> float:
    """세트 구성 배점이 있으면 사용, 없으면 1"""
    return override if override is not None else DEFAULT_WEIGHT


def _binary(ok: bool, weight: float) -> ScoreResult:
    return ScoreResult(ok, weight if ok else 0)


def _score_mcq_single(answer_key: Any, answer: Any, weight: float) -> ScoreResult:
    if not answer_key:
        return NOT_GRADABLE
    correct = _as_text(answer_key[0]) if isinstance(answer_key, (list, tuple)) else _as_text(answer_key)
    return _binary(normalize(_as_text(answer)) == normalize(correct), weight)


def _score_mcq_multi(answer_key: Any, answer: Any, weight: float) -> ScoreResult:
    if not isinstance(answer_key, (list, tuple)):
        return NOT_GRADABLE
    expected = {normalize(_as_text(k)) for k in answer_key}
    submitted = {normalize(a) for a in _as_list(answer)}
    return _binary(expected == submitted, weight)


def _score_fill_blank(answer_key: Any, answer: Any, weight: float) -> ScoreResult:
    if not answer_key:
        return NOT_GRADABLE
    variants = answer_key if isinstance(answer_key, (list, tuple)) else [answer_key]
    accepted = {normalize(_as_text(v)) for v in variants}
    return _binary(normalize(_as_text(answer)) in accepted, weight)


_SCORERS = {
    QuestionType.MCQ_SINGLE.value: _score_mcq_single,
    QuestionType.MCQ_MULTI.value: _score_mcq_multi,
    QuestionType.FILL_BLANK.value: _score_fill_blank,
}


def score(question_type: Optional[str], answer_key: Any, answer: Any, weight: float = DEFAULT_WEIGHT) -> ScoreResult:
    """자동 채점 수행

    writing_prompt / speaking_prompt 및 알 수 없는 유형은 항상 채점 불가로 반환한다.
    """
    scorer = _SCORERS.get((question_type or "").lower())
    if scorer is None:
        return NOT_GRADABLE

    try:
        return scorer(answer_key, answer, weight)
    except Exception as e:
        logger.warning(f"자동 채점 실패, 수동 검토로 전환 (type={question_type}): {str(e)}")
        return NOT_GRADABLE
