# assessment_engine/adapters.py
# Reduces loosely-typed record fields to the plain inputs the engine accepts.

import json
import logging
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Union

from pydantic import BaseModel, StrictStr, ValidationError, field_validator

from assessment_engine.errors import InvalidSubmissionError
from assessment_engine.normalizer import normalize
from assessment_engine.quiz.classifier import QuizResultPayload

logger = logging.getLogger(__name__)

RawFindings = Union[None, str, Iterable[str]]


def parse_detected_findings(raw: RawFindings) -> FrozenSet[str]:
    """
    Builds a DetectedFindingSet from a comma-joined string or a list of
    strings (entries may themselves be comma-joined).
    """
    if raw is None:
        return frozenset()
    chunks = [raw] if isinstance(raw, str) else list(raw)
    detected = set()
    for chunk in chunks:
        if chunk is None:
            continue
        for part in str(chunk).split(","):
            finding = normalize(part)
            if finding:
                detected.add(finding)
    return frozenset(detected)


class AnswerSubmission(BaseModel):
    answers: Dict[StrictStr, int]

    @field_validator("answers", mode="before")
    @classmethod
    def _reject_bools(cls, v: Any):
        if isinstance(v, Mapping):
            for key, value in v.items():
                if isinstance(value, bool):
                    raise ValueError(f"Answer for '{key}' must be an integer index, got a boolean")
        return v


def parse_answer_set(raw: Optional[Mapping[str, Any]]) -> Dict[str, int]:
    """
    Validates a raw ``{question_id: answer_index}`` mapping.

    Integral numeric strings ("2") are coerced; anything else non-integer raises
    InvalidSubmissionError. Range checks are left to the classifier, which skips
    out-of-range indices.
    """
    if raw is None:
        return {}
    try:
        return dict(AnswerSubmission.model_validate({"answers": raw}).answers)
    except ValidationError as e:
        raise InvalidSubmissionError(f"Invalid quiz answers: {e.errors()}")


def parse_quiz_payload(raw: Union[None, str, Mapping[str, Any]]) -> Optional[QuizResultPayload]:
    """Reads a stored quiz snapshot (JSON text or dict); None when empty or unreadable."""
    if not raw:
        return None
    try:
        data = json.loads(raw) if isinstance(raw, str) else raw
        if not isinstance(data, Mapping):
            raise ValueError("stored quiz payload is not an object")
        return QuizResultPayload.from_dict(data)
    except (ValueError, KeyError, TypeError) as e:
        logger.warning(f"Could not read stored quiz payload: {e}")
        return None
