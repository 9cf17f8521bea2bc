# assessment_engine/quiz/classifier.py
# Multi-axis quiz classification: axis totals -> primary axis + optional secondary tendency.

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Any, List, Mapping, Optional

from assessment_engine.catalog.models import Axis, QuizDefinition
from assessment_engine.constants import QUIZ_PAYLOAD_VERSION, SECONDARY_THRESHOLD

logger = logging.getLogger(__name__)

AnswerSet = Mapping[str, int]


@dataclass(frozen=True)
class SkinProfile:
    primary: str
    secondary: Optional[str]
    scores: Dict[str, int]


@dataclass(frozen=True)
class QuizResultPayload:
    """Snapshot handed to whoever persists quiz results."""
    completed_at: str
    answers: Dict[str, int]
    result: str
    result_label: str
    result_description: str
    recommended_product_names: List[str] = field(default_factory=list)
    secondary: Optional[str] = None
    version: int = QUIZ_PAYLOAD_VERSION

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "version": self.version,
            "completedAt": self.completed_at,
            "answers": dict(self.answers),
            "result": self.result,
            "recommendedProductNames": list(self.recommended_product_names),
            "resultLabel": self.result_label,
            "resultDescription": self.result_description,
        }
        if self.secondary is not None:
            data["secondary"] = self.secondary
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QuizResultPayload":
        return cls(
            version=int(data.get("version", QUIZ_PAYLOAD_VERSION)),
            completed_at=str(data["completedAt"]),
            answers=dict(data.get("answers") or {}),
            result=str(data["result"]),
            recommended_product_names=list(data.get("recommendedProductNames") or []),
            result_label=str(data.get("resultLabel") or data["result"]),
            result_description=str(data.get("resultDescription") or ""),
            secondary=data.get("secondary"),
        )


def _utc_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class QuizClassifier:
    """
    Classifies answer sets against one QuizDefinition.

    The definition is read-only; scoring never consults the clock. Only
    build_result_payload() stamps a time.
    """

    def __init__(self, definition: QuizDefinition, secondary_threshold: int = SECONDARY_THRESHOLD):
        self.definition = definition
        self.secondary_threshold = secondary_threshold
        self._axes_by_id: Dict[str, Axis] = {a.id: a for a in definition.axes}
        self._axis_order = [a.id for a in definition.axes]

    def get_axis(self, axis_id: str) -> Optional[Axis]:
        return self._axes_by_id.get(axis_id)

    def score_axes(self, answers: AnswerSet) -> Dict[str, int]:
        """
        Sums answer weights per axis, visiting questions in catalog order.
        Unanswered questions and invalid indices are skipped silently.
        """
        totals = {axis_id: 0 for axis_id in self._axis_order}
        for question in self.definition.questions:
            index = answers.get(question.id)
            # bool is an int subclass but never a valid index
            if not isinstance(index, int) or isinstance(index, bool):
                continue
            if index < 0 or index >= len(question.answers):
                continue
            for axis_id, weight in question.answers[index].weights.items():
                if axis_id in totals:
                    totals[axis_id] += weight
                else:
                    logger.debug(f"Ignoring weight for undeclared axis '{axis_id}' on question '{question.id}'")
        return totals

    def compute_profile(self, answers: AnswerSet) -> SkinProfile:
        scores = self.score_axes(answers)
        # sorted() is stable and _axis_order is the declared order, so ties keep that order
        ranked = sorted(self._axis_order, key=lambda axis_id: -scores[axis_id])
        primary = ranked[0]
        secondary = None
        if len(ranked) > 1:
            candidate = ranked[1]
            if candidate != primary and scores[primary] - scores[candidate] <= self.secondary_threshold:
                secondary = candidate
        return SkinProfile(primary=primary, secondary=secondary, scores=scores)

    def summarize(self, profile: SkinProfile) -> Dict[str, str]:
        primary = self.get_axis(profile.primary)
        secondary = self.get_axis(profile.secondary) if profile.secondary else None

        primary_label = primary.label if primary else profile.primary
        if profile.secondary:
            secondary_label = secondary.label if secondary else profile.secondary
            label = f"{primary_label} with {secondary_label} tendency"
        else:
            label = primary_label

        parts = [
            primary.description if primary else "",
            secondary.tendency_advice if secondary else "",
        ]
        description = " ".join(p for p in parts if p)
        return {"label": label, "description": description}

    def recommended_items(self, axis_id: str, recommendations: Optional[Mapping[str, List[str]]] = None) -> List[str]:
        source = self.definition.recommendations if recommendations is None else recommendations
        return list(source.get(axis_id, []))

    def build_result_payload(
        self,
        answers: AnswerSet,
        recommendations: Optional[Mapping[str, List[str]]] = None,
        now: Optional[datetime] = None,
    ) -> QuizResultPayload:
        """
        Profile + summary + recommended items for the primary axis, stamped with
        the current UTC time. ``recommendations`` overrides the definition's own mapping.
        """
        profile = self.compute_profile(answers)
        summary = self.summarize(profile)
        return QuizResultPayload(
            completed_at=_utc_timestamp(now),
            answers=dict(answers),
            result=profile.primary,
            recommended_product_names=self.recommended_items(profile.primary, recommendations),
            result_label=summary["label"],
            result_description=summary["description"],
            secondary=profile.secondary,
        )


# --- One-shot helpers ---

def score_axes(definition: QuizDefinition, answers: AnswerSet) -> Dict[str, int]:
    return QuizClassifier(definition).score_axes(answers)


def compute_profile(
    definition: QuizDefinition, answers: AnswerSet, secondary_threshold: int = SECONDARY_THRESHOLD
) -> SkinProfile:
    return QuizClassifier(definition, secondary_threshold).compute_profile(answers)


def summarize(definition: QuizDefinition, profile: SkinProfile) -> Dict[str, str]:
    return QuizClassifier(definition).summarize(profile)


def build_result_payload(
    definition: QuizDefinition,
    answers: AnswerSet,
    recommendations: Optional[Mapping[str, List[str]]] = None,
    now: Optional[datetime] = None,
) -> QuizResultPayload:
    return QuizClassifier(definition).build_result_payload(answers, recommendations, now=now)
