from dataclasses import dataclass, field, asdict
from typing import Dict, Any, List, Tuple

from assessment_engine.constants import Tier, ThemeClassification


@dataclass(frozen=True)
class SubScoreResult:
    name: str
    score: int
    tier: Tier
    detected: int
    total: int

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["tier"] = self.tier.value
        return data


@dataclass(frozen=True)
class CategoryResult:
    name: str
    key: str
    score: int
    tier: Tier
    sub_scores: Tuple[SubScoreResult, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "key": self.key,
            "score": self.score,
            "tier": self.tier.value,
            "sub_scores": [s.to_dict() for s in self.sub_scores],
        }


@dataclass(frozen=True)
class AreaResult:
    """
    Score for one anatomical area.

    ``detected``, ``total`` and ``detected_findings`` are the literal split behind
    ``score``; ``strengths`` and ``improvements`` are display lists and may have
    been rebalanced so neither side is empty.
    """
    name: str
    score: int
    tier: Tier
    detected: int
    total: int
    strengths: Tuple[str, ...] = field(default_factory=tuple)
    improvements: Tuple[str, ...] = field(default_factory=tuple)
    has_interest: bool = False
    detected_findings: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "score": self.score,
            "tier": self.tier.value,
            "detected": self.detected,
            "total": self.total,
            "strengths": list(self.strengths),
            "improvements": list(self.improvements),
            "has_interest": self.has_interest,
            "detected_findings": list(self.detected_findings),
        }


@dataclass(frozen=True)
class ThemeSummary:
    label: str
    classification: ThemeClassification
    detected_count: int
    total_count: int
    findings: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "type": self.classification.value,
            "detected_count": self.detected_count,
            "total_count": self.total_count,
            "findings": list(self.findings),
        }


def as_dicts(results: List[Any]) -> List[Dict[str, Any]]:
    return [r.to_dict() for r in results]
