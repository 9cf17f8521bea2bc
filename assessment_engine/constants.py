# assessment_engine/constants.py
from enum import Enum


class Tier(str, Enum):
    """Score bands, ordered best first."""
    EXCELLENT = "excellent"
    GOOD = "good"
    MODERATE = "moderate"
    ATTENTION = "attention"

    @classmethod
    def from_score(cls, score: int) -> "Tier":
        for threshold, tier in TIER_THRESHOLDS:
            if score >= threshold:
                return tier
        return cls.ATTENTION

    @property
    def label(self) -> str:
        return TIER_LABELS[self]

    @property
    def rank(self) -> int:
        # 0 is best
        return list(Tier).index(self)


# Lower bound (inclusive) for each band; anything below the last is ATTENTION.
TIER_THRESHOLDS = (
    (90, Tier.EXCELLENT),
    (70, Tier.GOOD),
    (50, Tier.MODERATE),
)

TIER_LABELS = {
    Tier.EXCELLENT: "Excellent",
    Tier.GOOD: "Very Good",
    Tier.MODERATE: "Good",
    Tier.ATTENTION: "Needs Attention",
}


class ThemeClassification(str, Enum):
    STRENGTH = "strength"
    IMPROVEMENT = "improvement"


# Max gap between the top two axis totals for the runner-up to count as a tendency.
SECONDARY_THRESHOLD = 2

QUIZ_PAYLOAD_VERSION = 1

# Sub-group score at or above which narrative text talks about refinement
# rather than opportunity.
REFINEMENT_SCORE = 80
