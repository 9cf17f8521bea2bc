from .results import AreaResult, CategoryResult, SubScoreResult, ThemeSummary
from .scorer import (
    DetectedFindingSet,
    FindingScorer,
    focus_areas,
    score_group,
    split_strengths_and_improvements,
)
