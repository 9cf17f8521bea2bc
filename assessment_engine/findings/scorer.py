# assessment_engine/findings/scorer.py
# Completeness scoring over a finding catalog: sub-features, categories, areas and themes.

import logging
from typing import AbstractSet, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

from assessment_engine.catalog.models import Area, Category, FindingCatalog, SubFeature, Theme
from assessment_engine.constants import Tier, ThemeClassification
from assessment_engine.findings.results import AreaResult, CategoryResult, SubScoreResult, ThemeSummary
from assessment_engine.normalizer import normalize

logger = logging.getLogger(__name__)

T = TypeVar("T")

# A DetectedFindingSet is any set of already-normalized finding ids.
DetectedFindingSet = AbstractSet[str]


# --- Rounding helpers ---
# Integer arithmetic so .5 always rounds up (Python's round() is half-to-even).

def round_half_up_ratio(numerator: int, denominator: int) -> int:
    """round_half_up(100 * numerator / denominator) without float error."""
    return (200 * numerator + denominator) // (2 * denominator)


def round_half_up_mean(values: Sequence[int]) -> int:
    return (2 * sum(values) + len(values)) // (2 * len(values))


# --- Primitive ---

def count_detected(findings: Iterable[str], detected: DetectedFindingSet) -> int:
    return sum(1 for f in findings if normalize(f) in detected)


def score_group(findings: Sequence[str], detected: DetectedFindingSet) -> int:
    """
    Completeness score: share of ``findings`` NOT present in ``detected``, 0..100.
    An empty group scores 100.
    """
    if not findings:
        return 100
    found = count_detected(findings, detected)
    return round_half_up_ratio(len(findings) - found, len(findings))


def split_strengths_and_improvements(
    items: Sequence[T],
    good_count: Callable[[T], int],
    improvement_count: Callable[[T], int],
) -> Tuple[List[T], List[T]]:
    """
    Classifies each item by majority (ties count as strengths), then rebalances
    so neither side is empty when there is at least one item.
    """
    strengths: List[T] = []
    improvements: List[T] = []
    for item in items:
        if improvement_count(item) > good_count(item):
            improvements.append(item)
        else:
            strengths.append(item)
    return _rebalance(strengths, improvements, good_count, improvement_count)


def _rebalance(
    strengths: List[T],
    improvements: List[T],
    good_count: Callable[[T], int],
    improvement_count: Callable[[T], int],
) -> Tuple[List[T], List[T]]:
    # min() returns the first minimum, so ties fall back to catalog order.
    if not strengths and improvements:
        moved = min(improvements, key=improvement_count)
        improvements = list(improvements)
        improvements.remove(moved)
        strengths = [moved]
    elif not improvements and strengths:
        moved = min(strengths, key=good_count)
        strengths = list(strengths)
        strengths.remove(moved)
        improvements = [moved]
    return strengths, improvements


def focus_areas(areas: Sequence[AreaResult]) -> List[AreaResult]:
    """Areas the subject is interested in, weakest first."""
    return sorted((a for a in areas if a.has_interest), key=lambda a: a.score)


class FindingScorer:
    """
    Scores a detected-finding set against a FindingCatalog.

    Holds only the immutable catalog plus lookups derived from it; every method is
    a pure function of its arguments.
    """

    def __init__(self, catalog: FindingCatalog):
        self.catalog = catalog
        self._categories_by_key: Dict[str, Category] = {c.key: c for c in catalog.categories}
        self._areas_by_name: Dict[str, Area] = {a.name.lower(): a for a in catalog.areas}
        self._themes_by_area: Dict[str, List[Theme]] = {
            group.area.lower(): list(group.themes) for group in catalog.area_themes
        }

    # --- Lookups (None when unknown) ---

    def get_category(self, key: str) -> Optional[Category]:
        return self._categories_by_key.get(key)

    def get_area(self, name: str) -> Optional[Area]:
        if not name:
            return None
        return self._areas_by_name.get(name.lower())

    def get_themes(self, area_name: str) -> List[Theme]:
        if not area_name:
            return []
        return list(self._themes_by_area.get(area_name.lower(), []))

    # --- Sub-features and categories ---

    def score_sub_feature(self, sub_feature: SubFeature, detected: DetectedFindingSet) -> SubScoreResult:
        score = score_group(sub_feature.findings, detected)
        return SubScoreResult(
            name=sub_feature.name,
            score=score,
            tier=Tier.from_score(score),
            detected=count_detected(sub_feature.findings, detected),
            total=len(sub_feature.findings),
        )

    def score_category(self, category: Category, detected: DetectedFindingSet) -> CategoryResult:
        """Category score is the rounded mean of the already-rounded sub-feature scores."""
        subs = tuple(self.score_sub_feature(s, detected) for s in category.sub_features)
        score = round_half_up_mean([s.score for s in subs]) if subs else 100
        logger.debug(f"Category '{category.key}' scored {score} from {[s.score for s in subs]}")
        return CategoryResult(
            name=category.name,
            key=category.key,
            score=score,
            tier=Tier.from_score(score),
            sub_scores=subs,
        )

    def score_category_by_key(self, key: str, detected: DetectedFindingSet) -> Optional[CategoryResult]:
        category = self.get_category(key)
        if category is None:
            return None
        return self.score_category(category, detected)

    def compute_categories(self, detected: DetectedFindingSet) -> List[CategoryResult]:
        return [self.score_category(c, detected) for c in self.catalog.categories]

    @staticmethod
    def score_overall(categories: Sequence[CategoryResult]) -> int:
        if not categories:
            return 100
        return round_half_up_mean([c.score for c in categories])

    # --- Areas ---

    def _origin_groups(self, area: Area) -> Dict[str, List[str]]:
        """Maps each normalized finding of the area to the normalized findings of the first theme listing it."""
        groups: Dict[str, List[str]] = {}
        for theme in self.get_themes(area.name):
            members = [normalize(f) for f in theme.findings]
            for member in members:
                groups.setdefault(member, members)
        return groups

    def score_area_group(
        self,
        area: Area,
        detected: DetectedFindingSet,
        interest_area_names: AbstractSet[str] = frozenset(),
    ) -> AreaResult:
        strengths: List[str] = []
        improvements: List[str] = []
        for finding in area.findings:
            if normalize(finding) in detected:
                improvements.append(finding)
            else:
                strengths.append(finding)
        detected_findings = tuple(improvements)
        score = score_group(area.findings, detected)

        # Rebalance by size of each finding's originating group on the donor side.
        groups = self._origin_groups(area)

        def donor_count(side: List[str]) -> Callable[[str], int]:
            on_side = {normalize(f) for f in side}

            def count(finding: str) -> int:
                members = groups.get(normalize(finding))
                if not members:
                    return 1
                return sum(1 for m in members if m in on_side)
            return count

        strengths, improvements = _rebalance(
            strengths, improvements, donor_count(strengths), donor_count(improvements)
        )

        return AreaResult(
            name=area.name,
            score=score,
            tier=Tier.from_score(score),
            detected=len(detected_findings),
            total=len(area.findings),
            strengths=tuple(strengths),
            improvements=tuple(improvements),
            has_interest=area.name.lower() in interest_area_names,
            detected_findings=detected_findings,
        )

    def compute_areas(
        self,
        detected: DetectedFindingSet,
        interest_area_names: AbstractSet[str] = frozenset(),
    ) -> List[AreaResult]:
        return [self.score_area_group(a, detected, interest_area_names) for a in self.catalog.areas]

    def score_area(
        self,
        name: str,
        detected: DetectedFindingSet,
        interest_area_names: AbstractSet[str] = frozenset(),
    ) -> Optional[AreaResult]:
        area = self.get_area(name)
        if area is None:
            return None
        return self.score_area_group(area, detected, interest_area_names)

    # --- Themes ---

    def summarize_area_themes(self, area_name: str, detected: DetectedFindingSet) -> List[ThemeSummary]:
        summaries = []
        for theme in self.get_themes(area_name):
            found = count_detected(theme.findings, detected)
            summaries.append(ThemeSummary(
                label=theme.label,
                classification=ThemeClassification.IMPROVEMENT if found > 0 else ThemeClassification.STRENGTH,
                detected_count=found,
                total_count=len(theme.findings),
                findings=tuple(theme.findings),
            ))
        return summaries

    def split_area_themes(
        self, area_name: str, detected: DetectedFindingSet
    ) -> Tuple[List[ThemeSummary], List[ThemeSummary]]:
        """Themes of an area split by majority into strength and improvement cards."""
        return split_strengths_and_improvements(
            self.summarize_area_themes(area_name, detected),
            good_count=lambda t: t.total_count - t.detected_count,
            improvement_count=lambda t: t.detected_count,
        )
