# assessment_engine/narrative/composer.py
# Template text for category, area and overall results. Always available as the
# fallback when no enriched prose comes back from the text-generation service.

import logging
from typing import Dict, Any, Iterable, List, Optional, Sequence

from assessment_engine.constants import REFINEMENT_SCORE
from assessment_engine.findings.results import AreaResult, CategoryResult
from assessment_engine.normalizer import normalize

logger = logging.getLogger(__name__)

# --- Score-band copy ---

# (lower bound, text) checked top-down; the last entry catches everything else.
OVERALL_OPENERS = [
    (90, "Overall aesthetic score of {score} reflects an exceptionally well-balanced profile."),
    (75, "Overall score of {score} shows a strong profile with clear areas of excellence."),
    (60, "Overall score of {score} shows a solid foundation with meaningful opportunities for enhancement."),
    (0, "Analysis identified several specific areas where targeted treatments could make a real difference."),
]

AREA_TAILS = [
    (90, "This area is in excellent shape."),
    (70, "There is some room for refinement here."),
    (50, "Targeted treatments in this area could make a meaningful difference."),
    (0, "This area has the most opportunity for improvement based on your analysis."),
]


def _band(bands, score: int) -> str:
    for lower, text in bands:
        if score >= lower:
            return text
    return bands[-1][1]


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


# --- Category / area descriptions ---

def describe_category(result: CategoryResult) -> str:
    """One or two sentences explaining a category score from the subject's own sub-scores."""
    subs = list(result.sub_scores)
    if not subs:
        return f"Your {result.name} score is {result.score}, based on this analysis."

    sub_list = ", ".join(f"{s.name} ({s.score})" for s in subs)
    ranked = sorted(subs, key=lambda s: s.score, reverse=True)
    strongest, weakest = ranked[0], ranked[-1]

    if strongest is weakest:
        tail = "All areas in this category contributed similarly to your score."
    elif weakest.score >= REFINEMENT_SCORE:
        tail = (
            f"Your strongest area here is {strongest.name}. "
            f"{weakest.name} has the most room for subtle refinement."
        )
    else:
        tail = (
            f"Your strongest area here is {strongest.name}. "
            f"{weakest.name} had the most findings in your analysis and is the main opportunity for improvement."
        )
    return (
        f"Your {result.name} score of {result.score} is based on {len(subs)} sub-areas "
        f"from your analysis: {sub_list}. {tail}"
    )


def describe_area(result: AreaResult) -> str:
    """Explains an area score from the literal detected split, not the display lists."""
    improvement_count = result.detected
    strength_count = result.total - result.detected
    total = result.total
    if total == 0:
        return f"Your {result.name} score is {result.score}, based on this analysis."

    if improvement_count == 0:
        main = f"All {total} features we evaluated in this area look good, with no concerns detected."
    elif strength_count == 0:
        main = (
            f"We evaluated {total} features; {improvement_count} "
            f"{_plural(improvement_count, 'was', 'were')} identified in your analysis as opportunities for improvement."
        )
    else:
        main = (
            f"Your score of {result.score} is based on {total} features: {strength_count} "
            f"{_plural(strength_count, 'is', 'are')} in good shape and {improvement_count} "
            f"{_plural(improvement_count, 'was', 'were')} identified as opportunities for improvement."
        )
    return f"{main} {_band(AREA_TAILS, result.score)}"


# --- Overall assessment ---

def generate_overall_assessment(overall: int, categories: Sequence[CategoryResult], focus_count: int = 0) -> str:
    opener = _band(OVERALL_OPENERS, overall).format(score=overall)
    if not categories:
        return opener

    ranked = sorted(categories, key=lambda c: c.score, reverse=True)
    strongest, weakest = ranked[0], ranked[-1]

    strength_line = f"{strongest.name} scored highest at {strongest.score}."

    if weakest.score >= REFINEMENT_SCORE:
        focus_line = (
            f"All categories are performing well, with {weakest.name} at {weakest.score} "
            f"offering the most room for subtle refinement."
        )
    else:
        weakest_sub = min(weakest.sub_scores, key=lambda s: s.score) if weakest.sub_scores else None
        detail = weakest_sub.name if weakest_sub else "this area"
        focus_line = f"Primary opportunity is in {weakest.name} ({weakest.score}), particularly {detail}."

    interest_line = ""
    if focus_count > 0:
        interest_line = (
            f" {focus_count} priority {_plural(focus_count, 'area', 'areas')} "
            f"highlighted based on patient interests."
        )

    return f"{opener} {strength_line} {focus_line}{interest_line}"


# --- Enrichment request context ---

def category_context(
    result: CategoryResult,
    detected_names: Iterable[str] = (),
    strength_names: Iterable[str] = (),
) -> Dict[str, Any]:
    return {
        "categoryOrArea": result.name,
        "score": result.score,
        "tier": result.tier.value,
        "subScores": [
            {"name": s.name, "score": s.score, "detected": s.detected, "total": s.total}
            for s in result.sub_scores
        ],
        "detectedIssues": list(detected_names),
        "strengthIssues": list(strength_names),
    }


def area_context(result: AreaResult) -> Dict[str, Any]:
    return {
        "categoryOrArea": result.name,
        "score": result.score,
        "tier": result.tier.value,
        "subScores": [],
        "detectedIssues": list(result.detected_findings),
        "strengthIssues": [
            f for f in result.strengths + result.improvements if f not in result.detected_findings
        ],
    }


def overall_context(
    overall: int,
    categories: Sequence[CategoryResult],
    focus_count: int = 0,
    detected_names: Iterable[str] = (),
) -> Dict[str, Any]:
    return {
        "overall": overall,
        "categories": [{"name": c.name, "score": c.score, "tier": c.tier.value} for c in categories],
        "focusCount": focus_count,
        "detectedIssues": sorted(detected_names),
    }


def choose_text(enriched: Optional[str], fallback: str) -> str:
    """Enriched prose replaces the template text outright; it is never merged."""
    if enriched and enriched.strip():
        return enriched.strip()
    logger.debug("No enriched text available, using template text")
    return fallback


def strength_findings(findings: Iterable[str], detected) -> List[str]:
    """Catalog findings that were not detected, in catalog order."""
    return [f for f in findings if normalize(f) not in detected]
