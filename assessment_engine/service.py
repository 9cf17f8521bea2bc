# assessment_engine/service.py
# Wires catalogs, scorer, classifier and composer together for one subject.

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import AbstractSet, Any, Dict, List, Mapping, Optional

from assessment_engine.adapters import RawFindings, parse_answer_set, parse_detected_findings
from assessment_engine.catalog.loader import load_finding_catalog_from_file, load_quiz_definition_from_file
from assessment_engine.config import EngineSettings, get_settings
from assessment_engine.logging_config import setup_logging
from assessment_engine.constants import Tier
from assessment_engine.findings.results import AreaResult, CategoryResult, as_dicts
from assessment_engine.findings.scorer import FindingScorer, focus_areas
from assessment_engine.narrative import composer
from assessment_engine.narrative.enrichment import NarrativeEnrichmentClient
from assessment_engine.quiz.classifier import QuizClassifier, QuizResultPayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisOverview:
    """Everything the overview screen shows for one subject."""
    overall: int
    tier: Tier
    categories: List[CategoryResult]
    areas: List[AreaResult]
    focus_count: int
    assessment: str
    detected: frozenset = field(default_factory=frozenset)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall": self.overall,
            "tier": self.tier.value,
            "categories": as_dicts(self.categories),
            "areas": as_dicts(self.areas),
            "focus_count": self.focus_count,
            "assessment": self.assessment,
        }


class AssessmentService:
    def __init__(
        self,
        scorer: FindingScorer,
        classifier: Optional[QuizClassifier] = None,
        enrichment: Optional[NarrativeEnrichmentClient] = None,
    ):
        self.scorer = scorer
        self.classifier = classifier
        self.enrichment = enrichment

    @classmethod
    def from_settings(cls, settings: Optional[EngineSettings] = None) -> "AssessmentService":
        settings = settings or get_settings()
        setup_logging(settings.log_level)
        catalog = load_finding_catalog_from_file(settings.catalog_path)
        definition = load_quiz_definition_from_file(settings.quiz_path)
        return cls(
            scorer=FindingScorer(catalog),
            classifier=QuizClassifier(definition, settings.secondary_threshold),
            enrichment=NarrativeEnrichmentClient(settings),
        )

    # --- Findings ---

    def overview(self, raw_findings: RawFindings, interest_area_names: AbstractSet[str] = frozenset()) -> AnalysisOverview:
        detected = parse_detected_findings(raw_findings)
        categories = self.scorer.compute_categories(detected)
        overall = self.scorer.score_overall(categories)
        areas = self.scorer.compute_areas(detected, interest_area_names)
        focus_count = len(focus_areas(areas))
        logger.info(f"Computed overview: overall={overall}, detected={len(detected)}, focus_count={focus_count}")
        return AnalysisOverview(
            overall=overall,
            tier=Tier.from_score(overall),
            categories=categories,
            areas=areas,
            focus_count=focus_count,
            assessment=composer.generate_overall_assessment(overall, categories, focus_count),
            detected=detected,
        )

    async def overview_assessment_text(self, overview: AnalysisOverview) -> str:
        """Enriched overall text when the collaborator answers, else the template text."""
        if not overview.detected or self.enrichment is None:
            return overview.assessment
        context = composer.overall_context(
            overview.overall, overview.categories, overview.focus_count, overview.detected
        )
        enriched = await self.enrichment.fetch_overall_assessment(context)
        return composer.choose_text(enriched, overview.assessment)

    async def category_assessment_text(self, key: str, raw_findings: RawFindings) -> Optional[str]:
        category = self.scorer.get_category(key)
        if category is None:
            return None
        detected = parse_detected_findings(raw_findings)
        result = self.scorer.score_category(category, detected)
        fallback = composer.describe_category(result)
        if self.enrichment is None:
            return fallback
        all_findings = [f for s in category.sub_features for f in s.findings]
        context = composer.category_context(
            result,
            detected_names=sorted(detected),
            strength_names=composer.strength_findings(all_findings, detected),
        )
        enriched = await self.enrichment.fetch_category_assessment(context)
        return composer.choose_text(enriched, fallback)

    async def area_assessment_text(
        self, name: str, raw_findings: RawFindings, interest_area_names: AbstractSet[str] = frozenset()
    ) -> Optional[str]:
        result = self.scorer.score_area(name, parse_detected_findings(raw_findings), interest_area_names)
        if result is None:
            return None
        fallback = composer.describe_area(result)
        if self.enrichment is None:
            return fallback
        enriched = await self.enrichment.fetch_category_assessment(composer.area_context(result))
        return composer.choose_text(enriched, fallback)

    # --- Quiz ---

    def quiz_result(
        self,
        raw_answers: Optional[Mapping[str, Any]],
        recommendations: Optional[Mapping[str, List[str]]] = None,
        now: Optional[datetime] = None,
    ) -> QuizResultPayload:
        """Validates raw answers at the boundary and builds the persistable payload."""
        if self.classifier is None:
            raise RuntimeError("AssessmentService was created without a quiz definition")
        answers = parse_answer_set(raw_answers)
        return self.classifier.build_result_payload(answers, recommendations, now=now)
