from .composer import (
    area_context,
    category_context,
    choose_text,
    describe_area,
    describe_category,
    generate_overall_assessment,
    overall_context,
    strength_findings,
)
from .enrichment import NarrativeEnrichmentClient
