from assessment_engine.constants import Tier
from assessment_engine.findings import AreaResult, CategoryResult, SubScoreResult
from assessment_engine.narrative import (
    area_context,
    category_context,
    choose_text,
    describe_area,
    describe_category,
    generate_overall_assessment,
    overall_context,
    strength_findings,
)


def sub(name, score, detected=0, total=2):
    return SubScoreResult(name=name, score=score, tier=Tier.from_score(score), detected=detected, total=total)


def category(name, key, score, *subs):
    return CategoryResult(name=name, key=key, score=score, tier=Tier.from_score(score), sub_scores=tuple(subs))


def area(name, score, strengths, improvements, has_interest=False):
    return AreaResult(
        name=name,
        score=score,
        tier=Tier.from_score(score),
        detected=len(improvements),
        total=len(strengths) + len(improvements),
        strengths=tuple(strengths),
        improvements=tuple(improvements),
        has_interest=has_interest,
        detected_findings=tuple(improvements),
    )


SKIN_HEALTH = category("Skin Health", "skinHealth", 88, sub("Wrinkles", 100), sub("Texture", 75, 1, 4))
PROPORTIONS = category("Proportions", "proportions", 75, sub("Brow", 100), sub("Lips", 50, 1))


# --- Categories ---

def test_describe_category_opportunity():
    result = category("Skin Health", "skinHealth", 75, sub("Wrinkles", 50, 1), sub("Texture", 100))
    assert describe_category(result) == (
        "Your Skin Health score of 75 is based on 2 sub-areas from your analysis: Wrinkles (50), Texture (100). "
        "Your strongest area here is Texture. Wrinkles had the most findings in your analysis "
        "and is the main opportunity for improvement."
    )


def test_describe_category_refinement():
    result = category("Volume Loss", "volumeLoss", 90, sub("Eye Area", 100), sub("Cheek Area", 80))
    text = describe_category(result)
    assert text.endswith("Your strongest area here is Eye Area. Cheek Area has the most room for subtle refinement.")


def test_describe_category_single_sub_feature():
    result = category("Skin Health", "skinHealth", 50, sub("Wrinkles", 50, 1))
    assert describe_category(result).endswith("All areas in this category contributed similarly to your score.")


def test_describe_category_without_sub_features():
    result = category("Empty", "empty", 100)
    assert describe_category(result) == "Your Empty score is 100, based on this analysis."


# --- Areas ---

def test_describe_area_mixed():
    result = area("Lips", 50, ["Thin Lips"], ["Dry Lips"])
    assert describe_area(result) == (
        "Your score of 50 is based on 2 features: 1 is in good shape and 1 was identified as "
        "opportunities for improvement. Targeted treatments in this area could make a meaningful difference."
    )


def test_describe_area_pluralizes():
    result = area("Forehead", 60, ["Brow Asymmetry", "Brow Ptosis"], ["Forehead Wrinkles", "Glabella Wrinkles"])
    assert "2 are in good shape and 2 were identified" in describe_area(result)


def test_describe_area_no_concerns():
    result = area("Nose", 100, ["Crooked Nose"], [])
    assert describe_area(result) == (
        "All 1 features we evaluated in this area look good, with no concerns detected. "
        "This area is in excellent shape."
    )


def test_describe_area_only_improvements():
    result = area("Nose", 0, [], ["Crooked Nose"])
    assert describe_area(result) == (
        "We evaluated 1 features; 1 was identified in your analysis as opportunities for improvement. "
        "This area has the most opportunity for improvement based on your analysis."
    )


def test_describe_area_refinement_band():
    result = area("Eyes", 70, ["A", "B", "C"], ["D"])
    assert describe_area(result).endswith("There is some room for refinement here.")


# --- Overall ---

def test_generate_overall_assessment():
    text = generate_overall_assessment(82, [SKIN_HEALTH, PROPORTIONS], focus_count=1)
    assert text == (
        "Overall score of 82 shows a strong profile with clear areas of excellence. "
        "Skin Health scored highest at 88. "
        "Primary opportunity is in Proportions (75), particularly Lips. "
        "1 priority area highlighted based on patient interests."
    )


def test_generate_overall_assessment_refinement_and_plural_focus():
    high = category("Skin Health", "skinHealth", 95, sub("Wrinkles", 95))
    still_high = category("Proportions", "proportions", 85, sub("Jaw", 85))
    text = generate_overall_assessment(90, [high, still_high], focus_count=3)
    assert text.startswith("Overall aesthetic score of 90 reflects an exceptionally well-balanced profile.")
    assert "All categories are performing well, with Proportions at 85 offering the most room for subtle refinement." in text
    assert text.endswith("3 priority areas highlighted based on patient interests.")


def test_generate_overall_assessment_low_band_has_no_number_in_opener():
    low = category("Volume Loss", "volumeLoss", 40, sub("Eye Area", 33), sub("Neck Area", 47))
    text = generate_overall_assessment(40, [low])
    assert text.startswith("Analysis identified several specific areas where targeted treatments could make a real difference.")
    assert text.endswith("Primary opportunity is in Volume Loss (40), particularly Eye Area.")


def test_generate_overall_assessment_without_categories():
    assert generate_overall_assessment(100, []) == (
        "Overall aesthetic score of 100 reflects an exceptionally well-balanced profile."
    )


def test_generate_overall_assessment_is_deterministic():
    first = generate_overall_assessment(65, [SKIN_HEALTH, PROPORTIONS], 2)
    assert first == generate_overall_assessment(65, [SKIN_HEALTH, PROPORTIONS], 2)
    assert first.startswith("Overall score of 65 shows a solid foundation")


# --- Enrichment context ---

def test_category_context():
    context = category_context(PROPORTIONS, detected_names=["dry lips"], strength_names=["Brow Asymmetry"])
    assert context == {
        "categoryOrArea": "Proportions",
        "score": 75,
        "tier": "good",
        "subScores": [
            {"name": "Brow", "score": 100, "detected": 0, "total": 2},
            {"name": "Lips", "score": 50, "detected": 1, "total": 2},
        ],
        "detectedIssues": ["dry lips"],
        "strengthIssues": ["Brow Asymmetry"],
    }


def test_area_context():
    context = area_context(area("Lips", 50, ["Thin Lips"], ["Dry Lips"]))
    assert context["categoryOrArea"] == "Lips"
    assert context["detectedIssues"] == ["Dry Lips"]
    assert context["strengthIssues"] == ["Thin Lips"]
    assert context["subScores"] == []


def test_overall_context_sorts_detected():
    context = overall_context(82, [SKIN_HEALTH, PROPORTIONS], 1, {"thin lips", "dry skin"})
    assert context == {
        "overall": 82,
        "categories": [
            {"name": "Skin Health", "score": 88, "tier": "good"},
            {"name": "Proportions", "score": 75, "tier": "good"},
        ],
        "focusCount": 1,
        "detectedIssues": ["dry skin", "thin lips"],
    }


# --- Helpers ---

def test_choose_text_prefers_enriched():
    assert choose_text("  Rich prose.  ", "Template.") == "Rich prose."


def test_choose_text_falls_back():
    assert choose_text(None, "Template.") == "Template."
    assert choose_text("   ", "Template.") == "Template."


def test_strength_findings_keeps_catalog_order():
    findings = ["Dry Skin", "Crow’s Feet Wrinkles", "Rosacea"]
    assert strength_findings(findings, {"crow's feet wrinkles"}) == ["Dry Skin", "Rosacea"]


# --- Descriptions of scored areas ---

def test_describe_clear_area_reports_no_concerns(scorer):
    # The display lists are rebalanced, but the text follows what was detected.
    result = scorer.score_area("Forehead", frozenset())
    assert result.improvements
    assert describe_area(result) == (
        "All 4 features we evaluated in this area look good, with no concerns detected. "
        "This area is in excellent shape."
    )


def test_describe_fully_detected_area_reports_only_improvements(scorer):
    result = scorer.score_area("Lips", {"thin lips", "dry lips"})
    assert result.strengths
    assert describe_area(result) == (
        "We evaluated 2 features; 2 were identified in your analysis as opportunities for improvement. "
        "This area has the most opportunity for improvement based on your analysis."
    )


def test_area_context_sends_only_detected_findings(scorer):
    context = area_context(scorer.score_area("Skin", frozenset()))
    assert context["detectedIssues"] == []
    assert sorted(context["strengthIssues"]) == sorted(
        ["Dry Skin", "Whiteheads", "Blackheads", "Rosacea", "Crow’s Feet Wrinkles"]
    )

    context = area_context(scorer.score_area("Lips", {"thin lips", "dry lips"}))
    assert context["detectedIssues"] == ["Thin Lips", "Dry Lips"]
    assert context["strengthIssues"] == []
