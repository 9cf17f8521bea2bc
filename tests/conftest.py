import pytest

from assessment_engine.catalog import load_finding_catalog_data, load_quiz_definition_data
from assessment_engine.findings import FindingScorer
from assessment_engine.quiz import QuizClassifier


# --- Finding catalog fixtures ---

@pytest.fixture
def minimal_catalog_data():
    """A small catalog that mirrors the shape of the shipped one."""
    return {
        "version": "test-1",
        "categories": [
            {
                "name": "Skin Health",
                "key": "skinHealth",
                "description": "Wrinkles and texture",
                "sub_features": [
                    {"name": "Wrinkles", "findings": ["Forehead Wrinkles", "Glabella Wrinkles"]},
                    {"name": "Texture", "findings": ["Dry Skin", "Whiteheads", "Blackheads", "Rosacea"]},
                ],
            },
            {
                "name": "Proportions",
                "key": "proportions",
                "description": "Brow and lips",
                "sub_features": [
                    {"name": "Brow", "findings": ["Brow Asymmetry", "Brow Ptosis"]},
                    {"name": "Lips", "findings": ["Thin Lips", "Dry Lips"]},
                ],
            },
        ],
        "areas": [
            {
                "name": "Forehead",
                "findings": ["Forehead Wrinkles", "Glabella Wrinkles", "Brow Asymmetry", "Brow Ptosis"],
            },
            {"name": "Lips", "findings": ["Thin Lips", "Dry Lips"]},
            {"name": "Skin", "findings": ["Dry Skin", "Whiteheads", "Blackheads", "Rosacea", "Crow’s Feet Wrinkles"]},
        ],
        "area_themes": [
            {
                "area": "Forehead",
                "themes": [
                    {"label": "Wrinkles", "findings": ["Forehead Wrinkles", "Glabella Wrinkles"]},
                    {"label": "Brow Position", "findings": ["Brow Asymmetry", "Brow Ptosis"]},
                ],
            },
            {
                "area": "Skin",
                "themes": [
                    {"label": "Texture", "findings": ["Dry Skin", "Whiteheads", "Blackheads"]},
                    {"label": "Redness", "findings": ["Rosacea"]},
                ],
            },
        ],
    }


@pytest.fixture
def minimal_catalog(minimal_catalog_data):
    return load_finding_catalog_data(minimal_catalog_data)


@pytest.fixture
def scorer(minimal_catalog):
    return FindingScorer(minimal_catalog)


# --- Quiz fixtures ---

@pytest.fixture
def minimal_quiz_data():
    """Three axes, three questions; answer weights chosen so totals are easy to reason about."""
    return {
        "version": "test-1",
        "axes": [
            {"id": "oily", "label": "Oily", "description": "Shiny skin.", "tendency_advice": "Mind the T-zone."},
            {"id": "dry", "label": "Dry", "description": "Tight skin.", "tendency_advice": "Moisturize more."},
            {"id": "sensitive", "label": "Sensitive", "description": "Reactive skin."},
        ],
        "questions": [
            {
                "id": "q1",
                "title": "Hydration",
                "text": "Morning feel?",
                "answers": [
                    {"label": "Oily", "weights": {"oily": 4}},
                    {"label": "Tight", "weights": {"dry": 4}},
                ],
            },
            {
                "id": "q2",
                "title": "Hydration",
                "text": "Midday shine?",
                "answers": [
                    {"label": "Very", "weights": {"oily": 3}},
                    {"label": "None", "weights": {"dry": 3, "sensitive": 1}},
                ],
            },
            {
                "id": "q3",
                "title": "Reactivity",
                "text": "New products?",
                "answers": [
                    {"label": "Irritated", "weights": {"sensitive": 3}},
                    {"label": "Fine", "weights": {"oily": 1}},
                    {"label": "Mixed", "weights": {"dry": 2, "sensitive": 2}},
                ],
            },
        ],
        "recommendations": {
            "oily": ["Gel Cleanser", "Niacinamide Serum"],
            "dry": ["Cream Cleanser"],
        },
    }


@pytest.fixture
def minimal_quiz(minimal_quiz_data):
    return load_quiz_definition_data(minimal_quiz_data)


@pytest.fixture
def classifier(minimal_quiz):
    return QuizClassifier(minimal_quiz)
