"""Deterministic scoring engine for aesthetic assessments."""

from .normalizer import normalize
from .constants import Tier, ThemeClassification, SECONDARY_THRESHOLD

__all__ = ["normalize", "Tier", "ThemeClassification", "SECONDARY_THRESHOLD"]
