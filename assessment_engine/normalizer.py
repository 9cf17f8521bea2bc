# assessment_engine/normalizer.py
# Canonical form for finding labels. Every comparison in the engine goes through here.

import re
from typing import Optional

_CURLY_APOSTROPHES = str.maketrans({"’": "'", "‘": "'"})
_WHITESPACE = re.compile(r"\s+")


def normalize(label: Optional[str]) -> str:
    """
    Lower-cases, trims, unifies curly/straight apostrophes and collapses
    internal whitespace. Total and idempotent; ``None`` and ``""`` map to ``""``.
    """
    if not label:
        return ""
    text = label.translate(_CURLY_APOSTROPHES).lower()
    return _WHITESPACE.sub(" ", text).strip()
