"""Name canonicalization and edit-distance similarity for user/employee matching."""

import re

from rapidfuzz.distance import Levenshtein

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_name(name: str) -> str:
    """Lowercase, turn punctuation into spaces and collapse whitespace.

    "Wright, Brandon" -> "wright brandon"
    """
    cleaned = _PUNCTUATION_RE.sub(" ", name.lower())
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def levenshtein_distance(a: str, b: str) -> int:
    return Levenshtein.distance(a, b)


def levenshtein_similarity(a: str, b: str) -> float:
    """Return ``1 - distance / max(len(a), len(b))``, 1.0 for two empty strings."""
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return 1 - levenshtein_distance(a, b) / max_len


def employee_name_variants(first_name: str, last_name: str) -> tuple[str, str]:
    """Normalized "first last" and "last first" forms of an employee name."""
    return (
        normalize_name(f"{first_name} {last_name}"),
        normalize_name(f"{last_name} {first_name}"),
    )
