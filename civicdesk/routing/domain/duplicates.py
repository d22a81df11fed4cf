"""
Duplicate Detection
===================

Exact-match comparison of normalized description/location pairs.
"""

import re
from typing import Any, Iterable

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lower-case, drop punctuation, collapse whitespace, trim."""
    text = _NON_ALNUM.sub("", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


class DuplicateDetector:
    """
    Detects resubmissions of a complaint already on record.

    Two complaints are duplicates only when BOTH the normalized description
    and the normalized location are identical. No fuzzy matching.
    """

    @staticmethod
    def is_duplicate(existing: Iterable[Any], description: str, location: str) -> bool:
        """
        Check a candidate against existing complaints.

        Args:
            existing: Objects exposing `description` and `location`
            description: Candidate description
            location: Candidate location

        Returns:
            True if any existing complaint matches both fields
        """
        wanted = (normalize_text(description), normalize_text(location))
        return any(
            (normalize_text(c.description), normalize_text(c.location)) == wanted
            for c in existing
        )


def is_duplicate_complaint(existing: Iterable[Any], description: str, location: str) -> bool:
    return DuplicateDetector.is_duplicate(existing, description, location)
