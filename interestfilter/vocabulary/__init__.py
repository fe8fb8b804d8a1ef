"""
Closed interest-tag vocabulary.

Responsibilities:
- Enumerate the canonical tags places and users can carry.
- Provide human-readable descriptions for prompt construction.
- Declare tag pairs that contradict each other.
"""
from .tags import (
    ALLOWED_TAG_STRINGS,
    ALLOWED_TAGS,
    CONTRADICTION_PAIRS,
    AllowedTag,
    Tag,
    disallowed,
    is_allowed,
)

__all__ = [
    "ALLOWED_TAGS",
    "ALLOWED_TAG_STRINGS",
    "CONTRADICTION_PAIRS",
    "AllowedTag",
    "Tag",
    "disallowed",
    "is_allowed",
]
