from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Tag = Literal[
    "quiet_spaces",
    "waterfront_views",
    "nature_walks",
    "sunset_spots",
    "not_crowded",
    "short_drive",
    "instagram_worthy",
    "lively_nightlife",
    "live_music",
    "historic_charms",
    "family_friendly",
    "coffee_nooks",
    "scenic_overlook",
]


@dataclass(frozen=True)
class AllowedTag:
    tag: str
    description: str


ALLOWED_TAGS: list[AllowedTag] = [
    AllowedTag("quiet_spaces", "calm, low-noise places for relaxing"),
    AllowedTag("waterfront_views", "visible bodies of water nearby"),
    AllowedTag("nature_walks", "walkable paths/trails in nature"),
    AllowedTag("sunset_spots", "good west-facing sunset views"),
    AllowedTag("not_crowded", "typically low foot traffic"),
    AllowedTag("short_drive", "≈ within ~45 minutes by car"),
    AllowedTag("instagram_worthy", "notably photogenic scenes"),
    AllowedTag("lively_nightlife", "energetic evening venues/districts"),
    AllowedTag("live_music", "scheduled musical performances"),
    AllowedTag("historic_charms", "notable historic structures/areas"),
    AllowedTag("family_friendly", "amenities suitable for families"),
    AllowedTag("coffee_nooks", "cafés suited to lingering/reading"),
    AllowedTag("scenic_overlook", "elevated viewpoint with vistas"),
]

# Changing this list is a breaking change for stored preferences.
ALLOWED_TAG_STRINGS: tuple[str, ...] = tuple(t.tag for t in ALLOWED_TAGS)

# Pairs that must never both appear in one accepted tag set
CONTRADICTION_PAIRS: list[tuple[str, str]] = [
    ("quiet_spaces", "lively_nightlife"),
    ("quiet_spaces", "live_music"),
]


def is_allowed(tag: object) -> bool:
    return isinstance(tag, str) and tag in ALLOWED_TAG_STRINGS


def disallowed(tags: list[str]) -> list[str]:
    """Return the entries of *tags* that are outside the vocabulary, in order."""
    return [t for t in tags if not is_allowed(t)]
