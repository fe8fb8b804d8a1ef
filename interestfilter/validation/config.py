from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationConfig:
    min_tags: int = 3
    max_tags: int = 7
    # Below this confidence the caller should ask the user to confirm
    advisory_confidence: float = 0.65


DEFAULT_VALIDATION_CONFIG = ValidationConfig()
