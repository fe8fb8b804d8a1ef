from __future__ import annotations

import logging
import math
from typing import Any, Iterable, TypeVar

from pydantic import ValidationError

from ..errors import (
    VALIDATION_ERRORS,
    ConfidenceOutOfRange,
    ContradictionViolation,
    MalformedResponse,
    TagCountViolation,
    WhitelistViolation,
)
from ..vocabulary import ALLOWED_TAG_STRINGS, CONTRADICTION_PAIRS
from .config import DEFAULT_VALIDATION_CONFIG, ValidationConfig
from .models import InferenceResult, RawInference, ValidationOutcome

logger = logging.getLogger(__name__)

T = TypeVar("T")


def unique(items: Iterable[T]) -> list[T]:
    """Drop repeated items, keeping the first occurrence of each."""
    seen: set[T] = set()
    out: list[T] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


# ---------------------------------------------------------------------------
# Structural normalization
# ---------------------------------------------------------------------------


def _as_float(value: int | float) -> float:
    # Integers too large for a float are still out of range.
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def parse_inference(raw: Any) -> InferenceResult:
    """
    Coerce an untrusted collaborator payload into an ``InferenceResult``.

    Missing list fields become empty lists and a missing rationale becomes
    an empty string. ``confidence`` is required and must be numeric.
    Raises ``MalformedResponse`` when the payload does not fit the shape.
    """
    try:
        parsed = RawInference.model_validate(raw)
        return InferenceResult(
            tags=unique(parsed.tags),
            exclusions=unique(parsed.exclusions),
            confidence=_as_float(parsed.confidence),
            rationale=parsed.rationale,
            warnings=parsed.warnings,
        )
    except ValidationError as exc:
        raise MalformedResponse(f"Malformed inference response: {exc}") from exc


# ---------------------------------------------------------------------------
# Business rules
# ---------------------------------------------------------------------------


def check_whitelist(
    tags: list[str],
    exclusions: list[str],
    allowed_tags: Iterable[str] = ALLOWED_TAG_STRINGS,
) -> None:
    allowed = set(allowed_tags)
    invalid = [t for t in [*tags, *exclusions] if t not in allowed]
    if invalid:
        raise WhitelistViolation(invalid)


def check_tag_count(tags: list[str], min_tags: int = 3, max_tags: int = 7) -> None:
    if len(tags) < min_tags or len(tags) > max_tags:
        raise TagCountViolation(min_tags, max_tags, len(tags))


def check_contradictions(
    tags: list[str],
    contradiction_pairs: Iterable[tuple[str, str]] = CONTRADICTION_PAIRS,
) -> None:
    present = set(tags)
    conflicts = [(a, b) for a, b in contradiction_pairs if a in present and b in present]
    if conflicts:
        raise ContradictionViolation(conflicts)


def check_confidence(confidence: float, advisory_threshold: float = 0.65) -> bool:
    """Raise if confidence is outside [0, 1]; return whether it meets the threshold."""
    if math.isnan(confidence) or confidence < 0.0 or confidence > 1.0:
        raise ConfidenceOutOfRange(confidence)
    return confidence >= advisory_threshold


def validate_inference(
    result: InferenceResult,
    config: ValidationConfig = DEFAULT_VALIDATION_CONFIG,
    allowed_tags: Iterable[str] = ALLOWED_TAG_STRINGS,
    contradiction_pairs: Iterable[tuple[str, str]] = CONTRADICTION_PAIRS,
) -> bool:
    """
    Run every rule against a normalized result and return ``needs_confirmation``.

    Rules run in a fixed order (whitelist, tag count, contradictions,
    confidence) and the first failure is raised. Low confidence is
    advisory only and never raises.
    """
    check_whitelist(result.tags, result.exclusions, allowed_tags)
    check_tag_count(result.tags, config.min_tags, config.max_tags)
    check_contradictions(result.tags, contradiction_pairs)
    meets_threshold = check_confidence(result.confidence, config.advisory_confidence)
    return not meets_threshold


def validate_payload(
    raw: Any,
    config: ValidationConfig = DEFAULT_VALIDATION_CONFIG,
) -> ValidationOutcome:
    """Normalize and validate *raw* without raising, reporting the first failure."""
    try:
        result = parse_inference(raw)
        needs_confirmation = validate_inference(result, config)
    except VALIDATION_ERRORS as exc:
        logger.info("Inference payload rejected: %s", exc)
        return ValidationOutcome(ok=False, error_kind=exc.kind, error=str(exc))

    return ValidationOutcome(
        ok=True,
        result=result,
        needs_confirmation=needs_confirmation,
    )
