from __future__ import annotations


class InterestFilterError(Exception):
    """Base class for every contract failure raised by the interest filter."""

    kind = "InterestFilterError"


class MalformedResponse(InterestFilterError):
    kind = "MalformedResponse"


class WhitelistViolation(InterestFilterError):
    kind = "WhitelistViolation"

    def __init__(self, values: list[str], context: str | None = None) -> None:
        self.values = list(values)
        prefix = f"{context}: " if context else ""
        super().__init__(
            f"{prefix}Whitelist violation: found non-allowed tags: "
            f"{', '.join(str(v) for v in self.values)}"
        )


class TagCountViolation(InterestFilterError):
    kind = "TagCountViolation"

    def __init__(self, min_tags: int, max_tags: int, actual: int) -> None:
        self.min_tags = min_tags
        self.max_tags = max_tags
        self.actual = actual
        super().__init__(
            f"Tag-count violation: expected between {min_tags} and {max_tags} tags, got {actual}"
        )


class ContradictionViolation(InterestFilterError):
    kind = "ContradictionViolation"

    def __init__(self, pairs: list[tuple[str, str]]) -> None:
        self.pairs = list(pairs)
        conflicts = "; ".join(f"{a} vs {b}" for a, b in self.pairs)
        super().__init__(f"Contradiction violation: conflicting tags detected: {conflicts}")


class ConfidenceOutOfRange(InterestFilterError):
    kind = "ConfidenceOutOfRange"

    def __init__(self, value: float) -> None:
        self.value = value
        super().__init__(f"Confidence violation: expected value in [0,1], got {value}")


class InvalidArgument(InterestFilterError):
    kind = "InvalidArgument"


class NoPreferencesSet(InterestFilterError):
    kind = "NoPreferencesSet"

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"No preferences set for user {user_id!r}")


# Kinds produced by the response validator (as opposed to caller misuse)
VALIDATION_ERRORS = (
    MalformedResponse,
    WhitelistViolation,
    TagCountViolation,
    ContradictionViolation,
    ConfidenceOutOfRange,
)
