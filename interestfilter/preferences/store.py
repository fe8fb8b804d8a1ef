from __future__ import annotations

import logging

from ..errors import InvalidArgument, WhitelistViolation
from ..validation.models import InferenceResult
from ..validation.validators import unique
from ..vocabulary import disallowed
from .models import PrefSource, UserInferredPrefs, UserPreferences

logger = logging.getLogger(__name__)


class PreferenceStore:
    """
    Holds exactly one active preference record per user id.

    Writers are expected to be serialised per user id; the store does no
    locking of its own.
    """

    def __init__(self) -> None:
        self._preferences: dict[str, UserPreferences] = {}
        self._inferred: dict[str, UserInferredPrefs] = {}

    def set_preferences(self, user_id: str, tags: list[str]) -> UserPreferences:
        if not user_id:
            raise InvalidArgument("set_preferences: user_id is required.")
        if not tags:
            raise InvalidArgument("set_preferences: tags must be non-empty.")
        invalid = disallowed(tags)
        if invalid:
            raise WhitelistViolation(invalid, context="set_preferences")

        # Any inferred record stays in place; only the active set changes.
        prefs = UserPreferences(user_id=user_id, tags=unique(tags), source=PrefSource.manual)
        self._preferences[user_id] = prefs
        logger.debug("Stored manual preferences for %s: %s", user_id, prefs.tags)
        return prefs

    def record_inference(
        self,
        user_id: str,
        text: str,
        result: InferenceResult,
        needs_confirmation: bool = False,
    ) -> UserInferredPrefs:
        """
        Store an already-validated inference and make its tags active.

        Validation is the caller's job; this only checks its own arguments.
        """
        if not user_id:
            raise InvalidArgument("record_inference: user_id is required.")
        if not text or not text.strip():
            raise InvalidArgument("record_inference: text must be non-empty.")

        inference = UserInferredPrefs(
            user_id=user_id,
            tags=list(result.tags),
            exclusions=list(result.exclusions),
            confidence=result.confidence,
            rationale=result.rationale,
            warnings=list(result.warnings),
            last_prompt=text,
            needs_confirmation=needs_confirmation,
        )
        self._inferred[user_id] = inference
        self._preferences[user_id] = UserPreferences(
            user_id=user_id, tags=list(result.tags), source=PrefSource.llm,
        )
        logger.debug(
            "Stored inferred preferences for %s: %s (excluding %s)",
            user_id, inference.tags, inference.exclusions,
        )
        return inference

    def clear_preferences(self, user_id: str) -> None:
        if not user_id:
            raise InvalidArgument("clear_preferences: user_id is required.")
        self._preferences.pop(user_id, None)
        self._inferred.pop(user_id, None)

    def get_preferences(self, user_id: str) -> UserPreferences | None:
        return self._preferences.get(user_id)

    def get_inference(self, user_id: str) -> UserInferredPrefs | None:
        return self._inferred.get(user_id)
