from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from .errors import InvalidArgument, VALIDATION_ERRORS
from .llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from .llm.groq_client import call_json
from .llm.prompts import PromptBuilder, PromptContext, baseline_prompt
from .matching.engine import MatchingEngine
from .places.index import PlaceTagIndex
from .places.models import MatchResult, Place
from .preferences.models import UserInferredPrefs, UserPreferences
from .preferences.store import PreferenceStore
from .validation.config import DEFAULT_VALIDATION_CONFIG, ValidationConfig
from .validation.models import InferenceResult
from .validation.validators import parse_inference, validate_inference
from .vocabulary import ALLOWED_TAGS

logger = logging.getLogger(__name__)

InferenceCall = Callable[[str, LLMConfig], Any]


class InterestFilter:
    """Owns the preference store and place index for one process."""

    def __init__(self, seed_places: Iterable[Place] = ()) -> None:
        self.store = PreferenceStore()
        self.index = PlaceTagIndex(seed_places)
        self.engine = MatchingEngine(self.store, self.index)

    # ── Preferences ──────────────────────────────────────────────────────

    def set_preferences(self, user_id: str, tags: list[str]) -> UserPreferences:
        return self.store.set_preferences(user_id, tags)

    def record_inference(
        self,
        user_id: str,
        text: str,
        result: InferenceResult,
        needs_confirmation: bool = False,
    ) -> UserInferredPrefs:
        return self.store.record_inference(user_id, text, result, needs_confirmation)

    def clear_preferences(self, user_id: str) -> None:
        self.store.clear_preferences(user_id)

    def get_user_preferences(self, user_id: str) -> UserPreferences | None:
        return self.store.get_preferences(user_id)

    def get_user_inference(self, user_id: str) -> UserInferredPrefs | None:
        return self.store.get_inference(user_id)

    def infer_preferences_from_text(
        self,
        user_id: str,
        text: str,
        *,
        radius: float | None = None,
        location_hint: str | None = None,
        prompt_builder: PromptBuilder = baseline_prompt,
        validation: ValidationConfig = DEFAULT_VALIDATION_CONFIG,
        llm_config: LLMConfig = DEFAULT_LLM_CONFIG,
        call: InferenceCall = call_json,
    ) -> tuple[UserInferredPrefs, bool]:
        """
        Infer tags from free text and make them the user's active preferences.

        The raw reply from *call* is normalized and validated before anything
        is stored, so a rejected reply leaves existing preferences untouched.
        Returns the stored inference and the ``needs_confirmation`` flag.
        """
        if not user_id:
            raise InvalidArgument("infer_preferences_from_text: user_id is required.")
        if not text or not text.strip():
            raise InvalidArgument("infer_preferences_from_text: text must be non-empty.")

        prompt = prompt_builder(PromptContext(
            text=text,
            allowed_tags=ALLOWED_TAGS,
            radius=radius,
            location_hint=location_hint,
        ))
        raw = call(prompt, llm_config)

        try:
            parsed = parse_inference(raw)
            needs_confirmation = validate_inference(parsed, validation)
        except VALIDATION_ERRORS as exc:
            logger.info("Rejected inference for %s: %s", user_id, exc)
            raise

        inference = self.store.record_inference(user_id, text, parsed, needs_confirmation)
        return inference, needs_confirmation

    # ── Places ───────────────────────────────────────────────────────────

    def tag_place(self, place_id: str, tag: str) -> None:
        self.index.tag_place(place_id, tag)

    def get_place_tags(self, place_id: str) -> list[str]:
        return self.index.get_tags(place_id)

    def candidate_places(self, seed_places: Iterable[Place]) -> list[Place]:
        """
        *seed_places* followed by any place known only to the index.

        Index-only places are named by their id and carry no declared tags;
        scoring reads their tags from the index.
        """
        candidates = list(seed_places)
        known = {p.id for p in candidates}
        candidates.extend(
            Place(id=pid, name=pid) for pid in self.index.place_ids() if pid not in known
        )
        return candidates

    # ── Matching ─────────────────────────────────────────────────────────

    def get_matching_places(self, user_id: str, places: Iterable[Place]) -> list[MatchResult]:
        return self.engine.score(user_id, places)
