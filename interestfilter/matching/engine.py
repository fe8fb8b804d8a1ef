from __future__ import annotations

from typing import Iterable

from ..errors import NoPreferencesSet
from ..places.index import PlaceTagIndex
from ..places.models import MatchResult, Place
from ..preferences.store import PreferenceStore


def _score_place(active_tags: list[str], exclusions: list[str], place_tags: set[str]) -> int:
    """Count matching preference tags; any excluded tag zeroes the whole match."""
    score = sum(1 for t in active_tags if t in place_tags)
    if any(ex in place_tags for ex in exclusions):
        score = 0
    return score


class MatchingEngine:
    def __init__(self, store: PreferenceStore, index: PlaceTagIndex) -> None:
        self._store = store
        self._index = index

    def score(self, user_id: str, places: Iterable[Place]) -> list[MatchResult]:
        """
        Rank *places* for *user_id* by tag overlap.

        Places scoring zero are dropped. Ties keep their input order.
        Raises ``NoPreferencesSet`` if the user has no active preferences.
        """
        prefs = self._store.get_preferences(user_id)
        if prefs is None:
            raise NoPreferencesSet(user_id)

        # Manual preferences carry no exclusions of their own; a retained
        # inference record still contributes its exclusions.
        inferred = self._store.get_inference(user_id)
        exclusions = inferred.exclusions if inferred else []

        results: list[MatchResult] = []
        for place in places:
            score = _score_place(prefs.tags, exclusions, self._index.tags_for(place))
            if score > 0:
                results.append(MatchResult(place=place, score=score))

        return sorted(results, key=lambda r: r.score, reverse=True)
