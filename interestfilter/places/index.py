from __future__ import annotations

import logging
from typing import Iterable

from ..errors import InvalidArgument, WhitelistViolation
from ..vocabulary import is_allowed
from .models import Place

logger = logging.getLogger(__name__)


class PlaceTagIndex:
    """Mutable tag sets keyed by place id. Tags can be added, never removed."""

    def __init__(self, seed_places: Iterable[Place] = ()) -> None:
        self._tags: dict[str, set[str]] = {}
        for place in seed_places:
            self._tags[place.id] = set(place.tags)

    def tag_place(self, place_id: str, tag: str) -> None:
        if not place_id:
            raise InvalidArgument("tag_place: place_id is required.")
        if not is_allowed(tag):
            raise WhitelistViolation([tag], context="tag_place")
        tags = self._tags.setdefault(place_id, set())
        if tag not in tags:
            tags.add(tag)
            logger.debug("Tagged place %s with %s", place_id, tag)

    def get_tags(self, place_id: str) -> list[str]:
        return sorted(self._tags.get(place_id, ()))

    def tags_for(self, place: Place) -> set[str]:
        """Indexed tags for *place*, or the place's own tags if it was never indexed."""
        indexed = self._tags.get(place.id)
        if indexed is None:
            return set(place.tags)
        return indexed

    def __contains__(self, place_id: object) -> bool:
        return place_id in self._tags

    def place_ids(self) -> list[str]:
        """Every indexed place id, in the order it was first seen."""
        return list(self._tags)
