from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..vocabulary import Tag


class Place(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    tags: tuple[Tag, ...] = ()


class PlaceOut(BaseModel):
    id: str
    name: str
    tags: list[str]


class MatchResult(BaseModel):
    place: Place
    score: int


class MatchResponse(BaseModel):
    matches: list[MatchResult]
    total_candidates: int


class TagPlaceRequest(BaseModel):
    tag: str = Field(..., min_length=1)
