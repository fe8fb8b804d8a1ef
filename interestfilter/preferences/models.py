from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class PrefSource(str, Enum):
    manual = "manual"
    llm = "llm"


class UserPreferences(BaseModel):
    user_id: str
    tags: list[str]
    source: PrefSource


class UserInferredPrefs(BaseModel):
    user_id: str
    tags: list[str]
    exclusions: list[str] = Field(default_factory=list)
    confidence: float
    rationale: str = ""
    warnings: list[str] = Field(default_factory=list)
    last_prompt: str
    needs_confirmation: bool = False


# ── Request / response bodies ────────────────────────────────────────────


class SetPreferencesRequest(BaseModel):
    tags: list[str] = Field(default_factory=list)


class InferPreferencesRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=1000)
    radius: float | None = Field(default=None, gt=0, description="Search radius in minutes of driving")
    location_hint: str | None = None
    prompt: str = Field(default="baseline", description="baseline | fewshot | contradictions")


class InferPreferencesResponse(BaseModel):
    inference: UserInferredPrefs
    needs_confirmation: bool
