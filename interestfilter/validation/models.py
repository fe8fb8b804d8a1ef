from __future__ import annotations

from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr


class RawInference(BaseModel):
    """Declarative shape of the payload returned by the inference collaborator."""

    tags: list[StrictStr] = Field(default_factory=list)
    exclusions: list[StrictStr] = Field(default_factory=list)
    confidence: StrictInt | StrictFloat
    rationale: StrictStr = ""
    warnings: list[StrictStr] = Field(default_factory=list)


class InferenceResult(BaseModel):
    tags: list[str] = Field(default_factory=list)
    exclusions: list[str] = Field(default_factory=list)
    confidence: float
    rationale: str = ""
    warnings: list[str] = Field(default_factory=list)


class ValidationOutcome(BaseModel):
    ok: bool
    result: InferenceResult | None = None
    needs_confirmation: bool = False
    error_kind: str | None = None
    error: str | None = None
