from __future__ import annotations

import logging
import os

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from .auth.dependencies import current_user_id, require_admin, require_user
from .auth.models import LoginRequest
from .auth.users import authenticate
from .errors import InterestFilterError, InvalidArgument, NoPreferencesSet
from .filter import InterestFilter
from .llm.config import DEFAULT_LLM_CONFIG
from .llm.groq_client import LLMCallError, call_json
from .llm.prompts import PROMPTS
from .places.data_store import get_places
from .places.models import MatchResponse, PlaceOut, TagPlaceRequest
from .preferences.models import (
    InferPreferencesRequest,
    InferPreferencesResponse,
    SetPreferencesRequest,
    UserInferredPrefs,
    UserPreferences,
)
from .vocabulary import ALLOWED_TAGS, CONTRADICTION_PAIRS

logger = logging.getLogger(__name__)

app = FastAPI(title="Interest Filter API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "interest-filter-secret-change-in-production"),
)

_filter = InterestFilter(get_places())


def get_filter() -> InterestFilter:
    return _filter


def reset_filter() -> None:
    """Drop all runtime preferences and place tags, reseeding from the CSV."""
    global _filter
    _filter = InterestFilter(get_places())


# ── Error mapping ────────────────────────────────────────────────────────


@app.exception_handler(InterestFilterError)
def interest_filter_error(request: Request, exc: InterestFilterError) -> JSONResponse:
    if isinstance(exc, InvalidArgument):
        status = 400
    elif isinstance(exc, NoPreferencesSet):
        status = 404
    else:
        status = 422
    return JSONResponse(status_code=status, content={"kind": exc.kind, "detail": str(exc)})


@app.exception_handler(LLMCallError)
def llm_call_error(request: Request, exc: LLMCallError) -> JSONResponse:
    logger.warning("Tag inference unavailable: %s", exc)
    return JSONResponse(status_code=502, content={"kind": "InferenceUnavailable", "detail": str(exc)})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/tags")
def tags() -> dict:
    return {
        "tags": [{"tag": t.tag, "description": t.description} for t in ALLOWED_TAGS],
        "contradictions": [list(pair) for pair in CONTRADICTION_PAIRS],
    }


@app.get("/places", response_model=list[PlaceOut])
def places(f: InterestFilter = Depends(get_filter)) -> list[PlaceOut]:
    return [
        PlaceOut(id=p.id, name=p.name, tags=sorted(f.index.tags_for(p)))
        for p in f.candidate_places(get_places())
    ]


@app.get("/places/{place_id}/tags")
def place_tags(place_id: str, f: InterestFilter = Depends(get_filter)) -> dict:
    return {"place_id": place_id, "tags": f.get_place_tags(place_id)}


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Preference endpoints ─────────────────────────────────────────────────


@app.get("/preferences", response_model=UserPreferences)
def get_preferences(
    user_id: str = Depends(current_user_id),
    f: InterestFilter = Depends(get_filter),
) -> UserPreferences:
    prefs = f.get_user_preferences(user_id)
    if prefs is None:
        raise HTTPException(status_code=404, detail="No preferences set")
    return prefs


@app.put("/preferences", response_model=UserPreferences)
def put_preferences(
    body: SetPreferencesRequest,
    user_id: str = Depends(current_user_id),
    f: InterestFilter = Depends(get_filter),
) -> UserPreferences:
    return f.set_preferences(user_id, body.tags)


@app.delete("/preferences")
def delete_preferences(
    user_id: str = Depends(current_user_id),
    f: InterestFilter = Depends(get_filter),
) -> dict:
    f.clear_preferences(user_id)
    return {"status": "cleared"}


@app.get("/preferences/inference", response_model=UserInferredPrefs)
def get_inference(
    user_id: str = Depends(current_user_id),
    f: InterestFilter = Depends(get_filter),
) -> UserInferredPrefs:
    inference = f.get_user_inference(user_id)
    if inference is None:
        raise HTTPException(status_code=404, detail="No inferred preferences")
    return inference


@app.post("/preferences/infer", response_model=InferPreferencesResponse)
def infer_preferences(
    body: InferPreferencesRequest,
    user_id: str = Depends(current_user_id),
    f: InterestFilter = Depends(get_filter),
) -> InferPreferencesResponse:
    builder = PROMPTS.get(body.prompt)
    if builder is None:
        raise HTTPException(
            status_code=422,
            detail=f"Unknown prompt {body.prompt!r}; expected one of {sorted(PROMPTS)}",
        )

    inference, needs_confirmation = f.infer_preferences_from_text(
        user_id,
        body.text,
        radius=body.radius,
        location_hint=body.location_hint,
        prompt_builder=builder,
        llm_config=DEFAULT_LLM_CONFIG,
        call=call_json,
    )
    return InferPreferencesResponse(inference=inference, needs_confirmation=needs_confirmation)


# ── Matching ─────────────────────────────────────────────────────────────


@app.get("/matches", response_model=MatchResponse)
def matches(
    user_id: str = Depends(current_user_id),
    f: InterestFilter = Depends(get_filter),
) -> MatchResponse:
    candidates = f.candidate_places(get_places())
    return MatchResponse(
        matches=f.get_matching_places(user_id, candidates),
        total_candidates=len(candidates),
    )


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.post("/places/{place_id}/tags")
def tag_place(
    place_id: str,
    body: TagPlaceRequest,
    user: dict = Depends(require_admin),
    f: InterestFilter = Depends(get_filter),
) -> dict:
    f.tag_place(place_id, body.tag)
    return {"place_id": place_id, "tags": f.get_place_tags(place_id)}
