from __future__ import annotations

import json
import logging
import re
import time
from typing import Any

from groq import Groq

from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an interest-tagging engine for a place discovery app. "
    "Follow the user's instructions exactly and reply with a single JSON object."
)

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


class LLMCallError(RuntimeError):
    """Raised when the inference collaborator cannot produce a JSON reply."""


def parse_json_loose(text: str) -> Any:
    """Parse JSON from a model reply, unwrapping a ``` fence if present."""
    trimmed = text.strip()
    match = _FENCE_RE.search(trimmed)
    candidate = match.group(1).strip() if match else trimmed
    return json.loads(candidate)


def _attempt_once(client: Groq, prompt: str, config: LLMConfig) -> Any:
    response = client.chat.completions.create(
        model=config.model,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        max_tokens=config.max_tokens,
        temperature=0.2,
        response_format={"type": "json_object"},
    )
    content = response.choices[0].message.content or ""
    return parse_json_loose(content)


def call_json(prompt: str, config: LLMConfig = DEFAULT_LLM_CONFIG) -> Any:
    """
    Send *prompt* to Groq and return the parsed JSON reply.

    The reply is returned as-is; callers must validate it. Failed attempts
    are retried with exponential backoff up to ``config.max_retries`` times,
    after which ``LLMCallError`` is raised.
    """
    if not config.enabled or not config.api_key:
        raise LLMCallError("LLM is not configured (set GROQ_API_KEY).")

    client = Groq(api_key=config.api_key, timeout=config.timeout)

    attempt = 0
    while True:
        try:
            return _attempt_once(client, prompt, config)
        except Exception as exc:
            if attempt >= config.max_retries:
                raise LLMCallError(
                    f"LLM call failed after {config.max_retries + 1} attempts: {exc}"
                ) from exc
            delay = config.backoff_seconds * (2 ** attempt)
            logger.warning(
                "Groq call failed (attempt %d), retrying in %.2fs",
                attempt + 1, delay, exc_info=True,
            )
            time.sleep(delay)
            attempt += 1
