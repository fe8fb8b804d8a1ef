"""
Per-user preference state.

Responsibilities:
- Keep one active tag set per user, sourced manually or by inference.
- Retain the full inference record (exclusions, rationale, confidence)
  for transparency and for scoring exclusions.
"""
