"""
Response validation layer.

Responsibilities:
- Normalize untrusted inference payloads into a fixed shape.
- Deduplicate tags and exclusions, preserving first occurrence.
- Enforce whitelist, tag-count, contradiction and confidence rules.
- Flag low-confidence results for human confirmation.
"""
