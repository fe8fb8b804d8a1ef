"""
Matching engine.

Responsibilities:
- Score places by exact overlap with a user's active tags.
- Zero out any place carrying one of the user's excluded tags.
- Return non-zero matches ranked by descending score.
"""
