"""
Place catalogue and tag index.

Responsibilities:
- Load seed places from the bundled CSV.
- Track each place's tag set, which grows as places are tagged at runtime.
"""
