from __future__ import annotations

from pathlib import Path

import pandas as pd

from .models import Place

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
_PLACES_CSV = _DATA_DIR / "places.csv"

_places: list[Place] | None = None


def _split_tags(raw: str) -> list[str]:
    return [t.strip() for t in raw.split(",") if t.strip()]


def load_places(path: Path = _PLACES_CSV) -> list[Place]:
    """Read seed places from a CSV with ``id,name,tags`` columns."""
    df = pd.read_csv(path, dtype=str).fillna("")
    df["tags_list"] = df["tags"].apply(_split_tags)
    return [
        Place(id=row["id"], name=row["name"], tags=tuple(row["tags_list"]))
        for _, row in df.iterrows()
    ]


def get_places() -> list[Place]:
    """Return the seed places, loading them on first call."""
    global _places
    if _places is None:
        _places = load_places()
    return _places
