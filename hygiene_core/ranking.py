"""
ranking.py — Competition ranking of group totals

Totals are deductions (<= 0), so the highest total is the best group and gets
rank 1. Each call ranks its own key universe; nothing is shared between calls.
"""

from __future__ import annotations
import pandas as pd
from typing import Dict, Hashable, Iterable, Tuple
from hygiene_core import config

# pandas rank methods for the two conventions
_METHODS = {"dense": "dense", "skip": "min"}


def rank_totals(pairs: Iterable[Tuple[Hashable, int]], method: str | None = None) -> Dict[Hashable, int]:
    """Map each key to its rank, best (highest) total first.

    dense: ties share a rank and the next distinct total follows immediately
           (0, 0, -1, -2 -> 1, 1, 2, 3).
    skip:  the next distinct total skips by the tie-group size
           (0, 0, -1, -2 -> 1, 1, 3, 4).
    """
    method = method or config.RANK_METHOD
    if method not in _METHODS:
        raise ValueError(f"Unknown rank method: {method!r}")

    pairs = list(pairs)
    keys = [k for k, _ in pairs]
    if len(set(keys)) != len(keys):
        raise ValueError("Duplicate keys passed to rank_totals")
    if not pairs:
        return {}

    totals = pd.Series([t for _, t in pairs], dtype="int64")
    ranks = totals.rank(method=_METHODS[method], ascending=False).astype(int)
    return {key: int(rank) for key, rank in zip(keys, ranks.tolist())}
