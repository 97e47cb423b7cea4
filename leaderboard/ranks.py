"""Ranking core: position scores, find a score, cut a window around it.

All three work on a sequence sorted non-increasing by score, which is the
order the store returns a game's scores in. Nothing here re-sorts.
"""
from typing import Iterable, List

from leaderboard.models import make_rank


def assemble_ranks(rows: Iterable[dict]) -> List[dict]:
    """Turn score rows (already best-first) into ranks with 1-based positions."""
    return [
        make_rank(i, row["score"], row.get("playerName"), row.get("timestamp"))
        for i, row in enumerate(rows, start=1)
    ]


def locate_rank(ranks: List[dict], score: int) -> int:
    """Index of the first rank holding `score`, or -1.

    Bisection mirrored for descending order: a probe bigger than the target
    means the target lies to the right. On a hit we keep searching left so
    ties resolve to the lowest index.
    """
    low, high = 0, len(ranks) - 1
    found = -1
    while low <= high:
        mid = (low + high) // 2
        diff = ranks[mid]["score"] - score
        if diff > 0:
            low = mid + 1
        elif diff < 0:
            high = mid - 1
        else:
            found = mid
            high = mid - 1
    return found


def ranks_around(ranks: List[dict], index: int, around: int) -> List[dict]:
    """Ranks within `around` places of `index`, clipped at both ends."""
    if index < 0 or index >= len(ranks):
        return []
    around = max(0, around)
    start = max(0, index - around)
    end = min(len(ranks) - 1, index + around)
    return ranks[start:end + 1]
