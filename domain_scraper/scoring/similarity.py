# domain_scraper/scoring/similarity.py
from __future__ import annotations


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance (insert / delete / substitute, all cost 1)."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    # Keep the shorter string on the inner loop; two rows are enough
    if len(a) < len(b):
        a, b = b, a

    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        cur = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                cur.append(prev[j - 1])
            else:
                cur.append(1 + min(prev[j - 1], prev[j], cur[j - 1]))
        prev = cur
    return prev[-1]


def similarity(a: str, b: str) -> float:
    """
    Normalized similarity ratio: 1 - editDistance / len(longer).

    Two empty strings are identical (1.0).
    """
    a = a or ""
    b = b or ""
    longer = max(len(a), len(b))
    if longer == 0:
        return 1.0
    return (longer - edit_distance(a, b)) / longer


__all__ = ["edit_distance", "similarity"]
