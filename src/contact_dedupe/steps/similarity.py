from __future__ import annotations

from contact_dedupe.steps.cleanup import normalize


def similarity(left: str | None, right: str | None) -> float:
    """Edit-distance similarity of two text values, in [0, 1].

    Raw values equal ignoring case score 1.0 without normalizing. Otherwise both
    sides are normalized and the Levenshtein distance is scaled by the longer
    canonical form; an empty canonical form scores 0.0.
    """
    if left is None or right is None:
        return 0.0
    if left.lower() == right.lower():
        return 1.0

    left_norm = normalize(left)
    right_norm = normalize(right)
    if not left_norm or not right_norm:
        return 0.0

    distance = levenshtein(left_norm, right_norm)
    return 1.0 - distance / max(len(left_norm), len(right_norm))


def levenshtein(left: str, right: str) -> int:
    if left == right:
        return 0
    if not left:
        return len(right)
    if not right:
        return len(left)

    # Keep the shorter string on the inner loop.
    if len(right) > len(left):
        left, right = right, left

    prev = list(range(len(right) + 1))
    for i, c1 in enumerate(left, start=1):
        curr = [i]
        for j, c2 in enumerate(right, start=1):
            cost = 0 if c1 == c2 else 1
            curr.append(min(curr[j - 1] + 1, prev[j] + 1, prev[j - 1] + cost))
        prev = curr
    return prev[-1]
