"""
distance.py — Levenshtein Edit Distance
----------------------------------------

Unit-cost insertion, deletion and substitution distance between two strings,
computed with a rolling two-row table sized by the shorter string.

Project: Field Guide
"""


def levenshtein(a: str, b: str) -> int:
    """
    Compute the Levenshtein edit distance between two strings.

    Args:
        a (str): First string.
        b (str): Second string.

    Returns:
        int: Minimum number of single-character edits turning `a` into `b`.
    """
    if a == b:
        return 0
    # Keep the row sized by the shorter string
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i] + [0] * len(b)
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current[j] = min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost
            )
        previous = current

    return previous[-1]
