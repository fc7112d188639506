"""
Cheap string similarity for short, hand-typed names.

This is not an edit distance. It rewards substring containment first and
otherwise counts characters that line up in order, allowing a single
character of slack on either side before giving up on a position.
"""

from __future__ import annotations

SUBSTRING_SCORE = 0.8
REVERSE_SUBSTRING_SCORE = 0.6


def string_similarity(value: str, target: str) -> float:
    """
    Score how closely ``value`` resembles ``target`` (case-insensitive).

    Returns:
        0.8 when ``target`` contains ``value``, 0.6 when ``value`` contains
        ``target``, otherwise the ordered-character overlap divided by the
        longer length (0.0 when both are empty).
    """
    left = value.lower()
    right = target.lower()
    if not left and not right:
        return 0.0

    if left in right:
        return SUBSTRING_SCORE
    if right in left:
        return REVERSE_SUBSTRING_SCORE

    return ordered_overlap(left, right)


def ordered_overlap(left: str, right: str) -> float:
    longest = max(len(left), len(right))
    if longest == 0:
        return 0.0

    matched = 0
    i = 0
    j = 0
    while i < len(left) and j < len(right):
        if left[i] == right[j]:
            matched += 1
            i += 1
            j += 1
        elif i < len(left) - 1 and left[i + 1] == right[j]:
            i += 1
        elif j < len(right) - 1 and left[i] == right[j + 1]:
            j += 1
        else:
            i += 1
            j += 1

    return matched / longest
