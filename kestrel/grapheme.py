"""Grapheme cluster segmentation and display width.

Cursor positions, edits and highlight spans are all expressed in grapheme
clusters, so a combining accent or an emoji modifier never ends up on a
different index than the character it decorates.
"""

from typing import List

import grapheme
from wcwidth import wcwidth


def split_graphemes(text: str) -> List[str]:
    """Split text into extended grapheme clusters (UAX #29)."""
    return list(grapheme.graphemes(text))


def grapheme_width(cluster: str) -> int:
    """Number of terminal columns a cluster occupies (tabs excluded)."""
    if not cluster:
        return 0
    w = wcwidth(cluster[0])
    if w < 0:
        # Control characters are drawn as a single replacement cell
        return 1
    if len(cluster) > 1 and any(ord(c) in (0xFE0F, 0x200D) for c in cluster):
        return 2
    return w


def find_sequence(haystack: List[str], needle: List[str], start: int = 0) -> int:
    """Index of the first occurrence of ``needle`` at or after ``start``, or -1.

    Matching is done cluster by cluster, so a match can never begin or end
    inside a grapheme.
    """
    n = len(needle)
    if n == 0:
        return -1
    last = len(haystack) - n
    first = needle[0]
    for i in range(max(start, 0), last + 1):
        if haystack[i] == first and haystack[i:i + n] == needle:
            return i
    return -1


def rfind_sequence(haystack: List[str], needle: List[str], end: int) -> int:
    """Index of the last occurrence of ``needle`` starting before ``end``, or -1."""
    n = len(needle)
    if n == 0:
        return -1
    first = needle[0]
    for i in range(min(end, len(haystack) - n + 1) - 1, -1, -1):
        if haystack[i] == first and haystack[i:i + n] == needle:
            return i
    return -1
