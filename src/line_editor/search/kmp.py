"""Knuth-Morris-Pratt substring search."""

from __future__ import annotations

from typing import List

NOT_FOUND = -1


def failure_function(pattern: str) -> List[int]:
    """Return the partial-match table for ``pattern``.

    ``table[i]`` is the length of the longest proper prefix of
    ``pattern[: i + 1]`` that is also a suffix of it.
    """

    table = [0] * len(pattern)
    prefix_len = 0
    i = 1
    while i < len(pattern):
        if pattern[i] == pattern[prefix_len]:
            prefix_len += 1
            table[i] = prefix_len
            i += 1
        elif prefix_len != 0:
            # retry against the next shorter border, i stays put
            prefix_len = table[prefix_len - 1]
        else:
            table[i] = 0
            i += 1
    return table


def find(text: str, pattern: str) -> int:
    """Return the 0-based start of the first ``pattern`` in ``text``, or ``-1``.

    Runs in ``O(len(text) + len(pattern))``: the text cursor never moves
    backwards, a mismatch only rewinds the pattern cursor through the
    failure table.
    """

    text_len = len(text)
    pattern_len = len(pattern)

    if pattern_len > text_len:
        return NOT_FOUND
    if pattern_len == 0:
        return 0
    if pattern_len == text_len:
        return 0 if text == pattern else NOT_FOUND

    table = failure_function(pattern)
    j = 0
    k = 0
    while k < text_len:
        if pattern[j] == text[k]:
            j += 1
            k += 1
            if j == pattern_len:
                return k - j
        elif j != 0:
            j = table[j - 1]
        else:
            k += 1
    return NOT_FOUND
