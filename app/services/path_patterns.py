"""Ant-style URL path patterns: "**" spans segments, "*" and "?" stay within one segment.

Matching is case-sensitive and trailing slashes are significant ("/login" does not match
"/login/"). A trailing "/**" also matches the bare prefix, so "/admin/**" matches "/admin".
"""

from fnmatch import fnmatchcase
from functools import lru_cache

DOUBLE_WILDCARD = "**"
_SEGMENT_WILDCARDS = ("*", "?", "[")


def _split(path: str) -> tuple[str, ...]:
    return tuple(path.split("/"))


def _has_wildcard(segment: str) -> bool:
    return any(ch in segment for ch in _SEGMENT_WILDCARDS)


def validate_pattern(pattern: str) -> None:
    """Raise ValueError for patterns that can never be meaningful."""
    if not pattern or not pattern.strip():
        raise ValueError("Path pattern must be non-empty")
    if not pattern.startswith("/"):
        raise ValueError(f"Path pattern must start with '/': {pattern!r}")
    for segment in _split(pattern):
        if DOUBLE_WILDCARD in segment and segment != DOUBLE_WILDCARD:
            raise ValueError(f"'**' must be a whole path segment: {pattern!r}")


def _match_segments(pattern: tuple[str, ...], path: tuple[str, ...]) -> bool:
    # Wildcard matching over segments; backtracks to the last "**" seen.
    p = s = 0
    star = -1
    mark = 0
    while s < len(path):
        if p < len(pattern) and pattern[p] == DOUBLE_WILDCARD:
            star, mark = p, s
            p += 1
        elif p < len(pattern) and fnmatchcase(path[s], pattern[p]):
            p += 1
            s += 1
        elif star != -1:
            p = star + 1
            mark += 1
            s = mark
        else:
            return False
    while p < len(pattern) and pattern[p] == DOUBLE_WILDCARD:
        p += 1
    return p == len(pattern)


def matches(pattern: str, path: str) -> bool:
    """True if path is matched by pattern."""
    return _match_segments(_split(pattern), _split(path))


def _segments_overlap(a: str, b: str) -> bool:
    a_wild, b_wild = _has_wildcard(a), _has_wildcard(b)
    if a_wild and b_wild:
        # Two globs may share a match; treat as overlapping.
        return True
    if a_wild:
        return fnmatchcase(b, a)
    if b_wild:
        return fnmatchcase(a, b)
    return a == b


@lru_cache(maxsize=1024)
def _overlap(a: tuple[str, ...], b: tuple[str, ...]) -> bool:
    # reachable[i][j]: some path is matched by both a[i:] and b[j:].
    n, m = len(a), len(b)
    reachable = [[False] * (m + 1) for _ in range(n + 1)]
    reachable[n][m] = True
    for i in range(n, -1, -1):
        for j in range(m, -1, -1):
            if i == n and j == m:
                continue
            if i < n and a[i] == DOUBLE_WILDCARD:
                value = reachable[i + 1][j] or (j < m and reachable[i][j + 1])
            elif j < m and b[j] == DOUBLE_WILDCARD:
                value = reachable[i][j + 1] or (i < n and reachable[i + 1][j])
            elif i == n or j == m:
                value = False
            else:
                value = _segments_overlap(a[i], b[j]) and reachable[i + 1][j + 1]
            reachable[i][j] = value
    return reachable[0][0]


def patterns_overlap(a: str, b: str) -> bool:
    """
    True if some path could be matched by both patterns.

    Conservative: two globs in the same segment position are assumed to overlap.
    """
    return _overlap(_split(a), _split(b))
