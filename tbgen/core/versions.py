"""
Version comparison for add-on and application version strings.

Handles the loose version values found in add-on manifests and in the
add-on directory:
- plain dotted numbers ("91.0", "4", "102.0.1")
- pre-release tags ("91.0a1", "102.0b3"), which sort before the release
- the "*" wildcard, which means "no upper bound" and beats everything

Comparison is best-effort: malformed values never raise, unknown fragments
simply count as 0.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from functools import cmp_to_key
from typing import Any

WILDCARD = "*"

# Offset applied to the code point of a pre-release tag so it sorts below 0.
TAG_OFFSET = 65536

_RE_NON_NUMERIC = re.compile(r"[^0-9.]+")
_RE_NON_WORD = re.compile(r"[\W_]+", re.ASCII)
# Drop ".0" groups in front of the last tag, e.g. "1.0.0b1" -> "1.b1".
_RE_TRAILING_ZEROS = re.compile(r"(?:\.0+)*(\.-[0-9]+)(\.[0-9]+)?\.*$")


def is_wildcard(value: Any) -> bool:
    return value == WILDCARD


def _tag_segment(match: re.Match[str]) -> str:
    run = _RE_NON_WORD.sub("", match.group(0), count=1)
    code = str(ord(run.lower()[0]) - TAG_OFFSET) if run else ""
    return f".{code}."


def _to_int(segment: str) -> int:
    try:
        return int(segment)
    except ValueError:
        return 0


def normalize_version(value: Any) -> list[int]:
    """
    Turn a version value into the list of integer segments used for ordering.

    >>> normalize_version("91.0a1")
    [91, -65439, 1]
    """
    text = _RE_NON_NUMERIC.sub(_tag_segment, "" if value is None else str(value))
    text = _RE_TRAILING_ZEROS.sub(lambda m: m.group(1) + (m.group(2) or ""), text)
    return [_to_int(part) for part in text.split(".")]


def compare_versions(a: Any, b: Any) -> int:
    """
    Compare two version values.

    Returns -1 if a < b, 0 if both are equal and 1 if a > b.
    """
    if is_wildcard(a) or is_wildcard(b):
        if is_wildcard(a) and is_wildcard(b):
            return 0
        return 1 if is_wildcard(a) else -1

    left = normalize_version(a)
    right = normalize_version(b)
    for i in range(max(len(left), len(right))):
        x = left[i] if i < len(left) else 0
        y = right[i] if i < len(right) else 0
        if x > y:
            return 1
        if x < y:
            return -1
    return 0


version_sort_key: Callable[[Any], Any] = cmp_to_key(compare_versions)
