from __future__ import annotations

import glob
import logging
from typing import List, Sequence

from go_include.core.errors import NoFilesResolvedError, PatternError

_log = logging.getLogger("go_include.resolver")

# Stands in for standard input when no patterns are given.
STDIN_SENTINEL = "/dev/stdin"


def validate_pattern(pattern: str) -> None:
    """Raise PatternError for patterns glob would silently misread."""
    if "\x00" in pattern:
        raise PatternError(pattern, "embedded NUL byte")

    i, n = 0, len(pattern)
    while i < n:
        if pattern[i] != "[":
            i += 1
            continue
        # Same class rules as fnmatch: optional '!', then a leading ']' is literal.
        j = i + 1
        if j < n and pattern[j] == "!":
            j += 1
        if j < n and pattern[j] == "]":
            j += 1
        while j < n and pattern[j] != "]":
            j += 1
        if j >= n:
            raise PatternError(pattern, f"unterminated character class at offset {i}")
        i = j + 1


def expand_pattern(pattern: str) -> List[str]:
    validate_pattern(pattern)
    return sorted(glob.glob(pattern, include_hidden=True))


def resolve_files(patterns: Sequence[str]) -> List[str]:
    """
    Expand patterns into an ordered file list.

    Bad or unmatched patterns are logged and skipped. Paths matched by more
    than one pattern are kept once per pattern. An empty pattern list means
    standard input.

    Raises NoFilesResolvedError when patterns were given but none matched.
    """
    if not patterns:
        return [STDIN_SENTINEL]

    files: List[str] = []
    for pattern in patterns:
        try:
            matches = expand_pattern(pattern)
        except PatternError as exc:
            _log.error("error: %s", exc)
            continue

        if matches:
            _log.debug("glob %r matched %d file(s)", pattern, len(matches))
            files.extend(matches)
        else:
            _log.warning("found no files matching '%s'", pattern)

    if not files:
        raise NoFilesResolvedError(patterns)
    return files
