from __future__ import annotations

from typing import List, Sequence


class GoIncludeError(RuntimeError):
    pass


class PatternError(GoIncludeError):
    """A glob pattern could not be parsed."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"with glob '{pattern}': {reason}")
        self.pattern = pattern
        self.reason = reason


class NoFilesResolvedError(GoIncludeError):
    def __init__(self, patterns: Sequence[str]):
        self.patterns: List[str] = list(patterns)
        super().__init__(f"found no files matching glob(s) [{' '.join(self.patterns)}]")
