"""
Run configuration.

Settings come from two places:
    - parsed command-line arguments (output target, encoding, patterns, -v)
    - an environment mapping handed in by the caller

Environment variables:
    GOPACKAGE            : package name of the generated file (set by `go generate`).
                           Default: main
    GO_INCLUDE_LOG_LEVEL : diagnostics threshold (DEBUG/INFO/WARNING/ERROR).
                           Default: WARNING
"""
from __future__ import annotations

import logging
from typing import List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

_log = logging.getLogger("go_include.config")

DEFAULT_PACKAGE = "main"
DEFAULT_LOG_LEVEL = "WARNING"
STDOUT_TARGET = "-"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

FileType = Literal["text", "bin"]


class IncludeSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    output: str = STDOUT_TARGET
    file_type: FileType = "text"
    patterns: List[str] = Field(default_factory=list)
    package: str = DEFAULT_PACKAGE
    log_level: str = DEFAULT_LOG_LEVEL


def resolve_package_name(environ: Mapping[str, str]) -> str:
    # An empty GOPACKAGE is still "set" and is used verbatim.
    if "GOPACKAGE" in environ:
        return environ["GOPACKAGE"]
    return DEFAULT_PACKAGE


def resolve_log_level(environ: Mapping[str, str], verbose: bool = False) -> str:
    raw = environ.get("GO_INCLUDE_LOG_LEVEL", "").strip().upper()
    level = DEFAULT_LOG_LEVEL
    if raw:
        if raw in _LOG_LEVELS:
            level = raw
        else:
            _log.warning("ignoring unknown GO_INCLUDE_LOG_LEVEL %r, using %s", raw, DEFAULT_LOG_LEVEL)

    if verbose and logging.getLevelName(level) > logging.INFO:
        level = "INFO"
    return level


def load_settings(
    *,
    output: Optional[str] = None,
    file_type: Optional[str] = None,
    patterns: Optional[List[str]] = None,
    verbose: bool = False,
    environ: Mapping[str, str],
) -> IncludeSettings:
    return IncludeSettings(
        output=output or STDOUT_TARGET,
        file_type=file_type or "text",
        patterns=list(patterns or []),
        package=resolve_package_name(environ),
        log_level=resolve_log_level(environ, verbose=verbose),
    )
