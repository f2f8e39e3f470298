from __future__ import annotations

import base64
import logging
import os
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from go_include.core.config import FileType
from go_include.core.spec_schema import Entry

_log = logging.getLogger("go_include.entries")

ReadBytes = Callable[[str], bytes]

# Closes the raw string, appends an interpreted "`", reopens the raw string.
BACKTICK_ESCAPE = '` + "`" + `'


def _is_separator(ch: str) -> bool:
    if ch.isascii():
        return not (ch.isalnum() or ch == "_")
    if ch.isalnum():
        return False
    return ch.isspace()


def title_words(name: str) -> str:
    """
    Upper-case the first letter of each word, leaving the rest untouched.

    Unlike str.title(), inner capitals survive ("myFile" -> "MyFile") and '_'
    does not start a new word ("my_file" -> "My_file").
    """
    out = []
    prev = " "
    for ch in name:
        if _is_separator(prev):
            upper = ch.upper()
            out.append(upper if len(upper) == 1 else ch)
        else:
            out.append(ch)
        prev = ch
    return "".join(out)


def derive_name(path: str) -> str:
    base = os.path.basename(path)
    dot = base.rfind(".")
    stem = base[:dot] if dot >= 0 else base
    return title_words(stem)


def encode_content(data: bytes, file_type: FileType) -> str:
    if file_type == "bin":
        return base64.b64encode(data).decode("ascii")
    if file_type == "text":
        # surrogateescape keeps undecodable bytes intact through render/encode.
        text = data.decode("utf-8", errors="surrogateescape")
        return text.replace("`", BACKTICK_ESCAPE)
    raise ValueError(f"unknown file type {file_type!r}")


def build_entry(path: str, data: bytes, file_type: FileType) -> Entry:
    name = derive_name(path)
    return Entry(
        name=name,
        content=encode_content(data, file_type),
        comment=f"{name} was sourced from {file_type} file {path}",
    )


def _read_path(path: str) -> bytes:
    return Path(path).read_bytes()


def build_entries(
    files: Sequence[str],
    file_type: FileType,
    *,
    read_bytes: Optional[ReadBytes] = None,
) -> List[Entry]:
    """Read and encode each file in order; unreadable files are logged and skipped."""
    read = read_bytes or _read_path

    entries: List[Entry] = []
    for path in files:
        try:
            data = read(path)
        except OSError as exc:
            _log.error("error: could not open %s", path)
            _log.debug("read of %s failed: %s", path, exc)
            continue
        entries.append(build_entry(path, data, file_type))
    return entries
