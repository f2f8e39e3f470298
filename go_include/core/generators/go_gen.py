from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from go_include.core.config import DEFAULT_PACKAGE, STDOUT_TARGET
from go_include.core.spec_schema import Entry, GenerationContext

PACKAGE_ROOT = Path(__file__).resolve().parents[2]
TEMPLATES_DIR = PACKAGE_ROOT / "templates"

GO_SUFFIX = ".go"


def format_timestamp(moment: datetime) -> str:
    """RFC 3339 with second precision; naive datetimes are taken as local time."""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    stamp = moment.isoformat(timespec="seconds")
    if stamp.endswith("+00:00"):
        stamp = stamp[: -len("+00:00")] + "Z"
    return stamp


def build_context(
    entries: Sequence[Entry],
    *,
    package: str = DEFAULT_PACKAGE,
    now: Optional[datetime] = None,
) -> GenerationContext:
    moment = now if now is not None else datetime.now().astimezone()
    return GenerationContext(
        timestamp=format_timestamp(moment),
        package=package,
        entries=list(entries),
    )


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(enabled_extensions=()),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_go_source(context: GenerationContext) -> bytes:
    template = _environment().get_template("go/include.go.j2")
    text = template.render(
        timestamp=context.timestamp,
        package=context.package,
        entries=context.entries,
    )
    # Text entries may carry surrogate-escaped bytes from non-UTF-8 input.
    return text.encode("utf-8", errors="surrogateescape")


def output_path(target: str) -> Path:
    if not target.endswith(GO_SUFFIX):
        target += GO_SUFFIX
    return Path(target)


def write_output(data: bytes, target: str, stdout: BinaryIO) -> Optional[Path]:
    """
    Write rendered source to stdout ("-") or to a .go file.

    Returns the file path written, or None for stdout.
    """
    if target == STDOUT_TARGET:
        stdout.write(data)
        stdout.flush()
        return None

    path = output_path(target)
    path.write_bytes(data)
    return path
