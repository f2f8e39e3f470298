from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Callable, List, Mapping, Optional, TextIO

from go_include import __version__
from go_include.core.config import STDOUT_TARGET, load_settings
from go_include.core.entries import build_entries
from go_include.core.errors import NoFilesResolvedError
from go_include.core.generators.go_gen import build_context, render_go_source, write_output
from go_include.core.observability.diagnostics import stderr_diagnostics
from go_include.core.resolver import STDIN_SENTINEL, resolve_files

log = logging.getLogger("go_include.cli")

DESCRIPTION = (
    "go-include creates a .go file containing the text or binary (base64) content of "
    "files specified by the glob pattern."
)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="go-include",
        usage="%(prog)s [-o FILE] [-t (text|bin)] [FILE|GLOB]...",
        description=DESCRIPTION,
    )
    ap.add_argument(
        "-o",
        dest="output",
        metavar="FILE",
        default=STDOUT_TARGET,
        help="filename of generated output; '.go' is appended if missing (default: - for stdout)",
    )
    ap.add_argument(
        "-t",
        dest="file_type",
        choices=("text", "bin"),
        default="text",
        help="type of file(s) input (default: text)",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("patterns", nargs="*", metavar="FILE|GLOB", help="files to include; stdin when omitted")
    return ap


def _stdin_reader(stdin: BinaryIO) -> Callable[[str], bytes]:
    def read(path: str) -> bytes:
        if path == STDIN_SENTINEL:
            return stdin.read()
        return Path(path).read_bytes()

    return read


def run(
    argv: Optional[List[str]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
    stderr: Optional[TextIO] = None,
    now: Optional[Callable[[], datetime]] = None,
) -> int:
    environ = os.environ if environ is None else environ
    stdin = sys.stdin.buffer if stdin is None else stdin
    stdout = sys.stdout.buffer if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr

    args = build_parser().parse_args(argv)

    with stderr_diagnostics(stderr) as logger:
        settings = load_settings(
            output=args.output,
            file_type=args.file_type,
            patterns=args.patterns,
            verbose=args.verbose,
            environ=environ,
        )
        logger.setLevel(settings.log_level)

        try:
            files = resolve_files(settings.patterns)
        except NoFilesResolvedError as exc:
            log.error("error: %s", exc)
            return 1
        log.info("resolved %d file(s)", len(files))

        entries = build_entries(files, settings.file_type, read_bytes=_stdin_reader(stdin))
        context = build_context(
            entries,
            package=settings.package,
            now=now() if now is not None else None,
        )
        data = render_go_source(context)

        try:
            written = write_output(data, settings.output, stdout)
        except OSError as exc:
            log.error("error: could not write %s: %s", settings.output, exc)
            return 1

        log.info(
            "wrote %d constant(s) to %s",
            len(context.entries),
            written if written is not None else "stdout",
        )
    return 0


def main() -> int:
    return run()


if __name__ == "__main__":
    raise SystemExit(main())
