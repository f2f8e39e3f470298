"""
End-to-end CLI tests through go_include.main.run with injected streams.
"""
from __future__ import annotations

import base64
import io
import re

import pytest

from go_include.main import run


def _run(argv, *, environ=None, stdin=b"", now=None):
    out = io.BytesIO()
    err = io.StringIO()
    code = run(
        argv,
        environ=environ if environ is not None else {},
        stdin=io.BytesIO(stdin),
        stdout=out,
        stderr=err,
        now=(lambda: now) if now is not None else None,
    )
    return code, out.getvalue(), err.getvalue()


def _constant(source: bytes, name: str) -> str:
    m = re.search(rb"^const " + name.encode() + rb" = `(.*?)`\n\n", source, re.S | re.M)
    assert m, f"const {name} not found in output"
    return m.group(1).decode("utf-8")


# ---------------------------------------------------------------------------
# Happy paths
# ---------------------------------------------------------------------------

def test_text_mode_to_stdout(workdir, fixed_now):
    code, out, err = _run(["-t", "text", "a.txt"], now=fixed_now)
    assert code == 0
    assert err == ""
    assert out == (
        b"// Generated code. DO NOT EDIT.\n"
        b"// Generated on 2024-01-02T03:04:05Z\n"
        b"\n"
        b"package main\n"
        b"\n"
        b"// A was sourced from text file a.txt\n"
        b'const A = `hello` + "`" + `world`\n'
        b"\n"
    )


def test_text_round_trip(workdir):
    _, out, _ = _run(["a.txt"])
    assert _constant(out, "A").replace('` + "`" + `', "`") == "hello`world"


def test_bin_mode_round_trip(workdir):
    code, out, _ = _run(["-t", "bin", "gopher.png"])
    assert code == 0
    assert b"// Gopher was sourced from bin file gopher.png\n" in out
    assert base64.b64decode(_constant(out, "Gopher")) == (workdir / "gopher.png").read_bytes()


def test_glob_order_and_package(workdir):
    code, out, _ = _run(["*.txt"], environ={"GOPACKAGE": "assets"})
    assert code == 0
    assert b"\npackage assets\n" in out
    assert out.index(b"const A =") < out.index(b"const B =")


def test_stdin_when_no_patterns(fixed_now):
    code, out, _ = _run([], stdin=b"from `stdin`", now=fixed_now)
    assert code == 0
    assert b"// Stdin was sourced from text file /dev/stdin\n" in out
    assert _constant(out, "Stdin").replace('` + "`" + `', "`") == "from `stdin`"


# ---------------------------------------------------------------------------
# Output targets
# ---------------------------------------------------------------------------

def test_output_file_gets_go_suffix(workdir):
    code, out, _ = _run(["-o", "res", "b.txt"])
    assert code == 0
    assert out == b""
    assert (workdir / "res.go").exists()
    assert b"const B = `plain`" in (workdir / "res.go").read_bytes()


def test_output_file_with_suffix_unchanged(workdir):
    code, _, _ = _run(["-o", "res.go", "b.txt"])
    assert code == 0
    assert (workdir / "res.go").exists()
    assert not (workdir / "res.go.go").exists()


def test_dash_output_is_stdout(workdir):
    code, out, _ = _run(["-o", "-", "b.txt"])
    assert code == 0
    assert b"const B = `plain`" in out
    assert not (workdir / "-.go").exists()


def test_unwritable_output_fails(workdir):
    code, out, err = _run(["-o", "missing_dir/res", "b.txt"])
    assert code == 1
    assert out == b""
    assert "include: error: could not write missing_dir/res" in err


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------

def test_all_patterns_unmatched_is_fatal(workdir):
    code, out, err = _run(["-o", "res", "nope*.txt", "other*.bin"])
    assert code == 1
    assert out == b""
    assert not (workdir / "res.go").exists()
    assert "include: found no files matching 'nope*.txt'" in err
    assert "include: error: found no files matching glob(s) [nope*.txt other*.bin]" in err


def test_partial_match_continues(workdir):
    code, out, err = _run(["nope*", "b.txt"])
    assert code == 0
    assert "include: found no files matching 'nope*'" in err
    assert b"const B = `plain`" in out


def test_bad_pattern_reported(workdir):
    code, out, err = _run(["[abc", "b.txt"])
    assert code == 0
    assert "include: error: with glob '[abc'" in err
    assert b"const B" in out


def test_unreadable_match_skipped(workdir):
    (workdir / "dir.txt").mkdir()
    code, out, err = _run(["*.txt"])
    assert code == 0
    assert "include: error: could not open dir.txt" in err
    assert b"const Dir" not in out
    assert b"const A" in out and b"const B" in out


def test_verbose_logs_progress(workdir):
    code, _, err = _run(["-v", "-o", "res", "*.txt"])
    assert code == 0
    assert "include: resolved 2 file(s)" in err
    assert "include: wrote 2 constant(s) to res.go" in err


def test_unknown_log_level_warns(workdir):
    code, _, err = _run(["b.txt"], environ={"GO_INCLUDE_LOG_LEVEL": "loud"})
    assert code == 0
    assert "ignoring unknown GO_INCLUDE_LOG_LEVEL 'LOUD'" in err


def test_invalid_type_is_usage_error(workdir, capsys):
    with pytest.raises(SystemExit) as exc:
        _run(["-t", "hex", "a.txt"])
    assert exc.value.code == 2
    assert "usage: go-include" in capsys.readouterr().err
