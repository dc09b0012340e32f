"""CLI tests, run in-process through main()."""

import io
import sys

import pytest

from tinyts import cli
from tinyts.errors import UnreachableTerm
from tinyts.ast import Pos, TVar


def test_default_mode(capsys):
    assert cli.main(["1 + 2"]) == 0
    out, err = capsys.readouterr()
    assert out == "number\n"
    assert err == ""


def test_mode_flag(capsys):
    src = "const f = (o: { a: number }) => o.a; f({ a: 1, b: true })"
    assert cli.main(["--mode", "sub", src]) == 0
    assert capsys.readouterr().out == "number\n"


def test_mode_equals_flag(capsys):
    assert cli.main(["--mode=rec-func", "function f(x: number): number { return f(x); }"]) == 0
    assert capsys.readouterr().out == "(x: number) => number\n"


def test_verbose(capsys):
    assert cli.main(["--verbose", "true"]) == 0
    assert capsys.readouterr().out == "boolean\n"


def test_stdin(capsys, monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("const x = { a: true };\nx.a\n"))
    assert cli.main(["--mode", "obj", "-"]) == 0
    assert capsys.readouterr().out == "boolean\n"


def test_help(capsys):
    assert cli.main(["--help"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("tinyts [OPTIONS] SOURCE")
    assert "--mode MODE" in out


def test_type_error(capsys):
    assert cli.main(["--mode", "basic", "x"]) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert err == "tinyts: type error: unknown variable: x at line 1 col 1\n"


def test_parse_error(capsys):
    assert cli.main(["1 +"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("tinyts: parse error: expected expression")


def test_tokenize_error(capsys):
    assert cli.main(["1 # 2"]) == 1
    assert capsys.readouterr().err == "tinyts: parse error: unexpected character: '#' at line 1 col 3\n"


def test_dialect_restriction_is_a_parse_error(capsys):
    assert cli.main(["true ? 1 : 2", "--mode", "sub"]) == 1
    err = capsys.readouterr().err
    assert "conditional expressions is not supported in sub mode" in err


def test_internal_error(capsys, monkeypatch):
    def broken_check(source, mode):
        raise UnreachableTerm(TVar(Pos(1, 1), "x"))

    monkeypatch.setattr(cli, "check", broken_check)
    assert cli.main(["1"]) == 1
    assert capsys.readouterr().err.startswith("tinyts: internal error: unknown term: ")


@pytest.mark.parametrize(
    "argv,message",
    [
        ([], "missing source argument"),
        (["--mode"], "--mode requires a value"),
        (["--mode", "ts", "1"], "unknown mode 'ts'"),
        (["--bogus", "1"], "unknown flag '--bogus'"),
        (["1", "2"], "unexpected argument '2'"),
    ],
)
def test_usage_errors(capsys, argv, message):
    assert cli.main(argv) == 2
    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("tinyts: " + message + "\n")
    assert "Options:" in err
