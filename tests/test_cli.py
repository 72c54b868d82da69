"""CLI tests for the letlang entry point, run in a subprocess."""

import subprocess
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).parent.parent


def run_cli(args: list[str], stdin: str = "") -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "letlang", *args],
        input=stdin,
        capture_output=True,
        text=True,
        cwd=ROOT_DIR,
        timeout=10,
    )


def test_help():
    result = run_cli(["--help"])
    assert result.returncode == 0
    assert "letlang [OPTIONS]" in result.stdout


def test_check_expr_prints_type():
    result = run_cli(["-e", "let x = 10 in x + 20"])
    assert result.returncode == 0
    assert result.stdout == "int\n"
    assert result.stderr == ""


def test_type_error_reported_and_next_input_processed():
    result = run_cli(["-e", "z + 1", "--expr", "2 * 3"])
    assert result.returncode == 1
    assert result.stdout == "int\n"
    assert result.stderr == "letlang: type error: undefined name 'z' at line 1 col 1\n"


def test_parse_error_skips_only_that_input():
    result = run_cli(["-e", "let x = 1 in", "-e", "1 + 1"])
    assert result.returncode == 1
    assert result.stdout == "int\n"
    assert result.stderr.startswith("letlang: parse error: expected NUMBER")


def test_lex_error():
    result = run_cli(["-e", "@"])
    assert result.returncode == 1
    assert "unknown character: '@'" in result.stderr


def test_ast_mode():
    result = run_cli(["--ast", "-e", "2 + 3 * 4"])
    assert result.returncode == 0
    assert result.stdout == "(2 + (3 * 4))\n"


def test_tokens_mode():
    result = run_cli(["--tokens", "-e", "let a = 1"])
    assert result.returncode == 0
    assert result.stdout.split("\n") == [
        "let 'let'",
        "IDENT 'a'",
        "= '='",
        "NUMBER '1'",
        "EOF ''",
        "",
    ]


def test_file_input(tmp_path):
    src = tmp_path / "prog.let"
    src.write_text("let x = 2 in\n  let y = x * 3 in\n    y + x\n")
    result = run_cli([str(src)])
    assert result.returncode == 0
    assert result.stdout == "int\n"


def test_stdin_input():
    result = run_cli(["-"], stdin="(1 + 2) * 3")
    assert result.returncode == 0
    assert result.stdout == "int\n"


def test_missing_file():
    result = run_cli(["does-not-exist.let"])
    assert result.returncode == 1
    assert "No such file or directory" in result.stderr


@pytest.mark.parametrize(
    "args, message",
    [
        ([], "missing input"),
        (["--bogus"], "unknown flag '--bogus'"),
        (["-e"], "-e requires an argument"),
    ],
)
def test_usage_errors(args, message):
    result = run_cli(args)
    assert result.returncode == 2
    assert message in result.stderr


def test_long_flat_sum():
    source = " + ".join(["1"] * 3000)
    result = run_cli(["-e", source])
    assert result.returncode == 0
    assert result.stdout == "int\n"
    assert result.stderr == ""
    result = run_cli(["--ast", "-e", source])
    assert result.returncode == 0
    assert result.stdout.startswith("(" * 2999 + "1 + 1)")


def test_deep_parens_reported_as_parse_error():
    source = "(" * 3000 + "1" + ")" * 3000
    result = run_cli(["-e", source])
    assert result.returncode == 1
    assert "Traceback" not in result.stderr
    assert "letlang: parse error: expression nested too deeply" in result.stderr
