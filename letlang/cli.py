"""letlang CLI — parse and type-check expressions."""

from __future__ import annotations

import sys

from . import check, parse, to_parenthesized, tokenize
from .check import CheckError, type_name
from .parse import ParseError
from .tokens import TokenizeError


USAGE: str = """\
letlang [OPTIONS] [FILE ...]

Type-check letlang expressions. Each -e argument and each FILE is
checked independently; '-' reads standard input.

Options:
  -e, --expr EXPR  Check EXPR (repeatable)
  --tokens         Print the token stream instead of checking
  --ast            Print the fully parenthesized AST instead of checking
  --help           Show this help message
"""

MODE_CHECK = "check"
MODE_TOKENS = "tokens"
MODE_AST = "ast"


def _read_input(path: str) -> str | None:
    """Return the text of path ('-' is stdin), or None after reporting."""
    if path == "-":
        return sys.stdin.read()
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except FileNotFoundError:
        print("letlang: " + path + ": No such file or directory", file=sys.stderr)
        return None
    except OSError as e:
        print("letlang: " + path + ": " + str(e), file=sys.stderr)
        return None
    try:
        return raw.decode("utf-8")
    except ValueError:
        print("letlang: " + path + ": invalid utf-8", file=sys.stderr)
        return None


def run_one(source: str, mode: str) -> bool:
    """Run the pipeline on one input. Returns True on success."""
    if mode == MODE_TOKENS:
        try:
            tokens = tokenize(source)
        except TokenizeError as e:
            print("letlang: parse error: " + str(e), file=sys.stderr)
            return False
        for tok in tokens:
            print(tok.type + " " + repr(tok.value))
        return True

    try:
        expr = parse(source)
    except (TokenizeError, ParseError) as e:
        print("letlang: parse error: " + str(e), file=sys.stderr)
        return False

    if mode == MODE_AST:
        print(to_parenthesized(expr))
        return True

    result = check(expr)
    if isinstance(result, CheckError):
        print("letlang: type error: " + str(result), file=sys.stderr)
        return False
    print(type_name(result))
    return True


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    # (kind, text): kind is "expr" or "file"
    inputs: list[tuple[str, str]] = []
    mode = MODE_CHECK
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        elif arg == "-e" or arg == "--expr":
            if i + 1 >= len(args):
                print("letlang: " + arg + " requires an argument", file=sys.stderr)
                return 2
            inputs.append(("expr", args[i + 1]))
            i += 2
        elif arg == "--tokens":
            mode = MODE_TOKENS
            i += 1
        elif arg == "--ast":
            mode = MODE_AST
            i += 1
        elif arg.startswith("-") and arg != "-":
            print("letlang: unknown flag '" + arg + "'", file=sys.stderr)
            return 2
        else:
            inputs.append(("file", arg))
            i += 1
    if len(inputs) == 0:
        print("letlang: missing input (FILE or -e EXPR)", file=sys.stderr)
        return 2

    ok = True
    for kind, text in inputs:
        if kind == "file":
            source = _read_input(text)
            if source is None:
                ok = False
                continue
        else:
            source = text
        if not run_one(source, mode):
            ok = False
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
