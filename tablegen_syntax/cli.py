"""Command-line tool printing the tokens, tree or errors of a TableGen file."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence

from .lexer import Lexer
from .statements import parse
from .token_kind import TokenKind

USAGE = "usage: tablegen-parse [token|node|error] <file>"


def _print_tokens(text: str) -> None:
    lexer = Lexer(text)
    while True:
        start = lexer.cursor()
        token = lexer.eat()
        end = lexer.cursor()
        message = lexer.take_error()
        if message is not None:
            print(f"{start}..{end}: Error({message})")
        else:
            print(f"{start}..{end}: {token.name}")
        if token is TokenKind.Eof:
            break


def _print_tree(text: str) -> None:
    print(parse(text).syntax_node().debug_dump(), end="")


def _print_errors(text: str) -> None:
    for error in parse(text).errors:
        print(error)


_COMMANDS = {
    "token": _print_tokens,
    "node": _print_tree,
    "error": _print_errors,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the tool; returns the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        print(USAGE)
        return 0
    command, path = args
    action = _COMMANDS.get(command)
    if action is None:
        print(f"unknown command: {command}", file=sys.stderr)
        return 2
    action(Path(path).read_text(encoding="utf-8"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())