"""Token stream filter that evaluates preprocessor directives."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .token_kind import TokenKind, TokenStream


class _IfKind(Enum):
    DEFINED = "#ifdef"
    NOT_DEFINED = "#ifndef"


class PreProcessor:
    """Token stream that handles ``#define``, ``#ifdef``, ``#ifndef``, ``#else`` and ``#endif``.

    Each directive, together with any text it skips, comes out as one
    ``PreProcessor`` token. All other tokens pass through unchanged.
    """

    def __init__(self, token_stream: TokenStream) -> None:
        self._stream = token_stream
        self._macros: set[str] = set()
        self._error: Optional[str] = None

    def eat(self) -> TokenKind:
        """Consume and return the kind of the next token."""
        kind = self._stream.eat()
        if kind is TokenKind.Ifdef:
            return self._process_if(_IfKind.DEFINED)
        if kind is TokenKind.Ifndef:
            return self._process_if(_IfKind.NOT_DEFINED)
        if kind is TokenKind.Else:
            self._skip_until_else_or_endif()
            return TokenKind.PreProcessor
        if kind is TokenKind.Endif:
            return TokenKind.PreProcessor
        if kind is TokenKind.Define:
            return self._process_define()
        return kind

    def cursor(self) -> int:
        """Current offset into the text."""
        return self._stream.cursor()

    def text(self, start: int, end: int) -> str:
        """Text between two offsets."""
        return self._stream.text(start, end)

    def take_error(self) -> Optional[str]:
        """Return and clear the pending error, preferring the preprocessor's own."""
        if self._error is not None:
            message, self._error = self._error, None
            return message
        return self._stream.take_error()

    def define_macro(self, macro_name: str) -> None:
        """Mark a macro as defined."""
        self._macros.add(macro_name)

    def macros(self) -> frozenset[str]:
        """Names of the macros defined so far."""
        return frozenset(self._macros)

    def _fail(self, message: str) -> TokenKind:
        self._error = message
        return TokenKind.Error

    def _next_not_trivia(self) -> tuple[int, TokenKind]:
        while True:
            start = self._stream.cursor()
            kind = self._stream.eat()
            if not kind.is_trivia():
                return start, kind

    def _process_if(self, if_kind: _IfKind) -> TokenKind:
        start, kind = self._next_not_trivia()
        if kind is not TokenKind.Id:
            return self._fail(f"expected macro name after {if_kind.value}")
        macro_name = self._stream.text(start, self._stream.cursor())
        defined = macro_name in self._macros
        if defined != (if_kind is _IfKind.DEFINED):
            self._skip_until_else_or_endif()
        return TokenKind.PreProcessor

    def _process_define(self) -> TokenKind:
        start, kind = self._next_not_trivia()
        if kind is not TokenKind.Id:
            return self._fail("expected macro name after #define")
        self.define_macro(self._stream.text(start, self._stream.cursor()))
        return TokenKind.PreProcessor

    def _skip_until_else_or_endif(self) -> None:
        depth = 1
        while True:
            kind = self._stream.eat()
            if kind in (TokenKind.Ifdef, TokenKind.Ifndef):
                depth += 1
            elif kind is TokenKind.Endif and depth >= 2:
                depth -= 1
            elif kind in (TokenKind.Else, TokenKind.Endif) and depth == 1:
                return
            elif kind is TokenKind.Eof:
                self._error = "reached EOF without matching #endif"
                return