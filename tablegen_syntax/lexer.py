"""Lexer turning TableGen source text into a stream of tokens."""

from __future__ import annotations

import re
from typing import Callable, Optional, Union

from .token_kind import TokenKind

_ASCII_WHITESPACE = " \t\n\x0c\r"
_DIGITS = "0123456789"
_HEX_DIGITS = "0123456789abcdefABCDEF"

_KEYWORDS = {
    "assert": TokenKind.Assert,
    "bit": TokenKind.Bit,
    "bits": TokenKind.Bits,
    "class": TokenKind.Class,
    "code": TokenKind.Code,
    "dag": TokenKind.Dag,
    "def": TokenKind.Def,
    "defm": TokenKind.Defm,
    "defset": TokenKind.Defset,
    "defvar": TokenKind.Defvar,
    "else": TokenKind.ElseKw,
    "field": TokenKind.Field,
    "foreach": TokenKind.Foreach,
    "if": TokenKind.If,
    "in": TokenKind.In,
    "include": TokenKind.Include,
    "int": TokenKind.Int,
    "let": TokenKind.Let,
    "list": TokenKind.List,
    "multiclass": TokenKind.MultiClass,
    "string": TokenKind.String,
    "then": TokenKind.Then,
    "true": TokenKind.TrueVal,
    "false": TokenKind.FalseVal,
}

_BANG_OPERATORS = {
    "concat": TokenKind.XConcat,
    "add": TokenKind.XAdd,
    "sub": TokenKind.XSub,
    "mul": TokenKind.XMul,
    "div": TokenKind.XDiv,
    "not": TokenKind.XNot,
    "log2": TokenKind.XLog2,
    "and": TokenKind.XAnd,
    "or": TokenKind.XOr,
    "xor": TokenKind.XXor,
    "sra": TokenKind.XSra,
    "srl": TokenKind.XSrl,
    "shl": TokenKind.XShl,
    "listconcat": TokenKind.XListConcat,
    "listsplat": TokenKind.XListSplat,
    "strconcat": TokenKind.XStrConcat,
    "interleave": TokenKind.XInterleave,
    "substr": TokenKind.XSubstr,
    "find": TokenKind.XFind,
    "cast": TokenKind.XCast,
    "subst": TokenKind.XSubst,
    "foreach": TokenKind.XForEach,
    "filter": TokenKind.XFilter,
    "foldl": TokenKind.XFoldl,
    "head": TokenKind.XHead,
    "tail": TokenKind.XTail,
    "size": TokenKind.XSize,
    "empty": TokenKind.XEmpty,
    "if": TokenKind.XIf,
    "cond": TokenKind.XCond,
    "eq": TokenKind.XEq,
    "isa": TokenKind.XIsA,
    "dag": TokenKind.XDag,
    "ne": TokenKind.XNe,
    "le": TokenKind.XLe,
    "lt": TokenKind.XLt,
    "ge": TokenKind.XGe,
    "gt": TokenKind.XGt,
    "setdagop": TokenKind.XSetDagOp,
    "getdagop": TokenKind.XGetDagOp,
    "exists": TokenKind.XExists,
    "listremove": TokenKind.XListRemove,
    "tolower": TokenKind.XToLower,
    "toupper": TokenKind.XToUpper,
    "range": TokenKind.XRange,
    "getdagarg": TokenKind.XGetDagArg,
    "getdagname": TokenKind.XGetDagName,
    "setdagarg": TokenKind.XSetDagArg,
    "setdagname": TokenKind.XSetDagName,
}

_DIRECTIVES = {
    "ifdef": TokenKind.Ifdef,
    "ifndef": TokenKind.Ifndef,
    "else": TokenKind.Else,
    "endif": TokenKind.Endif,
    "define": TokenKind.Define,
}

_PUNCTUATION = {
    "[": TokenKind.LSquare,
    "]": TokenKind.RSquare,
    "{": TokenKind.LBrace,
    "}": TokenKind.RBrace,
    "(": TokenKind.LParen,
    ")": TokenKind.RParen,
    "<": TokenKind.Less,
    ">": TokenKind.Greater,
    ":": TokenKind.Colon,
    ";": TokenKind.Semi,
    ",": TokenKind.Comma,
    "=": TokenKind.Equal,
    "?": TokenKind.Question,
}

_INVALID_NUMBER = {
    2: "Invalid binary number",
    10: "Invalid number",
    16: "Invalid hexadecimal number",
}

_BASE_DIGITS = {2: "01", 10: _DIGITS, 16: _HEX_DIGITS}

_HEX_RE = re.compile(r"\+?[0-9a-fA-F]+")
_BIN_RE = re.compile(r"\+?[01]+")
_DEC_RE = re.compile(r"\+?[0-9]+")
_NEG_RE = re.compile(r"-[0-9]+")

_U64_LIMIT = 1 << 64
_I64_SIGN = 1 << 63


def _is_whitespace(c: str) -> bool:
    return c.isspace() and c not in "\x1c\x1d\x1e\x1f"


def _is_digit(c: str) -> bool:
    return c in _DIGITS


def _is_ascii_alpha(c: str) -> bool:
    return ("a" <= c <= "z") or ("A" <= c <= "Z")


def _is_identifier_start(c: str) -> bool:
    return _is_ascii_alpha(c) or c == "_"


def _is_identifier_continue(c: str) -> bool:
    return _is_identifier_start(c) or _is_digit(c)


def _is_newline(c: str) -> bool:
    return c in "\r\n"


def _unsigned_to_i64(value: int) -> Optional[int]:
    if value >= _U64_LIMIT:
        return None
    return value - _U64_LIMIT if value >= _I64_SIGN else value


def interpret_number(text: str) -> Optional[int]:
    """Value of an integer literal as a signed 64-bit number, or None if invalid.

    Unsigned literals that do not fit in 63 bits wrap around to negative values.
    """
    if text.startswith("0x"):
        rest = text[2:]
        return _unsigned_to_i64(int(rest, 16)) if _HEX_RE.fullmatch(rest) else None
    if text.startswith("0b"):
        rest = text[2:]
        return _unsigned_to_i64(int(rest, 2)) if _BIN_RE.fullmatch(rest) else None
    if text.startswith("-"):
        if not _NEG_RE.fullmatch(text):
            return None
        value = int(text)
        return value if value >= -_I64_SIGN else None
    return _unsigned_to_i64(int(text)) if _DEC_RE.fullmatch(text) else None


_Pattern = Union[str, Callable[[str], bool]]


class Lexer:
    """Token stream reading TableGen tokens directly from text."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._error: Optional[str] = None

    def eat(self) -> TokenKind:
        """Consume and return the kind of the next token."""
        return self._next_token()

    def cursor(self) -> int:
        """Current offset into the text."""
        return self._pos

    def text(self, start: int, end: int) -> str:
        """Text between two offsets."""
        return self._text[start:end]

    def take_error(self) -> Optional[str]:
        """Return and clear the message of the last error token."""
        message, self._error = self._error, None
        return message

    # -- scanning helpers ------------------------------------------------

    def _peek(self) -> Optional[str]:
        return self._text[self._pos] if self._pos < len(self._text) else None

    def _bump(self) -> Optional[str]:
        c = self._peek()
        if c is not None:
            self._pos += 1
        return c

    def _eat_if(self, pattern: _Pattern) -> bool:
        if isinstance(pattern, str):
            if self._text.startswith(pattern, self._pos):
                self._pos += len(pattern)
                return True
            return False
        c = self._peek()
        if c is not None and pattern(c):
            self._pos += 1
            return True
        return False

    def _eat_while(self, predicate: Callable[[str], bool]) -> None:
        while (c := self._peek()) is not None and predicate(c):
            self._pos += 1

    def _eat_until(self, pattern: _Pattern) -> None:
        if isinstance(pattern, str):
            index = self._text.find(pattern, self._pos)
            self._pos = len(self._text) if index < 0 else index
        else:
            self._eat_while(lambda c: not pattern(c))

    def _fail(self, message: str) -> TokenKind:
        self._error = message
        return TokenKind.Error

    # -- tokens ----------------------------------------------------------

    def _next_token(self) -> TokenKind:
        start = self._pos
        c = self._bump()
        if c is None:
            return TokenKind.Eof
        if _is_whitespace(c):
            self._eat_while(lambda ch: ch in _ASCII_WHITESPACE)
            return TokenKind.Whitespace
        if c == "/" and self._eat_if("/"):
            self._eat_until(_is_newline)
            return TokenKind.LineComment
        if c == "/" and self._eat_if("*"):
            self._eat_until("*/")
            self._eat_if("*/")
            return TokenKind.BlockComment
        if _is_digit(c) or c in "-+":
            return self._number(start, c)
        if _is_identifier_start(c):
            return self._identifier(start)
        if c == '"':
            return self._string()
        if c == "$":
            return self._var_name()
        if c == "[" and self._eat_if("{"):
            return self._code_fragment()
        if c == "!":
            return self._bang_operator()
        if c == "#":
            return self._preprocessor()
        if c == ".":
            if self._eat_if("."):
                if self._eat_if("."):
                    return TokenKind.DotDotDot
                return self._fail("Invalid '..' punctuation")
            return TokenKind.Dot
        kind = _PUNCTUATION.get(c)
        if kind is not None:
            return kind
        return self._fail("Unexpected character")

    def _number(self, start: int, c: str) -> TokenKind:
        following = self._peek()
        if following is not None and not _is_digit(following):
            if c == "+":
                return TokenKind.Plus
            if c == "-":
                return TokenKind.Minus

        base = 10
        if c == "0":
            if self._eat_if("b"):
                base = 2
            elif self._eat_if("x"):
                base = 16

        digits = _BASE_DIGITS[base]
        self._eat_while(lambda ch: ch in digits)

        if interpret_number(self._text[start:self._pos]) is None:
            return self._fail(_INVALID_NUMBER[base])
        return TokenKind.BinaryIntVal if base == 2 else TokenKind.IntVal

    def _identifier(self, start: int) -> TokenKind:
        self._eat_while(_is_identifier_continue)
        return _KEYWORDS.get(self._text[start:self._pos], TokenKind.Id)

    def _string(self) -> TokenKind:
        escaped = False
        while True:
            c = self._bump()
            if c is None:
                return self._fail("End of file in string literal")
            if c == "\\":
                escaped = True
            elif c == '"' and not escaped:
                return TokenKind.StrVal
            elif c in "\r\n":
                return self._fail("End of line in string literal")
            else:
                escaped = False

    def _var_name(self) -> TokenKind:
        if not self._eat_if(_is_identifier_start):
            return self._fail("Invalid variable name")
        self._eat_while(_is_identifier_continue)
        return TokenKind.VarName

    def _code_fragment(self) -> TokenKind:
        self._eat_until("}]")
        if self._eat_if("}]"):
            return TokenKind.CodeFragment
        return self._fail("Unterminated code block")

    def _bang_operator(self) -> TokenKind:
        start = self._pos
        self._eat_while(_is_ascii_alpha)
        kind = _BANG_OPERATORS.get(self._text[start:self._pos])
        if kind is None:
            return self._fail("Unknown operator")
        return kind

    def _preprocessor(self) -> TokenKind:
        start = self._pos
        self._eat_while(str.isalpha)
        kind = _DIRECTIVES.get(self._text[start:self._pos])
        if kind is None:
            self._pos = start
            return TokenKind.Paste
        return kind


def tokenize(text: str) -> list[TokenKind]:
    """Kinds of all tokens in the text, up to and including the end marker."""
    lexer = Lexer(text)
    tokens: list[TokenKind] = []
    while not tokens or tokens[-1] is not TokenKind.Eof:
        tokens.append(lexer.eat())
    return tokens