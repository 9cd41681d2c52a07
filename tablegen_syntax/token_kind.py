"""Token kinds produced by the lexer and the token stream interface."""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional, Protocol, runtime_checkable


class TokenKind(Enum):
    """Kind of a single lexical token."""

    # Markers
    Eof = auto()
    Whitespace = auto()
    LineComment = auto()
    BlockComment = auto()
    Error = auto()
    PreProcessor = auto()

    # Symbols
    Minus = auto()
    Plus = auto()
    LSquare = auto()
    RSquare = auto()
    LBrace = auto()
    RBrace = auto()
    LParen = auto()
    RParen = auto()
    Less = auto()
    Greater = auto()
    Colon = auto()
    Semi = auto()
    Comma = auto()
    Dot = auto()
    Equal = auto()
    Question = auto()
    Paste = auto()
    DotDotDot = auto()

    # Keywords
    Assert = auto()
    Bit = auto()
    Bits = auto()
    Class = auto()
    Code = auto()
    Dag = auto()
    Def = auto()
    Defm = auto()
    Defset = auto()
    Defvar = auto()
    ElseKw = auto()
    Field = auto()
    Foreach = auto()
    If = auto()
    In = auto()
    Include = auto()
    Int = auto()
    Let = auto()
    List = auto()
    MultiClass = auto()
    String = auto()
    Then = auto()

    # Bang operators
    XConcat = auto()
    XAdd = auto()
    XSub = auto()
    XMul = auto()
    XDiv = auto()
    XNot = auto()
    XLog2 = auto()
    XAnd = auto()
    XOr = auto()
    XXor = auto()
    XSra = auto()
    XSrl = auto()
    XShl = auto()
    XListConcat = auto()
    XListSplat = auto()
    XStrConcat = auto()
    XInterleave = auto()
    XSubstr = auto()
    XFind = auto()
    XCast = auto()
    XSubst = auto()
    XForEach = auto()
    XFilter = auto()
    XFoldl = auto()
    XHead = auto()
    XTail = auto()
    XSize = auto()
    XEmpty = auto()
    XIf = auto()
    XCond = auto()
    XEq = auto()
    XIsA = auto()
    XDag = auto()
    XNe = auto()
    XLe = auto()
    XLt = auto()
    XGe = auto()
    XGt = auto()
    XSetDagOp = auto()
    XGetDagOp = auto()
    XExists = auto()
    XListRemove = auto()
    XToLower = auto()
    XToUpper = auto()
    XRange = auto()
    XGetDagArg = auto()
    XGetDagName = auto()
    XSetDagArg = auto()
    XSetDagName = auto()

    # Literals
    TrueVal = auto()
    FalseVal = auto()
    IntVal = auto()
    BinaryIntVal = auto()

    # Strings
    Id = auto()
    StrVal = auto()
    VarName = auto()
    CodeFragment = auto()

    # Preprocessor directives
    Ifdef = auto()
    Ifndef = auto()
    Else = auto()
    Endif = auto()
    Define = auto()

    def __repr__(self) -> str:
        return self.name

    def is_trivia(self) -> bool:
        """Whether the token carries no syntactic meaning for the parser."""
        return self in _TRIVIA

    def is_bang_operator(self) -> bool:
        """Whether the token is a bang operator other than ``!cond``."""
        return self in _BANG_OPERATORS

    def is_cond_operator(self) -> bool:
        """Whether the token is the ``!cond`` operator."""
        return self is TokenKind.XCond


_TRIVIA = frozenset(
    {
        TokenKind.Whitespace,
        TokenKind.LineComment,
        TokenKind.BlockComment,
        TokenKind.PreProcessor,
    }
)

_BANG_OPERATORS = frozenset(
    kind
    for kind in TokenKind
    if kind.name.startswith("X") and kind is not TokenKind.XCond
)


@runtime_checkable
class TokenStream(Protocol):
    """A source of tokens over a piece of text."""

    def eat(self) -> TokenKind:
        """Consume and return the kind of the next token."""

    def cursor(self) -> int:
        """Current offset into the text."""

    def text(self, start: int, end: int) -> str:
        """Text between two offsets."""

    def take_error(self) -> Optional[str]:
        """Return and clear the message of the last error token, if any."""