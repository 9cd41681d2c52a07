"""Kinds of nodes and tokens in the syntax tree."""

from __future__ import annotations

from enum import IntEnum, auto

from .token_kind import TokenKind


class SyntaxKind(IntEnum):
    """Kind of a node or token in the tree; values follow declaration order from 0."""

    def _generate_next_value_(name, start, count, last_values):  # noqa: N805
        return count

    # Marker
    Error = auto()

    # Syntax nodes
    SourceFile = auto()
    StatementList = auto()
    Include = auto()
    Class = auto()
    Def = auto()
    Let = auto()
    LetList = auto()
    LetItem = auto()
    MultiClass = auto()
    Defm = auto()
    Defset = auto()
    Defvar = auto()
    Foreach = auto()
    ForeachIterator = auto()
    If = auto()
    Assert = auto()
    TemplateArgList = auto()
    TemplateArgDecl = auto()
    RecordBody = auto()
    ParentClassList = auto()
    ClassRef = auto()
    ArgValueList = auto()
    PositionalArgValueList = auto()
    NamedArgValueList = auto()
    NamedArgValue = auto()
    Body = auto()
    BodyItem = auto()
    FieldDef = auto()
    CodeType = auto()
    FieldLet = auto()
    BitType = auto()
    IntType = auto()
    StringType = auto()
    DagType = auto()
    BitsType = auto()
    ListType = auto()
    ClassId = auto()
    Value = auto()
    InnerValue = auto()
    RangeSuffix = auto()
    RangeList = auto()
    RangePiece = auto()
    SliceSuffix = auto()
    SliceElements = auto()
    SliceElement = auto()
    FieldSuffix = auto()
    Integer = auto()
    String = auto()
    Code = auto()
    Boolean = auto()
    Uninitialized = auto()
    Bits = auto()
    ValueList = auto()
    List = auto()
    Dag = auto()
    DagArgList = auto()
    DagArg = auto()
    VarName = auto()
    Identifier = auto()
    ClassValue = auto()
    BangOperator = auto()
    CondOperator = auto()
    CondClause = auto()

    # Token markers
    Eof = auto()
    Whitespace = auto()
    LineComment = auto()
    BlockComment = auto()

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
    AssertKw = auto()
    Bit = auto()
    BitsKw = auto()
    ClassKw = auto()
    CodeKw = auto()
    DagKw = auto()
    DefKw = auto()
    DefmKw = auto()
    DefsetKw = auto()
    DefvarKw = auto()
    ElseKw = auto()
    Field = auto()
    ForeachKw = auto()
    IfKw = auto()
    In = auto()
    IncludeKw = auto()
    Int = auto()
    LetKw = auto()
    ListKw = auto()
    MultiClassKw = auto()
    StringKw = auto()
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
    VarNameKw = auto()
    CodeFragment = auto()

    # Preprocessor tokens
    PreProcessor = auto()

    def __repr__(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name


# Token kinds whose tree kind carries a different name.
_RENAMED = {
    TokenKind.Assert: SyntaxKind.AssertKw,
    TokenKind.Bits: SyntaxKind.BitsKw,
    TokenKind.Class: SyntaxKind.ClassKw,
    TokenKind.Code: SyntaxKind.CodeKw,
    TokenKind.Dag: SyntaxKind.DagKw,
    TokenKind.Def: SyntaxKind.DefKw,
    TokenKind.Defm: SyntaxKind.DefmKw,
    TokenKind.Defset: SyntaxKind.DefsetKw,
    TokenKind.Defvar: SyntaxKind.DefvarKw,
    TokenKind.Foreach: SyntaxKind.ForeachKw,
    TokenKind.If: SyntaxKind.IfKw,
    TokenKind.Include: SyntaxKind.IncludeKw,
    TokenKind.Let: SyntaxKind.LetKw,
    TokenKind.List: SyntaxKind.ListKw,
    TokenKind.MultiClass: SyntaxKind.MultiClassKw,
    TokenKind.String: SyntaxKind.StringKw,
    TokenKind.VarName: SyntaxKind.VarNameKw,
    TokenKind.Ifdef: SyntaxKind.PreProcessor,
    TokenKind.Ifndef: SyntaxKind.PreProcessor,
    TokenKind.Else: SyntaxKind.PreProcessor,
    TokenKind.Endif: SyntaxKind.PreProcessor,
    TokenKind.Define: SyntaxKind.PreProcessor,
}

_TOKEN_TO_SYNTAX = {
    kind: _RENAMED.get(kind) or SyntaxKind[kind.name] for kind in TokenKind
}


def syntax_kind_of(kind: TokenKind) -> SyntaxKind:
    """Tree kind under which a token of the given kind is stored."""
    return _TOKEN_TO_SYNTAX[kind]