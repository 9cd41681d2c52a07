"""Grammar rules for values, types and template argument lists."""

from __future__ import annotations

from typing import Callable

from .parser import Parser
from .syntax_kind import SyntaxKind
from .token_kind import TokenKind

VALUE_START = frozenset(
    {
        TokenKind.IntVal,
        TokenKind.BinaryIntVal,
        TokenKind.StrVal,
        TokenKind.CodeFragment,
        TokenKind.TrueVal,
        TokenKind.FalseVal,
        TokenKind.Question,
        TokenKind.LBrace,
        TokenKind.LSquare,
        TokenKind.LParen,
        TokenKind.Id,
        TokenKind.VarName,
        TokenKind.XCond,
    }
    | {kind for kind in TokenKind if kind.is_bang_operator()}
)

TYPE_FIRST_TOKENS = frozenset(
    {
        TokenKind.Bit,
        TokenKind.Int,
        TokenKind.String,
        TokenKind.Dag,
        TokenKind.Bits,
        TokenKind.List,
        TokenKind.Code,
        TokenKind.Id,
    }
)

_RANGE_SEPARATORS = frozenset({TokenKind.DotDotDot, TokenKind.Minus})
_DAG_OPERATOR_START = frozenset(
    {TokenKind.Id, TokenKind.XCast, TokenKind.Question, TokenKind.XGetDagOp}
)


def delimited(
    p: Parser,
    bra: TokenKind,
    ket: TokenKind,
    delim: TokenKind,
    parse_item: Callable[[Parser], object],
) -> None:
    """Parse ``bra item (delim item)* delim? ket``."""
    p.expect(bra)
    while not p.at(ket) and not p.eof():
        parse_item(p)
        if not p.eat_if(delim):
            break
    p.expect(ket)


def _single_token_node(p: Parser, node: SyntaxKind, *kinds: TokenKind) -> bool:
    p.start_node(node)
    ok = any(p.eat_if(kind) for kind in kinds)
    p.finish_node()
    return ok


# -- values ------------------------------------------------------------------


def opt_value(p: Parser) -> None:
    """Parse a value if one starts at the current token."""
    if p.at_set(VALUE_START):
        value(p)


def value(p: Parser) -> bool:
    """Value ::= InnerValue ( "#" InnerValue )*"""
    p.start_node(SyntaxKind.Value)
    inner_value(p)
    while p.eat_if(TokenKind.Paste):
        inner_value(p)
    p.finish_node()
    return True


def inner_value(p: Parser) -> bool:
    """InnerValue ::= SimpleValue ValueSuffix*"""
    p.start_node(SyntaxKind.InnerValue)
    if not simple_value(p):
        p.finish_node()
        return False
    while value_suffix(p):
        pass
    p.finish_node()
    return True


def opt_name_value(p: Parser) -> None:
    """Parse a record name value if one starts at the current token."""
    if p.at_set(VALUE_START):
        name_value(p)


def name_value(p: Parser) -> bool:
    """Value in name position, where a '{' starts the body rather than a range."""
    p.start_node(SyntaxKind.Value)
    inner_name_value(p)
    while p.eat_if(TokenKind.Paste):
        inner_name_value(p)
    p.finish_node()
    return True


def inner_name_value(p: Parser) -> bool:
    """InnerValue in name position: suffixes stop before '{'."""
    p.start_node(SyntaxKind.InnerValue)
    if not simple_value(p):
        p.finish_node()
        return False
    while not p.at(TokenKind.LBrace) and value_suffix(p):
        pass
    p.finish_node()
    return True


def value_suffix(p: Parser) -> bool:
    """ValueSuffix ::= RangeSuffix | SliceSuffix | FieldSuffix"""
    kind = p.peek()
    if kind is TokenKind.LBrace:
        range_suffix(p)
    elif kind is TokenKind.LSquare:
        slice_suffix(p)
    elif kind is TokenKind.Dot:
        field_suffix(p)
    else:
        return False
    return True


def range_suffix(p: Parser) -> bool:
    """RangeSuffix ::= "{" RangeList "}" """
    p.start_node(SyntaxKind.RangeSuffix)
    p.bump(TokenKind.LBrace)
    range_list(p)
    p.expect_with_msg(TokenKind.RBrace, "expected '}' at end of bit range list")
    p.finish_node()
    return True


def range_list(p: Parser) -> bool:
    """RangeList ::= RangePiece ( "," RangePiece )*"""
    p.start_node(SyntaxKind.RangeList)
    while not p.eof():
        range_piece(p)
        if not p.eat_if(TokenKind.Comma):
            break
    p.finish_node()
    return True


def range_piece(p: Parser) -> bool:
    """RangePiece ::= Integer | Integer "..." Integer | Integer "-" Integer | Integer Integer"""
    p.start_node(SyntaxKind.RangePiece)
    p.error_unless(integer(p), "expected integer or bitrange")
    if p.at_set(_RANGE_SEPARATORS):
        p.eat()
    if p.at(TokenKind.IntVal):
        p.error_unless(integer(p), "expected integer value as end of range")
    p.finish_node()
    return True


def slice_suffix(p: Parser) -> bool:
    """SliceSuffix ::= "[" SliceElements "]" """
    p.start_node(SyntaxKind.SliceSuffix)
    p.bump(TokenKind.LSquare)
    slice_elements(p)
    p.expect_with_msg(TokenKind.RSquare, "expected ']' at end of list slice")
    p.finish_node()
    return True


def slice_elements(p: Parser) -> bool:
    """SliceElements ::= ( SliceElement "," )* SliceElement ","?"""
    p.start_node(SyntaxKind.SliceElements)
    while not p.eof():
        slice_element(p)
        if not p.eat_if(TokenKind.Comma) or p.at(TokenKind.RSquare):
            break
    p.finish_node()
    return True


def slice_element(p: Parser) -> bool:
    """SliceElement ::= Value | Value "..." Value | Value "-" Value | Value Integer"""
    p.start_node(SyntaxKind.SliceElement)
    value(p)
    if p.at_set(_RANGE_SEPARATORS):
        p.eat()
    opt_value(p)
    p.finish_node()
    return True


def field_suffix(p: Parser) -> bool:
    """FieldSuffix ::= "." Identifier"""
    p.start_node(SyntaxKind.FieldSuffix)
    p.bump(TokenKind.Dot)
    p.error_unless(identifier(p), "expected field identifier after '.'")
    p.finish_node()
    return True


def simple_value(p: Parser) -> bool:
    """Parse any simple value; report an error if none starts here."""
    kind = p.peek()
    if kind in (TokenKind.IntVal, TokenKind.BinaryIntVal):
        return integer(p)
    if kind is TokenKind.StrVal:
        return string_value(p)
    if kind is TokenKind.CodeFragment:
        return code(p)
    if kind in (TokenKind.TrueVal, TokenKind.FalseVal):
        return boolean(p)
    if kind is TokenKind.Question:
        return uninitialized(p)
    if kind is TokenKind.LBrace:
        return bits(p)
    if kind is TokenKind.LSquare:
        return list_value(p)
    if kind is TokenKind.LParen:
        return dag(p)
    if kind is TokenKind.Id:
        return identifier_or_class_value(p)
    if kind.is_bang_operator():
        return bang_operator(p)
    if kind.is_cond_operator():
        return cond_operator(p)
    p.error_and_recover("unknown token when parsing a value")
    return False


def integer(p: Parser) -> bool:
    """Integer ::= INT"""
    return _single_token_node(p, SyntaxKind.Integer, TokenKind.IntVal, TokenKind.BinaryIntVal)


def string_value(p: Parser) -> bool:
    """String ::= STRING+ (adjacent literals are concatenated)"""
    p.start_node(SyntaxKind.String)
    ok = p.at(TokenKind.StrVal)
    while p.eat_if(TokenKind.StrVal):
        pass
    p.finish_node()
    return ok


def code(p: Parser) -> bool:
    """Code ::= CODE"""
    return _single_token_node(p, SyntaxKind.Code, TokenKind.CodeFragment)


def boolean(p: Parser) -> bool:
    """Boolean ::= "true" | "false" """
    return _single_token_node(p, SyntaxKind.Boolean, TokenKind.TrueVal, TokenKind.FalseVal)


def uninitialized(p: Parser) -> bool:
    """Uninitialized ::= "?" """
    return _single_token_node(p, SyntaxKind.Uninitialized, TokenKind.Question)


def bits(p: Parser) -> bool:
    """Bits ::= "{" ValueList "}" """
    p.start_node(SyntaxKind.Bits)
    value_list(p, TokenKind.LBrace, TokenKind.RBrace)
    p.finish_node()
    return True


def list_value(p: Parser) -> bool:
    """List ::= "[" ValueList "]" ( "<" Type ">" )?"""
    p.start_node(SyntaxKind.List)
    value_list(p, TokenKind.LSquare, TokenKind.RSquare)
    if p.eat_if(TokenKind.Less):
        parse_type(p)
        p.expect_with_msg(TokenKind.Greater, "expected '>' at end of list element type")
    p.finish_node()
    return True


def value_list(p: Parser, bra: TokenKind, ket: TokenKind) -> bool:
    """ValueList ::= Value ( "," Value )* between the given brackets."""
    p.start_node(SyntaxKind.ValueList)
    delimited(p, bra, ket, TokenKind.Comma, value)
    p.finish_node()
    return True


def dag(p: Parser) -> bool:
    """Dag ::= "(" DagArg DagArgList? ")" """
    p.start_node(SyntaxKind.Dag)
    p.expect(TokenKind.LParen)
    if not p.at_set(_DAG_OPERATOR_START):
        p.error("expected identifier in dag init")
        p.finish_node()
        return False
    dagarg(p)
    if not p.at(TokenKind.RParen):
        dagarg_list(p)
    p.expect_with_msg(TokenKind.RParen, "expected ')' in dag init")
    p.finish_node()
    return True


def dagarg_list(p: Parser) -> bool:
    """DagArgList ::= DagArg ( "," DagArg )*"""
    p.start_node(SyntaxKind.DagArgList)
    while not p.eof():
        dagarg(p)
        if not p.eat_if(TokenKind.Comma):
            break
    p.finish_node()
    return True


def dagarg(p: Parser) -> bool:
    """DagArg ::= Value ( ":" VARNAME )? | VARNAME"""
    p.start_node(SyntaxKind.DagArg)
    if p.eat_if(TokenKind.VarName):
        p.finish_node()
        return True
    value(p)
    if p.eat_if(TokenKind.Colon):
        p.error_unless(var_name(p), "expected variable name in dag literal")
    p.finish_node()
    return True


def var_name(p: Parser) -> bool:
    """VarName ::= VARNAME"""
    return _single_token_node(p, SyntaxKind.VarName, TokenKind.VarName)


def identifier(p: Parser) -> bool:
    """Identifier ::= ID"""
    return _single_token_node(p, SyntaxKind.Identifier, TokenKind.Id)


def identifier_or_class_value(p: Parser) -> bool:
    """Identifier, or ClassValue ::= Identifier "<" ArgValueList? ">" """
    checkpoint = p.checkpoint()
    ok = identifier(p)
    if not p.eat_if(TokenKind.Less):
        return ok
    p.start_node_at(checkpoint, SyntaxKind.ClassValue)
    arg_value_list(p)
    p.expect_with_msg(TokenKind.Greater, "expected '>' at end of value list")
    p.finish_node()
    return True


def bang_operator(p: Parser) -> bool:
    """BangOperator ::= BANGOP ( "<" Type ">" )? "(" ValueList ")" """
    p.start_node(SyntaxKind.BangOperator)
    if not p.peek().is_bang_operator():
        p.error_and_recover("expected bang operator")
        p.finish_node()
        return False
    p.eat()
    if p.eat_if(TokenKind.Less):
        parse_type(p)
        p.expect(TokenKind.Greater)
    delimited(p, TokenKind.LParen, TokenKind.RParen, TokenKind.Comma, value)
    p.finish_node()
    return True


def cond_operator(p: Parser) -> bool:
    """CondOperator ::= "!cond" "(" CondClause ( "," CondClause )* ")" """
    p.start_node(SyntaxKind.CondOperator)
    p.expect(TokenKind.XCond)
    delimited(p, TokenKind.LParen, TokenKind.RParen, TokenKind.Comma, cond_clause)
    p.finish_node()
    return True


def cond_clause(p: Parser) -> bool:
    """CondClause ::= Value ":" Value"""
    p.start_node(SyntaxKind.CondClause)
    value(p)
    p.expect(TokenKind.Colon)
    value(p)
    p.finish_node()
    return True


# -- template arguments ------------------------------------------------------


def arg_value_list(p: Parser) -> None:
    """ArgValueList ::= PositionalArgValueList"""
    p.start_node(SyntaxKind.ArgValueList)
    if p.at_set(VALUE_START):
        positional_arg_value_list(p)
    p.finish_node()


def positional_arg_value_list(p: Parser) -> None:
    """PositionalArgValueList ::= Value ( "," Value )*"""
    p.start_node(SyntaxKind.PositionalArgValueList)
    while not p.eof():
        value(p)
        if not p.eat_if(TokenKind.Comma):
            break
    p.finish_node()


def named_arg_value_list(p: Parser) -> None:
    """NamedArgValueList ::= NamedArgValue ( "," NamedArgValue )*"""
    p.start_node(SyntaxKind.NamedArgValueList)
    while not p.eof():
        named_arg_value(p)
        if not p.eat_if(TokenKind.Comma):
            break
    p.finish_node()


def named_arg_value(p: Parser) -> None:
    """NamedArgValue ::= Value "=" Value"""
    p.start_node(SyntaxKind.NamedArgValue)
    value(p)
    p.expect(TokenKind.Equal)
    value(p)
    p.finish_node()


# -- types -------------------------------------------------------------------


def parse_type(p: Parser) -> None:
    """Type ::= BitType | IntType | StringType | DagType | BitsType | ListType | CodeType | ClassId"""
    kind = p.peek()
    rule = _TYPE_RULES.get(kind)
    if rule is None:
        p.error_and_recover("unknown token when expecting a type")
    else:
        rule(p)


def _keyword_type(p: Parser, node: SyntaxKind, keyword: TokenKind) -> None:
    p.start_node(node)
    p.bump(keyword)
    p.finish_node()


def bit_type(p: Parser) -> None:
    """BitType ::= "bit" """
    _keyword_type(p, SyntaxKind.BitType, TokenKind.Bit)


def int_type(p: Parser) -> None:
    """IntType ::= "int" """
    _keyword_type(p, SyntaxKind.IntType, TokenKind.Int)


def string_type(p: Parser) -> None:
    """StringType ::= "string" """
    _keyword_type(p, SyntaxKind.StringType, TokenKind.String)


def dag_type(p: Parser) -> None:
    """DagType ::= "dag" """
    _keyword_type(p, SyntaxKind.DagType, TokenKind.Dag)


def code_type(p: Parser) -> None:
    """CodeType ::= "code" """
    _keyword_type(p, SyntaxKind.CodeType, TokenKind.Code)


def bits_type(p: Parser) -> None:
    """BitsType ::= "bits" "<" Integer ">" """
    p.start_node(SyntaxKind.BitsType)
    p.bump(TokenKind.Bits)
    p.expect_with_msg(TokenKind.Less, "expected '<' after bits type")
    p.error_unless(integer(p), "expected integer in bits<n> type")
    p.expect_with_msg(TokenKind.Greater, "expected '>' at end of bits<n> type")
    p.finish_node()


def list_type(p: Parser) -> None:
    """ListType ::= "list" "<" Type ">" """
    p.start_node(SyntaxKind.ListType)
    p.bump(TokenKind.List)
    p.expect_with_msg(TokenKind.Less, "expected '<' after list type")
    parse_type(p)
    p.expect_with_msg(TokenKind.Greater, "expected '>' at end of list<ty> type")
    p.finish_node()


def class_id(p: Parser) -> None:
    """ClassId ::= Identifier"""
    p.start_node(SyntaxKind.ClassId)
    p.error_unless(identifier(p), "expected name for ClassID")
    p.finish_node()


_TYPE_RULES: dict[TokenKind, Callable[[Parser], None]] = {
    TokenKind.Bit: bit_type,
    TokenKind.Int: int_type,
    TokenKind.String: string_type,
    TokenKind.Dag: dag_type,
    TokenKind.Bits: bits_type,
    TokenKind.List: list_type,
    TokenKind.Code: code_type,
    TokenKind.Id: class_id,
}