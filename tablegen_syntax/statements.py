"""Grammar rules for TableGen statements and the entry point for parsing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

from .errors import ParseError
from .lexer import Lexer
from .parser import GreenNode, Parser, SyntaxNode
from .preprocessor import PreProcessor
from .syntax_kind import SyntaxKind
from .token_kind import TokenKind
from .values import (
    TYPE_FIRST_TOKENS,
    arg_value_list,
    delimited,
    identifier,
    opt_name_value,
    parse_type,
    range_list,
    range_piece,
    string_value,
    value,
)


class StatementListType(Enum):
    """How a list of statements is delimited."""

    TOP_LEVEL = auto()
    BLOCK = auto()
    SINGLE_OR_BLOCK = auto()


@dataclass(frozen=True)
class Parse:
    """Result of parsing a source file: the tree and the syntax errors found."""

    green: GreenNode
    errors: tuple[ParseError, ...]

    def syntax_node(self) -> SyntaxNode:
        """Root of the tree, placed at offset zero."""
        return SyntaxNode(self.green)


def parse(text: str) -> Parse:
    """Parse TableGen source text, evaluating preprocessor directives."""
    p = Parser(PreProcessor(Lexer(text)))
    source_file(p)
    green, errors = p.finish()
    return Parse(green, tuple(errors))


def source_file(p: Parser) -> None:
    """SourceFile ::= StatementList"""
    p.start_node(SyntaxKind.SourceFile)
    statement_list(p, StatementListType.TOP_LEVEL)
    if not p.eof():
        p.error("unexpected input at top level")
    p.finish_node()


def _statements_until_rbrace(p: Parser) -> None:
    while not p.at(TokenKind.RBrace) and not p.eof():
        statement(p)


def statement_list(p: Parser, typ: StatementListType) -> None:
    """StatementList ::= Statement*, delimited according to ``typ``."""
    p.start_node(SyntaxKind.StatementList)
    p.skip()
    if typ is StatementListType.TOP_LEVEL:
        while not p.eof():
            statement(p)
    elif typ is StatementListType.BLOCK:
        p.expect(TokenKind.LBrace)
        _statements_until_rbrace(p)
        p.expect(TokenKind.RBrace)
    elif p.eat_if(TokenKind.LBrace):
        _statements_until_rbrace(p)
        p.expect(TokenKind.RBrace)
    else:
        statement(p)
    p.finish_node()


def statement(p: Parser) -> None:
    """Statement ::= Include | Assert | Class | Def | Defm | Defset | Defvar | Foreach | If | Let | MultiClass"""
    rule = _STATEMENT_RULES.get(p.peek())
    if rule is None:
        p.error_and_eat("expected class, def, defm, defset, multiclass, let or foreach")
    else:
        rule(p)


def include(p: Parser) -> None:
    """Include ::= "include" String"""
    p.start_node(SyntaxKind.Include)
    p.bump(TokenKind.Include)
    p.error_unless(string_value(p), "expected filename after include")
    p.finish_node()


def class_statement(p: Parser) -> None:
    """Class ::= "class" Identifier TemplateArgList? RecordBody"""
    p.start_node(SyntaxKind.Class)
    p.bump(TokenKind.Class)
    p.error_unless(identifier(p), "expected class name after 'class' keyword")
    opt_template_arg_list(p)
    record_body(p)
    p.finish_node()


def def_statement(p: Parser) -> None:
    """Def ::= "def" Value? RecordBody"""
    p.start_node(SyntaxKind.Def)
    p.bump(TokenKind.Def)
    object_name(p)
    record_body(p)
    p.finish_node()


def object_name(p: Parser) -> None:
    """Optional record name, absent when a parent list or body follows directly."""
    if p.peek() not in (TokenKind.Colon, TokenKind.Semi, TokenKind.LBrace):
        opt_name_value(p)


def let_statement(p: Parser) -> None:
    """Let ::= "let" LetList "in" ( "{" Statement* "}" | Statement )"""
    p.start_node(SyntaxKind.Let)
    p.bump(TokenKind.Let)
    let_list(p)
    p.expect_with_msg(TokenKind.In, "expected 'in' at end of top-level 'let'")
    statement_list(p, StatementListType.SINGLE_OR_BLOCK)
    p.finish_node()


def let_list(p: Parser) -> None:
    """LetList ::= LetItem ( "," LetItem )*"""
    p.start_node(SyntaxKind.LetList)
    while not p.eof():
        let_item(p)
        if not p.eat_if(TokenKind.Comma):
            break
    p.finish_node()


def let_item(p: Parser) -> None:
    """LetItem ::= Identifier ( "<" RangeList ">" )? "=" Value"""
    p.start_node(SyntaxKind.LetItem)
    p.error_unless(identifier(p), "expected identifier in let expression")
    if p.eat_if(TokenKind.Less):
        range_list(p)
        p.expect_with_msg(TokenKind.Greater, "expected '>' at end of range list")
    p.expect_with_msg(TokenKind.Equal, "expected '=' in let expression")
    value(p)
    p.finish_node()


def multi_class(p: Parser) -> None:
    """MultiClass ::= "multiclass" Identifier TemplateArgList? ParentClassList "{" MultiClassStatement+ "}" """
    p.start_node(SyntaxKind.MultiClass)
    p.bump(TokenKind.MultiClass)
    p.error_unless(identifier(p), "expected identifier after multiclass for name")
    opt_template_arg_list(p)
    parent_class_list(p)
    p.expect_with_msg(TokenKind.LBrace, "expected '{' in multiclass definition")
    multi_class_statements(p)
    p.finish_node()


def multi_class_statements(p: Parser) -> None:
    """One or more multiclass statements followed by the closing brace."""
    p.start_node(SyntaxKind.StatementList)
    multi_class_statement(p)
    while not p.at(TokenKind.RBrace) and not p.eof():
        multi_class_statement(p)
    p.expect(TokenKind.RBrace)
    p.finish_node()


def multi_class_statement(p: Parser) -> None:
    """MultiClassStatement ::= Def | Defm | Foreach | Let"""
    rule = _MULTI_CLASS_RULES.get(p.peek())
    if rule is None:
        p.error_and_eat("expected 'let', 'def', 'defm' or 'foreach' in multiclass body")
    else:
        rule(p)


def defm(p: Parser) -> None:
    """Defm ::= "defm" Value? ParentClassList ";" """
    p.start_node(SyntaxKind.Defm)
    p.bump(TokenKind.Defm)
    object_name(p)
    parent_class_list(p)
    p.expect_with_msg(TokenKind.Semi, "expected ';' at end of defm")
    p.finish_node()


def defset(p: Parser) -> None:
    """Defset ::= "defset" Type Identifier "=" "{" Statement* "}" """
    p.start_node(SyntaxKind.Defset)
    p.bump(TokenKind.Defset)
    parse_type(p)
    identifier(p)
    p.expect(TokenKind.Equal)
    statement_list(p, StatementListType.BLOCK)
    p.finish_node()


def defvar(p: Parser) -> None:
    """Defvar ::= "defvar" Identifier "=" Value ";" """
    p.start_node(SyntaxKind.Defvar)
    p.bump(TokenKind.Defvar)
    identifier(p)
    p.expect(TokenKind.Equal)
    value(p)
    p.expect(TokenKind.Semi)
    p.finish_node()


def foreach(p: Parser) -> None:
    """Foreach ::= "foreach" ForeachIterator "in" ( "{" Statement* "}" | Statement )"""
    p.start_node(SyntaxKind.Foreach)
    p.bump(TokenKind.Foreach)
    foreach_iterator(p)
    p.expect(TokenKind.In)
    statement_list(p, StatementListType.SINGLE_OR_BLOCK)
    p.finish_node()


def foreach_iterator(p: Parser) -> None:
    """ForeachIterator ::= Identifier "=" ForeachIteratorInit"""
    p.start_node(SyntaxKind.ForeachIterator)
    p.error_unless(identifier(p), "expected identifier in foreach declaration")
    p.expect_with_msg(TokenKind.Equal, "expected '=' in foreach declaration")
    foreach_iterator_init(p)
    p.finish_node()


def foreach_iterator_init(p: Parser) -> None:
    """ForeachIteratorInit ::= "{" RangeList "}" | RangePiece | Value"""
    kind = p.peek()
    if kind is TokenKind.LBrace:
        p.bump(TokenKind.LBrace)
        range_list(p)
        p.expect_with_msg(TokenKind.RBrace, "expected '}' at end of bit range list")
    elif kind is TokenKind.IntVal:
        range_piece(p)
    else:
        value(p)


def if_statement(p: Parser) -> None:
    """If ::= "if" Value "then" StatementList ( "else" StatementList )?"""
    p.start_node(SyntaxKind.If)
    p.bump(TokenKind.If)
    value(p)
    p.expect(TokenKind.Then)
    statement_list(p, StatementListType.SINGLE_OR_BLOCK)
    if p.eat_if(TokenKind.ElseKw):
        statement_list(p, StatementListType.SINGLE_OR_BLOCK)
    p.finish_node()


def assert_statement(p: Parser) -> None:
    """Assert ::= "assert" Value "," Value ";" """
    p.start_node(SyntaxKind.Assert)
    p.bump(TokenKind.Assert)
    value(p)
    p.expect(TokenKind.Comma)
    value(p)
    p.expect(TokenKind.Semi)
    p.finish_node()


def opt_template_arg_list(p: Parser) -> None:
    """Parse a template argument list if one starts here."""
    if p.at(TokenKind.Less):
        template_arg_list(p)


def template_arg_list(p: Parser) -> None:
    """TemplateArgList ::= "<" TemplateArgDecl ( "," TemplateArgDecl )* ">" """
    p.start_node(SyntaxKind.TemplateArgList)
    delimited(p, TokenKind.Less, TokenKind.Greater, TokenKind.Comma, template_arg_decl)
    p.finish_node()


def template_arg_decl(p: Parser) -> None:
    """TemplateArgDecl ::= Type Identifier ( "=" Value )?"""
    p.start_node(SyntaxKind.TemplateArgDecl)
    parse_type(p)
    p.error_unless(identifier(p), "expected identifier in declaration")
    if p.eat_if(TokenKind.Equal):
        value(p)
    p.finish_node()


def record_body(p: Parser) -> None:
    """RecordBody ::= ParentClassList Body"""
    p.start_node(SyntaxKind.RecordBody)
    parent_class_list(p)
    body(p)
    p.finish_node()


def parent_class_list(p: Parser) -> None:
    """ParentClassList ::= ( ":" ClassRef ( "," ClassRef )* )?"""
    p.start_node(SyntaxKind.ParentClassList)
    if p.eat_if(TokenKind.Colon):
        while not p.eof():
            class_ref(p)
            if not p.eat_if(TokenKind.Comma):
                break
    p.finish_node()


def class_ref(p: Parser) -> None:
    """ClassRef ::= Identifier ( "<" ArgValueList? ">" )?"""
    p.start_node(SyntaxKind.ClassRef)
    identifier(p)
    if p.eat_if(TokenKind.Less):
        arg_value_list(p)
        p.expect_with_msg(TokenKind.Greater, "expected '>' in template value list")
    p.finish_node()


def body(p: Parser) -> None:
    """Body ::= ";" | "{" BodyItem* "}" """
    p.start_node(SyntaxKind.Body)
    if p.eat_if(TokenKind.Semi):
        p.finish_node()
        return
    p.expect_with_msg(TokenKind.LBrace, "expected ';' or '{' to start body")
    while not p.at(TokenKind.RBrace) and not p.eof():
        if not body_item(p):
            break
    p.expect(TokenKind.RBrace)
    p.finish_node()


def body_item(p: Parser) -> bool:
    """BodyItem ::= FieldDef | FieldLet | Defvar | Assert; False if none starts here."""
    if p.at_set(TYPE_FIRST_TOKENS) or p.at(TokenKind.Field):
        field_def(p)
        return True
    rule = _BODY_RULES.get(p.peek())
    if rule is None:
        return False
    rule(p)
    return True


def field_def(p: Parser) -> None:
    """FieldDef ::= "field"? Type Identifier ( "=" Value )? ";" """
    p.start_node(SyntaxKind.FieldDef)
    p.eat_if(TokenKind.Field)
    parse_type(p)
    p.error_unless(identifier(p), "expected identifier in declaration")
    if p.eat_if(TokenKind.Equal):
        value(p)
    p.expect_with_msg(TokenKind.Semi, "expected ';' after declaration")
    p.finish_node()


def field_let(p: Parser) -> None:
    """FieldLet ::= "let" Identifier ( "{" RangeList "}" )? "=" Value ";" """
    p.start_node(SyntaxKind.FieldLet)
    p.bump(TokenKind.Let)
    p.error_unless(identifier(p), "expected field identifier after let")
    if p.eat_if(TokenKind.LBrace):
        range_list(p)
        p.expect_with_msg(TokenKind.RBrace, "expected '}' at end of bit list")
    p.expect(TokenKind.Equal)
    p.error_unless(value(p), "expected '=' in let expression")
    p.expect_with_msg(TokenKind.Semi, "expected ';' after let expression")
    p.finish_node()


_STATEMENT_RULES: dict[TokenKind, Callable[[Parser], None]] = {
    TokenKind.Include: include,
    TokenKind.Assert: assert_statement,
    TokenKind.Class: class_statement,
    TokenKind.Def: def_statement,
    TokenKind.Defm: defm,
    TokenKind.Defset: defset,
    TokenKind.Defvar: defvar,
    TokenKind.Foreach: foreach,
    TokenKind.If: if_statement,
    TokenKind.Let: let_statement,
    TokenKind.MultiClass: multi_class,
}

_MULTI_CLASS_RULES: dict[TokenKind, Callable[[Parser], None]] = {
    TokenKind.Def: def_statement,
    TokenKind.Defm: defm,
    TokenKind.Foreach: foreach,
    TokenKind.Let: let_statement,
}

_BODY_RULES: dict[TokenKind, Callable[[Parser], None]] = {
    TokenKind.Let: field_let,
    TokenKind.Defvar: defvar,
    TokenKind.Assert: assert_statement,
}