import pytest

from tablegen_syntax.syntax_kind import SyntaxKind, syntax_kind_of
from tablegen_syntax.token_kind import TokenKind


def test_values_follow_declaration_order_from_zero():
    assert [SyntaxKind(i) for i in range(len(SyntaxKind))] == list(SyntaxKind)


def test_first_kinds():
    assert SyntaxKind(0) is SyntaxKind.Error
    assert SyntaxKind(1) is SyntaxKind.SourceFile


def test_node_kinds_precede_token_kinds():
    assert syntax_kind_of(TokenKind.Eof) > SyntaxKind.CondClause
    assert max(syntax_kind_of(t) for t in TokenKind) is SyntaxKind.PreProcessor


@pytest.mark.parametrize(
    "token, expected",
    [
        (TokenKind.Assert, SyntaxKind.AssertKw),
        (TokenKind.Bits, SyntaxKind.BitsKw),
        (TokenKind.Bit, SyntaxKind.Bit),
        (TokenKind.ElseKw, SyntaxKind.ElseKw),
        (TokenKind.String, SyntaxKind.StringKw),
        (TokenKind.MultiClass, SyntaxKind.MultiClassKw),
        (TokenKind.VarName, SyntaxKind.VarNameKw),
        (TokenKind.Error, SyntaxKind.Error),
        (TokenKind.Eof, SyntaxKind.Eof),
        (TokenKind.Paste, SyntaxKind.Paste),
        (TokenKind.TrueVal, SyntaxKind.TrueVal),
        (TokenKind.CodeFragment, SyntaxKind.CodeFragment),
    ],
)
def test_selected_mappings(token, expected):
    assert syntax_kind_of(token) is expected


@pytest.mark.parametrize(
    "token",
    [
        TokenKind.Ifdef,
        TokenKind.Ifndef,
        TokenKind.Else,
        TokenKind.Endif,
        TokenKind.Define,
        TokenKind.PreProcessor,
    ],
)
def test_preprocessor_tokens_collapse(token):
    assert syntax_kind_of(token) is SyntaxKind.PreProcessor


@pytest.mark.parametrize(
    "token", [k for k in TokenKind if k.name.startswith("X")]
)
def test_bang_operators_keep_their_name(token):
    assert syntax_kind_of(token).name == token.name


def test_every_token_maps_to_a_token_kind_or_error():
    for token in TokenKind:
        kind = syntax_kind_of(token)
        if token is TokenKind.Error:
            assert kind is SyntaxKind.Error
        else:
            assert kind >= SyntaxKind.Eof


def test_mapping_is_injective_outside_preprocessor():
    directives = {
        TokenKind.Ifdef,
        TokenKind.Ifndef,
        TokenKind.Else,
        TokenKind.Endif,
        TokenKind.Define,
    }
    mapped = [syntax_kind_of(t) for t in TokenKind if t not in directives]
    assert len(mapped) == len(set(mapped))


def test_str_is_name():
    assert str(syntax_kind_of(TokenKind.Id)) == "Id"
    assert str(SyntaxKind(SyntaxKind.ClassValue.value)) == "ClassValue"