import pytest

from tablegen_syntax.lexer import Lexer
from tablegen_syntax.parser import GreenToken, Parser, SyntaxNode
from tablegen_syntax.preprocessor import PreProcessor
from tablegen_syntax.syntax_kind import SyntaxKind
from tablegen_syntax.token_kind import TokenKind
from tablegen_syntax import values


def run(rule, text):
    p = Parser(PreProcessor(Lexer(text)))
    p.start_node(SyntaxKind.SourceFile)
    p.skip()
    result = rule(p)
    remaining = p.peek()
    p.finish_node()
    green, errors = p.finish()
    return result, SyntaxNode(green), errors, remaining


def kinds(node):
    yield node.green.kind
    for child in node.children():
        yield from kinds(child)


def find(node, kind):
    return [n for n in _walk(node) if n.green.kind is kind]


def _walk(node):
    yield node
    for child in node.children():
        yield from _walk(child)


def test_integer_value():
    result, node, errors, remaining = run(values.value, "42")
    assert result is True
    assert errors == []
    assert remaining is TokenKind.Eof
    assert list(kinds(node)) == [
        SyntaxKind.SourceFile,
        SyntaxKind.Value,
        SyntaxKind.InnerValue,
        SyntaxKind.Integer,
    ]


@pytest.mark.parametrize(
    "text",
    [
        '"hoge" # "fuga"',
        "Hoge.Fuga",
        "Hoge{0...1}",
        "Hoge[0...1]",
        "(add A:$hoge)",
        "!add(A, B)",
        "!cond(false: 1, true: 2)",
        "[{ true }]",
        "[[1], [1,], [1,2]]",
        "{0, 1}",
        "Bar<A, 2>",
    ],
)
def test_values_parse_cleanly_and_keep_text(text):
    result, node, errors, remaining = run(values.value, text)
    assert result is True
    assert errors == []
    assert remaining is TokenKind.Eof
    assert node.green.text() == text
    assert node.text_range().end == len(text)


def test_adjacent_strings_form_one_string_node():
    _, node, errors, _ = run(values.value, '"a" "b"')
    assert errors == []
    (string_node,) = find(node, SyntaxKind.String)
    tokens = [c for c in string_node.green.children if isinstance(c, GreenToken)]
    assert [t.kind for t in tokens if t.kind is SyntaxKind.StrVal] == [
        SyntaxKind.StrVal,
        SyntaxKind.StrVal,
    ]


def test_paste_makes_two_inner_values():
    _, node, _, _ = run(values.value, '"hoge" # "fuga"')
    assert len(find(node, SyntaxKind.InnerValue)) == 2
    assert len(find(node, SyntaxKind.Value)) == 1


def test_class_value_wraps_identifier():
    _, node, errors, _ = run(values.value, "Bar<A, 2>")
    assert errors == []
    (class_value,) = find(node, SyntaxKind.ClassValue)
    child_kinds = [c.green.kind for c in class_value.children()]
    assert child_kinds == [SyntaxKind.Identifier, SyntaxKind.ArgValueList]
    assert len(find(class_value, SyntaxKind.PositionalArgValueList)) == 1


def test_plain_identifier_is_not_class_value():
    result, node, _, _ = run(values.value, "Foo")
    assert result is True
    assert find(node, SyntaxKind.ClassValue) == []
    assert len(find(node, SyntaxKind.Identifier)) == 1


@pytest.mark.parametrize(
    "text, suffix",
    [
        ("Hoge.Fuga", SyntaxKind.FieldSuffix),
        ("Hoge{0...1}", SyntaxKind.RangeSuffix),
        ("Hoge[0...1]", SyntaxKind.SliceSuffix),
    ],
)
def test_value_suffixes(text, suffix):
    _, node, _, _ = run(values.value, text)
    assert len(find(node, suffix)) == 1


def test_name_value_stops_before_brace():
    result, node, errors, remaining = run(values.name_value, "Foo {")
    assert result is True
    assert errors == []
    assert remaining is TokenKind.LBrace
    assert find(node, SyntaxKind.RangeSuffix) == []


def test_opt_value_adds_nothing_when_no_value_starts():
    _, node, errors, remaining = run(values.opt_value, ";")
    assert list(kinds(node)) == [SyntaxKind.SourceFile]
    assert errors == []
    assert remaining is TokenKind.Semi


def test_opt_name_value_parses_value():
    _, node, _, _ = run(values.opt_name_value, "Foo")
    assert len(find(node, SyntaxKind.Value)) == 1


def test_bang_operator_with_type():
    _, node, errors, _ = run(values.value, "!cast<int>(A)")
    assert errors == []
    (bang,) = find(node, SyntaxKind.BangOperator)
    assert len(find(bang, SyntaxKind.IntType)) == 1


def test_bang_operator_missing_close_paren():
    _, _, errors, _ = run(values.value, "!add(1")
    assert [e.message for e in errors] == ["expected RParen"]


def test_cond_operator_clauses():
    _, node, errors, _ = run(values.value, "!cond(false: 1, true: 2)")
    assert errors == []
    assert len(find(node, SyntaxKind.CondOperator)) == 1
    assert len(find(node, SyntaxKind.CondClause)) == 2


def test_dag_with_var_name():
    _, node, errors, _ = run(values.value, "(add A:$hoge)")
    assert errors == []
    assert len(find(node, SyntaxKind.Dag)) == 1
    assert len(find(node, SyntaxKind.DagArg)) == 2
    assert len(find(node, SyntaxKind.DagArgList)) == 1
    assert len(find(node, SyntaxKind.VarName)) == 1


def test_dag_requires_operator():
    result, _, errors, _ = run(values.dag, "(1)")
    assert result is False
    assert [e.message for e in errors] == ["expected identifier in dag init"]


def test_unknown_token_is_wrapped_in_error_node():
    result, node, errors, remaining = run(values.simple_value, ")")
    assert result is False
    assert [e.message for e in errors] == ["unknown token when parsing a value"]
    assert errors[0].range.start == 0 and errors[0].range.end == 1
    assert find(node, SyntaxKind.Error) != [] and remaining is TokenKind.Eof


def test_recovery_token_is_not_eaten():
    result, node, errors, remaining = run(values.simple_value, ";")
    assert result is False
    assert remaining is TokenKind.Semi
    assert find(node, SyntaxKind.Error) == []
    assert len(errors) == 1


def test_list_with_element_type():
    _, node, errors, _ = run(values.value, "[1, 2]<int>")
    assert errors == []
    (lst,) = find(node, SyntaxKind.List)
    assert [c.green.kind for c in lst.children()] == [SyntaxKind.ValueList, SyntaxKind.IntType]


@pytest.mark.parametrize(
    "text, rule",
    [
        ("?", SyntaxKind.Uninitialized),
        ("true", SyntaxKind.Boolean),
        ("0b101", SyntaxKind.Integer),
        ("[{ code }]", SyntaxKind.Code),
        ("{0, 1}", SyntaxKind.Bits),
    ],
)
def test_simple_value_kinds(text, rule):
    result, node, errors, _ = run(values.simple_value, text)
    assert result is True
    assert errors == []
    assert [c.green.kind for c in node.children()] == [rule]


def test_var_name_fails_without_var():
    result, node, _, remaining = run(values.var_name, "x")
    assert result is False
    assert remaining is TokenKind.Id
    assert len(find(node, SyntaxKind.VarName)) == 1


def test_range_list_pieces():
    result, node, errors, _ = run(values.range_list, "0...1, 3-5, 7")
    assert result is True
    assert errors == []
    assert len(find(node, SyntaxKind.RangePiece)) == 3
    assert len(find(node, SyntaxKind.Integer)) == 5


def test_range_piece_requires_integer():
    _, _, errors, _ = run(values.range_piece, "a")
    assert [e.message for e in errors] == ["expected integer or bitrange"]


def test_slice_elements_trailing_comma():
    _, node, errors, _ = run(values.value, "A[1, 2,]")
    assert errors == []
    assert len(find(node, SyntaxKind.SliceElement)) == 2


def test_field_suffix_requires_identifier():
    _, _, errors, _ = run(values.value, "A.1")
    assert [e.message for e in errors] == ["expected field identifier after '.'"]


def test_delimited_with_custom_item():
    _, node, errors, remaining = run(
        lambda p: values.delimited(
            p, TokenKind.LSquare, TokenKind.RSquare, TokenKind.Comma, values.integer
        ),
        "[1, 2, 3]",
    )
    assert errors == []
    assert remaining is TokenKind.Eof
    assert len(find(node, SyntaxKind.Integer)) == 3


def test_named_arg_value():
    _, node, errors, _ = run(values.named_arg_value_list, "A = 1, B = 2")
    assert errors == []
    assert len(find(node, SyntaxKind.NamedArgValue)) == 2
    assert len(find(node, SyntaxKind.Value)) == 4


def test_arg_value_list_empty():
    _, node, _, remaining = run(values.arg_value_list, ">")
    assert remaining is TokenKind.Greater
    assert find(node, SyntaxKind.PositionalArgValueList) == []


@pytest.mark.parametrize(
    "text, kind",
    [
        ("bit", SyntaxKind.BitType),
        ("int", SyntaxKind.IntType),
        ("string", SyntaxKind.StringType),
        ("dag", SyntaxKind.DagType),
        ("bits<32>", SyntaxKind.BitsType),
        ("list<int>", SyntaxKind.ListType),
        ("code", SyntaxKind.CodeType),
        ("Bar", SyntaxKind.ClassId),
    ],
)
def test_types(text, kind):
    _, node, errors, remaining = run(values.parse_type, text)
    assert errors == []
    assert remaining is TokenKind.Eof
    assert [c.green.kind for c in node.children()] == [kind]
    assert node.green.text() == text


def test_unknown_type():
    _, _, errors, _ = run(values.parse_type, "1")
    assert [e.message for e in errors] == ["unknown token when expecting a type"]


def test_bits_type_requires_integer():
    _, _, errors, _ = run(values.parse_type, "bits<>")
    assert [e.message for e in errors] == ["expected integer in bits<n> type"]


def test_list_type_requires_open_angle():
    _, _, errors, _ = run(values.list_type, "list int")
    assert errors[0].message == "expected '<' after list type"


def test_bump_on_wrong_token_raises():
    p = Parser(PreProcessor(Lexer("int")))
    p.start_node(SyntaxKind.SourceFile)
    p.skip()
    with pytest.raises(AssertionError):
        values.bit_type(p)
    assert p.peek() is TokenKind.Int