import pytest

from tablegen_syntax.lexer import Lexer
from tablegen_syntax.preprocessor import PreProcessor
from tablegen_syntax.token_kind import TokenKind

K = TokenKind


def _drain(prep: PreProcessor) -> list[TokenKind]:
    kinds: list[TokenKind] = []
    while not kinds or kinds[-1] is not K.Eof:
        kinds.append(prep.eat())
    return kinds


def _prep(text: str, *macros: str) -> PreProcessor:
    prep = PreProcessor(Lexer(text))
    for name in macros:
        prep.define_macro(name)
    return prep


IFDEF_TEXT = "text1\n#ifdef HOGE\ntext2\n#endif\ntext3"
IFNDEF_TEXT = "text1\n#ifndef HOGE\ntext2\n#endif\ntext3"
ELSE_TEXT = (
    "text1\n        #ifdef HOGE\n        [\n        #else\n        ]\n"
    "        #endif\n        text2"
)


def test_define_1():
    prep = _prep("#define FOO\n")
    assert "FOO" not in prep.macros()
    assert prep.eat() is K.PreProcessor
    assert "FOO" in prep.macros()
    assert prep.eat() is K.Whitespace
    assert prep.eat() is K.Eof


def test_define_2():
    prep = _prep("text1\n#define FOO\ntext2")
    assert "FOO" not in prep.macros()
    assert prep.eat() is K.Id
    assert prep.eat() is K.Whitespace
    assert prep.eat() is K.PreProcessor
    assert "FOO" in prep.macros()
    assert prep.eat() is K.Whitespace
    assert prep.eat() is K.Id
    assert prep.eat() is K.Eof


def test_ifdef_defined():
    prep = _prep(IFDEF_TEXT, "HOGE")
    assert _drain(prep) == [
        K.Id, K.Whitespace, K.PreProcessor, K.Whitespace, K.Id,
        K.Whitespace, K.PreProcessor, K.Whitespace, K.Id, K.Eof,
    ]


def test_ifdef_not_defined():
    prep = _prep(IFDEF_TEXT)
    assert _drain(prep) == [K.Id, K.Whitespace, K.PreProcessor, K.Whitespace, K.Id, K.Eof]


def test_ifndef_defined():
    prep = _prep(IFNDEF_TEXT, "HOGE")
    assert _drain(prep) == [K.Id, K.Whitespace, K.PreProcessor, K.Whitespace, K.Id, K.Eof]


def test_ifndef_not_defined():
    prep = _prep(IFNDEF_TEXT)
    assert _drain(prep) == [
        K.Id, K.Whitespace, K.PreProcessor, K.Whitespace, K.Id,
        K.Whitespace, K.PreProcessor, K.Whitespace, K.Id, K.Eof,
    ]


def test_ifdef_nested():
    text = (
        "text1\n            #ifdef HOGE\n            text2\n            #ifdef FUGA\n"
        "            text3\n            #endif\n            text4\n"
        "            #endif\n            text5"
    )
    prep = _prep(text)
    assert _drain(prep) == [K.Id, K.Whitespace, K.PreProcessor, K.Whitespace, K.Id, K.Eof]


def test_ifdef_else_not_defined():
    prep = _prep(ELSE_TEXT)
    assert _drain(prep) == [
        K.Id, K.Whitespace, K.PreProcessor, K.Whitespace, K.RSquare,
        K.Whitespace, K.PreProcessor, K.Whitespace, K.Id, K.Eof,
    ]


def test_ifdef_else_defined():
    prep = _prep(ELSE_TEXT, "HOGE")
    assert _drain(prep) == [
        K.Id, K.Whitespace, K.PreProcessor, K.Whitespace, K.LSquare,
        K.Whitespace, K.PreProcessor, K.Whitespace, K.Id, K.Eof,
    ]


def test_define_then_ifdef_uses_defined_macro():
    prep = _prep("#define A\n#ifdef A\nx\n#endif")
    assert _drain(prep) == [
        K.PreProcessor, K.Whitespace, K.PreProcessor, K.Whitespace, K.Id,
        K.Whitespace, K.PreProcessor, K.Eof,
    ]


@pytest.mark.parametrize(
    "text, message",
    [
        ("#define", "expected macro name after #define"),
        ("#define 1", "expected macro name after #define"),
        ("#ifdef ;", "expected macro name after #ifdef"),
        ("#ifndef", "expected macro name after #ifndef"),
    ],
)
def test_missing_macro_name(text, message):
    prep = _prep(text)
    assert prep.eat() is K.Error
    assert prep.take_error() == message
    assert prep.take_error() is None


def test_unterminated_ifdef_reports_error():
    prep = _prep("#ifdef FOO\ntext")
    assert prep.eat() is K.PreProcessor
    assert prep.take_error() == "reached EOF without matching #endif"
    assert prep.eat() is K.Eof


def test_lexer_error_passes_through():
    prep = _prep("#define FOO\n..")
    assert prep.eat() is K.PreProcessor
    assert prep.eat() is K.Whitespace
    assert prep.eat() is K.Error
    assert prep.take_error() == "Invalid '..' punctuation"


def test_cursor_and_text_delegate():
    prep = _prep("abc def")
    assert prep.eat() is K.Id
    assert prep.cursor() == 3
    assert prep.text(0, 3) == "abc"


def test_macros_snapshot_is_not_live():
    prep = _prep("")
    snapshot = prep.macros()
    prep.define_macro("X")
    assert snapshot == frozenset()
    assert prep.macros() == frozenset({"X"})