# tablegen_syntax

An error-tolerant lexer, preprocessor and parser for the TableGen language.
Parsing never stops at the first problem. It always builds a complete,
lossless concrete syntax tree, which keeps every byte of the input including
whitespace and comments. Alongside the tree it returns a list of syntax
errors, each with a text range.

## Installation

```
pip install .
```

## Library use

```python
from tablegen_syntax.statements import parse

result = parse("class Foo<int A, int B = 1>: Bar<A, 2>;")
root = result.syntax_node()
print(root.debug_dump())
for error in result.errors:
    print(error)
```

To work with tokens only:

```python
from tablegen_syntax.lexer import tokenize

print(tokenize("def Foo : Bar;"))
```

The preprocessor handles `#define`, `#ifdef`, `#ifndef`, `#else` and
`#endif`. It sits between the lexer and the parser:

```python
from tablegen_syntax.lexer import Lexer
from tablegen_syntax.preprocessor import PreProcessor

stream = PreProcessor(Lexer("#define FOO\n#ifdef FOO\ndef A;\n#endif\n"))
```

## Command line

```
tablegen-parse token FILE   # print every token with its byte range
tablegen-parse node FILE    # print the syntax tree
tablegen-parse error FILE   # print syntax errors
```

## Running the tests

```
pip install ".[test]"
pytest
```