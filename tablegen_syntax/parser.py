"""Green syntax tree, its builder, and the token-driven parser core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union

from .errors import ParseError, TextRange
from .syntax_kind import SyntaxKind, syntax_kind_of
from .token_kind import TokenKind, TokenStream

RECOVER_TOKENS = frozenset(
    {TokenKind.Include, TokenKind.Class, TokenKind.Def, TokenKind.Let, TokenKind.Semi}
)


@dataclass(frozen=True)
class GreenToken:
    """A leaf of the tree: a token kind and its exact source text."""

    kind: SyntaxKind
    text: str


@dataclass(frozen=True)
class GreenNode:
    """An interior node of the tree, without position information."""

    kind: SyntaxKind
    children: tuple[Union["GreenNode", GreenToken], ...]

    def text(self) -> str:
        """Source text covered by the node."""
        return "".join(
            child.text() if isinstance(child, GreenNode) else child.text
            for child in self.children
        )

    def text_len(self) -> int:
        """Length of the source text covered by the node."""
        return sum(
            child.text_len() if isinstance(child, GreenNode) else len(child.text)
            for child in self.children
        )


class GreenNodeBuilder:
    """Builds a green tree from a sequence of start, token and finish events."""

    def __init__(self) -> None:
        self._parents: list[tuple[SyntaxKind, int]] = []
        self._children: list[Union[GreenNode, GreenToken]] = []

    def start_node(self, kind: SyntaxKind) -> None:
        """Open a node; following elements become its children."""
        self._parents.append((kind, len(self._children)))

    def token(self, kind: SyntaxKind, text: str) -> None:
        """Append a token to the current node."""
        self._children.append(GreenToken(kind, text))

    def finish_node(self) -> None:
        """Close the most recently opened node."""
        if not self._parents:
            raise RuntimeError("finish_node called without an open node")
        kind, first = self._parents.pop()
        node = GreenNode(kind, tuple(self._children[first:]))
        del self._children[first:]
        self._children.append(node)

    def checkpoint(self) -> int:
        """Position at which a node may later be opened with start_node_at."""
        return len(self._children)

    def start_node_at(self, checkpoint: int, kind: SyntaxKind) -> None:
        """Open a node that wraps everything added since the checkpoint."""
        if checkpoint > len(self._children):
            raise ValueError("checkpoint no longer valid, was finish_node called early?")
        if self._parents and checkpoint < self._parents[-1][1]:
            raise ValueError("checkpoint lies before the start of the current node")
        self._parents.append((kind, checkpoint))

    def finish(self) -> GreenNode:
        """Return the single completed root node."""
        if self._parents:
            raise RuntimeError("unfinished nodes remain")
        if len(self._children) != 1 or not isinstance(self._children[0], GreenNode):
            raise RuntimeError("the builder must hold exactly one root node")
        return self._children[0]


def _debug_str(text: str) -> str:
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def _dump(element: Union[GreenNode, GreenToken], offset: int, depth: int, out: list[str]) -> int:
    indent = "  " * depth
    if isinstance(element, GreenToken):
        end = offset + len(element.text)
        out.append(f"{indent}{element.kind.name}@{offset}..{end} {_debug_str(element.text)}\n")
        return end
    out.append(f"{indent}{element.kind.name}@{offset}..{offset + element.text_len()}\n")
    position = offset
    for child in element.children:
        position = _dump(child, position, depth + 1, out)
    return position


@dataclass(frozen=True)
class SyntaxNode:
    """A green node placed at an offset in the source text."""

    green: GreenNode
    offset: int = 0

    def children(self) -> Iterator["SyntaxNode"]:
        """Child nodes, skipping tokens, each at its own offset."""
        position = self.offset
        for child in self.green.children:
            if isinstance(child, GreenNode):
                yield SyntaxNode(child, position)
                position += child.text_len()
            else:
                position += len(child.text)

    def text_range(self) -> TextRange:
        """Range of the source text covered by the node."""
        return TextRange(self.offset, self.offset + self.green.text_len())

    def debug_dump(self) -> str:
        """Indented listing of every node and token with its range."""
        out: list[str] = []
        _dump(self.green, self.offset, 0, out)
        return "".join(out)


class Parser:
    """Cursor over a token stream that records a green tree and syntax errors."""

    def __init__(self, token_stream: TokenStream) -> None:
        self._stream = token_stream
        start = token_stream.cursor()
        self._current = token_stream.eat()
        self._range = (start, token_stream.cursor())
        self._builder = GreenNodeBuilder()
        self._errors: list[ParseError] = []
        self._is_after_error = False

    def finish(self) -> tuple[GreenNode, list[ParseError]]:
        """Return the built tree and the errors collected while parsing."""
        return self._builder.finish(), list(self._errors)

    def start_node(self, kind: SyntaxKind) -> None:
        self._builder.start_node(kind)

    def finish_node(self) -> None:
        self._builder.finish_node()

    def checkpoint(self) -> int:
        return self._builder.checkpoint()

    def start_node_at(self, checkpoint: int, kind: SyntaxKind) -> None:
        self._builder.start_node_at(checkpoint, kind)

    def peek(self) -> TokenKind:
        """Kind of the current token."""
        return self._current

    def at(self, kind: TokenKind) -> bool:
        return self._current is kind

    def at_set(self, kinds: Iterable[TokenKind]) -> bool:
        return self._current in kinds

    def eof(self) -> bool:
        return self._current is TokenKind.Eof

    def error(self, message: str) -> None:
        """Record an error at the current token."""
        self._errors.append(ParseError(TextRange(*self._range), message))
        self._is_after_error = True

    def error_unless(self, ok: bool, message: str) -> None:
        """Record an error when a sub-parse did not succeed."""
        if not ok:
            self.error(message)

    def error_and_eat(self, message: str) -> None:
        """Record an error and wrap the current token in an error node."""
        self.error(message)
        self._builder.start_node(SyntaxKind.Error)
        self.eat()
        self._builder.finish_node()

    def error_and_recover(self, message: str) -> None:
        """Record an error and eat the current token unless it is a recovery point."""
        self.error(message)
        if not self.at_set(RECOVER_TOKENS) and not self.eof():
            self._builder.start_node(SyntaxKind.Error)
            self.eat()
            self._builder.finish_node()

    def bump(self, kind: TokenKind) -> None:
        """Eat a token that the grammar guarantees to be there."""
        if not self.eat_if(kind):
            raise AssertionError(f"expected {kind!r}, found {self._current!r}")

    def expect(self, kind: TokenKind) -> None:
        self.expect_with_msg(kind, f"expected {kind!r}")

    def expect_with_msg(self, kind: TokenKind, message: str) -> None:
        """Eat the token, or report an error unless one was just reported."""
        if not self.eat_if(kind) and not self._is_after_error:
            self.error(message)

    def eat(self) -> None:
        """Add the current token to the tree and advance past any trivia."""
        self.save()
        self.lex()
        self.skip()

    def eat_if(self, kind: TokenKind) -> bool:
        if self.at(kind):
            self.eat()
            return True
        return False

    def save(self) -> None:
        """Add the current token to the tree, reporting it if it is an error."""
        text = self._stream.text(*self._range)
        self._builder.token(syntax_kind_of(self._current), text)
        if self.at(TokenKind.Error):
            message: Optional[str] = self._stream.take_error()
            if message is None:
                raise RuntimeError("error token without message")
            self.error(message)
        else:
            self._is_after_error = False

    def lex(self) -> None:
        """Read the next token from the stream."""
        start = self._stream.cursor()
        self._current = self._stream.eat()
        self._range = (start, self._stream.cursor())

    def skip(self) -> None:
        """Add trivia tokens to the tree until a significant token is current."""
        while self._current.is_trivia():
            self.save()
            self.lex()