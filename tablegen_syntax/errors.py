"""Text ranges and the syntax errors reported by the parser."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class TextRange:
    """Half-open range of offsets into the source text."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.start > self.end:
            raise ValueError(f"invalid text range {self.start}..{self.end}")

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


@dataclass(frozen=True)
class ParseError:
    """A syntax error located at a range of the source text."""

    range: TextRange
    message: str

    def __str__(self) -> str:
        return f"{self.range}:{self.message}"