"""Lexer, preprocessor and lossless syntax tree parser for TableGen."""

__version__ = "0.1.0"