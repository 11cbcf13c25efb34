"""
exprlang Lexer Package

Character-at-a-time lexical analyzer for the exprlang expression language.

Key Features:
- Demand-driven: reads one character at a time from a string or text stream
- Single character of lookahead, no pushback
- `#` line comments
- Source location tracking for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerWarning

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "Diagnostic",
    "LexerWarning",
    "tokenize_string",
    "tokenize_file",
]
