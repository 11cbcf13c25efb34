"""
Token definitions for the exprlang lexer.

The language has very few token classes:
- Keywords (`def`, `extern`)
- Identifiers and number literals
- Single characters (punctuation and operators), each returned as itself
- End of input

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """Enumeration of all token types in exprlang."""

    EOF = auto()                    # End of input

    # Keywords
    DEF = auto()                    # def
    EXTERN = auto()                 # extern

    # Classified values
    IDENTIFIER = auto()             # foo, x1
    NUMBER = auto()                 # 42, 3.14

    # Anything else: '(', ')', ',', ';', '+', '<', ...
    CHAR = auto()


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting only; it never takes part in AST equality.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    A lexical token.

    `value` holds the payload: the identifier string for IDENTIFIER and
    keyword tokens, a float for NUMBER, the character itself for CHAR and
    None for EOF.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any
    location: SourceLocation

    def __str__(self) -> str:
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.CHAR:
            return f"'{self.lexeme}'"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    def is_char(self, char: str) -> bool:
        """Check if this is the single-character token `char`."""
        return self.type == TokenType.CHAR and self.lexeme == char

    @property
    def is_keyword(self) -> bool:
        return self.type in (TokenType.DEF, TokenType.EXTERN)

    @property
    def is_eof(self) -> bool:
        return self.type == TokenType.EOF


KEYWORDS = {
    "def": TokenType.DEF,
    "extern": TokenType.EXTERN,
}

# C isspace() set
WHITESPACE = frozenset(" \t\n\r\v\f")

# Characters that end a '#' comment (end of input ends one too)
COMMENT_TERMINATORS = frozenset("\n\r")
