"""
exprlang Lexer - turns a character stream into tokens

Pulls one character at a time from its source and never seeks backward.
The character that ended the previous token is kept as lookahead; that
single character is the only state carried from one call to the next.

xwest
"""

import io
import re
from typing import List, TextIO, Union

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, WHITESPACE, COMMENT_TERMINATORS
)
from .errors import LexerWarning, create_multiple_decimal_points_warning


def _is_alpha(char: str) -> bool:
    return char.isascii() and char.isalpha()


def _is_digit(char: str) -> bool:
    return char.isascii() and char.isdigit()


def _is_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()


class Lexer:
    """
    exprlang lexical analyzer.

    Call next_token() repeatedly; each call consumes zero or more characters
    and returns exactly one token. Once the source is exhausted every call
    returns an EOF token.
    """

    def __init__(self, source: Union[str, TextIO], filename: str = "<stdin>"):
        """
        Initialize the lexer.

        Args:
            source: Source text, or a readable text stream such as sys.stdin
            filename: Name of the source for error reporting
        """
        if isinstance(source, str):
            source = io.StringIO(source)
        self.stream = source
        self.filename = filename

        # Position of the next character to be read from the stream
        self.line = 1
        self.column = 1
        self.offset = 0

        # Lookahead: the not yet classified character and where it sits.
        # Starts as a space so the first call simply reads on.
        self._char = " "
        self._char_location = SourceLocation(filename, 1, 0, 0)

        # Payloads of the most recent identifier/keyword and number tokens
        self.identifier = ""
        self.number_value = 0.0

        self.warnings: List[LexerWarning] = []

        # Longest prefix strtod() would accept from a digit/dot run
        self.number_prefix_pattern = re.compile(r'\d+(?:\.\d*)?')

    def next_token(self) -> Token:
        """Return the next token from the source."""
        while True:
            while self._char in WHITESPACE:
                self._advance()

            if self._char != "#":
                break

            # Comment until end of line
            while self._char and self._char not in COMMENT_TERMINATORS:
                self._advance()

        location = self._char_location

        if _is_alpha(self._char):
            return self._tokenize_identifier_or_keyword(location)

        if _is_digit(self._char):
            return self._tokenize_number(location)

        if self._char == "":
            return Token(TokenType.EOF, "", None, location)

        char = self._char
        self._advance()
        return Token(TokenType.CHAR, char, char, location)

    def tokenize(self) -> List[Token]:
        """
        Tokenize the rest of the input.

        Returns:
            List of tokens up to and including the first EOF token
        """
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    def _tokenize_identifier_or_keyword(self, location: SourceLocation) -> Token:
        chars = [self._char]
        self._advance()
        while _is_alnum(self._char):
            chars.append(self._char)
            self._advance()

        name = ''.join(chars)
        self.identifier = name
        token_type = KEYWORDS.get(name, TokenType.IDENTIFIER)
        return Token(token_type, name, name, location)

    def _tokenize_number(self, location: SourceLocation) -> Token:
        # Digits and any number of '.' characters; see _number_value
        chars = []
        while _is_digit(self._char) or self._char == ".":
            chars.append(self._char)
            self._advance()

        lexeme = ''.join(chars)
        value = self._number_value(lexeme, location)
        self.number_value = value
        return Token(TokenType.NUMBER, lexeme, value, location)

    def _number_value(self, lexeme: str, location: SourceLocation) -> float:
        """Convert a digit/dot run, warning when only a prefix is usable."""
        match = self.number_prefix_pattern.match(lexeme)
        used = match.group(0)
        if used != lexeme:
            self.warnings.append(
                create_multiple_decimal_points_warning(lexeme, used, location)
            )
        return float(used)

    def _advance(self):
        """Read the next character into the lookahead slot."""
        self._char_location = SourceLocation(
            self.filename, self.line, self.column, self.offset
        )
        char = self.stream.read(1)
        if char:
            self.offset += 1
            if char == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        self._char = char

    def has_warnings(self) -> bool:
        """Check if lexer encountered any warnings."""
        return len(self.warnings) > 0

    def get_diagnostics(self) -> List[LexerWarning]:
        """Get all diagnostics recorded so far."""
        return list(self.warnings)


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens ending with an EOF token
    """
    lexer = Lexer(source, filename)
    return lexer.tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8', errors='replace') as f:
        return Lexer(f, filepath).tokenize()
