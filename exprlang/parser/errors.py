"""
Error reporting for the exprlang parser.

There is a single kind of error: a parse failure at the current token. The
parser records these rather than raising them; only the module level
conveniences (parse_string, parse_file) raise the first one recorded.

Author: xwest
"""

from typing import Optional

from ..lexer.tokens import Token, SourceLocation
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    A syntax error at a specific token.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text
        )
        self.token = token

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


# Parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token in expression",
    "P002": "Missing closing parenthesis",
    "P003": "Bad argument list separator",
    "P004": "Malformed prototype",
    "P005": "Expression nested too deeply",
}


# Helper functions for creating common parser errors

def create_unknown_token_error(found: Token) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    return ParseError(
        message="unknown token when parsing an expression",
        location=found.location,
        token=found,
        code="P001",
        help_text=f"Found {found}; an expression starts with a number, an identifier or '('.",
    )


def create_unclosed_paren_error(found: Token) -> ParseError:
    """Create an error for a parenthesized expression missing its ')'."""
    return ParseError(
        message="expected ')' in expression",
        location=found.location,
        token=found,
        code="P002",
        help_text=f"Found {found} where the closing parenthesis should be."
    )


def create_argument_separator_error(found: Token) -> ParseError:
    """Create an error for a call argument followed by neither ',' nor ')'."""
    return ParseError(
        message="expected ')' or ',' in argument list",
        location=found.location,
        token=found,
        code="P003",
        help_text=f"Found {found} after a call argument."
    )


def create_prototype_error(message: str, found: Token) -> ParseError:
    """Create an error for a malformed function prototype."""
    return ParseError(
        message=message,
        location=found.location,
        token=found,
        code="P004",
        help_text=f"Found {found}; a prototype looks like 'name(arg1 arg2)'.",
    )


def create_nesting_error(found: Token, limit: int) -> ParseError:
    """Create an error for an expression nested past the parser's depth limit."""
    return ParseError(
        message="expression nested too deeply",
        location=found.location,
        token=found,
        code="P005",
        help_text=f"At most {limit} levels of parentheses and call arguments are accepted.",
    )
