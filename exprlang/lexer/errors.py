"""
Diagnostics for the exprlang lexer.

The lexer never fails: malformed character sequences either become
single-character tokens (which the parser then rejects) or are accepted
with a warning. This module holds the shared Diagnostic record and the
warning type.

Author: xwest
"""

from typing import Optional
from dataclasses import dataclass

from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """A located message, printed as `SEVERITY: message` plus an optional help line."""
    message: str
    location: SourceLocation
    severity: str  # "error" or "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None

    def __str__(self) -> str:
        result = f"{self.severity.upper()}: {self.message}\n  --> {self.location}\n"
        if self.help_text:
            result += f"  help: {self.help_text}\n"
        return result


class LexerWarning:
    """A questionable but accepted spelling, reported without stopping the parse."""

    def __init__(self, message: str, location: SourceLocation,
                 code: Optional[str] = None, help_text: Optional[str] = None):
        self.diagnostic = Diagnostic(message, location, "warning", code, help_text)

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


# Warning codes for categorization
WARNING_CODES = {
    "L003": "Numeric literal with more than one decimal point",
}


def create_multiple_decimal_points_warning(lexeme: str, used: str,
                                           location: SourceLocation) -> LexerWarning:
    """Create a warning for a number like '1.2.3' that only partly converts."""
    return LexerWarning(
        message=f"Numeric literal '{lexeme}' has more than one decimal point",
        location=location,
        code="L003",
        help_text=f"Only the leading '{used}' is used as the value."
    )
