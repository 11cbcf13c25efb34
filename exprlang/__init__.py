"""
exprlang Front End Package

Lexer and parser for a small expression language with function
definitions, extern declarations and top-level expressions. Source text
goes in; syntax trees (or diagnostics) come out.

Architecture:
    exprlang/
    ├── lexer/           # Characters to tokens
    ├── parser/          # Tokens to AST (precedence climbing)
    ├── driver.py        # Top-level dispatch and error recovery
    └── cli.py           # `exprlang` command

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .lexer import Lexer
from .parser import Parser, ParseError, standard_precedence
from .driver import Driver, DriverResult, parse_string, parse_file

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "Driver",
    "DriverResult",
    "ParseError",

    # Conveniences
    "parse_string",
    "parse_file",
    "standard_precedence",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
