"""
Top-level dispatch loop for exprlang.

The driver decides which parser entry point handles each top-level unit,
reports what happened, and recovers from failures by skipping exactly one
token. It never evaluates anything.

Author: xwest
"""

import io
import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional, TextIO, Union

from .lexer.errors import LexerWarning
from .lexer.lexer import Lexer
from .lexer.tokens import TokenType
from .parser.ast_nodes import ASTNode, ASTPrinter
from .parser.errors import ParseError
from .parser.parser import Parser


PROMPT = "ready> "


@dataclass
class DriverResult:
    """Outcome of a driver run: parsed units in order, and every failure."""
    units: List[ASTNode] = field(default_factory=list)
    errors: List[ParseError] = field(default_factory=list)
    warnings: List[LexerWarning] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


class Driver:
    """
    Read-parse loop over a single Parser.

    For each unit the current token selects the rule: end of input stops,
    ';' is skipped, 'def' and 'extern' go to their parsers and anything else
    is a top-level expression. After a failed unit the driver prints the
    diagnostic and advances one token, so a token that can never be parsed
    is eventually consumed.
    """

    def __init__(
        self,
        parser: Parser,
        output: Optional[TextIO] = None,
        prompt: bool = False,
        show_ast: bool = False,
        quiet: bool = False,
    ):
        """
        Args:
            parser: Parser to drive; it must not have been primed yet
            output: Stream for prompts, reports and diagnostics (default stderr)
            prompt: Print a 'ready> ' prompt before each unit
            show_ast: Print each parsed unit as an outline
            quiet: Suppress success reports (diagnostics are still printed)
        """
        self.parser = parser
        self.output = output if output is not None else sys.stderr
        self.prompt = prompt
        self.show_ast = show_ast
        self.quiet = quiet
        self.result = DriverResult()

    @property
    def units(self) -> List[ASTNode]:
        return self.result.units

    def run(self) -> DriverResult:
        """Parse units until end of input."""
        self._prompt()
        self.parser.next_token()

        while True:
            self._prompt()
            token = self.parser.current

            if token.type == TokenType.EOF:
                self._report_warnings()
                return self.result
            if token.is_char(";"):
                # Ignore top-level semicolons
                self.parser.next_token()
            elif token.type == TokenType.DEF:
                self._handle(self.parser.parse_definition, "Parsed a function definition.")
            elif token.type == TokenType.EXTERN:
                self._handle(self.parser.parse_extern, "Parsed an extern.")
            else:
                self._handle(self.parser.parse_top_level_expr, "Parsed a top-level expression.")

    def _handle(self, parse_unit, message: str):
        errors_before = len(self.parser.errors)
        unit = parse_unit()
        self._report_warnings()

        if unit is None:
            for error in self.parser.errors[errors_before:]:
                self.result.errors.append(error)
                self._write(str(error))
            # Skip the offending token before trying again
            self.parser.next_token()
            return

        self.result.units.append(unit)
        if not self.quiet:
            self._write(message)
        if self.show_ast:
            self._write(ASTPrinter().render(unit))

    def _report_warnings(self):
        for warning in self.parser.lexer.warnings[len(self.result.warnings):]:
            self.result.warnings.append(warning)
            self._write(str(warning))

    def _prompt(self):
        if self.prompt:
            print(PROMPT, end="", file=self.output, flush=True)

    def _write(self, text: str):
        print(text.rstrip("\n"), file=self.output)


def parse_string(
    source: str,
    filename: str = "<string>",
    precedence: Optional[Dict[str, int]] = None,
) -> List[ASTNode]:
    """
    Convenience function to parse every unit of a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting
        precedence: Operator table (default: standard precedence)

    Returns:
        Parsed units in source order (FunctionDef or Prototype nodes)

    Raises:
        ParseError: The first failure, if any unit failed to parse
    """
    return _parse_silently(Lexer(source, filename), precedence)


def parse_file(filepath: str, precedence: Optional[Dict[str, int]] = None) -> List[ASTNode]:
    """
    Convenience function to parse every unit of a source file.

    Raises:
        ParseError: The first failure, if any unit failed to parse
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8', errors='replace') as f:
        return _parse_silently(Lexer(f, filepath), precedence)


def _parse_silently(lexer: Lexer, precedence: Optional[Dict[str, int]]) -> List[ASTNode]:
    # Reports go nowhere; failures are surfaced by raising instead
    driver = Driver(Parser(lexer, precedence), output=io.StringIO(), quiet=True)
    result = driver.run()
    if result.errors:
        raise result.errors[0]
    return result.units


def run_source(
    source: Union[str, TextIO],
    filename: str = "<stdin>",
    precedence: Optional[Dict[str, int]] = None,
    **driver_options,
) -> DriverResult:
    """Build a lexer, parser and driver over `source` and run it."""
    parser = Parser(Lexer(source, filename), precedence)
    return Driver(parser, **driver_options).run()
