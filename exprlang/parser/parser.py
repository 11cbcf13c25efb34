"""
exprlang Recursive Descent Parser

Builds AST nodes from the token stream of a Lexer, pulling one token at a
time. Binary expressions are folded with operator-precedence climbing, so
there is one token of lookahead, no operator stack and no backtracking.

Every parse_* method expects `current` to sit on the first token of its
construct. On success it leaves `current` just past the construct; on
failure it records a ParseError, returns None and leaves `current` on the
token it could not handle.

Author: xwest
"""

from typing import Dict, List, Optional

from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenType
from .ast_nodes import (
    ANONYMOUS_FUNCTION_NAME, SourceSpan, Expression, NumberLiteral,
    VariableRef, BinaryExpr, Call, Prototype, FunctionDef
)
from .errors import (
    ParseError, create_unknown_token_error, create_unclosed_paren_error,
    create_argument_separator_error, create_prototype_error,
    create_nesting_error
)


# Binary operator precedences installed by the driver: higher binds tighter
STANDARD_PRECEDENCE: Dict[str, int] = {
    "<": 10,
    ">": 10,
    "+": 20,
    "-": 20,
    "*": 40,
    "/": 40,
}

# Precedence reported for anything that is not an infix operator
NOT_AN_OPERATOR = -1

# Nesting levels (parentheses, call arguments) allowed in one expression.
# Each level costs up to four Python frames.
MAX_NESTING_DEPTH = 128


def standard_precedence() -> Dict[str, int]:
    """Return a fresh, caller-owned copy of the standard precedence table."""
    return dict(STANDARD_PRECEDENCE)


class Parser:
    """
    exprlang parser.

    Holds the current token and nothing else besides the precedence table
    and the errors it has recorded. The first token is not read on
    construction; call next_token() once before parsing.

    Expressions nest through parentheses and call arguments by recursion.
    Past `max_depth` levels the parser records a P005 error instead of
    descending further.
    """

    def __init__(self, lexer: Lexer, precedence: Optional[Dict[str, int]] = None,
                 max_depth: int = MAX_NESTING_DEPTH):
        """
        Initialize the parser.

        Args:
            lexer: Token source
            precedence: Binary operator table mapping a single character to a
                positive precedence. Defaults to standard_precedence().
                The mapping is used as given, not copied.
            max_depth: Deepest expression nesting accepted
        """
        self.lexer = lexer
        self.precedence = standard_precedence() if precedence is None else precedence
        self.current: Optional[Token] = None
        self.previous: Optional[Token] = None
        self.errors: List[ParseError] = []
        self.max_depth = max_depth
        self._depth = 0

    # Token handling

    def next_token(self) -> Token:
        """Replace the current token with the next one from the lexer."""
        self.previous = self.current
        self.current = self.lexer.next_token()
        return self.current

    def get_token_precedence(self) -> int:
        """Precedence of the current token, or -1 if it is not an infix operator."""
        token = self.current
        if token is None or token.type != TokenType.CHAR or not token.lexeme.isascii():
            return NOT_AN_OPERATOR

        precedence = self.precedence.get(token.lexeme, NOT_AN_OPERATOR)
        if precedence <= 0:
            return NOT_AN_OPERATOR
        return precedence

    @property
    def last_error(self) -> Optional[ParseError]:
        """The most recently recorded error, if any."""
        return self.errors[-1] if self.errors else None

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    # Expressions

    def parse_number_expr(self) -> Optional[NumberLiteral]:
        """numberexpr ::= number"""
        token = self.current
        if token.type != TokenType.NUMBER:
            return self._fail(create_unknown_token_error(token))
        self.next_token()
        return NumberLiteral(token.value, self._span_from(token))

    def parse_paren_expr(self) -> Optional[Expression]:
        """parenexpr ::= '(' expression ')'"""
        self.next_token()  # Consume (
        expr = self.parse_expression()
        if expr is None:
            return None

        if not self.current.is_char(")"):
            return self._fail(create_unclosed_paren_error(self.current))
        self.next_token()
        return expr

    def parse_identifier_expr(self) -> Optional[Expression]:
        """
        identifierexpr
          ::= identifier
          ::= identifier '(' expression* ')'
        """
        name_token = self.current
        name = name_token.value
        self.next_token()

        if not self.current.is_char("("):
            return VariableRef(name, self._span_from(name_token))

        self.next_token()  # Consume (
        args: List[Expression] = []
        while not self.current.is_char(")"):
            arg = self.parse_expression()
            if arg is None:
                return None
            args.append(arg)

            if self.current.is_char(")"):
                break
            if not self.current.is_char(","):
                return self._fail(create_argument_separator_error(self.current))
            self.next_token()

        self.next_token()  # Consume )
        return Call(name, args, self._span_from(name_token))

    def parse_primary(self) -> Optional[Expression]:
        """
        primary
          ::= identifierexpr
          ::= numberexpr
          ::= parenexpr
        """
        token = self.current
        if token.type == TokenType.IDENTIFIER:
            return self.parse_identifier_expr()
        if token.type == TokenType.NUMBER:
            return self.parse_number_expr()
        if token.is_char("("):
            return self.parse_paren_expr()
        return self._fail(create_unknown_token_error(token))

    def parse_binary_rhs(self, min_precedence: int, left: Expression) -> Optional[Expression]:
        """
        binoprhs ::= (binop primary)*

        Folds operators of at least `min_precedence` onto `left`.
        """
        while True:
            token_precedence = self.get_token_precedence()
            if token_precedence < min_precedence:
                return left

            op = self.current.lexeme
            self.next_token()

            right = self.parse_primary()
            if right is None:
                return None

            # A tighter operator after `right` takes it as its left operand.
            # Equal precedence does not recurse, which keeps chains left-associative.
            next_precedence = self.get_token_precedence()
            if token_precedence < next_precedence:
                right = self.parse_binary_rhs(token_precedence + 1, right)
                if right is None:
                    return None

            left = BinaryExpr(op, left, right, self._join(left))

    def parse_expression(self) -> Optional[Expression]:
        """expression ::= primary binoprhs"""
        if self._depth >= self.max_depth:
            return self._fail(create_nesting_error(self.current, self.max_depth))

        self._depth += 1
        try:
            left = self.parse_primary()
            if left is None:
                return None
            return self.parse_binary_rhs(0, left)
        finally:
            self._depth -= 1

    # Top-level constructs

    def parse_prototype(self) -> Optional[Prototype]:
        """prototype ::= identifier '(' identifier* ')'"""
        start_token = self.current
        if start_token.type != TokenType.IDENTIFIER:
            return self._fail(create_prototype_error(
                "expected function name in prototype", start_token))

        name = start_token.value
        self.next_token()

        if not self.current.is_char("("):
            return self._fail(create_prototype_error(
                "expected '(' in prototype", self.current))

        params: List[str] = []
        while self.next_token().type == TokenType.IDENTIFIER:
            params.append(self.current.value)

        if not self.current.is_char(")"):
            return self._fail(create_prototype_error(
                "expected ')' in prototype", self.current))
        self.next_token()

        return Prototype(name, params, self._span_from(start_token))

    def parse_definition(self) -> Optional[FunctionDef]:
        """definition ::= 'def' prototype expression"""
        start_token = self.current
        self.next_token()  # Consume def

        prototype = self.parse_prototype()
        if prototype is None:
            return None

        body = self.parse_expression()
        if body is None:
            return None

        return FunctionDef(prototype, body, self._span_from(start_token))

    def parse_extern(self) -> Optional[Prototype]:
        """external ::= 'extern' prototype"""
        start_token = self.current
        self.next_token()  # Consume extern

        prototype = self.parse_prototype()
        if prototype is None:
            return None

        prototype.span = self._span_from(start_token)
        return prototype

    def parse_top_level_expr(self) -> Optional[FunctionDef]:
        """toplevelexpr ::= expression"""
        start_token = self.current
        body = self.parse_expression()
        if body is None:
            return None

        span = self._span_from(start_token)
        prototype = Prototype(ANONYMOUS_FUNCTION_NAME, [], span)
        return FunctionDef(prototype, body, span)

    # Utility methods

    def _fail(self, error: ParseError) -> None:
        """Record an error; returns None so callers can `return self._fail(...)`."""
        self.errors.append(error)
        return None

    def _span_from(self, start_token: Token) -> SourceSpan:
        """Span from `start_token` to the last consumed token."""
        end_token = self.previous if self.previous is not None else start_token
        return SourceSpan(start_token.location, end_token.location)

    def _join(self, left: Expression) -> SourceSpan:
        """Span from the start of `left` to the last consumed token."""
        end = self.previous.location
        start = left.span.start if left.span is not None else end
        return SourceSpan(start, end)
