"""
Test suite for the exprlang lexer.

Tests cover:
- Identifiers and keywords
- Number literals, including the multiple decimal point case
- Comments and whitespace
- Single-character tokens and end of input
- Source locations and stream input

Author: xwest
"""

import io
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from exprlang.lexer import Lexer, TokenType, tokenize_string


class TestLexer(unittest.TestCase):
    """Test cases for the lexer."""

    def _kinds(self, source: str):
        """Helper returning (type, value) pairs for every token."""
        return [(token.type, token.value) for token in tokenize_string(source)]

    def test_identifiers(self):
        """Identifiers keep their exact text."""
        for name in ["x", "foo", "x1", "abc123", "CamelCase", "a1b2c3"]:
            with self.subTest(name=name):
                lexer = Lexer(name)
                token = lexer.next_token()
                self.assertEqual(token.type, TokenType.IDENTIFIER)
                self.assertEqual(token.value, name)
                self.assertEqual(lexer.identifier, name)
                self.assertEqual(lexer.next_token().type, TokenType.EOF)

    def test_keywords(self):
        """def and extern are keywords, anything longer is an identifier."""
        self.assertEqual(self._kinds("def extern define externs"), [
            (TokenType.DEF, "def"),
            (TokenType.EXTERN, "extern"),
            (TokenType.IDENTIFIER, "define"),
            (TokenType.IDENTIFIER, "externs"),
            (TokenType.EOF, None),
        ])

    def test_numbers(self):
        """Number tokens carry the float value of their text."""
        for text in ["0", "42", "3.14", "1.", "007", "2.50", "123456789.125"]:
            with self.subTest(text=text):
                lexer = Lexer(text)
                token = lexer.next_token()
                self.assertEqual(token.type, TokenType.NUMBER)
                self.assertEqual(token.lexeme, text)
                self.assertEqual(token.value, float(text))
                self.assertEqual(lexer.number_value, float(text))
                self.assertFalse(lexer.has_warnings())

    def test_multiple_decimal_points_are_permissive(self):
        """'1.2.3' is one number token worth 1.2, with a warning."""
        lexer = Lexer("1.2.3 x")
        token = lexer.next_token()

        self.assertEqual(token.type, TokenType.NUMBER)
        self.assertEqual(token.lexeme, "1.2.3")
        self.assertEqual(token.value, 1.2)
        self.assertEqual(lexer.next_token().value, "x")

        self.assertTrue(lexer.has_warnings())
        self.assertEqual(lexer.warnings[0].code, "L003")
        self.assertIn("1.2.3", str(lexer.warnings[0]))

    def test_warning_text(self):
        lexer = Lexer("\n 1.2.3", "<test>")
        lexer.next_token()
        self.assertEqual(str(lexer.warnings[0]), (
            "WARNING: Numeric literal '1.2.3' has more than one decimal point\n"
            "  --> <test>:2:2\n"
            "  help: Only the leading '1.2' is used as the value.\n"
        ))

    def test_number_followed_by_letters(self):
        """A number stops at the first character that is neither digit nor dot."""
        self.assertEqual(self._kinds("12abc"), [
            (TokenType.NUMBER, 12.0),
            (TokenType.IDENTIFIER, "abc"),
            (TokenType.EOF, None),
        ])

    def test_comment_is_skipped(self):
        """A comment line lexes the same as nothing at all."""
        self.assertEqual(self._kinds("# ignore this\n42"), self._kinds("42"))

    def test_comment_ended_by_carriage_return(self):
        self.assertEqual(self._kinds("# note\rfoo"), self._kinds("foo"))

    def test_comment_running_into_end_of_input(self):
        self.assertEqual(self._kinds("1 # trailing"), [
            (TokenType.NUMBER, 1.0),
            (TokenType.EOF, None),
        ])

    def test_consecutive_comments(self):
        self.assertEqual(self._kinds("# one\n# two\n\n  x"), self._kinds("x"))

    def test_whitespace(self):
        self.assertEqual(self._kinds(" \t\r\n\v\f x \n"), self._kinds("x"))

    def test_single_character_tokens(self):
        """Any other character is returned as itself."""
        tokens = tokenize_string("(a+b);,<%")
        self.assertEqual(
            [t.lexeme for t in tokens if t.type == TokenType.CHAR],
            ["(", "+", ")", ";", ",", "<", "%"]
        )

    def test_lookahead_is_kept_between_calls(self):
        """The character that ends a token starts the next one."""
        self.assertEqual(self._kinds("a+b"), [
            (TokenType.IDENTIFIER, "a"),
            (TokenType.CHAR, "+"),
            (TokenType.IDENTIFIER, "b"),
            (TokenType.EOF, None),
        ])

    def test_underscore_and_non_ascii_are_characters(self):
        self.assertEqual(self._kinds("_x é"), [
            (TokenType.CHAR, "_"),
            (TokenType.IDENTIFIER, "x"),
            (TokenType.CHAR, "é"),
            (TokenType.EOF, None),
        ])

    def test_eof_repeats(self):
        """Once exhausted, every call returns EOF."""
        lexer = Lexer("")
        for _ in range(3):
            self.assertEqual(lexer.next_token().type, TokenType.EOF)

    def test_source_locations(self):
        lexer = Lexer("a\n  bc", "test.ex")
        first = lexer.next_token()
        second = lexer.next_token()

        self.assertEqual((first.location.line, first.location.column), (1, 1))
        self.assertEqual((second.location.line, second.location.column), (2, 3))
        self.assertEqual(second.location.offset, 4)
        self.assertEqual(str(second.location), "test.ex:2:3")

    def test_stream_source(self):
        """A text stream is read the same way as a string."""
        from_stream = [(t.type, t.value) for t in Lexer(io.StringIO("def f(x) x*2")).tokenize()]
        self.assertEqual(from_stream, self._kinds("def f(x) x*2"))

    def test_tokenize_ends_with_eof(self):
        tokens = tokenize_string("1 2 3")
        self.assertEqual(len(tokens), 4)
        self.assertTrue(tokens[-1].is_eof)

    def test_token_helpers(self):
        tokens = tokenize_string("def ( x")
        self.assertTrue(tokens[0].is_keyword)
        self.assertTrue(tokens[1].is_char("("))
        self.assertFalse(tokens[2].is_char("("))
        self.assertEqual(str(tokens[1]), "'('")
        self.assertEqual(str(tokens[3]), "end of input")


if __name__ == '__main__':
    unittest.main()
