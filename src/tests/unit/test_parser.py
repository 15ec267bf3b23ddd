import pytest

from tagexpr._enums import TokenType
from tagexpr._models import Token, identifier, and_, or_, not_
from tagexpr.errors import ParseError, ExpressionError
from tagexpr.parser import parse, parse_tokens
from tagexpr.tokenizer import tokenize

a, b, c, d = identifier("a"), identifier("b"), identifier("c"), identifier("d")


class TestBasicOperators:
    """Tests for single operators."""

    def test_identifier(self):
        """A single word parses to an identifier."""
        assert parse("slow") == identifier("slow")

    def test_and(self):
        """`a and b` parses to AND."""
        assert parse("slow and integration") == and_(
            identifier("slow"), identifier("integration")
        )

    def test_or(self):
        """`a or b` parses to OR."""
        assert parse("slow or fast") == or_(identifier("slow"), identifier("fast"))

    def test_not(self):
        """`not a` parses to NOT."""
        assert parse("not slow") == not_(identifier("slow"))

    def test_wildcard_pattern_is_kept(self):
        """Wildcard patterns are stored as written."""
        assert parse("test_* or *integration*") == or_(
            identifier("test_*"), identifier("*integration*")
        )

    def test_uppercase_keywords(self):
        """Keywords are case-insensitive."""
        assert parse("a AND b Or NOT c") == or_(and_(a, b), not_(c))


class TestAssociativity:
    """Tests for operator associativity."""

    def test_and_is_left_associative(self):
        """`a and b and c` == `(a and b) and c`"""
        assert parse("a and b and c") == and_(and_(a, b), c)

    def test_or_is_left_associative(self):
        """`a or b or c` == `(a or b) or c`"""
        assert parse("a or b or c") == or_(or_(a, b), c)

    def test_double_not(self):
        """`not not a` nests to the right."""
        assert parse("not not a") == not_(not_(a))

    def test_triple_not(self):
        """`not not not a` nests to the right."""
        assert parse("not not not a") == not_(not_(not_(a)))

    def test_long_not_chain(self):
        """Thousands of NOTs parse without hitting the recursion limit."""
        expr = parse("not " * 5000 + "a")
        for _ in range(5000):
            expr = expr.expr
        assert expr == a

    def test_long_chain(self):
        """A 5000-term chain folds to the left."""
        expr = parse(" and ".join(f"t{i}" for i in range(5000)))
        assert expr.right == identifier("t4999")
        assert expr.left.right == identifier("t4998")


class TestPrecedence:
    """Tests for operator precedence. NOT > AND > OR"""

    def test_not_binds_tighter_than_and(self):
        """`not a and b` == `(not a) and b`"""
        assert parse("not a and b") == and_(not_(a), b)

    def test_and_binds_tighter_than_or(self):
        """`a or b and c` == `a or (b and c)`"""
        assert parse("a or b and c") == or_(a, and_(b, c))

    def test_or_after_and(self):
        """`a and b or c` == `(a and b) or c`"""
        assert parse("a and b or c") == or_(and_(a, b), c)

    def test_not_binds_tighter_than_or(self):
        """`not a or b` == `(not a) or b`"""
        assert parse("not a or b") == or_(not_(a), b)

    def test_complex_precedence(self):
        """`a or b and not c or d` == `(a or (b and (not c))) or d`"""
        assert parse("a or b and not c or d") == or_(or_(a, and_(b, not_(c))), d)

    def test_multiple_and_or(self):
        """`a and b or c and d` == `(a and b) or (c and d)`"""
        assert parse("a and b or c and d") == or_(and_(a, b), and_(c, d))


class TestParentheses:
    """Tests for parenthesized expressions."""

    def test_parenthesized_identifier(self):
        """`(slow)` is just the identifier."""
        assert parse("(slow)") == identifier("slow")

    def test_parens_override_precedence(self):
        """`(a or b) and c` groups the OR first."""
        assert parse("(a or b) and c") == and_(or_(a, b), c)

    def test_nested_parens(self):
        """Redundant parentheses disappear."""
        assert parse("((a))") == a

    def test_not_with_parens(self):
        """`not (slow or flaky)`"""
        assert parse("not (slow or flaky)") == not_(
            or_(identifier("slow"), identifier("flaky"))
        )

    def test_no_spaces_around_parens(self):
        """`(a or b)and c` needs no whitespace around parentheses."""
        assert parse("(a or b)and c") == and_(or_(a, b), c)

    def test_deeply_nested(self):
        """Deeply nested groups keep their structure."""
        e, f, g, h = (identifier(x) for x in "efgh")
        assert parse("(((a and b) or (c and d)) and ((e or f) and (g or h)))") == and_(
            or_(and_(a, b), and_(c, d)),
            and_(or_(e, f), or_(g, h)),
        )

    def test_multiline_expression(self):
        """Newlines are whitespace."""
        assert parse("slow\nand not\r\n  integration") == and_(
            identifier("slow"), not_(identifier("integration"))
        )


class TestParseErrors:
    """Tests for malformed expressions."""

    @pytest.mark.parametrize("text", ["", "   ", "\n"])
    def test_empty_input(self, text):
        """Empty input has no expression."""
        with pytest.raises(ParseError) as exc_info:
            parse(text)
        assert str(exc_info.value) == "Unexpected end of input: expected expression"
        assert exc_info.value.expected == "expression"
        assert exc_info.value.actual == "EOF"

    @pytest.mark.parametrize("text, keyword", [("and slow", "and"), ("or slow", "or"), ("AND slow", "AND")])
    def test_leading_operator(self, text, keyword):
        """A leading AND/OR is missing its left operand."""
        with pytest.raises(ParseError) as exc_info:
            parse(text)
        assert str(exc_info.value) == f"Unexpected '{keyword}': missing left operand"
        assert exc_info.value.actual == keyword
        assert exc_info.value.expected == 'identifier or "("'
        assert exc_info.value.position == 0

    @pytest.mark.parametrize(
        "text, keyword",
        [
            ("slow and and fast", "and"),
            ("slow or and fast", "and"),
            ("slow and or fast", "or"),
            ("slow OR OR fast", "OR"),
        ],
    )
    def test_consecutive_operators(self, text, keyword):
        """An operator directly after another is missing its left operand."""
        with pytest.raises(ParseError, match=f"^Unexpected '{keyword}': missing left operand$"):
            parse(text)

    @pytest.mark.parametrize("text", ["slow and", "slow or", "not", "not not", "(", "a and ("])
    def test_missing_operand(self, text):
        """Input ending where an operand is expected."""
        with pytest.raises(ParseError) as exc_info:
            parse(text)
        assert str(exc_info.value) == 'Unexpected end of input: expected identifier or "("'
        assert exc_info.value.actual == "EOF"

    def test_empty_parens(self):
        """`()` has no expression inside."""
        with pytest.raises(ParseError) as exc_info:
            parse("()")
        assert str(exc_info.value) == "Unexpected ')': missing opening parenthesis or expression"
        assert exc_info.value.actual == ")"
        assert exc_info.value.position == 1

    def test_empty_parens_after_operator(self):
        """`a and ()` has no expression inside the parentheses."""
        with pytest.raises(ParseError, match="missing opening parenthesis or expression"):
            parse("a and ()")

    def test_unmatched_opening_paren(self):
        """An unclosed parenthesis is reported at EOF."""
        with pytest.raises(ParseError) as exc_info:
            parse("(slow and fast")
        assert str(exc_info.value) == "Expected ')' after expression"
        assert exc_info.value.expected == "RIGHT_PAREN"
        assert exc_info.value.actual == "EOF"
        assert exc_info.value.position == 14

    def test_unmatched_closing_paren(self):
        """A stray `)` after a complete expression."""
        with pytest.raises(ParseError) as exc_info:
            parse("slow and fast)")
        assert str(exc_info.value) == "Unexpected token ')'"
        assert exc_info.value.expected == "end of expression"
        assert exc_info.value.actual == ")"
        assert exc_info.value.position == 13

    def test_missing_operator(self):
        """`slow (integration)` has no operator between the operands."""
        with pytest.raises(ParseError) as exc_info:
            parse("slow (integration)")
        assert str(exc_info.value) == "Unexpected token '('"
        assert exc_info.value.expected == "end of expression"

    def test_two_identifiers(self):
        """Two identifiers in a row."""
        with pytest.raises(ParseError, match="^Unexpected token 'fast'$"):
            parse("slow fast")

    def test_trailing_keyword_after_expression(self):
        """A NOT after a complete expression is a leftover token."""
        with pytest.raises(ParseError, match="^Unexpected token 'not'$"):
            parse("slow not fast")

    def test_position_information(self):
        """Errors carry the position of the offending token."""
        with pytest.raises(ParseError) as exc_info:
            parse("slow and")
        assert exc_info.value.position == 8
        assert exc_info.value.line == 1
        assert exc_info.value.column == 9

    def test_position_on_later_line(self):
        """Line and column point at the offending token on a later line."""
        with pytest.raises(ParseError) as exc_info:
            parse("slow and\n  or fast")
        assert exc_info.value.line == 2
        assert exc_info.value.column == 3
        assert exc_info.value.location == "line 2, column 3"

    def test_parse_error_is_value_error(self):
        """ParseError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse("a and")


class TestParseTokens:
    """Tests for parsing pre-tokenized input."""

    def test_parse_tokens_matches_parse(self):
        """parse_tokens on a tokenize result matches parse."""
        text = "slow and not (integration or flaky)"
        assert parse_tokens(tokenize(text)) == parse(text)

    def test_tokens_can_be_reused(self):
        """The same token stream parses to the same tree twice."""
        tokens = tokenize("a or b")
        assert parse_tokens(tokens) == parse_tokens(tokens)

    def test_empty_stream_raises(self):
        """A stream without tokens is rejected."""
        with pytest.raises(ValueError, match="EOF"):
            parse_tokens([])

    def test_stream_without_eof_raises(self):
        """A stream that does not end with EOF is rejected."""
        tokens = tokenize("a")[:-1]
        with pytest.raises(ValueError, match="EOF"):
            parse_tokens(tokens)

    def test_eof_before_end_raises(self):
        """Tokens after an EOF token are not silently dropped."""
        tokens = tokenize("a") + tokenize("b")
        with pytest.raises(ValueError, match="exactly one EOF"):
            parse_tokens(tokens)

    def test_hand_built_stream(self):
        """Streams can be built by hand."""
        tokens = [
            Token(type=TokenType.NOT, value="NOT", position=0, line=1, column=1),
            Token(type=TokenType.IDENTIFIER, value="x", position=4, line=1, column=5),
            Token(type=TokenType.EOF, value="", position=5, line=1, column=6),
        ]
        assert parse_tokens(tokens) == not_(identifier("x"))


class TestParseError:
    """Tests for the ParseError class."""

    def test_properties(self):
        """ParseError keeps every field."""
        error = ParseError("Test error", 5, 1, 6, "identifier", "and")
        assert str(error) == "Test error"
        assert error.message == "Test error"
        assert error.position == 5
        assert error.line == 1
        assert error.column == 6
        assert error.expected == "identifier"
        assert error.actual == "and"

    def test_is_exception(self):
        """ParseError is an ExpressionError."""
        error = ParseError("Test error", 0, 1, 1)
        assert isinstance(error, ExpressionError)
        assert isinstance(error, Exception)
        assert error.expected is None
        assert error.actual is None

    def test_optional_location(self):
        """Position fields are optional."""
        error = ParseError("Test error")
        assert error.position is None
        assert error.location is None

    def test_from_token(self):
        """from_token copies the token's position and text."""
        token = Token(type=TokenType.AND, value="And", position=3, line=2, column=4)
        error = ParseError.from_token("msg", token, "identifier")
        assert (error.position, error.line, error.column) == (3, 2, 4)
        assert error.expected == "identifier"
        assert error.actual == "And"

    def test_from_eof_token(self):
        """from_token uses the type name when the token has no text."""
        token = Token(type=TokenType.EOF, value="", position=0, line=1, column=1)
        assert ParseError.from_token("msg", token).actual == "EOF"
