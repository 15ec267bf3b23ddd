# ---
# jupyter:
#   kernelspec:
#     display_name: Python 3
#     language: python
#     name: python3
# ---

# %% [markdown]
# # parser

# %%
#|default_exp parser

# %%
#|hide
from nblite import nbl_export, show_doc; nbl_export();
import tagexpr.parser as this_module

# %%
#|export
from typing import Sequence

from tagexpr import const
from tagexpr._enums import TokenType
from tagexpr._models import Token, Expression, identifier, and_, or_, not_
from tagexpr.errors import ParseError
from tagexpr.tokenizer import tokenize

# %%
#|hide
show_doc(this_module.parse)

# %%
#|exporti
class _Parser:
    """
    Recursive descent parser with one token of lookahead.

    Grammar:
        expression ::= or_expr
        or_expr    ::= and_expr ( OR and_expr )*
        and_expr   ::= not_expr ( AND not_expr )*
        not_expr   ::= NOT not_expr | primary
        primary    ::= IDENTIFIER | "(" expression ")"

    Operator precedence: NOT > AND > OR. AND and OR fold to the left, NOT
    nests to the right.
    """

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = tokens
        self.current = 0

    def parse(self) -> Expression:
        if self._peek().is_eof:
            raise ParseError.from_token(
                const.MSG_EXPECTED_EXPRESSION, self._peek(), const.EXPECTED_EXPRESSION
            )

        expr = self._parse_or_expression()

        # Check if we consumed all tokens
        token = self._peek()
        if not token.is_eof:
            raise ParseError.from_token(
                const.MSG_UNEXPECTED_TOKEN.format(value=token.value),
                token,
                const.EXPECTED_END,
            )

        return expr

    def _parse_or_expression(self) -> Expression:
        """Parse OR expressions (lowest precedence)."""
        left = self._parse_and_expression()

        while self._match(TokenType.OR):
            right = self._parse_and_expression()
            left = or_(left, right)

        return left

    def _parse_and_expression(self) -> Expression:
        """Parse AND expressions (medium precedence)."""
        left = self._parse_not_expression()

        while self._match(TokenType.AND):
            right = self._parse_not_expression()
            left = and_(left, right)

        return left

    def _parse_not_expression(self) -> Expression:
        """Parse NOT expressions (highest precedence)."""
        not_count = 0
        while self._match(TokenType.NOT):
            not_count += 1

        expr = self._parse_primary()
        for _ in range(not_count):
            expr = not_(expr)
        return expr

    def _parse_primary(self) -> Expression:
        """Parse identifiers and parenthesized expressions."""
        if self._match(TokenType.LEFT_PAREN):
            expr = self._parse_or_expression()
            self._consume(TokenType.RIGHT_PAREN, const.MSG_EXPECTED_RIGHT_PAREN)
            return expr

        if self._check(TokenType.IDENTIFIER):
            token = self._peek()
            self._advance()
            return identifier(token.value)

        token = self._peek()
        if token.is_eof:
            message = const.MSG_EXPECTED_PRIMARY
        elif token.type == TokenType.RIGHT_PAREN:
            message = const.MSG_MISSING_OPENING_PAREN
        elif token.type in (TokenType.AND, TokenType.OR):
            message = const.MSG_MISSING_LEFT_OPERAND.format(value=token.value)
        else:
            message = const.MSG_UNEXPECTED_TOKEN.format(value=token.value)
        raise ParseError.from_token(message, token, const.EXPECTED_PRIMARY)

    def _match(self, token_type: TokenType) -> bool:
        """Advance past the current token if it has the given type."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        return self._peek().type == token_type

    def _consume(self, token_type: TokenType, message: str) -> Token:
        token = self._peek()
        if not self._check(token_type):
            raise ParseError.from_token(message, token, token_type.value)
        self._advance()
        return token

    def _advance(self) -> None:
        # Never move past the EOF token
        if self.current < len(self.tokens) - 1:
            self.current += 1

    def _peek(self) -> Token:
        return self.tokens[self.current]

# %%
#|export
def parse_tokens(tokens: Sequence[Token]) -> Expression:
    """
    Parse a token stream produced by `tokenize` into an expression tree.

    Raises:
        ValueError: If `tokens` does not end with an EOF token, or has an EOF
            token anywhere else
        ParseError: If the tokens do not form a valid expression
    """
    if len(tokens) == 0 or not tokens[-1].is_eof:
        raise ValueError("Token stream must end with an EOF token.")
    if any(token.is_eof for token in tokens[:-1]):
        raise ValueError("Token stream must contain exactly one EOF token, at the end.")
    return _Parser(tokens).parse()


def parse(expression: str) -> Expression:
    """
    Parse a filter expression into an expression tree.

    Supports AND, OR, NOT operators (case-insensitive) and parentheses for grouping.
    Operator precedence: NOT > AND > OR

    Examples:
        "slow"
        "slow and not integration"
        "not (slow or flaky)"
        "(unit or smoke) and linux_*"

    Args:
        expression: Boolean expression string

    Returns:
        The root node of the expression tree

    Raises:
        TokenizerError: If the expression contains a character that cannot be tokenized
        ParseError: If the expression is empty or contains syntax errors
    """
    return parse_tokens(tokenize(expression))

# %%
parse("slow and not (integration or flaky)")

# %%
a, b, c = identifier("a"), identifier("b"), identifier("c")
assert parse("a or b and c") == or_(a, and_(b, c))
assert parse("not a and b") == and_(not_(a), b)
assert parse("a and b and c") == and_(and_(a, b), c)
assert parse("not not a") == not_(not_(a))

# %%
try:
    parse("slow and fast)")
except ParseError as e:
    print(e, e.location, e.expected, e.actual)
