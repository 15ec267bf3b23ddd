from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tagexpr._models import Token


class ExpressionError(ValueError):
    """Base class for errors raised while reading a filter expression."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        line: int | None = None,
        column: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.position = position  # 0-based offset into the input
        self.line = line  # 1-based
        self.column = column  # 1-based

    @property
    def location(self) -> str | None:
        """`line N, column M` if both are known, otherwise None."""
        if self.line is None or self.column is None:
            return None
        return f"line {self.line}, column {self.column}"


class TokenizerError(ExpressionError):
    """Raised when the input contains a character that cannot start a token."""


class ExpressionDepthError(ExpressionError):
    """Raised when an expression tree is nested deeper than its JSON form supports."""


class ParseError(ExpressionError):
    """Raised when the token stream does not follow the expression grammar."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        line: int | None = None,
        column: int | None = None,
        expected: str | None = None,
        actual: str | None = None,
    ):
        super().__init__(message, position, line, column)
        self.expected = expected
        self.actual = actual

    @classmethod
    def from_token(
        cls, message: str, token: Token, expected: str | None = None
    ) -> ParseError:
        """Create a ParseError located at `token`.

        `actual` is the token's text, or the name of its type when the text is
        empty (the EOF token).
        """
        return cls(
            message,
            position=token.position,
            line=token.line,
            column=token.column,
            expected=expected,
            actual=token.value or token.type.value,
        )
