# ---
# jupyter:
#   kernelspec:
#     display_name: Python 3
#     language: python
#     name: python3
# ---

# %% [markdown]
# # tokenizer

# %%
#|default_exp tokenizer

# %%
#|hide
from nblite import nbl_export, show_doc; nbl_export();
import tagexpr.tokenizer as this_module

# %%
#|export
from tagexpr import const
from tagexpr._enums import TokenType
from tagexpr._models import Token
from tagexpr.errors import TokenizerError

# %%
#|hide
show_doc(this_module.tokenize)

# %%
#|exporti
class _Tokenizer:
    """Single pass scanner over one input string. Created fresh for every call."""

    def __init__(self, expression: str):
        self.expression = expression
        self.pos = 0
        self.line = 1
        self.column = 1

    def tokenize(self) -> list[Token]:
        tokens = []
        while True:
            token = self._next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    def _next_token(self) -> Token:
        self._skip_whitespace()

        if self.pos >= len(self.expression):
            return self._make_token(TokenType.EOF, "")

        c = self.expression[self.pos]
        if c == const.LEFT_PAREN_CHAR:
            token = self._make_token(TokenType.LEFT_PAREN, c)
            self._advance()
            return token
        if c == const.RIGHT_PAREN_CHAR:
            token = self._make_token(TokenType.RIGHT_PAREN, c)
            self._advance()
            return token

        return self._read_word()

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.expression):
            c = self.expression[self.pos]
            if c == " " or c == "\t":
                self._advance()
            elif c == "\n":
                self._advance()
                self._newline()
            elif c == "\r":
                self._advance()
                # \r\n is a single line break
                if self.pos < len(self.expression) and self.expression[self.pos] == "\n":
                    self._advance()
                self._newline()
            else:
                break

    def _read_word(self) -> Token:
        start_pos, start_line, start_column = self.pos, self.line, self.column

        while self.pos < len(self.expression) and not _is_word_boundary(
            self.expression[self.pos]
        ):
            self._advance()
        value = self.expression[start_pos : self.pos]

        if not value:
            raise TokenizerError(
                const.MSG_UNEXPECTED_CHARACTER.format(char=self.expression[self.pos]),
                self.pos,
                self.line,
                self.column,
            )

        token_type = const.KEYWORDS.get(value.lower(), TokenType.IDENTIFIER)
        return Token(
            type=token_type,
            value=value,
            position=start_pos,
            line=start_line,
            column=start_column,
        )

    def _advance(self) -> None:
        if self.pos < len(self.expression):
            self.pos += 1
            self.column += 1

    def _newline(self) -> None:
        self.line += 1
        self.column = 1

    def _make_token(self, token_type: TokenType, value: str) -> Token:
        return Token(
            type=token_type,
            value=value,
            position=self.pos,
            line=self.line,
            column=self.column,
        )


def _is_word_boundary(c: str) -> bool:
    """Check if a character ends a word (identifier or keyword)."""
    return c in const.WHITESPACE_CHARS or c in (
        const.LEFT_PAREN_CHAR,
        const.RIGHT_PAREN_CHAR,
    )

# %%
#|export
def tokenize(expression: str) -> list[Token]:
    """
    Split a filter expression into tokens.

    Keywords (`and`, `or`, `not`) are matched case-insensitively and keep
    their original spelling as the token value. Any other run of characters
    that is not whitespace or a parenthesis is an identifier, so dots, colons,
    slashes and `*` wildcards are all part of identifiers.

    Examples:
        "slow and not integration"
        "(linux_amd64 OR *darwin*) AND NOT flaky"

    Args:
        expression: The text to tokenize

    Returns:
        The tokens in input order. The last token, and only the last, is EOF.

    Raises:
        TokenizerError: If a character cannot start any token
    """
    return _Tokenizer(expression).tokenize()

# %%
[(t.type.value, t.value, t.line, t.column) for t in tokenize("slow AND (*integration or a*z*)")]

# %%
tokenize("slow\r\nand\r\nfast")[-1]

# %%
assert [t.type for t in tokenize("android and oracle")] == [TokenType.IDENTIFIER, TokenType.AND, TokenType.IDENTIFIER, TokenType.EOF]
assert tokenize("   \t\n  ") == [Token(type=TokenType.EOF, value="", position=7, line=2, column=3)]
