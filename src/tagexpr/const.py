from pydantic import BaseModel, ConfigDict

from tagexpr._enums import TokenType


WHITESPACE_CHARS = frozenset(" \t\n\r")
LEFT_PAREN_CHAR = "("
RIGHT_PAREN_CHAR = ")"

# Keywords are matched against the lower-cased word.
KEYWORDS = {
    "and": TokenType.AND,
    "or": TokenType.OR,
    "not": TokenType.NOT,
}


MSG_EXPECTED_EXPRESSION = "Unexpected end of input: expected expression"
MSG_EXPECTED_PRIMARY = 'Unexpected end of input: expected identifier or "("'
MSG_MISSING_LEFT_OPERAND = "Unexpected '{value}': missing left operand"
MSG_MISSING_OPENING_PAREN = "Unexpected ')': missing opening parenthesis or expression"
MSG_UNEXPECTED_TOKEN = "Unexpected token '{value}'"
MSG_EXPECTED_RIGHT_PAREN = "Expected ')' after expression"
MSG_UNEXPECTED_CHARACTER = "Unexpected character '{char}'"
MSG_TOO_DEEP_FOR_JSON = (
    "Expression is nested {depth} levels deep; JSON supports at most {max_depth}"
)

EXPECTED_EXPRESSION = "expression"
EXPECTED_PRIMARY = 'identifier or "("'
EXPECTED_END = "end of expression"


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


# pydantic-core and its JSON parser stop at a fixed nesting depth.
MAX_JSON_DEPTH = 100
