from enum import Enum


class TokenType(str, Enum):
    IDENTIFIER = "IDENTIFIER"
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    LEFT_PAREN = "LEFT_PAREN"
    RIGHT_PAREN = "RIGHT_PAREN"
    EOF = "EOF"


class ExpressionType(str, Enum):
    IDENTIFIER = "identifier"
    AND = "and"
    OR = "or"
    NOT = "not"
