# ---
# jupyter:
#   kernelspec:
#     display_name: Python 3
#     language: python
#     name: python3
# ---

# %% [markdown]
# # _enums
#
# Token and expression node kinds.

# %%
#|default_exp _enums

# %%
#|hide
from nblite import nbl_export, show_doc; nbl_export();

# %%
#|export
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
