# ---
# jupyter:
#   kernelspec:
#     display_name: Python 3
#     language: python
#     name: python3
# ---

# %% [markdown]
# # evaluator

# %%
#|default_exp evaluator

# %%
#|hide
from nblite import nbl_export, show_doc; nbl_export();
import tagexpr.evaluator as this_module

# %%
#|export
from typing import Callable, Iterable

from tagexpr._models import (
    Expression,
    IdentifierExpression,
    AndExpression,
    OrExpression,
    NotExpression,
)
from tagexpr.parser import parse

# %%
#|exporti
def _evaluate(expr: Expression, subjects: frozenset[str]) -> bool:
    # Operator chains nest one level per operator, so the tree is walked with
    # an explicit stack. A node is pushed once on the way down and, for AND and
    # OR, once more after its left operand has been evaluated.
    results = []
    stack = [(expr, False)]
    while stack:
        node, left_done = stack.pop()
        if isinstance(node, IdentifierExpression):
            # Exact, case-sensitive match. `*` in a pattern is not expanded.
            results.append(node.pattern in subjects)
        elif isinstance(node, NotExpression):
            if left_done:
                results.append(not results.pop())
            else:
                stack.append((node, True))
                stack.append((node.expr, False))
        elif isinstance(node, (AndExpression, OrExpression)):
            if not left_done:
                stack.append((node, True))
                stack.append((node.left, False))
                continue
            left = results.pop()
            if isinstance(node, AndExpression) and not left:
                results.append(False)
            elif isinstance(node, OrExpression) and left:
                results.append(True)
            else:
                # The right operand's result is the result of the node
                stack.append((node.right, False))
        else:
            raise TypeError(f"Invalid expression node: {node!r}")
    return results.pop()

# %%
#|hide
show_doc(this_module.evaluate)

# %%
#|export
def evaluate(expr: Expression, subjects: Iterable[str]) -> bool:
    """
    Evaluate an expression tree against a collection of subject names.

    An identifier is true if any subject is exactly equal to its pattern.
    AND and OR short-circuit; NOT negates. Evaluation has no side effects, so
    the same tree can be evaluated any number of times.

    Args:
        expr: Root of the expression tree
        subjects: The names (tags) of the item being tested. Not modified. A
            single string is one subject, not a sequence of characters.

    Returns:
        True if the expression holds for the given subjects, False otherwise
    """
    if isinstance(subjects, str):
        subjects = (subjects,)
    return _evaluate(expr, frozenset(subjects))


def create_evaluator(expr: Expression) -> Callable[[Iterable[str]], bool]:
    """Bind `expr` and return a function of the subjects only."""

    def _evaluator(subjects: Iterable[str]) -> bool:
        return evaluate(expr, subjects)

    return _evaluator

# %%
#|hide
show_doc(this_module.get_filter_func)

# %%
#|export
def get_filter_func(expression: str) -> Callable[[Iterable[str]], bool]:
    """
    Get a function that evaluates a boolean expression against a set of tags.

    The expression is parsed once, so syntax errors are raised here rather
    than on the first call of the returned function.

    Examples:
        >>> is_selected = get_filter_func("slow and not integration")
        >>> is_selected(["slow", "unit"])
        True
        >>> is_selected(["slow", "integration"])
        False

    Raises:
        TokenizerError: If the expression contains a character that cannot be tokenized
        ParseError: If the expression is invalid or contains syntax errors
    """
    return create_evaluator(parse(expression))

# %% [markdown]
# Example usage:

# %%
# Example usage:
tags = ["slow", "unit"]

assert evaluate(parse("slow and not integration"), tags) == True
assert evaluate(parse("slow and not integration"), ["slow", "integration"]) == False
assert evaluate(parse("not fast"), []) == True
assert get_filter_func("(unit OR smoke) AND NOT flaky")(tags) == True
