from typing import Annotated, Literal, Union
from pydantic import Field, TypeAdapter

from tagexpr import const
from tagexpr._enums import TokenType, ExpressionType
from tagexpr.errors import ExpressionDepthError


class Token(const.StrictModel):
    type: TokenType
    value: str  # Original text of the token. Empty for EOF.
    position: int  # 0-based offset of the first character
    line: int  # 1-based
    column: int  # 1-based

    @property
    def is_eof(self) -> bool:
        return self.type == TokenType.EOF


class _ExpressionNode(const.StrictModel):
    def children(self) -> tuple["Expression", ...]:
        """The direct subexpressions, left to right."""
        return ()

    # Operator chains nest one level per operator, so equality and hashing
    # walk the tree with an explicit stack.
    def __eq__(self, other) -> bool:
        if not isinstance(other, _ExpressionNode):
            return NotImplemented
        pairs = [(self, other)]
        while pairs:
            a, b = pairs.pop()
            if a is b:
                continue
            if a.type != b.type or getattr(a, "pattern", None) != getattr(b, "pattern", None):
                return False
            pairs.extend(zip(a.children(), b.children()))
        return True

    def __hash__(self) -> int:
        hashes = {}
        stack = [(self, False)]
        while stack:
            node, children_done = stack.pop()
            children = node.children()
            if children_done or not children:
                hashes[id(node)] = hash(
                    (node.type, getattr(node, "pattern", None))
                    + tuple(hashes[id(child)] for child in children)
                )
            else:
                stack.append((node, True))
                stack.extend((child, False) for child in children)
        return hashes[id(self)]


class IdentifierExpression(_ExpressionNode):
    """
    A leaf matching subjects against `pattern`.

    The pattern may contain `*` characters. They are kept as written and
    compared literally by the evaluator.
    """

    type: Literal["identifier"] = "identifier"
    pattern: str


class AndExpression(_ExpressionNode):
    type: Literal["and"] = "and"
    left: "Expression"
    right: "Expression"

    def children(self) -> tuple["Expression", ...]:
        return (self.left, self.right)


class OrExpression(_ExpressionNode):
    type: Literal["or"] = "or"
    left: "Expression"
    right: "Expression"

    def children(self) -> tuple["Expression", ...]:
        return (self.left, self.right)


class NotExpression(_ExpressionNode):
    type: Literal["not"] = "not"
    expr: "Expression"

    def children(self) -> tuple["Expression", ...]:
        return (self.expr,)


Expression = Annotated[
    Union[IdentifierExpression, AndExpression, OrExpression, NotExpression],
    Field(discriminator="type"),
]

AndExpression.model_rebuild()
OrExpression.model_rebuild()
NotExpression.model_rebuild()

expression_adapter = TypeAdapter(Expression)


def get_expression_type(expr: Expression) -> ExpressionType:
    return ExpressionType(expr.type)


def expression_depth(expr: Expression) -> int:
    """Number of nodes on the longest path from `expr` down to an identifier."""
    depth = 0
    stack = [(expr, 1)]
    while stack:
        node, level = stack.pop()
        depth = max(depth, level)
        stack.extend((child, level + 1) for child in node.children())
    return depth


def identifier(pattern: str) -> IdentifierExpression:
    """
    Create an identifier node.

    Examples:
        identifier("slow")
        identifier("test_*")
    """
    return IdentifierExpression(pattern=pattern)


def and_(left: Expression, right: Expression) -> AndExpression:
    """Create an AND node, e.g. `and_(identifier("slow"), identifier("integration"))`."""
    return AndExpression(left=left, right=right)


def or_(left: Expression, right: Expression) -> OrExpression:
    """Create an OR node, e.g. `or_(identifier("slow"), identifier("fast"))`."""
    return OrExpression(left=left, right=right)


def not_(expr: Expression) -> NotExpression:
    """Create a NOT node, e.g. `not_(identifier("slow"))`."""
    return NotExpression(expr=expr)


def expression_to_json(expr: Expression, indent: int | None = None) -> str:
    """
    Dump an expression tree to JSON.

    Raises:
        ExpressionDepthError: If the tree is nested deeper than `const.MAX_JSON_DEPTH`
    """
    depth = expression_depth(expr)
    if depth > const.MAX_JSON_DEPTH:
        raise ExpressionDepthError(
            const.MSG_TOO_DEEP_FOR_JSON.format(depth=depth, max_depth=const.MAX_JSON_DEPTH)
        )
    return expression_adapter.dump_json(expr, indent=indent).decode()


def expression_from_json(data: str | bytes) -> Expression:
    """
    Load an expression tree from its JSON form.

    Raises:
        pydantic.ValidationError: If the JSON does not describe an expression tree,
            or is nested deeper than pydantic's JSON parser allows
    """
    return expression_adapter.validate_json(data)
