# ---
# jupyter:
#   kernelspec:
#     display_name: Python 3
#     language: python
#     name: python3
# ---

# %% [markdown]
# # main

# %%
#|default_exp _cli.main

# %%
#|hide
from nblite import nbl_export, show_doc; nbl_export();

# %%
#|export
import typer
from typer import Argument, Option
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from tagexpr._cli.app import app, app_state
from tagexpr._models import (
    Expression,
    IdentifierExpression,
    get_expression_type,
    expression_to_json,
)
from tagexpr.errors import ExpressionError

# %% [markdown]
# ## Helpers for expression error handling

# %%
#|exporti
def _format_expression_error(e: ExpressionError) -> str:
    if e.location is None:
        return f"Error: {e}"
    return f"Error: {e.location}: {e}"


def _call_with_expression_error_handling(func, *args, **kwargs):
    """Call a function and report malformed expressions without a traceback."""
    try:
        return func(*args, **kwargs)
    except ExpressionError as e:
        typer.echo(_format_expression_error(e), err=True)
        raise typer.Exit(code=2)


def _build_tree(expr: Expression) -> Tree:
    root = None
    stack = [(expr, None)]
    while stack:
        node, parent = stack.pop()
        if isinstance(node, IdentifierExpression):
            label = f"[green]{escape(node.pattern)}[/green]"
        else:
            label = f"[bold]{get_expression_type(node).name}[/bold]"
        branch = Tree(label) if parent is None else parent.add(label)
        if root is None:
            root = branch
        # Reversed so the left operand is added first
        stack.extend((child, branch) for child in reversed(node.children()))
    return root

# %% [markdown]
# ## Main command

# %%
#|export
@app.callback()
def entrypoint(
    ctx: typer.Context,
    verbose: bool = Option(
        False, "--verbose", "-v", help="Print the parsed expression before evaluating it."
    ),
):
    app_state["verbose"] = verbose
    if ctx.invoked_subcommand is not None:
        return
    typer.echo(ctx.get_help())

# %%
# !tagexpr

# %% [markdown]
# ## tokens

# %%
#|export
@app.command(name="tokens")
def cli_tokens(
    expression: str = Argument(..., help="The filter expression to tokenize."),
):
    """
    Show the tokens of a filter expression.
    """
    from tagexpr.tokenizer import tokenize

    tokens = _call_with_expression_error_handling(tokenize, expression)

    table = Table("type", "value", "position", "line", "column")
    for token in tokens:
        table.add_row(
            token.type.value,
            escape(token.value),
            str(token.position),
            str(token.line),
            str(token.column),
        )
    Console().print(table)

# %%
# !tagexpr tokens "slow and (fast)"

# %% [markdown]
# ## parse

# %%
#|export
@app.command(name="parse")
def cli_parse(
    expression: str = Argument(..., help="The filter expression to parse."),
    json: bool = Option(False, "--json", help="Print the expression tree as JSON."),
):
    """
    Parse a filter expression and show its expression tree.
    """
    from tagexpr.parser import parse

    expr = _call_with_expression_error_handling(parse, expression)

    if json:
        typer.echo(
            _call_with_expression_error_handling(expression_to_json, expr, indent=2)
        )
    else:
        Console().print(_build_tree(expr))

# %%
# !tagexpr parse 'not (slow or flaky)'

# %% [markdown]
# ## eval

# %%
#|export
@app.command(name="eval")
def cli_eval(
    expression: str = Argument(..., help="The filter expression to evaluate."),
    subjects: list[str] | None = Argument(
        None, help="The tags to evaluate the expression against."
    ),
    check: bool = Option(
        False,
        "--check",
        help="Exit with code 0 if the expression is true and 1 if it is false.",
    ),
):
    """
    Evaluate a filter expression against a list of tags.
    """
    from tagexpr.parser import parse
    from tagexpr.evaluator import evaluate

    expr = _call_with_expression_error_handling(parse, expression)
    if app_state.get("verbose"):
        Console().print(_build_tree(expr))

    result = evaluate(expr, subjects or [])
    typer.echo("true" if result else "false")
    if check and not result:
        raise typer.Exit(code=1)

# %%
# !tagexpr eval --check 'slow and not integration' slow unit
