# ---
# jupyter:
#   kernelspec:
#     display_name: Python 3
#     language: python
#     name: python3
# ---

# %% [markdown]
# # app
#
# The `tagexpr` Typer application. Commands are registered in `_cli.main`.

# %%
#|default_exp _cli.app

# %%
#|hide
import nblite; from nblite import show_doc; nblite.nbl_export()

# %%
#|export
import typer

# %%
#|export
app = typer.Typer(invoke_without_command=True)
app_state = {}
