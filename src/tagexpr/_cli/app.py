import typer


app = typer.Typer(invoke_without_command=True)
app_state = {}
