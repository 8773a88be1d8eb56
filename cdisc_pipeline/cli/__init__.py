import click

from .commands.describe import describe_command
from .commands.generate import generate_command
from .commands.run import run_command


@click.group()
def app() -> None:
    pass


app.add_command(generate_command, name="generate")
app.add_command(run_command, name="run")
app.add_command(describe_command, name="describe")
__all__ = ["app"]
