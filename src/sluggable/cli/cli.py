"""CLI entrypoint: Typer app definition and command registration"""

import logging
from typing import Annotated

import typer

from sluggable.cli.commands import add_cmd, delete_cmd, init_cmd, list_cmd, preview_cmd, rename_cmd
from sluggable.utils.logging import configure_logging


app = typer.Typer(name="sluggable", no_args_is_help=True, help="Unique URL slugs for stored records")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log slug decisions")] = False,
    ):
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


app.command(name="init")(init_cmd)
app.command(name="preview")(preview_cmd)
app.command(name="add")(add_cmd)
app.command(name="rename")(rename_cmd)
app.command(name="list")(list_cmd)
app.command(name="delete")(delete_cmd)
