"""CLI entrypoint: Typer app definition and command registration"""

import typer

from vaultpub.cli.commands import run_cmd


app = typer.Typer(name="vaultpub", add_completion=False, help="Normalize note vault front matter and publish notes for Quartz")

app.command()(run_cmd)
