"""
Main CLI application for zipmeta.

Defines the Typer application structure and command routing, keeping the
CLI layer thin over ZipSoftwareMetaProvider.
"""
import typer

from zipmeta.cli.commands.scan import scan_command


# Initialize Typer app
app = typer.Typer(help="zipmeta - firmware build metadata from zip packages")

# Register commands
app.command("scan", help="Extract metadata records for every boot file in the given packages.")(scan_command)


@app.callback()
def main():
    """zipmeta - firmware build metadata from zip packages.

    Run 'zipmeta scan PATH' with a package path or wildcard pattern.
    """
