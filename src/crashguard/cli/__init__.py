"""
crashguard CLI.

- main: run, sweep, backup, restore, status
"""

import typer

from crashguard.cli.main import configure_logging, register_commands

app = typer.Typer(help="crashguard - background maintenance for agent hosts")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging (DEBUG level)"
    ),
):
    """
    crashguard - background maintenance for agent hosts.
    """
    configure_logging(verbose)


register_commands(app)

if __name__ == "__main__":
    app()
