"""
Top-level CLI commands: run, sweep, backup, restore, status.
"""

import asyncio
import os
from typing import Optional

import typer

from crashguard.config import GuardConfig


def configure_logging(verbose: bool = False):
    """Configure logging for the CLI."""
    from crashguard.logger import setup_logging

    log_level = "DEBUG" if verbose else os.getenv("LOG_LEVEL", "INFO")
    setup_logging(level=log_level, log_file=os.getenv("LOG_FILE"))


def load_config() -> GuardConfig:
    return GuardConfig.from_env()


def register_commands(app: typer.Typer):
    """Attach the top-level commands to ``app``."""

    @app.command()
    def run():
        """Run the crash guard in the foreground until interrupted."""
        from crashguard.core.service import GuardService

        service = GuardService(load_config())

        async def _main():
            await service.start()
            try:
                await asyncio.Event().wait()
            finally:
                await service.stop()

        try:
            service.supervisor.call(asyncio.run, _main())
        except KeyboardInterrupt:
            typer.echo("Stopped.")

    @app.command()
    def sweep(
        max_age_minutes: Optional[float] = typer.Option(
            None,
            "--max-age-minutes",
            "-m",
            help="Only remove locks older than this. Omit to remove every lock.",
        ),
    ):
        """Remove session lock files under the agents directory."""
        from crashguard.maintenance.lock_janitor import LockJanitor

        config = load_config()
        janitor = LockJanitor(config.agents_dir, config.lock_suffix)
        max_age_ms = 0 if max_age_minutes is None else int(max_age_minutes * 60 * 1000)

        if max_age_minutes is not None and max_age_ms <= 0:
            typer.echo("--max-age-minutes must be positive.", err=True)
            raise typer.Exit(code=1)

        removed = janitor.sweep(max_age_ms)
        typer.echo(f"Removed {removed} lock file(s) from {config.agents_dir}")

    @app.command()
    def backup():
        """Copy changed memory files to the backup directory."""
        from crashguard.maintenance.state_mirror import StateMirror

        config = load_config()
        copied = StateMirror(config.memory_dir, config.backup_dir).backup()
        typer.echo(f"Backed up {copied} file(s) to {config.backup_dir}")

    @app.command()
    def restore():
        """Restore memory files from backup into an empty memory directory."""
        from crashguard.maintenance.state_mirror import StateMirror

        config = load_config()
        restored = StateMirror(config.memory_dir, config.backup_dir).restore()
        if restored:
            typer.echo(f"Restored {restored} file(s) into {config.memory_dir}")
        else:
            typer.echo("Nothing restored (memory directory not empty or no backup).")

    @app.command()
    def status():
        """Show guard paths and current lock files."""
        from crashguard.maintenance.lock_janitor import LockJanitor

        config = load_config()
        markers = LockJanitor(config.agents_dir, config.lock_suffix).find_markers()

        typer.echo(f"  Agents dir:    {config.agents_dir}")
        typer.echo(f"  Memory dir:    {config.memory_dir}")
        typer.echo(f"  Backup dir:    {config.backup_dir}")
        typer.echo(f"  Lock files:    {len(markers)}")
        for marker in markers:
            typer.echo(f"    - {marker}")
