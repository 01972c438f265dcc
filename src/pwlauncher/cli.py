"""CLI module for pwlauncher."""

from __future__ import annotations

import asyncio
import signal
import sys
from typing import Optional

import click
from rich.console import Console

from pwlauncher import __version__
from pwlauncher.logging_config import setup_logging
from pwlauncher.server.launcher import Launcher

console = Console()


async def _run_until_signalled(launcher: Launcher) -> int:
    """Run the launcher, cancelling it on SIGTERM so the driver gets stopped."""
    loop = asyncio.get_running_loop()
    task = asyncio.current_task()
    try:
        loop.add_signal_handler(signal.SIGTERM, task.cancel)
    except (NotImplementedError, RuntimeError):
        # Windows event loops have no signal handlers
        pass

    try:
        return await launcher.run()
    except asyncio.CancelledError:
        return 0


@click.command()
@click.version_option(version=__version__, prog_name="pwlauncher")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error", "critical"], case_sensitive=False),
    default=None,
    help="Diagnostic log level (defaults to PWLAUNCHER_LOGGING_LEVEL or info)",
)
@click.option("--dry-run", is_flag=True, help="Print the resolved launch options as JSON and exit")
def cli(log_level: Optional[str], dry_run: bool):
    """Start a remote Playwright browser server.

    The browser is selected with environment variables:

    \b
        PW_BROWSER   chromium (default), firefox, webkit, chrome/google-chrome
        PW_HEADLESS  "true" for headless, anything else runs headed
        PW_ARGS      space-separated extra browser flags

    The server listens on ws://0.0.0.0:3000/playwright until stopped.
    """
    setup_logging(stream=sys.stderr, log_level=log_level, force_setup=log_level is not None)

    launcher = Launcher(console=console)
    if dry_run:
        sys.exit(launcher.dry_run())

    try:
        exit_code = asyncio.run(_run_until_signalled(launcher))
    except KeyboardInterrupt:
        exit_code = 0
    sys.exit(exit_code)


def main():
    """Main entry point for the ``pwlauncher`` console script."""
    cli()


if __name__ == "__main__":
    main()
