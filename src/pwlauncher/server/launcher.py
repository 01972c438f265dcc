"""Launcher: environment in, running Playwright browser server out.

This module provides the Launcher which resolves the PW_* environment into a
LaunchConfig, starts the remote browser server through the Playwright driver
and reports the endpoint (or why it could not be started).

Classes:
    Launcher: Runs a single browser server for the lifetime of the process.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import ValidationError
from rich.console import Console

from pwlauncher.config import CONFIG, EnvConfig
from pwlauncher.server.driver import BrowserServer, launch_server
from pwlauncher.server.exceptions import (
    BrowserLaunchError,
    ChromeBinaryMissingError,
    LauncherUnresolvedError,
)
from pwlauncher.server.resolver import build_launch_config, resolve_browser_type
from pwlauncher.server.views import BrowserEngine, LaunchConfig

logger = logging.getLogger(__name__)

LaunchServerFn = Callable[[str, dict[str, Any]], Awaitable[BrowserServer]]

# Substrings (lowercased) that mean the browser binary itself could not be started
LAUNCH_FAILURE_SIGNATURES = (
    'failed to launch',
    "distribution 'chrome' is not found",
)


def classify_launch_error(config: LaunchConfig, error: BaseException) -> BrowserLaunchError:
    """Turn an error from the launch call into a BrowserLaunchError.

    Args:
        config: The launch request that failed.
        error: Whatever the launch call raised.

    Returns:
        ChromeBinaryMissingError for a chrome-channel launch failure,
        otherwise a BrowserLaunchError carrying the full error detail.
    """
    message = getattr(error, 'message', None) or str(error) or type(error).__name__
    if config.engine is BrowserEngine.CHROME and any(
        signature in message.lower() for signature in LAUNCH_FAILURE_SIGNATURES
    ):
        return ChromeBinaryMissingError(message, engine=config.engine.value, cause=error)
    return BrowserLaunchError(message, engine=config.engine.value, cause=error)


class Launcher:
    """Starts one remote browser server and keeps it running.

    Example:
        >>> launcher = Launcher()
        >>> exit_code = await launcher.run()
    """

    def __init__(
        self,
        env: EnvConfig | None = None,
        launch: LaunchServerFn | None = None,
        console: Console | None = None,
    ):
        self.env = env
        self._launch = launch or launch_server
        self.console = console or Console()

    def resolve(self) -> tuple[LaunchConfig, str]:
        """Build the LaunchConfig and the Playwright browser type hosting it.

        Raises:
            LauncherUnresolvedError: If no browser type exists for the engine.
            ValidationError: If the environment cannot be loaded.
        """
        config = build_launch_config(self.env)
        return config, resolve_browser_type(config.engine)

    def _resolve_or_report(self) -> tuple[LaunchConfig, str] | None:
        try:
            return self.resolve()
        except LauncherUnresolvedError as e:
            logger.error(e.message)
        except ValidationError as e:
            logger.error(f'Invalid launcher configuration: {e}')
        return None

    def dry_run(self) -> int:
        """Resolve the configuration and print the launch request as JSON."""
        resolved = self._resolve_or_report()
        if resolved is None:
            return 1
        config, browser_type = resolved

        self.console.print_json(data={'browser': browser_type, 'options': config.to_launch_options()})
        return 0

    async def run(self) -> int:
        """Launch the server, report its endpoint and wait for it to close.

        Returns:
            Process exit status: 0 when the server closed cleanly, 1 on any
            launch failure or unexpected server exit.
        """
        resolved = self._resolve_or_report()
        if resolved is None:
            return 1
        config, browser_type = resolved

        logger.debug(f'Running in container: {CONFIG.IN_DOCKER}')
        logger.info(f'Attempting to launch Playwright {config.display_name} server (headless: {config.headless})...')

        try:
            server = await self._launch(browser_type, config.to_launch_options())
        except Exception as e:
            self._report_failure(config, classify_launch_error(config, e))
            return 1

        self._report_success(config, server)
        return await self._serve(config, server)

    async def _serve(self, config: LaunchConfig, server: BrowserServer) -> int:
        try:
            returncode = await server.wait_until_closed()
        except asyncio.CancelledError:
            logger.info(f'Shutting down Playwright {config.display_name} server')
            await server.close()
            raise

        if returncode:
            logger.error(f'Playwright {config.display_name} server exited unexpectedly with code {returncode}')
            return 1
        logger.info(f'Playwright {config.display_name} server closed')
        return 0

    def _report_success(self, config: LaunchConfig, server: BrowserServer) -> None:
        name = config.display_name
        self._print(f'Playwright {name} server (headless: {config.headless}) listening on {server.ws_endpoint}')
        if not config.headless:
            self._print(f'Browser ({name}) should be running in headed mode. Connect via VNC to view.')
        else:
            self._print(f'Browser ({name}) is running in headless mode. VNC will not show browser UI.')

    def _report_failure(self, config: LaunchConfig, error: BrowserLaunchError) -> None:
        name = config.display_name
        if isinstance(error, ChromeBinaryMissingError):
            logger.error(f'Failed to start {name}. {error.hint}\nOriginal error: {error.message}')
            return

        # Unexpected exception types get their traceback; driver errors already carry stderr
        exc_info = error.cause if not isinstance(error.cause, BrowserLaunchError) else None
        logger.error(f'Failed to start Playwright {name} server: {error.message}', exc_info=exc_info)

    def _print(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)
