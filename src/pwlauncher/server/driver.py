"""Remote browser server backed by Playwright's bundled driver.

The Python binding of Playwright does not expose ``launchServer``; the
Node.js driver shipped inside the ``playwright`` wheel does, through its
``launch-server`` command. This module runs that command as a child
process and hands back a small handle around it.

Classes:
    BrowserServer: Handle for a running driver process.
"""

import asyncio
import json
import logging
import os
import tempfile
from collections import deque
from pathlib import Path
from typing import Any

from playwright._impl._driver import compute_driver_executable, get_driver_env

from pwlauncher.server.exceptions import BrowserLaunchError

logger = logging.getLogger(__name__)

# Lines of driver stderr kept for error reporting
STDERR_BUFFER_LINES = 200


def _driver_command(browser_type: str, config_path: str) -> list[str]:
    """Command line for ``playwright launch-server``."""
    driver_executable, driver_cli = compute_driver_executable()
    return [
        str(driver_executable),
        str(driver_cli),
        'launch-server',
        '--browser',
        browser_type,
        '--config',
        config_path,
    ]


def _driver_env() -> dict[str, str]:
    # get_driver_env() starts from a copy of os.environ
    return get_driver_env()


class BrowserServer:
    """Handle for a browser server running inside the Playwright driver.

    The driver prints the websocket endpoint once the browser is up and then
    keeps running until it is terminated.

    Example:
        >>> server = await launch_server('chromium', {'port': 3000, 'wsPath': '/playwright'})
        >>> print(server.ws_endpoint)  # ws://0.0.0.0:3000/playwright
        >>> await server.wait_until_closed()
    """

    def __init__(
        self,
        process: asyncio.subprocess.Process,
        ws_endpoint: str,
        stderr_task: 'asyncio.Task[None] | None' = None,
    ):
        self._process = process
        self._ws_endpoint = ws_endpoint
        self._stderr_task = stderr_task
        self._closed = False

    @property
    def ws_endpoint(self) -> str:
        return self._ws_endpoint

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def returncode(self) -> int | None:
        return self._process.returncode

    async def wait_until_closed(self) -> int:
        """Wait for the driver process to exit and return its exit code."""
        returncode = await self._process.wait()
        await self._stop_stderr_task()
        return returncode

    async def close(self) -> None:
        """Terminate the driver, falling back to a kill after 5 seconds."""
        if self._closed:
            return
        self._closed = True

        process = self._process
        logger.info(f'Stopping browser server (PID {process.pid})')

        try:
            if process.returncode is None:
                process.terminate()
                try:
                    await asyncio.wait_for(process.wait(), timeout=5.0)
                except asyncio.TimeoutError:
                    logger.warning('Browser server did not terminate gracefully, killing')
                    if process.returncode is None:
                        process.kill()
                        await process.wait()
        except ProcessLookupError:
            pass

        await self._stop_stderr_task()

    async def _stop_stderr_task(self) -> None:
        task = self._stderr_task
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass


async def _drain_stderr(stream: asyncio.StreamReader, buffer: 'deque[str]') -> None:
    while True:
        line = await stream.readline()
        if not line:
            return
        text = line.decode(errors='replace').rstrip()
        buffer.append(text)
        logger.debug(f'[driver] {text}')


async def launch_server(browser_type: str, options: dict[str, Any]) -> BrowserServer:
    """Launch a remote browser server and wait for its endpoint.

    Args:
        browser_type: Playwright browser type (chromium, firefox or webkit).
        options: ``launchServer`` options (headless, port, args, host,
            wsPath and optionally channel).

    Returns:
        BrowserServer for the running driver.

    Raises:
        BrowserLaunchError: If the driver exits before reporting an endpoint.
    """
    fd, config_path = tempfile.mkstemp(prefix='pwlauncher_', suffix='.json')
    try:
        with os.fdopen(fd, 'w') as f:
            json.dump(options, f)

        command = _driver_command(browser_type, config_path)
        logger.debug(f'Starting Playwright driver: {command}')

        process = await asyncio.create_subprocess_exec(
            *command,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=_driver_env(),
        )
        logger.debug(f'Playwright driver started with PID {process.pid}')

        stderr_lines: deque[str] = deque(maxlen=STDERR_BUFFER_LINES)
        stderr_task = asyncio.create_task(_drain_stderr(process.stderr, stderr_lines))

        try:
            ws_endpoint = await _read_endpoint(process.stdout)
        except BaseException:
            if process.returncode is None:
                process.kill()
            stderr_task.cancel()
            await process.wait()
            raise
        if ws_endpoint is None:
            returncode = await process.wait()
            await stderr_task
            message = '\n'.join(stderr_lines).strip() or f'driver exited with code {returncode}'
            raise BrowserLaunchError(message, engine=browser_type)

        return BrowserServer(process, ws_endpoint, stderr_task)
    finally:
        Path(config_path).unlink(missing_ok=True)


async def _read_endpoint(stream: asyncio.StreamReader) -> str | None:
    """Return the first non-empty stdout line, or None at EOF."""
    while True:
        line = await stream.readline()
        if not line:
            return None
        text = line.decode(errors='replace').strip()
        if text:
            return text
