"""Logging setup for pwlauncher.

Diagnostics always go to a stream handler (stderr by default); the
endpoint itself is printed to stdout by the launcher so that it can be
piped without log noise.
"""

import logging
import sys
from typing import TextIO

from pwlauncher.config import CONFIG

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
    'critical': logging.CRITICAL,
}

_configured = False


def setup_logging(
    stream: TextIO | None = None,
    log_level: str | None = None,
    force_setup: bool = False,
) -> logging.Logger:
    """Configure the ``pwlauncher`` logger hierarchy.

    Args:
        stream: Stream for the handler. Defaults to ``sys.stderr``.
        log_level: One of debug/info/warning/error/critical. Defaults to
            ``PWLAUNCHER_LOGGING_LEVEL``.
        force_setup: Reconfigure even if logging was already set up, or if
            ``PWLAUNCHER_SETUP_LOGGING`` is false.

    Returns:
        The package root logger.
    """
    global _configured

    root_logger = logging.getLogger('pwlauncher')
    if _configured and not force_setup:
        return root_logger
    if not CONFIG.SETUP_LOGGING and not force_setup:
        return root_logger

    level_name = (log_level or CONFIG.LOGGING_LEVEL).lower()
    level = _LEVELS.get(level_name, logging.INFO)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    _configured = True
    return root_logger
