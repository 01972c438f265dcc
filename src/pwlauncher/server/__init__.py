"""Browser server launch: configuration, driver handle and launcher."""

from pwlauncher.server.driver import BrowserServer, launch_server
from pwlauncher.server.exceptions import (
    BrowserLaunchError,
    ChromeBinaryMissingError,
    LauncherError,
    LauncherUnresolvedError,
)
from pwlauncher.server.launcher import Launcher, classify_launch_error
from pwlauncher.server.resolver import build_launch_config
from pwlauncher.server.views import BrowserEngine, LaunchConfig

__all__ = [
    'BrowserEngine',
    'BrowserLaunchError',
    'BrowserServer',
    'ChromeBinaryMissingError',
    'LaunchConfig',
    'Launcher',
    'LauncherError',
    'LauncherUnresolvedError',
    'build_launch_config',
    'classify_launch_error',
    'launch_server',
]
