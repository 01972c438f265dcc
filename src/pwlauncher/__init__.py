"""pwlauncher - start a remote Playwright browser server from environment settings."""

__version__ = "0.1.0"

from pwlauncher.server import (
    BrowserEngine,
    BrowserLaunchError,
    BrowserServer,
    ChromeBinaryMissingError,
    LaunchConfig,
    Launcher,
    LauncherError,
    LauncherUnresolvedError,
    build_launch_config,
    launch_server,
)

__all__ = [
    # Version
    "__version__",
    # Config
    "BrowserEngine",
    "LaunchConfig",
    "build_launch_config",
    # Launch
    "BrowserServer",
    "Launcher",
    "launch_server",
    # Errors
    "LauncherError",
    "LauncherUnresolvedError",
    "BrowserLaunchError",
    "ChromeBinaryMissingError",
]
