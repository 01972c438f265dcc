"""Pytest configuration and fixtures for the pwlauncher test suite.

Configuration:
    - Adds src/ directory to Python path for test imports
    - Clears the PW_* environment so each test starts from defaults

Shared Fakes:
    FakeBrowserServer stands in for the driver-backed BrowserServer so the
    launcher can be exercised without a browser installed.
"""

import io
import sys
from pathlib import Path

import pytest

src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from rich.console import Console  # noqa: E402


PW_ENV_VARS = ("PW_BROWSER", "PW_HEADLESS", "PW_ARGS", "PWLAUNCHER_LOGGING_LEVEL", "PWLAUNCHER_SETUP_LOGGING", "IN_DOCKER")


class FakeBrowserServer:
    """Minimal BrowserServer: fixed endpoint, configurable exit code."""

    def __init__(self, ws_endpoint="ws://0.0.0.0:3000/playwright", returncode=0):
        self.ws_endpoint = ws_endpoint
        self.returncode = returncode
        self.closed = False

    async def wait_until_closed(self):
        return self.returncode

    async def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def clean_pw_env(monkeypatch):
    """Remove launcher environment variables inherited from the host."""
    for name in PW_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def output():
    """StringIO that the launcher console prints into."""
    return io.StringIO()


@pytest.fixture
def console(output):
    return Console(file=output, width=80, color_system=None)
