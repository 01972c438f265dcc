"""Value objects describing a browser server launch."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PORT = 3000
DEFAULT_BIND_HOST = '0.0.0.0'
DEFAULT_WS_PATH = '/playwright'
CHROME_CHANNEL = 'chrome'


class BrowserEngine(str, Enum):
    """Browser engine/binary the server drives."""

    CHROMIUM = 'chromium'
    FIREFOX = 'firefox'
    WEBKIT = 'webkit'
    CHROME = 'chrome'


# Playwright browser type that hosts each engine
BROWSER_TYPES: dict[BrowserEngine, str] = {
    BrowserEngine.CHROMIUM: 'chromium',
    BrowserEngine.FIREFOX: 'firefox',
    BrowserEngine.WEBKIT: 'webkit',
    BrowserEngine.CHROME: 'chromium',
}

DISPLAY_NAMES: dict[BrowserEngine, str] = {
    BrowserEngine.CHROMIUM: 'Chromium (Playwright default)',
    BrowserEngine.FIREFOX: 'Firefox',
    BrowserEngine.WEBKIT: 'WebKit',
    BrowserEngine.CHROME: 'Google Chrome (via channel)',
}


class LaunchConfig(BaseModel):
    """Launch request for a single remote browser server.

    Built once from the environment and never mutated; port, bind host and
    websocket path are fixed so remote clients can always connect to
    ``ws://<host>:3000/playwright``.
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    engine: BrowserEngine = Field(default=BrowserEngine.CHROMIUM, description='Browser engine to launch')
    headless: bool = Field(default=False, description='Run the browser without a visible UI')
    extra_args: tuple[str, ...] = Field(default=(), description='Additional CLI args passed to the browser process')
    port: int = Field(default=DEFAULT_PORT, frozen=True)
    bind_host: str = Field(default=DEFAULT_BIND_HOST, frozen=True)
    ws_path: str = Field(default=DEFAULT_WS_PATH, frozen=True)

    @property
    def channel(self) -> str | None:
        """Channel for the system-installed Chrome; only set for the chrome engine."""
        if self.engine is BrowserEngine.CHROME:
            return CHROME_CHANNEL
        return None

    @property
    def display_name(self) -> str:
        return DISPLAY_NAMES.get(self.engine, self.engine.value)

    def to_launch_options(self) -> dict[str, Any]:
        """Options mapping understood by Playwright's ``launchServer``."""
        options: dict[str, Any] = {
            'headless': self.headless,
            'port': self.port,
            'args': list(self.extra_args),
            'host': self.bind_host,
            'wsPath': self.ws_path,
        }
        if self.channel is not None:
            options['channel'] = self.channel
        return options
