"""Resolve PW_* environment values into a LaunchConfig."""

import logging

from pwlauncher.config import EnvConfig
from pwlauncher.server.exceptions import LauncherUnresolvedError
from pwlauncher.server.views import BROWSER_TYPES, BrowserEngine, LaunchConfig

logger = logging.getLogger(__name__)

DEFAULT_BROWSER = 'chromium'

_BROWSER_ALIASES: dict[str, BrowserEngine] = {
    'chromium': BrowserEngine.CHROMIUM,
    'firefox': BrowserEngine.FIREFOX,
    'webkit': BrowserEngine.WEBKIT,
    'chrome': BrowserEngine.CHROME,
    'google-chrome': BrowserEngine.CHROME,
}


def resolve_engine(raw: str | None) -> BrowserEngine:
    """Map a PW_BROWSER value to an engine.

    Unset, empty and unrecognized values fall back to Playwright's bundled
    Chromium; unrecognized ones are logged with the raw value.
    """
    browser = (raw or DEFAULT_BROWSER).lower()
    engine = _BROWSER_ALIASES.get(browser)
    if engine is None:
        logger.warning(f'Unsupported PW_BROWSER value: "{raw}". Defaulting to Playwright\'s Chromium.')
        return BrowserEngine.CHROMIUM
    return engine


def parse_headless(raw: str | None) -> bool:
    """Only a literal "true" (any case) enables headless mode."""
    return (raw or 'false').lower() == 'true'


def parse_args(raw: str | None) -> tuple[str, ...]:
    """Split PW_ARGS on single spaces.

    Consecutive spaces yield empty-string entries, same as the shell image
    this launcher replaces.
    """
    if not raw:
        return ()
    return tuple(raw.split(' '))


def resolve_browser_type(engine: BrowserEngine) -> str:
    """Return the Playwright browser type hosting ``engine``."""
    browser_type = BROWSER_TYPES.get(engine)
    if not browser_type:
        raise LauncherUnresolvedError(
            f"Could not determine browser launcher for type: '{engine.value}'. Please check PW_BROWSER.",
            engine=engine.value,
        )
    return browser_type


def build_launch_config(env: EnvConfig | None = None) -> LaunchConfig:
    """Build the LaunchConfig for this process from the environment."""
    if env is None:
        env = EnvConfig()

    engine = resolve_engine(env.PW_BROWSER)
    headless = parse_headless(env.PW_HEADLESS)
    config = LaunchConfig(
        engine=engine,
        headless=headless,
        extra_args=parse_args(env.PW_ARGS),
    )

    logger.info(f'Effective PW_BROWSER: {(env.PW_BROWSER or DEFAULT_BROWSER).lower()}')
    logger.info(
        f"Effective PW_HEADLESS mode: {headless} "
        f"(raw PW_HEADLESS env: '{env.PW_HEADLESS}', interpreted as '{(env.PW_HEADLESS or 'false').lower()}')"
    )
    if config.extra_args:
        logger.debug(f'Extra browser args: {list(config.extra_args)}')
    return config
