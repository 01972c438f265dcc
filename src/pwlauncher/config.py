"""Environment configuration for the Playwright server launcher."""

import logging
import os
from functools import cache
from pathlib import Path

import psutil
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Markers written by container runtimes (docker, podman)
CONTAINER_MARKER_FILES = ('/.dockerenv', '/run/.containerenv')
CGROUP_CONTAINER_HINTS = ('docker', 'containerd', 'kubepods', 'libpod')
# PID 1 of a browser/VNC image is an init shim or process supervisor, never systemd
CONTAINER_INIT_HINTS = ('tini', 'dumb-init', 'supervisord', 'docker-entrypoint', 'node', 'xvfb')


def init_looks_like_container(init_cmd: str) -> bool:
    """Whether a PID 1 command line belongs to a container entrypoint."""
    init_cmd = init_cmd.lower()
    if not init_cmd or 'systemd' in init_cmd or init_cmd.startswith(('/sbin/init', 'init')):
        return False
    return any(hint in init_cmd for hint in CONTAINER_INIT_HINTS)


@cache
def is_running_in_docker() -> bool:
    """Detect if we are running inside a container.

    The launcher is normally shipped inside a browser image with a VNC
    display attached, so this is reported alongside the resolved config.
    """
    if any(Path(marker).exists() for marker in CONTAINER_MARKER_FILES):
        return True

    try:
        cgroup = Path('/proc/1/cgroup').read_text().lower()
        if any(hint in cgroup for hint in CGROUP_CONTAINER_HINTS):
            return True
    except OSError:
        pass

    try:
        return init_looks_like_container(' '.join(psutil.Process(1).cmdline()))
    except (psutil.Error, OSError):
        return False


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name, '').strip().lower()
    if not value:
        return default
    return value[0] in ('t', 'y', '1')


class EnvConfig(BaseSettings):
    """Environment variable configuration using pydantic-settings.

    The PW_* values are kept as raw strings: their interpretation
    (case folding, aliases, splitting) lives in the resolver so the raw
    value can still be reported back to the operator.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra='allow',
    )

    # Browser selection
    PW_BROWSER: str | None = Field(default=None)
    PW_HEADLESS: str | None = Field(default=None)
    PW_ARGS: str | None = Field(default=None)


class Config:
    """Process-wide view of the launcher's own settings.

    Re-reads environment variables on every access so tests and embedding
    code can change them after import.
    """

    _instance: 'Config | None' = None

    def __new__(cls) -> 'Config':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def LOGGING_LEVEL(self) -> str:
        return os.getenv('PWLAUNCHER_LOGGING_LEVEL', 'info').strip().lower() or 'info'

    @property
    def SETUP_LOGGING(self) -> bool:
        return _env_flag('PWLAUNCHER_SETUP_LOGGING', True)

    @property
    def IN_DOCKER(self) -> bool:
        # unset or "auto" falls back to detection
        return _env_flag('IN_DOCKER', False) or is_running_in_docker()


# Create singleton instance
CONFIG = Config()
