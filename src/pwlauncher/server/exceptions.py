"""Launcher exceptions."""

CHROME_INSTALL_HINT = (
    'This might be because Google Chrome stable is not installed in the Docker image or not found in PATH. '
    "You may need to add steps to your Dockerfile to install 'google-chrome-stable'."
)


class LauncherError(Exception):
    """Base exception for all launcher errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LauncherUnresolvedError(LauncherError):
    """Raised when no Playwright browser type could be determined for an engine."""

    def __init__(self, message: str, engine: str | None = None):
        super().__init__(message)
        self.engine = engine


class BrowserLaunchError(LauncherError):
    """Raised when the delegated server launch fails."""

    def __init__(
        self,
        message: str,
        engine: str | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.engine = engine
        self.cause = cause

    def __str__(self) -> str:
        if self.engine:
            return f'[{self.engine}] {self.message}'
        return self.message


class ChromeBinaryMissingError(BrowserLaunchError):
    """Raised when the chrome channel fails to launch, usually a missing binary."""

    hint = CHROME_INSTALL_HINT
