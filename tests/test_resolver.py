"""Tests for PW_* environment resolution and the LaunchConfig value object."""

import logging

import pytest
from pydantic import ValidationError

from pwlauncher.config import EnvConfig
from pwlauncher.server.resolver import (
    build_launch_config,
    parse_args,
    parse_headless,
    resolve_browser_type,
    resolve_engine,
)
from pwlauncher.server.views import BrowserEngine, LaunchConfig


# ===========================================================================
# Engine selection
# ===========================================================================


@pytest.mark.parametrize(
    "raw, engine, browser_type, channel, display_name",
    [
        ("chromium", BrowserEngine.CHROMIUM, "chromium", None, "Chromium (Playwright default)"),
        ("firefox", BrowserEngine.FIREFOX, "firefox", None, "Firefox"),
        ("webkit", BrowserEngine.WEBKIT, "webkit", None, "WebKit"),
        ("chrome", BrowserEngine.CHROME, "chromium", "chrome", "Google Chrome (via channel)"),
        ("google-chrome", BrowserEngine.CHROME, "chromium", "chrome", "Google Chrome (via channel)"),
        ("FireFox", BrowserEngine.FIREFOX, "firefox", None, "Firefox"),
        ("Google-Chrome", BrowserEngine.CHROME, "chromium", "chrome", "Google Chrome (via channel)"),
    ],
)
def test_supported_browsers_resolve(raw, engine, browser_type, channel, display_name):
    config = build_launch_config(EnvConfig(PW_BROWSER=raw))

    assert config.engine is engine
    assert resolve_browser_type(config.engine) == browser_type
    assert config.channel == channel
    assert config.display_name == display_name


def test_unset_browser_defaults_to_chromium_without_warning(caplog):
    with caplog.at_level(logging.WARNING):
        config = build_launch_config(EnvConfig())

    assert config.engine is BrowserEngine.CHROMIUM
    assert config.channel is None
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_empty_browser_is_treated_as_unset(caplog):
    with caplog.at_level(logging.WARNING):
        assert resolve_engine("") is BrowserEngine.CHROMIUM
    assert caplog.records == []


def test_unrecognized_browser_falls_back_with_warning(caplog):
    with caplog.at_level(logging.WARNING):
        config = build_launch_config(EnvConfig(PW_BROWSER="safari"))

    assert config.engine is BrowserEngine.CHROMIUM
    assert config.channel is None
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert '"safari"' in warnings[0].getMessage()


def test_browser_read_from_environment(monkeypatch):
    monkeypatch.setenv("PW_BROWSER", "webkit")
    monkeypatch.setenv("PW_HEADLESS", "true")

    config = build_launch_config()

    assert config.engine is BrowserEngine.WEBKIT
    assert config.headless is True


# ===========================================================================
# Headless and args parsing
# ===========================================================================


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, False),
        ("true", True),
        ("TRUE", True),
        ("True", True),
        ("yes", False),
        ("1", False),
        ("false", False),
        ("", False),
    ],
)
def test_parse_headless(raw, expected):
    assert parse_headless(raw) is expected


def test_headless_line_reports_raw_value(caplog):
    with caplog.at_level(logging.INFO):
        build_launch_config(EnvConfig(PW_HEADLESS="TRUE"))

    messages = [r.getMessage() for r in caplog.records]
    assert any("raw PW_HEADLESS env: 'TRUE', interpreted as 'true'" in m for m in messages)


def test_parse_args_splits_on_spaces():
    assert parse_args("--flag1 --flag2") == ("--flag1", "--flag2")


def test_parse_args_unset_or_empty():
    assert parse_args(None) == ()
    assert parse_args("") == ()


def test_parse_args_keeps_empty_entries_for_double_spaces():
    assert parse_args("--a  --b") == ("--a", "", "--b")


# ===========================================================================
# LaunchConfig
# ===========================================================================


@pytest.mark.parametrize("browser", ["chromium", "firefox", "webkit", "chrome", "safari"])
def test_fixed_server_settings(browser):
    config = build_launch_config(EnvConfig(PW_BROWSER=browser, PW_HEADLESS="true", PW_ARGS="--x"))

    assert config.port == 3000
    assert config.bind_host == "0.0.0.0"
    assert config.ws_path == "/playwright"


def test_launch_options_for_chromium():
    config = build_launch_config(EnvConfig(PW_ARGS="--flag1 --flag2"))

    assert config.to_launch_options() == {
        "headless": False,
        "port": 3000,
        "args": ["--flag1", "--flag2"],
        "host": "0.0.0.0",
        "wsPath": "/playwright",
    }


def test_launch_options_channel_only_for_chrome():
    for engine in BrowserEngine:
        options = LaunchConfig(engine=engine).to_launch_options()
        if engine is BrowserEngine.CHROME:
            assert options["channel"] == "chrome"
        else:
            assert "channel" not in options


def test_launch_config_is_immutable():
    config = LaunchConfig(engine=BrowserEngine.FIREFOX)

    with pytest.raises(ValidationError):
        config.headless = True
    with pytest.raises(ValidationError):
        config.port = 4000
