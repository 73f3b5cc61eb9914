"""Tests for md_term configuration - glyph defaults and environment settings."""

import dataclasses
import io

from pydantic import ValidationError
import pytest

from md_term.config import DEFAULT_CONFIG, Settings, TerminalConfig


class FakeTerminal(io.StringIO):
    def isatty(self) -> bool:
        return True


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv('MD_TERM_COLOR', raising=False)
    monkeypatch.delenv('MD_TERM_LOGGING_LEVEL', raising=False)


# ============================================================================
# TerminalConfig
# ============================================================================


def test_default_glyphs() -> None:
    assert DEFAULT_CONFIG.bullet == '•'
    assert DEFAULT_CONFIG.task_checked == '☑'
    assert DEFAULT_CONFIG.task_unchecked == '☐'
    assert DEFAULT_CONFIG.quote_marker == '▌ '
    assert DEFAULT_CONFIG.indent_per_level == 2
    assert DEFAULT_CONFIG.show_link_urls is False


def test_config_is_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.bullet = '-'  # type: ignore[misc]


def test_config_replace() -> None:
    config = dataclasses.replace(DEFAULT_CONFIG, bullet='-')

    assert config.bullet == '-'
    assert config == TerminalConfig(bullet='-')


# ============================================================================
# Settings
# ============================================================================


def test_settings_defaults() -> None:
    settings = Settings()

    assert settings.color == 'auto'
    assert settings.logging_level == 'WARNING'


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('MD_TERM_COLOR', 'never')
    monkeypatch.setenv('MD_TERM_LOGGING_LEVEL', 'DEBUG')
    settings = Settings()

    assert settings.color == 'never'
    assert settings.logging_level == 'DEBUG'


def test_settings_reject_unknown_color(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('MD_TERM_COLOR', 'sometimes')

    with pytest.raises(ValidationError):
        Settings()


@pytest.mark.parametrize(
    ('color', 'stream', 'expected'),
    [
        ('always', io.StringIO(), True),
        ('never', FakeTerminal(), False),
        ('auto', FakeTerminal(), True),
        ('auto', io.StringIO(), False),
        ('auto', object(), False),
    ],
)
def test_use_colors(color: str, stream: object, expected: bool) -> None:
    assert Settings(color=color).use_colors(stream) is expected  # type: ignore[arg-type]
