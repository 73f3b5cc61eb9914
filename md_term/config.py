"""Configuration for terminal Markdown rendering."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, TextIO

from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class TerminalConfig:
    """Glyphs and layout knobs used by the terminal renderer.

    This is an immutable dataclass with sensible defaults. Colors are not
    configured here: the renderer takes an explicit ``use_colors`` flag.

    Attributes:
        bullet: Marker written before unordered list items (default: •)
        task_checked: Glyph for completed task list items (default: ☑)
        task_unchecked: Glyph for open task list items (default: ☐)
        quote_marker: Prefix written before every blockquote line
        indent_per_level: Spaces of indentation per nested list level
        rule_char: Character repeated for thematic breaks (default: ─)
        rule_length: Length of a thematic break line
        show_link_urls: Append " (url)" after links whose text differs from the URL
    """

    bullet: str = '\N{BULLET}'  # •
    task_checked: str = '\N{BALLOT BOX WITH CHECK}'  # ☑
    task_unchecked: str = '\N{BALLOT BOX}'  # ☐
    quote_marker: str = '\N{LEFT HALF BLOCK} '  # ▌

    indent_per_level: int = 2

    rule_char: str = '\N{BOX DRAWINGS LIGHT HORIZONTAL}'  # ─
    rule_length: int = 40

    show_link_urls: bool = False


# Default configuration instance
DEFAULT_CONFIG = TerminalConfig()


ColorMode = Literal['auto', 'always', 'never']


class Settings(BaseSettings):
    """Environment-driven settings for the command-line wrapper.

    Values are read from ``MD_TERM_*`` environment variables (and ``.env`` when
    present), e.g. ``MD_TERM_COLOR=never``.
    """

    if Path('.env').exists():
        model_config = SettingsConfigDict(
            env_prefix='MD_TERM_', env_file='.env', env_file_encoding='utf-8', extra='ignore'
        )
    else:
        model_config = SettingsConfigDict(env_prefix='MD_TERM_')

    color: ColorMode = 'auto'

    # Logging level
    logging_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = 'WARNING'

    def use_colors(self, stream: TextIO) -> bool:
        """Resolve the color policy into the renderer's ``use_colors`` flag.

        Args:
            stream: Output stream the rendered text will be written to

        Returns:
            True if ANSI escape sequences should be emitted
        """
        if self.color == 'always':
            return True
        if self.color == 'never':
            return False
        isatty = getattr(stream, 'isatty', None)
        return bool(isatty and isatty())
