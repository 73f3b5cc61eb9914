"""ANSI decorations for inline Markdown formatting."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

RESET = '\033[0m'
BOLD = '\033[1m'
ITALIC = '\033[3m'
UNDERLINE = '\033[4m'
REVERSE = '\033[7m'
BLUE = '\033[34m'


class FormattingState(Enum):
    """Inline style currently open in the formatting stack."""

    BOLD = 'bold'
    ITALIC = 'italic'
    LINK = 'link'


_DECORATIONS = {
    FormattingState.BOLD: BOLD,
    FormattingState.ITALIC: ITALIC,
    FormattingState.LINK: UNDERLINE + BLUE,
}


def style_text(text: str, stack: Sequence[FormattingState], use_colors: bool) -> str:
    """Decorate a text run with every style in the formatting stack.

    Styles are applied from the innermost (last pushed) to the outermost, so
    the outermost escape ends up first in the result. With colors disabled the
    text is returned unchanged.

    Args:
        text: Raw text run
        stack: Active styles, innermost last
        use_colors: Whether ANSI escapes may be emitted

    Returns:
        Decorated text
    """
    if not use_colors or not text:
        return text

    result = text
    for state in reversed(stack):
        result = f'{_DECORATIONS[state]}{result}{RESET}'
    return result


def style_inline_code(code: str, use_colors: bool) -> str:
    """Render an inline code span in reverse video (respects terminal theme)."""
    if not use_colors or not code:
        return code
    return f'{REVERSE}{code}{RESET}'
