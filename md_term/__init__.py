"""Markdown to terminal text renderer.

This module renders Markdown into text for a terminal: ANSI styles for inline
emphasis, box-drawing borders around code blocks and tables, bar-prefixed
blockquotes and bullet or numbered lists.

Example:
    >>> from md_term import render_markdown
    >>> print(render_markdown('**Bold** and *italic* text'), end='')
    Bold and italic text
    >>> # With ANSI escapes for an interactive terminal
    >>> render_markdown('**Bold**', use_colors=True)
    '\\x1b[1mBold\\x1b[0m\\n'
"""

from md_term.config import DEFAULT_CONFIG, Settings, TerminalConfig
from md_term.renderer import MarkdownRenderer, render_markdown

__version__ = '0.1.0'

__all__ = [
    'render_markdown',
    'MarkdownRenderer',
    'TerminalConfig',
    'DEFAULT_CONFIG',
    'Settings',
]
