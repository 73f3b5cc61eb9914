"""Render a Markdown file (or stdin) to the terminal.

Usage:
    python -m md_term README.md
    cat notes.md | python -m md_term --color=always | less -R
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
import sys

from md_term.config import Settings
from md_term.renderer import MarkdownRenderer

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='md-term', description='Render Markdown for a terminal.')
    parser.add_argument(
        'file',
        nargs='?',
        help='Markdown file to render (reads stdin when omitted or "-").',
    )
    parser.add_argument(
        '--color',
        choices=['auto', 'always', 'never'],
        help='Override the MD_TERM_COLOR setting.',
    )
    return parser


def read_input(path: str | None) -> str:
    if not path or path == '-':
        return sys.stdin.read()
    with open(path, encoding='utf-8') as f:
        return f.read()


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the ``md-term`` command.

    Returns:
        Process exit code (0 on success, 1 when the input can't be read)
    """
    args = build_parser().parse_args(argv)

    settings = Settings()
    if args.color:
        settings = settings.model_copy(update={'color': args.color})

    logging.basicConfig(level=getattr(logging, settings.logging_level), stream=sys.stderr)

    try:
        text = read_input(args.file)
    except (OSError, UnicodeDecodeError) as e:
        LOGGER.error(f'Cannot read {args.file}: {e}')
        return 1

    renderer = MarkdownRenderer.for_stream(sys.stdout, settings)
    LOGGER.debug('Rendering %d characters (colors=%s)', len(text), renderer.use_colors)
    sys.stdout.write(renderer.render(text))
    return 0


if __name__ == '__main__':
    sys.exit(main())
