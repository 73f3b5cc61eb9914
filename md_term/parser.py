"""Mistune adapter producing the renderer's event sequence."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import mistune
from mistune import BaseRenderer
from mistune.core import BlockState

from md_term.events import (
    End,
    Event,
    HardBreak,
    InlineCode,
    RawHtml,
    Rule,
    SoftBreak,
    Start,
    Tag,
    TagKind,
    TaskMarker,
    Text,
)

# Tables, task lists, strikethrough, footnotes and bare URLs are always enabled
PLUGINS = ['strikethrough', 'footnotes', 'table', 'task_lists', 'url']


class EventCollector(BaseRenderer):
    """Renderer that flattens mistune's AST into Start/End/Text events.

    Each render method appends events to ``events`` and returns an empty
    string, so the collector can be driven by ``mistune.Markdown`` like any
    other renderer.

    Attributes:
        events: Events collected so far, in document order
    """

    NAME = 'terminal-events'

    def __init__(self) -> None:
        super().__init__()
        self.events: list[Event] = []

    def _get_method(self, name: str) -> Callable[..., str]:
        """Get renderer method by name with fallback.

        Args:
            name: Method name (token type)

        Returns:
            Renderer method or fallback handler
        """
        try:
            return super()._get_method(name)
        except AttributeError:
            return self._fallback_renderer

    def _fallback_renderer(self, token: dict[str, Any], state: BlockState) -> str:
        """Render unknown tokens through their children or raw text."""
        if 'children' in token:
            self._render_children(token, state)
        elif isinstance(token.get('raw'), str):
            self._emit(Text(token['raw']))
        return ''

    def _emit(self, event: Event) -> None:
        self.events.append(event)

    def _render_children(self, token: dict[str, Any], state: BlockState) -> None:
        children = token.get('children', [])
        if not isinstance(children, list):
            children = [children]

        for child in children:
            if isinstance(child, str):
                self._emit(Text(child))
            elif isinstance(child, dict):
                self.render_token(child, state)

    def _render_container(self, tag: Tag, token: dict[str, Any], state: BlockState) -> str:
        """Emit Start, the token's children, then End."""
        self._emit(Start(tag))
        self._render_children(token, state)
        self._emit(End(tag))
        return ''

    def _render_transparent(self, token: dict[str, Any], state: BlockState) -> str:
        self._render_children(token, state)
        return ''

    # Inline elements

    def text(self, token: dict[str, Any], state: BlockState) -> str:
        raw = token.get('raw', '')
        if raw:
            self._emit(Text(raw))
        return ''

    def emphasis(self, token: dict[str, Any], state: BlockState) -> str:
        return self._render_container(Tag(TagKind.EMPHASIS), token, state)

    def strong(self, token: dict[str, Any], state: BlockState) -> str:
        return self._render_container(Tag(TagKind.STRONG), token, state)

    def link(self, token: dict[str, Any], state: BlockState) -> str:
        """Render link [text](url); links without text show their URL."""
        attrs = token.get('attrs', {})
        url = attrs.get('url', '') if isinstance(attrs, dict) else ''
        tag = Tag(TagKind.LINK, url=url)
        if token.get('children'):
            return self._render_container(tag, token, state)

        self._emit(Start(tag))
        self._emit(Text(url))
        self._emit(End(tag))
        return ''

    def codespan(self, token: dict[str, Any], state: BlockState) -> str:
        self._emit(InlineCode(str(token.get('raw', ''))))
        return ''

    def linebreak(self, token: dict[str, Any], state: BlockState) -> str:
        self._emit(HardBreak())
        return ''

    def softbreak(self, token: dict[str, Any], state: BlockState) -> str:
        self._emit(SoftBreak())
        return ''

    def inline_html(self, token: dict[str, Any], state: BlockState) -> str:
        self._emit(RawHtml(str(token.get('raw', ''))))
        return ''

    # Images keep only their alt text; strikethrough is not decorated
    image = _render_transparent
    strikethrough = _render_transparent

    def footnote_ref(self, token: dict[str, Any], state: BlockState) -> str:
        attrs = token.get('attrs', {})
        index = attrs.get('index', token.get('raw', '')) if isinstance(attrs, dict) else ''
        self._emit(Text(f'[{index}]'))
        return ''

    # Block elements

    def paragraph(self, token: dict[str, Any], state: BlockState) -> str:
        return self._render_container(Tag(TagKind.PARAGRAPH), token, state)

    def heading(self, token: dict[str, Any], state: BlockState) -> str:
        attrs = token.get('attrs', {})
        level = attrs.get('level', 1) if isinstance(attrs, dict) else 1
        return self._render_container(Tag(TagKind.HEADING, level=level), token, state)

    # Tight list items hold block_text instead of paragraphs
    block_text = _render_transparent

    def blank_line(self, token: dict[str, Any], state: BlockState) -> str:
        return ''

    def thematic_break(self, token: dict[str, Any], state: BlockState) -> str:
        self._emit(Rule())
        return ''

    def block_code(self, token: dict[str, Any], state: BlockState) -> str:
        tag = Tag(TagKind.CODE_BLOCK)
        self._emit(Start(tag))
        raw = str(token.get('raw', ''))
        if raw:
            self._emit(Text(raw))
        self._emit(End(tag))
        return ''

    def block_quote(self, token: dict[str, Any], state: BlockState) -> str:
        return self._render_container(Tag(TagKind.BLOCK_QUOTE), token, state)

    def block_html(self, token: dict[str, Any], state: BlockState) -> str:
        self._emit(RawHtml(str(token.get('raw', ''))))
        return ''

    def list(self, token: dict[str, Any], state: BlockState) -> str:
        attrs = token.get('attrs', {})
        ordered = attrs.get('ordered', False) if isinstance(attrs, dict) else False
        return self._render_container(Tag(TagKind.LIST, ordered=ordered), token, state)

    def list_item(self, token: dict[str, Any], state: BlockState) -> str:
        return self._render_container(Tag(TagKind.ITEM), token, state)

    def task_list_item(self, token: dict[str, Any], state: BlockState) -> str:
        """Render task list item (- [ ] or - [x]) as an item with a marker."""
        attrs = token.get('attrs', {})
        checked = attrs.get('checked', False) if isinstance(attrs, dict) else False

        tag = Tag(TagKind.ITEM)
        self._emit(Start(tag))
        self._emit(TaskMarker(checked))
        self._render_children(token, state)
        self._emit(End(tag))
        return ''

    def table(self, token: dict[str, Any], state: BlockState) -> str:
        return self._render_container(Tag(TagKind.TABLE), token, state)

    def table_head(self, token: dict[str, Any], state: BlockState) -> str:
        """Header cells are direct children of table_head (no table_row)."""
        return self._render_container(Tag(TagKind.TABLE_HEAD), token, state)

    table_body = _render_transparent

    def table_row(self, token: dict[str, Any], state: BlockState) -> str:
        return self._render_container(Tag(TagKind.TABLE_ROW), token, state)

    def table_cell(self, token: dict[str, Any], state: BlockState) -> str:
        return self._render_container(Tag(TagKind.TABLE_CELL), token, state)

    def footnotes(self, token: dict[str, Any], state: BlockState) -> str:
        """Render collected footnote definitions after a rule, as plain paragraphs."""
        self._emit(Rule())
        self._render_children(token, state)
        return ''

    def footnote_item(self, token: dict[str, Any], state: BlockState) -> str:
        attrs = token.get('attrs', {})
        index = attrs.get('index', '') if isinstance(attrs, dict) else ''

        prefix: str | None = f'[{index}] '
        for child in token.get('children', []):
            if child.get('type') != 'paragraph':
                self.render_token(child, state)
                continue
            tag = Tag(TagKind.PARAGRAPH)
            self._emit(Start(tag))
            if prefix:
                self._emit(Text(prefix))
                prefix = None
            self._render_children(child, state)
            self._emit(End(tag))
        return ''


def parse_events(markdown_text: str) -> Iterator[Event]:
    """Parse Markdown into the renderer's event sequence.

    Args:
        markdown_text: Input Markdown text

    Yields:
        Events in document order

    Examples:
        >>> [type(e).__name__ for e in parse_events('*hi*')]
        ['Start', 'Start', 'Text', 'End', 'End']
    """
    collector = EventCollector()
    md = mistune.create_markdown(renderer=collector, plugins=PLUGINS)
    md(markdown_text)
    yield from collector.events
