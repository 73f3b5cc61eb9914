"""Terminal Markdown renderer: event dispatch and public API."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
import logging
from typing import TextIO

from md_term.blocks import (
    BlockquoteRenderer,
    BlockRenderer,
    CodeBlockRenderer,
    ListRenderer,
    TableRenderer,
)
from md_term.config import DEFAULT_CONFIG, Settings, TerminalConfig
from md_term.context import RenderContext
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
from md_term.layout import render_grid
from md_term.parser import parse_events
from md_term.styles import FormattingState, style_inline_code, style_text
from md_term.utils import has_markdown_syntax

LOGGER = logging.getLogger(__name__)

_INLINE_STYLES = {
    TagKind.EMPHASIS: FormattingState.ITALIC,
    TagKind.STRONG: FormattingState.BOLD,
    TagKind.LINK: FormattingState.LINK,
}

_HANDLER_NAMES: dict[type, str] = {
    Start: '_on_start',
    End: '_on_end',
    Text: '_on_text',
    InlineCode: '_on_inline_code',
    SoftBreak: '_on_soft_break',
    HardBreak: '_on_hard_break',
    RawHtml: '_on_raw_html',
    TaskMarker: '_on_task_marker',
    Rule: '_on_rule',
}


class RenderDriver:
    """Consumes one event sequence and builds the rendered output.

    A driver owns its render context and block renderers; create a new one for
    every render call.

    Only one capturing block renderer (code block, table or blockquote) is
    active at a time. While it is active it receives all text and every nested
    block event. The list renderer is kept separately since list items write
    directly into the context.

    Attributes:
        config: Glyph and layout configuration
        context: Output buffer and formatting state
    """

    def __init__(self, use_colors: bool = False, config: TerminalConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self.context = RenderContext(use_colors)
        self._active: BlockRenderer | None = None
        self._list: ListRenderer | None = None
        # Raw text of the innermost open link, for show_link_urls
        self._link_text: str = ''
        self._heading_open: bool = False

    @property
    def list_depth(self) -> int:
        return self._list.depth if self._list else 0

    def run(self, events: Iterable[Event]) -> str:
        """Dispatch every event and return the finalized output."""
        for event in events:
            self.dispatch(event)
        return self.context.finalize()

    def dispatch(self, event: Event) -> None:
        """Route a single event to its handler; unknown events are ignored."""
        handler = self._get_handler(event)
        handler(event)

    def _get_handler(self, event: Event) -> Callable[[Event], None]:
        name = _HANDLER_NAMES.get(type(event))
        if name is None:
            return self._ignore
        return getattr(self, name)

    def _ignore(self, event: Event) -> None:
        LOGGER.debug('Ignoring unsupported event %r', event)

    # Output helpers

    def _write(self, text: str) -> None:
        """Write already-decorated inline text, through the list renderer if any."""
        if self._list is not None:
            self._list.handle_text(text, self.context)
        else:
            self.context.append(text)

    def _open_block(self) -> None:
        """Separate a new block from preceding output."""
        if self._list is not None:
            self.context.ensure_newline()
        else:
            self.context.ensure_blank_line()

    def _emit_block(self, text: str | None) -> None:
        if not text:
            return
        if self._list is not None:
            text = self._list.indent_block(text)
        self.context.append(text)

    def _activate(self, renderer: BlockRenderer) -> None:
        self._open_block()
        renderer.start(self.context)
        self._active = renderer

    def _finish_active(self) -> None:
        renderer, self._active = self._active, None
        if renderer is None:
            return
        self._emit_block(renderer.end(self.context))
        self.context.newline()

    # Start / End

    def _on_start(self, event: Start) -> None:
        tag = event.tag
        if tag.is_inline:
            self.context.push_style(_INLINE_STYLES[tag.kind])
            if tag.kind is TagKind.LINK:
                self._link_text = ''
            return

        if self._active is not None:
            self._active.handle_start(tag, self.context)
            return

        if tag.kind is TagKind.PARAGRAPH:
            if self._list is not None and self._list.in_item:
                self._list.start_paragraph(self.context)
            else:
                self.context.ensure_blank_line()
        elif tag.kind is TagKind.HEADING:
            self._open_block()
            self.context.push_style(FormattingState.BOLD)
            self._heading_open = True
        elif tag.kind is TagKind.LIST:
            if self._list is None:
                self._open_block()
                self._list = ListRenderer(self.config)
                self._list.start(self.context)
            self._list.open_list(tag.ordered)
        elif tag.kind is TagKind.ITEM:
            if self._list is not None:
                self._list.start_item(self.context)
            else:
                LOGGER.debug('Ignoring list item outside of a list')
        elif tag.kind is TagKind.CODE_BLOCK:
            self._activate(CodeBlockRenderer())
        elif tag.kind is TagKind.BLOCK_QUOTE:
            self._activate(BlockquoteRenderer(self.config))
        elif tag.kind is TagKind.TABLE:
            self._activate(TableRenderer())
        else:
            LOGGER.debug('Ignoring start of %s outside of its block', tag.kind.value)

    def _on_end(self, event: End) -> None:
        tag = event.tag
        if tag.is_inline:
            self.context.pop_style()
            if tag.kind is TagKind.LINK:
                self._on_link_end(tag)
            return

        if self._active is not None:
            if self._active.handle_end(tag, self.context):
                self._finish_active()
            return

        if tag.kind is TagKind.PARAGRAPH:
            if self._list is None or not self._list.in_item:
                self.context.newline()
        elif tag.kind is TagKind.HEADING:
            self._on_heading_end()
        elif tag.kind is TagKind.LIST:
            self._on_list_end()
        elif tag.kind is TagKind.ITEM:
            if self._list is not None:
                self._list.end_item(self.context)
        else:
            LOGGER.debug('Ignoring end of %s with no active renderer', tag.kind.value)

    def _on_heading_end(self) -> None:
        if not self._heading_open:
            LOGGER.debug('Ignoring end of heading with no open heading')
            return
        self._heading_open = False
        self.context.pop_style()
        self.context.newline()
        self.context.newline()

    def _on_list_end(self) -> None:
        if self._list is None:
            LOGGER.debug('Ignoring end of list with no open list')
            return
        if self._list.close_list():
            self.context.ensure_newline()
            return

        self._emit_block(self._list.end(self.context))
        self._list = None
        self.context.ensure_newline()
        self.context.ensure_blank_line()

    def _on_link_end(self, tag: Tag) -> None:
        if not self.config.show_link_urls or not tag.url:
            return
        if self._active is not None or self._link_text.strip() == tag.url:
            return
        self._write(f' ({tag.url})')

    # Text and breaks

    def _on_text(self, event: Text) -> None:
        if self._active is not None:
            self._active.handle_text(event.text, self.context)
            return
        stack = self.context.formatting_stack
        if FormattingState.LINK in stack:
            self._link_text += event.text
        self._write(style_text(event.text, stack, self.context.use_colors))

    def _on_inline_code(self, event: InlineCode) -> None:
        if self._active is not None:
            self._active.handle_text(event.code, self.context)
            return
        self._write(style_inline_code(event.code, self.context.use_colors))

    def _on_soft_break(self, event: SoftBreak) -> None:
        if self._active is not None:
            self._active.handle_soft_break(self.context)
        elif self._list is not None:
            self._list.handle_soft_break(self.context)
        else:
            self.context.append(' ')

    def _on_hard_break(self, event: HardBreak) -> None:
        if self._active is not None:
            self._active.handle_hard_break(self.context)
        elif self._list is not None and self._list.in_item:
            self._list.handle_hard_break(self.context)
        else:
            self.context.newline()

    # Leaf events

    def _on_raw_html(self, event: RawHtml) -> None:
        return None

    def _on_task_marker(self, event: TaskMarker) -> None:
        glyph = self.config.task_checked if event.checked else self.config.task_unchecked
        if self._active is not None:
            self._active.handle_text(f'{glyph} ', self.context)
            return
        # Part of the item prefix, not item content
        self.context.append(f'{glyph} ')

    def _on_rule(self, event: Rule) -> None:
        line = self.config.rule_char * self.config.rule_length
        if self._active is not None:
            self._active.handle_text(line, self.context)
            self._active.handle_hard_break(self.context)
            return
        self._open_block()
        self._emit_block(line)
        self.context.newline()


class MarkdownRenderer:
    """Renders Markdown into text for a terminal.

    The renderer itself holds only configuration; every ``render`` call uses
    its own driver and context, so one instance may be shared freely.

    Examples:
        >>> MarkdownRenderer().render('**bold** and *italic*')
        'bold and italic\\n'
    """

    def __init__(self, use_colors: bool = False, config: TerminalConfig | None = None) -> None:
        """Initialize renderer.

        Args:
            use_colors: Emit ANSI escape sequences for inline formatting
            config: Glyph and layout configuration (uses default if None)
        """
        self.use_colors = use_colors
        self.config = config or DEFAULT_CONFIG

    @classmethod
    def for_stream(
        cls,
        stream: TextIO,
        settings: Settings | None = None,
        config: TerminalConfig | None = None,
    ) -> MarkdownRenderer:
        """Create a renderer whose color flag follows the settings' color policy."""
        settings = settings or Settings()
        return cls(use_colors=settings.use_colors(stream), config=config)

    def render(self, markdown: str) -> str:
        """Render Markdown text.

        Text without any Markdown trigger is returned unchanged, without
        parsing.

        Args:
            markdown: Input Markdown text

        Returns:
            Rendered text, trailing whitespace trimmed, ending in one newline
        """
        if not has_markdown_syntax(markdown):
            return markdown
        return self.render_events(parse_events(markdown))

    def render_events(self, events: Iterable[Event]) -> str:
        """Render an already-parsed event sequence."""
        return RenderDriver(self.use_colors, self.config).run(events)

    def render_table(self, rows: Sequence[Sequence[str]]) -> str:
        """Render rows of plain cell text as a bordered table (no trailing newline)."""
        return render_grid(rows)


def render_markdown(
    markdown: str,
    use_colors: bool = False,
    config: TerminalConfig | None = None,
) -> str:
    """Render Markdown text for a terminal.

    Args:
        markdown: Input Markdown text
        use_colors: Emit ANSI escape sequences for inline formatting
        config: Optional glyph and layout configuration

    Returns:
        Rendered text

    Examples:
        >>> render_markdown('**bold** and *italic* with `code`')
        'bold and italic with code\\n'
    """
    return MarkdownRenderer(use_colors, config).render(markdown)
