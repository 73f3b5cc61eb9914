"""Tests for the mistune adapter - Markdown to event sequence."""

import pytest

from md_term.events import (
    End,
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
from md_term.parser import parse_events

PARAGRAPH = Tag(TagKind.PARAGRAPH)


def events_of(text: str) -> list:
    return list(parse_events(text))


def tag_kinds(text: str, event_type: type = Start) -> list[TagKind]:
    return [event.tag.kind for event in parse_events(text) if isinstance(event, event_type)]


# ============================================================================
# Inline elements
# ============================================================================


@pytest.mark.parametrize(
    ('text', 'kind'),
    [
        ('*hi*', TagKind.EMPHASIS),
        ('_hi_', TagKind.EMPHASIS),
        ('**hi**', TagKind.STRONG),
        ('__hi__', TagKind.STRONG),
    ],
)
def test_inline_emphasis(text: str, kind: TagKind) -> None:
    assert events_of(text) == [
        Start(PARAGRAPH),
        Start(Tag(kind)),
        Text('hi'),
        End(Tag(kind)),
        End(PARAGRAPH),
    ]


def test_inline_code_keeps_raw_text() -> None:
    assert events_of('`a *b*`') == [Start(PARAGRAPH), InlineCode('a *b*'), End(PARAGRAPH)]


def test_link_carries_url() -> None:
    tag = Tag(TagKind.LINK, url='https://example.com')
    assert events_of('[Example](https://example.com)') == [
        Start(PARAGRAPH),
        Start(tag),
        Text('Example'),
        End(tag),
        End(PARAGRAPH),
    ]


def test_bare_url_becomes_link() -> None:
    events = events_of('see https://example.com\n')
    tag = Tag(TagKind.LINK, url='https://example.com')

    assert Start(tag) in events
    assert Text('https://example.com') in events


def test_image_keeps_alt_text() -> None:
    assert events_of('![a cat](cat.png)') == [Start(PARAGRAPH), Text('a cat'), End(PARAGRAPH)]


def test_strikethrough_is_not_decorated() -> None:
    assert events_of('~~gone~~') == [Start(PARAGRAPH), Text('gone'), End(PARAGRAPH)]


def test_inline_html_is_raw_html_event() -> None:
    events = events_of('a <b>x</b>')

    assert RawHtml('<b>') in events
    assert RawHtml('</b>') in events
    assert Text('x') in events


@pytest.mark.parametrize(
    ('text', 'event'),
    [
        ('a  \nb', HardBreak()),
        ('a\\\nb', HardBreak()),
        ('a\nb', SoftBreak()),
    ],
)
def test_line_breaks(text: str, event: object) -> None:
    events = events_of(text)

    assert event in events, f'Expected {event!r} in {events!r}'
    assert Text('a') in events and Text('b') in events


# ============================================================================
# Block elements
# ============================================================================


@pytest.mark.parametrize('level', [1, 2, 3, 6])
def test_heading_level(level: int) -> None:
    tag = Tag(TagKind.HEADING, level=level)
    assert events_of('#' * level + ' Title') == [Start(tag), Text('Title'), End(tag)]


def test_code_block_text_is_raw() -> None:
    tag = Tag(TagKind.CODE_BLOCK)
    assert events_of('```python\nx = *1*\n```') == [Start(tag), Text('x = *1*\n'), End(tag)]


def test_blockquote_wraps_paragraph() -> None:
    tag = Tag(TagKind.BLOCK_QUOTE)
    assert events_of('> quoted') == [
        Start(tag),
        Start(PARAGRAPH),
        Text('quoted'),
        End(PARAGRAPH),
        End(tag),
    ]


def test_thematic_break_is_rule() -> None:
    events = events_of('a\n\n---\n\nb')

    assert events.count(Rule()) == 1
    assert events.index(Rule()) == 3, 'Rule belongs between the two paragraphs'


def test_block_html_is_raw_html_event() -> None:
    events = events_of('<div>\nhi\n</div>\n')

    assert len(events) == 1
    assert isinstance(events[0], RawHtml)
    assert events[0].html.startswith('<div>')


# ============================================================================
# Lists
# ============================================================================


@pytest.mark.parametrize(('text', 'ordered'), [('- a', False), ('* a', False), ('1. a', True)])
def test_list_ordered_flag(text: str, ordered: bool) -> None:
    list_tag = Tag(TagKind.LIST, ordered=ordered)
    item_tag = Tag(TagKind.ITEM)

    assert events_of(text) == [
        Start(list_tag),
        Start(item_tag),
        Text('a'),
        End(item_tag),
        End(list_tag),
    ]


def test_nested_list_is_inside_item() -> None:
    kinds = [
        (type(event).__name__, event.tag.kind)
        for event in parse_events('- outer\n  - inner')
        if isinstance(event, (Start, End))
    ]

    assert kinds == [
        ('Start', TagKind.LIST),
        ('Start', TagKind.ITEM),
        ('Start', TagKind.LIST),
        ('Start', TagKind.ITEM),
        ('End', TagKind.ITEM),
        ('End', TagKind.LIST),
        ('End', TagKind.ITEM),
        ('End', TagKind.LIST),
    ]


def test_loose_list_items_hold_paragraphs() -> None:
    assert tag_kinds('- a\n\n- b') == [
        TagKind.LIST,
        TagKind.ITEM,
        TagKind.PARAGRAPH,
        TagKind.ITEM,
        TagKind.PARAGRAPH,
    ]


@pytest.mark.parametrize(('marker', 'checked'), [('[x]', True), ('[X]', True), ('[ ]', False)])
def test_task_list_item(marker: str, checked: bool) -> None:
    list_tag = Tag(TagKind.LIST)
    item_tag = Tag(TagKind.ITEM)

    assert events_of(f'- {marker} done') == [
        Start(list_tag),
        Start(item_tag),
        TaskMarker(checked),
        Text('done'),
        End(item_tag),
        End(list_tag),
    ]


# ============================================================================
# Tables
# ============================================================================


def test_table_structure() -> None:
    text = '| Name | Age |\n|------|-----|\n| Alice | 30 |\n| Bob | 25 |'

    assert tag_kinds(text) == [
        TagKind.TABLE,
        TagKind.TABLE_HEAD,
        TagKind.TABLE_CELL,
        TagKind.TABLE_CELL,
        TagKind.TABLE_ROW,
        TagKind.TABLE_CELL,
        TagKind.TABLE_CELL,
        TagKind.TABLE_ROW,
        TagKind.TABLE_CELL,
        TagKind.TABLE_CELL,
    ]
    texts = [event.text for event in parse_events(text) if isinstance(event, Text)]
    assert texts == ['Name', 'Age', 'Alice', '30', 'Bob', '25']


def test_table_cell_inline_code() -> None:
    events = events_of('| a | `b` |\n|---|---|\n| c | d |')
    assert InlineCode('b') in events


# ============================================================================
# Footnotes
# ============================================================================


def test_footnotes_render_after_rule() -> None:
    events = events_of('Text[^1]\n\n[^1]: Note')

    assert events[:4] == [Start(PARAGRAPH), Text('Text'), Text('[1]'), End(PARAGRAPH)]
    assert events[4:] == [
        Rule(),
        Start(PARAGRAPH),
        Text('[1] '),
        Text('Note'),
        End(PARAGRAPH),
    ]


def test_empty_input_has_no_events() -> None:
    assert events_of('') == []
