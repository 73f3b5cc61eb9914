"""Utility functions for terminal Markdown rendering."""

# Substrings that suggest the text needs a full Markdown pass
MARKDOWN_TRIGGERS = ('**', '*', '`', '#', '[', '- ', '1. ', '\n')


def has_markdown_syntax(text: str) -> bool:
    """Cheap lexical check for Markdown syntax.

    Text without any trigger is returned by the renderer as-is, without
    invoking the parser.

    Args:
        text: Input text

    Returns:
        True if the text contains at least one trigger substring

    Examples:
        >>> has_markdown_syntax('4 + 5 = 9')
        False
        >>> has_markdown_syntax('**bold**')
        True
    """
    return any(trigger in text for trigger in MARKDOWN_TRIGGERS)
