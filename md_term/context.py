"""Shared output state written by every part of the terminal renderer."""

from __future__ import annotations

from md_term.styles import FormattingState


class RenderContext:
    """Output buffer, formatting stack and blank-line bookkeeping.

    One context exists per render call; block renderers and the driver all
    write through it.

    Attributes:
        use_colors: Whether ANSI escapes may be emitted
        output: Accumulated output text
        formatting_stack: Active inline styles, innermost last
        pending_newlines: Trailing newlines already in ``output`` (0, 1 or 2)
    """

    # More than one blank line is never wanted
    MAX_PENDING_NEWLINES = 2

    def __init__(self, use_colors: bool = False) -> None:
        self.use_colors = use_colors
        self.output: str = ''
        self.formatting_stack: list[FormattingState] = []
        self.pending_newlines: int = 0

    def append(self, text: str) -> None:
        """Append text verbatim and reset newline bookkeeping.

        Args:
            text: Text to append
        """
        if not text:  # Early return for empty strings
            return
        self.output += text
        self.pending_newlines = 0

    def newline(self) -> None:
        """Append a single newline."""
        self.output += '\n'
        self.pending_newlines = min(self.pending_newlines + 1, self.MAX_PENDING_NEWLINES)

    def ensure_newline(self) -> None:
        """Make sure the next write starts at the beginning of a line."""
        if self.output and not self.output.endswith('\n'):
            self.newline()

    def ensure_blank_line(self) -> None:
        """Make sure one blank line precedes the next write.

        Idempotent: consecutive calls never produce more than one blank line.
        Does nothing at the very start of the output.
        """
        if (
            self.output
            and self.pending_newlines < self.MAX_PENDING_NEWLINES
            and not self.output.endswith('\n\n')
        ):
            self.newline()

    def push_style(self, state: FormattingState) -> None:
        self.formatting_stack.append(state)

    def pop_style(self) -> FormattingState | None:
        """Pop the innermost style; popping an empty stack is a no-op."""
        if not self.formatting_stack:
            return None
        return self.formatting_stack.pop()

    def finalize(self) -> str:
        """Return the output with trailing whitespace trimmed and one final newline."""
        return self.output.rstrip() + '\n'
