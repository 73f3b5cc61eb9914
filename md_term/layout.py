"""Box-drawing layout shared by code blocks and tables.

All widths are measured on raw, undecorated text: nothing passed to these
functions may contain ANSI escapes.
"""

from __future__ import annotations

from collections.abc import Sequence

HORIZONTAL = '─'
VERTICAL = '│'

# (left, junction, right) glyphs per border kind
TOP = ('┌', '┬', '┐')
MIDDLE = ('├', '┼', '┤')
BOTTOM = ('└', '┴', '┘')


def column_widths(rows: Sequence[Sequence[str]]) -> list[int]:
    """Compute the width of every column in a (possibly ragged) grid.

    Args:
        rows: Grid rows, each a sequence of cell strings

    Returns:
        ``widths[i]`` = longest cell in column ``i``; one entry per column of
        the longest row

    Examples:
        >>> column_widths([['Name', 'Age'], ['Alice', '30']])
        [5, 3]
    """
    num_cols = max((len(row) for row in rows), default=0)
    widths = [0] * num_cols
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    return widths


def _border(widths: Sequence[int], glyphs: tuple[str, str, str]) -> str:
    left, junction, right = glyphs
    return left + junction.join(HORIZONTAL * (width + 2) for width in widths) + right


def render_box(lines: Sequence[str]) -> str:
    """Draw a single-column bordered rectangle around lines of text.

    Every line is padded with trailing spaces to the longest line. Widths are
    counted in code points, so wide (East Asian, emoji) characters misalign
    the right border.

    Args:
        lines: Content lines (no embedded newlines)

    Returns:
        Bordered text without a trailing newline, or '' when there are no lines
    """
    if not lines:
        return ''

    max_len = max(len(line) for line in lines)
    output = [_border([max_len], TOP)]
    output.extend(f'{VERTICAL} {line.ljust(max_len)} {VERTICAL}' for line in lines)
    output.append(_border([max_len], BOTTOM))
    return '\n'.join(output)


def render_grid(rows: Sequence[Sequence[str]]) -> str:
    """Draw a bordered grid with a separator between every pair of rows.

    Rows shorter than the widest row render only the cells they have; missing
    trailing cells are not padded. Cell widths are counted in code points, not
    terminal columns, so wide (East Asian, emoji) characters misalign borders.

    Args:
        rows: Grid rows, each a sequence of cell strings

    Returns:
        Bordered grid without a trailing newline, or '' when there are no rows

    Examples:
        ┌───────┬─────┐
        │ Name  │ Age │
        ├───────┼─────┤
        │ Alice │ 30  │
        └───────┴─────┘
    """
    if not rows:
        return ''

    widths = column_widths(rows)
    separator = _border(widths, MIDDLE)

    output = [_border(widths, TOP)]
    for row_idx, row in enumerate(rows):
        cells = ''.join(
            f' {cell.ljust(widths[col_idx])} {VERTICAL}' for col_idx, cell in enumerate(row)
        )
        output.append(VERTICAL + cells)
        if row_idx < len(rows) - 1:
            output.append(separator)
    output.append(_border(widths, BOTTOM))
    return '\n'.join(output)
