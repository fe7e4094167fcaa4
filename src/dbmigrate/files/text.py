"""Helpers for locating positions inside migration scripts."""


def line_column_from_offset(text: str, offset: int) -> tuple[int, int]:
    """Convert a character offset into a 1-based (line, column) pair.

    Args:
        text: Script text.
        offset: 0-based character offset. ``len(text)`` is allowed and
            points just past the last character.

    Returns:
        Tuple of (line, column), both starting at 1.

    Raises:
        ValueError: If the offset is negative or beyond the end of the text.
    """
    if offset < 0 or offset > len(text):
        raise ValueError(f"Offset {offset} out of range for text of length {len(text)}")

    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def lines_before_and_after(
    text: str,
    line: int,
    before: int,
    after: int,
    line_numbers: bool = True,
) -> str:
    """Extract the lines surrounding ``line``.

    Args:
        text: Script text.
        line: 1-based line number at the centre of the window.
        before: Number of lines to include before ``line``.
        after: Number of lines to include after ``line``.
            Negative counts are treated as zero.
        line_numbers: Prefix each line with its right-aligned number.

    Returns:
        The selected lines joined back together, original line endings kept.
    """
    lines = text.splitlines(keepends=True)
    start = max(line - 1 - max(before, 0), 0)
    end = min(line + max(after, 0), len(lines))
    selected = lines[start:end]
    if not line_numbers:
        return "".join(selected)

    width = len(str(end))
    return "".join(
        f"{number:>{width}}: {content}"
        for number, content in enumerate(selected, start=start + 1)
    )
