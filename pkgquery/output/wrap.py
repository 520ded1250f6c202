"""
Column-aware wrapping of description lines.
"""

from typing import Optional


INDENT = 4


def wrap_text(text: Optional[str], indent: int = INDENT, columns: Optional[int] = None) -> str:
    """
    Wrap text to the terminal width with a fixed left indent.

    Words are separated by single spaces and packed greedily so that no line
    reaches the last column. A word wider than the available space is put on
    a line of its own and never cut. Without a known width the whole text is
    returned as one indented line.

    Args:
        text: Text to wrap.
        indent: Number of spaces prefixed to every line.
        columns: Terminal width, or None if unknown.

    Returns:
        The wrapped text, lines joined with newlines, without a trailing newline.
    """
    prefix = " " * indent
    text = text or ""
    if not columns:
        return prefix + text

    lines = []
    current = None
    for word in text.split(" "):
        if current is None:
            current = word
        elif indent + len(current) + 1 + len(word) >= columns:
            lines.append(current)
            current = word
        else:
            current = f"{current} {word}"
    lines.append(current)
    return "\n".join(prefix + line for line in lines)
