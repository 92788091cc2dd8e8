# src/jsonscan_lib/boundary.py
"""Locate the end of a top-level JSON object inside a text buffer."""
from __future__ import annotations


def find_balanced_object_length(text: str, start_index: int) -> int:
    """Return the length of the balanced ``{...}`` span starting at ``start_index``.

    Parameters
    ----------
    text: str
        Buffer to scan. ``text[start_index]`` is expected to be ``{``.
    start_index: int
        Position of the opening brace.

    Returns
    -------
    int
        Number of characters from ``start_index`` up to and including the
        closing brace, or ``0`` when the buffer ends before the braces balance.

    Notes
    -----
    Braces inside double-quoted strings are ignored and a backslash inside a
    string skips the next character. No other JSON syntax is checked, so an
    unterminated string literal makes the rest of the buffer look like
    string content.
    """

    depth = 0
    in_str = False
    i = start_index
    n = len(text)
    while i < n:
        ch = text[i]
        if in_str:
            if ch == "\\":
                i += 2
                continue
            if ch == '"':
                in_str = False
        elif ch == '"':
            in_str = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i - start_index + 1
        i += 1
    return 0
