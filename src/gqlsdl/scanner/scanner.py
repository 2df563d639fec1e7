"""Cursor primitives over an in-memory SDL source string.

Every function takes the source text and an absolute cursor position and
returns a new position; none of them mutate state.  An optional ``end``
bound restricts the scan to ``text[:end]`` so that declaration bodies can
be processed in place without slicing.
"""
from __future__ import annotations

from gqlsdl.grammar.keywords import COMMENT_DELIMITER

_DELIM_LEN = len(COMMENT_DELIMITER)


def skip_whitespace(text: str, pos: int, end: int | None = None) -> int:
    """Advance ``pos`` past any whitespace.

    Returns ``pos`` unchanged when it does not point at whitespace.
    """
    limit = len(text) if end is None else end
    while pos < limit and text[pos].isspace():
        pos += 1
    return pos


def line_end(text: str, pos: int, end: int | None = None) -> int:
    """Return the index of the next line feed at or after ``pos``.

    When there is no line feed before ``end`` (or the end of the text),
    the bound itself is returned.
    """
    limit = len(text) if end is None else end
    idx = text.find("\n", pos, limit)
    return idx if idx > -1 else limit


def skip_to_whitespace(text: str, pos: int, end: int | None = None, stops: str = "") -> int:
    """Advance ``pos`` until whitespace, any char in ``stops``, or ``end``."""
    limit = len(text) if end is None else end
    while pos < limit and not text[pos].isspace() and text[pos] not in stops:
        pos += 1
    return pos


def starts_comment(text: str, pos: int) -> bool:
    """Return True if a comment delimiter begins at ``pos``."""
    return text.startswith(COMMENT_DELIMITER, pos)


def read_comment(text: str, pos: int, end: int | None = None) -> tuple[str, int] | None:
    """Read the comment whose opening delimiter is at ``pos``.

    Returns
    -------
    tuple[str, int] | None
        The comment body (delimiters excluded) and the position just past
        the closing delimiter, or ``None`` when the closing delimiter is
        missing.
    """
    limit = len(text) if end is None else end
    body_start = pos + _DELIM_LEN
    close = text.find(COMMENT_DELIMITER, body_start, limit)
    if close == -1:
        return None
    return text[body_start:close], close + _DELIM_LEN


def location(text: str, offset: int) -> tuple[int, int]:
    """Return the 1-based ``(line, col)`` of ``offset`` within ``text``."""
    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset) + 1
    col = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, col
