"""Masking pass for the statement classifier.

Quoted literals and comments are blanked out before any keyword or
separator is looked for, so that data inside a string cannot trigger a
rejection and nothing can hide inside a comment. The masked text keeps
the length and positions of the original query.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

MASK_CHAR = " "


class _Mode(Enum):
    NORMAL = "normal"
    SINGLE_QUOTE = "single_quote"
    DOUBLE_QUOTE = "double_quote"
    BACKTICK = "backtick"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"


_QUOTE_MODES = {"'": _Mode.SINGLE_QUOTE, '"': _Mode.DOUBLE_QUOTE, "`": _Mode.BACKTICK}


@dataclass(frozen=True)
class MaskedQuery:
    """A query with its literals and comments replaced by MASK_CHAR.

    Attributes:
        text: Masked text, same length as the raw query.
        comments: (start, end) spans of every comment region, end exclusive.
        literals: (start, end) spans of every quoted string, end exclusive.
        identifiers: (start, end) spans of every backtick-quoted
            identifier, end exclusive.
    """

    text: str
    comments: tuple[tuple[int, int], ...] = ()
    literals: tuple[tuple[int, int], ...] = ()
    identifiers: tuple[tuple[int, int], ...] = ()

    @property
    def has_comment(self) -> bool:
        """Whether masking found at least one comment region."""
        return bool(self.comments)


def mask(raw: str, backslash_escapes: bool = True) -> MaskedQuery:
    """Mask quoted literals and comments in a raw query.

    Line comments start at ``--`` or ``#`` and run through the next
    newline. Block comments run from ``/*`` through ``*/``. Strings are
    quoted with ``'`` or ``"``, identifiers with a backtick; a doubled
    quote of the same kind is an escaped quote. Unterminated quotes and
    block comments mask to end of input.

    Args:
        raw: The untrusted query text.
        backslash_escapes: Treat a backslash inside a quoted string as
            escaping the next character, as MySQL does unless
            NO_BACKSLASH_ESCAPES is set.

    Returns:
        MaskedQuery for ``raw``.

    Examples:
        >>> mask("SELECT 'a;b' -- c").text.rstrip()
        'SELECT'
    """
    out = list(raw)
    comments: list[tuple[int, int]] = []
    literals: list[tuple[int, int]] = []
    identifiers: list[tuple[int, int]] = []

    mode = _Mode.NORMAL
    start = 0
    quote = ""
    n = len(raw)
    i = 0

    while i < n:
        ch = raw[i]

        if mode is _Mode.NORMAL:
            pair = raw[i : i + 2]
            if ch in _QUOTE_MODES:
                mode, quote, start = _QUOTE_MODES[ch], ch, i
                out[i] = MASK_CHAR
            elif pair == "--" or ch == "#":
                mode, start = _Mode.LINE_COMMENT, i
                out[i] = MASK_CHAR
            elif pair == "/*":
                mode, start = _Mode.BLOCK_COMMENT, i
                out[i] = out[i + 1] = MASK_CHAR
                i += 1
            i += 1
            continue

        out[i] = MASK_CHAR

        if mode is _Mode.LINE_COMMENT:
            if ch == "\n":
                comments.append((start, i + 1))
                mode = _Mode.NORMAL
        elif mode is _Mode.BLOCK_COMMENT:
            if raw[i : i + 2] == "*/":
                out[i + 1] = MASK_CHAR
                comments.append((start, i + 2))
                mode = _Mode.NORMAL
                i += 1
        elif backslash_escapes and ch == "\\" and mode is not _Mode.BACKTICK:
            if i + 1 < n:
                out[i + 1] = MASK_CHAR
                i += 1
        elif ch == quote:
            if raw[i + 1 : i + 2] == quote:
                out[i + 1] = MASK_CHAR
                i += 1
            else:
                spans = identifiers if mode is _Mode.BACKTICK else literals
                spans.append((start, i + 1))
                mode = _Mode.NORMAL
        i += 1

    if mode in (_Mode.LINE_COMMENT, _Mode.BLOCK_COMMENT):
        comments.append((start, n))
    elif mode is _Mode.BACKTICK:
        identifiers.append((start, n))
    elif mode is not _Mode.NORMAL:
        literals.append((start, n))

    return MaskedQuery(
        text="".join(out),
        comments=tuple(comments),
        literals=tuple(literals),
        identifiers=tuple(identifiers),
    )
