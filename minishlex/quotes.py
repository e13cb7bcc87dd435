"""Quote checks, argument counting and quote removal for input lines."""

from __future__ import annotations

import re

_QUOTES = frozenset("'\"")
_OPERATORS = frozenset("|<>;&")
_DOUBLE_SECOND = frozenset("<>&|")
_QUOTED_STOP = frozenset(" |><")
_SEGMENT_STOP = frozenset(" '\"|><")
_ARG_STOP = frozenset(" |><;&")

_QUOTED_RUN = re.compile(r"'([^']*)'?|\"([^\"]*)\"?")


def _at(text: str, i: int) -> str:
    """Character at *i*, or an empty string past the end."""
    return text[i] if 0 <= i < len(text) else ""


def has_unclosed_quotes(text: str) -> bool:
    """Return True when a quote opened in *text* is never closed."""
    quote = ""
    for char in text:
        if char in _QUOTES and not quote:
            quote = char
        elif char == quote:
            quote = ""
    return bool(quote)


def _skip_quoted_segment(text: str, i: int, quote: str) -> int:
    while _at(text, i) and _at(text, i) != quote:
        i += 1
    if _at(text, i) == quote:
        i += 1
    if _at(text, i) in ("", " "):
        return i
    while _at(text, i) and _at(text, i) not in _SEGMENT_STOP:
        i += 1
    return i


def scan_quoted(text: str, start: int) -> int:
    """Return the index just past the quoted word that starts at *start*."""
    i = start
    while _at(text, i):
        if _at(text, i) in _QUOTES:
            quote = text[i]
            i += 1
            if _at(text, i) == quote and i >= 2 and text[i - 2] != "$":
                i += 1
            else:
                i = _skip_quoted_segment(text, i, quote)
            if _at(text, i) in _QUOTED_STOP:
                break
        else:
            i += 1
    return i


def _scan_argument(text: str, i: int) -> int:
    while _at(text, i) and _at(text, i) not in _ARG_STOP:
        quote = ""
        if text[i] in _QUOTES and i > 0 and text[i - 1] == "=":
            quote = text[i]
        i += 1
        while quote and _at(text, i) and _at(text, i) != quote:
            i += 1
    return i


def count_args(text: str) -> int:
    """Count the words and operators the tokenizer will find in *text*."""
    count = 0
    i = 0
    while _at(text, i):
        while _at(text, i) == " ":
            i += 1
        if not _at(text, i):
            break
        char = text[i]
        if char in _OPERATORS:
            i += 1
            if _at(text, i) and _at(text, i + 1) and text[i] in _DOUBLE_SECOND:
                i += 1
        elif char in _QUOTES:
            i = scan_quoted(text, i)
        else:
            i = _scan_argument(text, i)
        count += 1
    return count


def remove_quotes(value: str) -> str:
    """Strip every quote pair from *value*, keeping what they enclose.

    An unclosed quote runs to the end of the string.
    """
    return _QUOTED_RUN.sub(
        lambda m: m.group(1) if m.group(1) is not None else m.group(2), value
    )