"""Split an input line into typed tokens."""

from __future__ import annotations

import re
from itertools import takewhile

from minishlex.quotes import count_args, scan_quoted
from minishlex.tokens import Token, TokenClassifier, TokenType

_QUOTES = frozenset("'\"")
_OPERATORS = frozenset("|<>;&")
_NO_SKIP_AFTER_QUOTED = frozenset("|<>")

_SEGMENT = re.compile(r"'[^']*'?|\"[^\"]*\"?|[^'\"]+")


def _at(text: str, i: int) -> str:
    """Character at *i*, or an empty string past the end."""
    return text[i] if 0 <= i < len(text) else ""


def rejoin_segments(value: str | None) -> str | None:
    """Drop empty quote pairs from *value*, keeping every other segment as is."""
    if value is None:
        return None
    return "".join(
        "" if segment in ("''", '""') else segment
        for segment in _SEGMENT.findall(value)
    )


def _end_of_regular(text: str, i: int) -> int:
    while _at(text, i) not in ("", " ") and text[i] not in _OPERATORS:
        if text[i] in _QUOTES:
            quote = text[i]
            i += 1
            while _at(text, i) and text[i] != quote:
                i += 1
        i += 1
    return i


def _read_word(text: str, start: int) -> tuple[str | None, int]:
    """Return the word that begins at *start* and the index to resume from."""
    char = text[start]
    if char in _QUOTES:
        end = scan_quoted(text, start)
        if end - start == 2:
            value: str | None = ""
        else:
            value = rejoin_segments(text[start:end])
        following = _at(text, end)
        if not (following and following in _NO_SKIP_AFTER_QUOTED):
            end += 1
        return value, end
    if char in _OPERATORS:
        end = start + 1
        if _at(text, end) and text[end] in _OPERATORS:
            end += 1
    else:
        end = _end_of_regular(text, start)
    return text[start:end], end


def tokenize(
    text: str,
    n_args: int | None = None,
    classifier: TokenClassifier | None = None,
) -> list[Token]:
    """Split *text* into at most *n_args* typed tokens.

    When *n_args* is not given it is taken from :func:`count_args`.
    """
    if n_args is None:
        n_args = count_args(text)
    if classifier is None:
        classifier = TokenClassifier()
    tokens: list[Token] = []
    i = 0
    while _at(text, i) and len(tokens) < n_args:
        while _at(text, i) == " ":
            i += 1
        if not _at(text, i):
            break
        prev_type = tokens[-1].type if tokens else TokenType.NULL
        value, i = _read_word(text, i)
        tokens.append(Token(value, classifier.classify(value, prev_type)))
    return tokens


def drop_empty_tokens(
    tokens: list[Token],
    classifier: TokenClassifier | None = None,
) -> list[Token]:
    """Remove EMPTY tokens and classify the remaining ones afresh.

    The list is returned unchanged when it holds no EMPTY token. Tokens
    after the first one without a value are ignored.
    """
    live = list(takewhile(lambda token: token.value is not None, tokens))
    if not any(token.type is TokenType.EMPTY for token in live):
        return tokens
    if classifier is None:
        classifier = TokenClassifier()
    rebuilt: list[Token] = []
    prev_type = TokenType.NULL
    for token in live:
        if token.type is TokenType.EMPTY:
            continue
        kind = classifier.classify(token.value, prev_type)
        rebuilt.append(Token(token.value, kind))
        prev_type = kind
    return rebuilt