"""Token kinds and the classifier that assigns them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

BUILTINS = frozenset({"echo", "pwd", "exit", "cd", "env", "export", "unset"})

_QUOTES = frozenset("'\"")


class TokenType(Enum):
    """Kind of a lexical token."""

    NULL = auto()
    CMD = auto()
    BUILTIN = auto()
    ARG = auto()
    VAR = auto()
    PIPE = auto()
    OUT_REDIRECT = auto()
    IN_REDIRECT = auto()
    HEREDOC = auto()
    FILE = auto()
    EXCEPTION = auto()
    EMPTY = auto()


_REDIRECTS = frozenset(
    {TokenType.OUT_REDIRECT, TokenType.IN_REDIRECT, TokenType.HEREDOC}
)
_ARG_PREDECESSORS = frozenset(
    {TokenType.CMD, TokenType.BUILTIN, TokenType.ARG, TokenType.VAR, TokenType.FILE}
)
_NOT_BEFORE_QUOTED_FILE = _ARG_PREDECESSORS | {TokenType.PIPE, TokenType.EXCEPTION}


@dataclass
class Token:
    """A word of the input line together with its kind."""

    value: str | None
    type: TokenType = TokenType.NULL
    old_value: str | None = None


def is_builtin(word: str) -> bool:
    """Return True when *word* names a command the shell runs itself."""
    return word in BUILTINS


def should_expand(text: str) -> bool:
    """Return True when *text* holds a ``$`` that is not inside single quotes."""
    quote = ""
    expand = False
    for char in text:
        if char in _QUOTES:
            if quote == char:
                quote = ""
            elif not quote:
                quote = char
            continue
        if char == "$" and quote != "'":
            expand = True
    return expand


def _redirection_type(value: str) -> TokenType:
    if value == "<":
        return TokenType.IN_REDIRECT
    if value in (">", ">>", ">|"):
        return TokenType.OUT_REDIRECT
    if value == "<<":
        return TokenType.HEREDOC
    return TokenType.CMD


def _operator_type(value: str) -> TokenType:
    if value == "|":
        return TokenType.PIPE
    if (
        value in ("||", "&&", ";", "&")
        or value.startswith((";", "&"))
        or (value.startswith("|") and len(value) > 1)
    ):
        return TokenType.EXCEPTION
    return TokenType.CMD


class TokenClassifier:
    """Assigns token types, remembering whether a line began with a redirect."""

    def __init__(self) -> None:
        self._inverted = False

    def reset(self) -> None:
        """Forget that a redirect came before the command."""
        self._inverted = False

    def _redirection_or_operator(self, value: str, prev_type: TokenType) -> TokenType:
        kind = _redirection_type(value)
        if kind in _REDIRECTS and prev_type in (TokenType.PIPE, TokenType.NULL):
            self._inverted = True
        if kind is not TokenType.CMD:
            return kind
        if prev_type in _REDIRECTS:
            return TokenType.FILE
        kind = _operator_type(value)
        if kind is TokenType.PIPE and prev_type in (
            TokenType.PIPE,
            TokenType.EXCEPTION,
        ):
            return TokenType.EXCEPTION
        return kind

    def classify(self, value: str, prev_type: TokenType) -> TokenType:
        """Return the type of *value* given the type of the token before it."""
        value = value or ""
        kind = self._redirection_or_operator(value, prev_type)
        if kind is not TokenType.CMD:
            return kind
        if prev_type in (TokenType.NULL, TokenType.PIPE) or (
            prev_type is TokenType.FILE and self._inverted
        ):
            self._inverted = False
            return TokenType.BUILTIN if is_builtin(value) else TokenType.CMD
        if "$" in value:
            if value.startswith("$") or should_expand(value):
                return TokenType.VAR
            return TokenType.ARG
        if value[:1] in _QUOTES and prev_type not in _NOT_BEFORE_QUOTED_FILE:
            return TokenType.FILE
        if prev_type in _ARG_PREDECESSORS:
            return TokenType.ARG
        return TokenType.CMD