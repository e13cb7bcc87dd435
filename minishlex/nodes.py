"""Nodes of the syntax tree and the grouping of command words into them."""

from __future__ import annotations

from dataclasses import dataclass, field

from minishlex.quotes import remove_quotes
from minishlex.tokens import Token, TokenType

OPERATOR_TYPES = frozenset(
    {
        TokenType.PIPE,
        TokenType.OUT_REDIRECT,
        TokenType.IN_REDIRECT,
        TokenType.HEREDOC,
        TokenType.EXCEPTION,
    }
)
_COMMAND_TYPES = frozenset({TokenType.CMD, TokenType.BUILTIN})
_ARGUMENT_TYPES = frozenset({TokenType.ARG, TokenType.VAR})
_FILL_TYPES = _COMMAND_TYPES | _ARGUMENT_TYPES
_REDIRECT_OR_FILE = frozenset(
    {
        TokenType.IN_REDIRECT,
        TokenType.OUT_REDIRECT,
        TokenType.HEREDOC,
        TokenType.FILE,
    }
)
_GROUP_STOP = frozenset({TokenType.PIPE, TokenType.EXCEPTION, TokenType.CMD})


@dataclass(eq=False)
class Node:
    """A command, file or operator in the syntax tree."""

    token: Token
    left: Node | None = None
    right: Node | None = None
    prev: Node | None = field(default=None, repr=False)
    argv: list[str] | None = None
    file: bool = False
    file_unlink: bool = False
    heredoc_stops: list[str] | None = None

    def is_operator(self) -> bool:
        """Return True for pipes, redirections and rejected operators."""
        return self.token.type in OPERATOR_TYPES


@dataclass
class _Counts:
    arg_count: int = 1
    empty: int = 0
    redirects: int = 0


def _token_at(tokens: list[Token], index: int) -> Token:
    """Token at *index*, or an end marker past the end of the list."""
    if 0 <= index < len(tokens):
        return tokens[index]
    return Token(None, TokenType.NULL)


def _has_quote(value: str | None) -> bool:
    return bool(value) and ("'" in value or '"' in value)


def count_command_words(value: str | None) -> int:
    """Count the space-separated words of a command value.

    A value that begins with a quote counts as a single word.
    """
    value = value or ""
    if value[:1] in ("'", '"'):
        return 1
    return sum(1 for word in value.split(" ") if word)


def remove_empty_values(args: list[str], arg_count: int) -> list[str]:
    """Drop empty strings from *args*.

    *args* is returned as it is when it already holds *arg_count*
    non-empty values.
    """
    kept = [arg for arg in args if arg]
    if len(kept) == arg_count:
        return args
    return kept


def _collect_arguments(tokens: list[Token], index: int, counts: _Counts) -> int:
    while True:
        token = _token_at(tokens, index)
        if token.value is None or token.type not in _ARGUMENT_TYPES:
            return index
        if token.value:
            counts.arg_count += 1
        else:
            counts.empty += 1
        index += 1


def _skip_redirects(tokens: list[Token], index: int, counts: _Counts) -> int:
    while True:
        token = _token_at(tokens, index)
        if token.value is None or token.type in _GROUP_STOP:
            return index
        start = index
        if token.type in _REDIRECT_OR_FILE:
            counts.redirects += 1
            index += 1
            if _token_at(tokens, index).type is TokenType.FILE:
                counts.redirects += 1
                index += 1
        index = _collect_arguments(tokens, index, counts)
        if index == start:
            return index


def group_command(tokens: list[Token], index: int) -> tuple[Node, int]:
    """Gather the command at *index* and its arguments into one node.

    Returns the node and the index at which parsing continues: the first
    redirection after the command when it has any, otherwise the token
    after its last argument.
    """
    node = Node(tokens[index])
    value = node.token.value or ""
    words = count_command_words(value)
    counts = _Counts()
    index = _collect_arguments(tokens, index + 1, counts)
    stop = index
    index = _skip_redirects(tokens, index, counts)

    argv: list[str] = []
    if words > 1:
        argv.extend(word for word in value.split(" ") if word)
        counts.arg_count -= 1
    elif _has_quote(value):
        node.token.value = remove_quotes(value)

    index -= counts.arg_count + counts.redirects + counts.empty
    split_words = len(argv)
    limit = counts.arg_count + (words if words != 1 else 0)
    while len(argv) < limit:
        token = _token_at(tokens, index)
        if token.value is not None and token.type in _FILL_TYPES:
            if token.value:
                if len(argv) > split_words and _has_quote(token.value):
                    token.value = remove_quotes(token.value)
                argv.append(token.value)
            index += 1
        elif token.type in _REDIRECT_OR_FILE:
            index += 1
        else:
            break

    if counts.redirects:
        index = stop
    if argv:
        argv = remove_empty_values(argv, limit)
    node.argv = argv
    return node, index


def create_command(tokens: list[Token], index: int) -> tuple[Node, int]:
    """Build the node for the token at *index*; return it and the next index."""
    token = tokens[index]
    if token.type in _COMMAND_TYPES:
        return group_command(tokens, index)
    return Node(token), index + 1