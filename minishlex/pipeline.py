"""Turn one input line into tokens and a syntax tree, ready to run."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from itertools import takewhile

from minishlex.lexer import drop_empty_tokens, tokenize
from minishlex.nodes import Node
from minishlex.parser import parse
from minishlex.quotes import count_args, has_unclosed_quotes
from minishlex.tokens import Token, TokenClassifier, TokenType

_PROMPT_RED = "\001\033[31m\002"
_PROMPT_WHITE = "\001\033[37m\002"
_PROMPT_CYAN = "\001\033[36m\002"
_PROMPT_YELLOW = "\001\033[33m\002"


class UnclosedQuotesError(ValueError):
    """The line opens a quote that it never closes."""

    def __init__(self) -> None:
        super().__init__("minishell: unclosed quotes")


class ShellSyntaxError(ValueError):
    """The line holds an operator the shell does not accept."""

    exit_status = 2

    def __init__(self, token: str | None) -> None:
        self.token = token
        super().__init__(
            f"minishell: syntax error near unexpected token `{token or ''}'"
        )


@dataclass
class Prepared:
    """What a line turns into before it is run.

    ``root`` is None when there is nothing to run; ``errors`` holds the
    messages that were reported while checking redirected files.
    """

    tokens: list[Token]
    root: Node | None = None
    stuck_cats: int = 0
    errors: list[str] = field(default_factory=list)


def _token_at(tokens: list[Token], index: int) -> Token:
    """Token at *index*, or an end marker outside the list."""
    if 0 <= index < len(tokens):
        return tokens[index]
    return Token(None, TokenType.NULL)


def _live(tokens: list[Token]) -> list[Token]:
    return list(takewhile(lambda token: token.type is not TokenType.NULL, tokens))


def _is_cat(token: Token) -> bool:
    return token.type is TokenType.CMD and token.value == "cat"


def find_syntax_error(tokens: list[Token]) -> Token | None:
    """Return the first rejected operator in *tokens*, or None."""
    return next(
        (token for token in _live(tokens) if token.type is TokenType.EXCEPTION),
        None,
    )


def _ends_with_piped_redirect(tokens: list[Token]) -> bool:
    live = _live(tokens)
    return (
        len(live) > 2
        and live[-1].type is TokenType.FILE
        and live[-2].type in (TokenType.IN_REDIRECT, TokenType.OUT_REDIRECT)
        and _token_at(live, len(live) - 3).type is TokenType.PIPE
    )


def check_redirect_files(tokens: list[Token]) -> list[str]:
    """Report redirected files that do not exist.

    A missing output file is created. Returns one message per missing file.
    """
    messages: list[str] = []
    live = _live(tokens)
    for before, token in zip(live, live[1:]):
        if token.type is not TokenType.FILE:
            continue
        path = token.value or ""
        if before.type not in (TokenType.IN_REDIRECT, TokenType.OUT_REDIRECT):
            continue
        if os.path.exists(path):
            continue
        messages.append(f"minishell: {path}: No such file or directory")
        if before.type is TokenType.OUT_REDIRECT:
            try:
                os.close(os.open(path, os.O_CREAT | os.O_WRONLY, 0o644))
            except OSError:
                pass
    return messages


def _last_cat(tokens: list[Token]) -> int:
    return max(
        (index for index, token in enumerate(_live(tokens)) if _is_cat(token)),
        default=-1,
    )


def _first_cat_of_run(tokens: list[Token], last_cat: int) -> tuple[int, int]:
    """Walk back from *last_cat* over ``cat |`` pairs.

    Returns the index two past where the run stops and the number of pipes.
    """
    i = last_cat
    pipes = 0
    while i >= 0:
        if _is_cat(_token_at(tokens, i)):
            i -= 1
        if i < 0:
            break
        if _token_at(tokens, i).type is TokenType.PIPE:
            pipes += 1
            i -= 1
        token = _token_at(tokens, i)
        if token.type is not TokenType.PIPE and not _is_cat(token):
            break
    return i + 2, pipes


def _initial_cat_run(tokens: list[Token]) -> int:
    """Length of a leading ``cat | cat | ...`` run.

    Returns -1 when the whole line is such a run and 0 when it does not
    start with ``cat``.
    """
    if not tokens or not _is_cat(tokens[0]):
        return 0
    count = 1
    i = 1
    while _token_at(tokens, i).type is not TokenType.NULL:
        if tokens[i].type is not TokenType.PIPE:
            return 0
        i += 1
        if not _is_cat(_token_at(tokens, i)):
            return count
        count += 1
        i += 1
    return -1


def simplify_cat_pipes(tokens: list[Token]) -> list[Token]:
    """Return a copy of *tokens* without ``| cat |`` links in the middle."""
    result: list[Token] = []
    i = 0
    while i < len(tokens):
        if (
            tokens[i].type is TokenType.PIPE
            and _is_cat(_token_at(tokens, i + 1))
            and _token_at(tokens, i + 2).type is TokenType.PIPE
        ):
            i += 2
            continue
        token = tokens[i]
        result.append(Token(token.value, token.type, token.old_value))
        i += 1
    return result


def trim_cat_sequence(
    tokens: list[Token], in_pipe: bool = False
) -> tuple[list[Token], int]:
    """Drop redundant trailing ``cat`` links.

    Returns the tokens to parse and the number of ``cat`` commands that
    will wait for input: -1 when the line is nothing but ``cat`` commands.
    """
    last_cat = _last_cat(tokens)
    if last_cat == -1:
        return tokens, 0
    first_cat, pipes = _first_cat_of_run(tokens, last_cat)
    initial = _initial_cat_run(tokens)
    stuck = 0
    if not in_pipe and (initial > 1 or initial == -1):
        stuck = initial
    if pipes >= 1 and first_cat > 1:
        tokens = simplify_cat_pipes(tokens)
    return tokens, stuck


def prepare(line: str, in_pipe: bool = False) -> Prepared:
    """Tokenize, check and parse *line*.

    Raises UnclosedQuotesError or ShellSyntaxError when the line cannot run.
    """
    if has_unclosed_quotes(line):
        raise UnclosedQuotesError()
    classifier = TokenClassifier()
    tokens = tokenize(line, count_args(line), classifier)
    tokens = drop_empty_tokens(tokens, classifier)
    bad = find_syntax_error(tokens)
    if bad is not None:
        raise ShellSyntaxError(bad.value)
    if _ends_with_piped_redirect(tokens):
        return Prepared(tokens, errors=check_redirect_files(tokens))
    tokens, stuck = trim_cat_sequence(tokens, in_pipe)
    return Prepared(tokens, parse(tokens), stuck)


def build_prompt(exit_code: int, cwd: str | None = None) -> str:
    """Return the coloured prompt showing *exit_code* and *cwd*."""
    if cwd is None:
        cwd = os.getcwd()
    return "".join(
        (
            f"{_PROMPT_RED}[",
            _PROMPT_WHITE,
            str(exit_code),
            f"{_PROMPT_RED}]",
            f"{_PROMPT_CYAN}minishell:",
            _PROMPT_YELLOW,
            cwd,
            f"{_PROMPT_WHITE}$ ",
        )
    )