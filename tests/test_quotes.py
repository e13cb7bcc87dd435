import pytest

from minishlex.quotes import (
    count_args,
    has_unclosed_quotes,
    remove_quotes,
    scan_quoted,
)


@pytest.mark.parametrize(
    "text", ["", "echo hi", "echo 'a'", 'echo "a"', "echo \"it's\"", "'\"'"]
)
def test_closed_quotes(text):
    assert has_unclosed_quotes(text) is False


@pytest.mark.parametrize("text", ["'", "echo 'a", 'echo "a', "echo \"it's", "''\""])
def test_unclosed_quotes(text):
    assert has_unclosed_quotes(text) is True


@pytest.mark.parametrize(
    "parts",
    [
        ["echo", "hello"],
        ["ls", "|", "wc", "-l"],
        ["cat", ">>", "out"],
        ["cat", "<<", "eof"],
        ["echo", "'a b'", "c"],
        ["export", "X='a b'"],
        ["echo", '"x y z"'],
    ],
)
def test_count_args_matches_words(parts):
    assert count_args(" ".join(parts)) == len(parts)


def test_count_args_without_spaces_around_operators():
    parts = ["ls", "|", "wc", ">", "f"]
    assert count_args("".join(parts)) == len(parts)


def test_count_args_ignores_surrounding_spaces():
    text = "echo a | cat"
    assert count_args("   " + text + "   ") == count_args(text)


def test_count_args_empty():
    assert count_args("") == 0
    assert count_args("     ") == 0


def test_scan_quoted_stops_at_space():
    word = "'a b'"
    text = word + " rest"
    assert text[: scan_quoted(text, 0)] == word


def test_scan_quoted_includes_adjacent_text():
    word = "\"a b\"cd"
    text = word + " rest"
    assert text[: scan_quoted(text, 0)] == word


def test_scan_quoted_stops_at_pipe():
    word = "'x'"
    text = word + "|wc"
    assert text[: scan_quoted(text, 0)] == word


def test_scan_quoted_runs_to_end():
    text = "'a b'c'd e'"
    assert scan_quoted(text, 0) == len(text)


def test_scan_quoted_from_offset():
    prefix = "echo "
    word = "'hi there'"
    text = prefix + word + " x"
    assert text[len(prefix) : scan_quoted(text, len(prefix))] == word


@pytest.mark.parametrize("inner", ["abc", "a b", "it's", ""])
def test_remove_double_quotes(inner):
    assert remove_quotes('"' + inner + '"') == inner


@pytest.mark.parametrize("inner", ["abc", "a b", 'say "hi"', ""])
def test_remove_single_quotes(inner):
    assert remove_quotes("'" + inner + "'") == inner


def test_remove_quotes_joins_segments():
    left, middle, right = "ab", "c d", "ef"
    assert remove_quotes(left + "'" + middle + "'" + right) == left + middle + right


def test_remove_quotes_unclosed_runs_to_end():
    inner = "tail text"
    assert remove_quotes('"' + inner) == inner


def test_remove_quotes_plain_text_unchanged():
    text = "plain-word"
    assert remove_quotes(text) == text


def test_remove_quotes_is_idempotent_on_result():
    once = remove_quotes("'a'\"b\"c")
    assert remove_quotes(once) == once