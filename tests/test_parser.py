from minishlex.lexer import tokenize
from minishlex.parser import parse
from minishlex.tokens import Token, TokenType


def test_empty_input_gives_no_tree():
    assert parse([]) is None


def test_single_command():
    root = parse(tokenize("ls -l"))
    assert root.argv == ["ls", "-l"]
    assert root.left is None and root.right is None
    assert root.prev is None


def test_pipe():
    root = parse(tokenize("ls -l | wc -l"))
    assert root.token.type is TokenType.PIPE
    assert root.left.argv == ["ls", "-l"]
    assert root.right.argv == ["wc", "-l"]
    assert root.right.prev is root
    assert root.prev is None


def test_two_pipes_nest_to_the_left():
    root = parse(tokenize("a | b | c"))
    assert root.token.type is TokenType.PIPE
    assert root.right.argv == ["c"]
    inner = root.left
    assert inner.token.type is TokenType.PIPE
    assert inner.left.argv == ["a"]
    assert inner.right.argv == ["b"]


def test_output_redirect():
    root = parse(tokenize("echo hi > out"))
    assert root.token.type is TokenType.OUT_REDIRECT
    assert root.left.argv == ["echo", "hi"]
    assert root.right.token.value == "out"
    assert root.right.token.old_value == "out"
    assert root.right.prev is root


def test_quoted_file_name_is_unquoted():
    root = parse(tokenize('cat > "my file"'))
    assert root.token.type is TokenType.OUT_REDIRECT
    assert root.left.argv == ["cat"]
    assert root.right.token.value == "my file"
    assert root.right.token.old_value == '"my file"'


def test_heredoc():
    root = parse(tokenize("cat << EOF"))
    assert root.token.type is TokenType.HEREDOC
    assert root.left.argv == ["cat"]
    assert root.right.token.value == "EOF"


def test_input_redirect_after_pipe_stays_on_right():
    root = parse(tokenize("ls | cat < in"))
    assert root.token.type is TokenType.PIPE
    assert root.left.argv == ["ls"]
    redirect = root.right
    assert redirect.token.type is TokenType.IN_REDIRECT
    assert redirect.left.argv == ["cat"]
    assert redirect.right.token.value == "in"
    assert redirect.prev is root


def test_leading_input_redirect():
    root = parse(tokenize("< in cat"))
    assert root.token.type is TokenType.IN_REDIRECT
    assert root.left.argv == ["cat"]
    assert root.right.token.value == "in"


def test_redirect_before_command_after_pipe():
    root = parse(tokenize("ls | < in wc"))
    assert root.token.type is TokenType.PIPE
    assert root.left.argv == ["ls"]
    redirect = root.right
    assert redirect.token.type is TokenType.IN_REDIRECT
    assert redirect.right.token.value == "in"
    assert redirect.left.argv == ["wc"]


def test_command_without_value_becomes_empty():
    tokens = [Token(None, TokenType.CMD)]
    root = parse(tokens)
    assert tokens[0].value == ""
    assert root.argv == []
    assert root.token is tokens[0]