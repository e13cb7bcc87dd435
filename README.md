# minishlex

`minishlex` takes one line of a small shell command language and turns it
into typed tokens and a syntax tree of commands, pipes and redirections. It
checks the line for unclosed quotes and for operators the language does not
accept, gives every word a type (command, builtin, argument, variable, file,
operator), strips quotes the way a shell does, and builds the tree that a
command executor would walk.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Preparing a line

`minishlex.pipeline.prepare(line, in_pipe=False)` does all the steps in
order and returns a `Prepared` record:

- `tokens`: the final list of `Token` objects,
- `root`: the root `Node` of the tree, or `None` when there is nothing to run,
- `stuck_cats`: how many leading `cat` commands in a `cat | cat | ...` run
  will wait for input (`-1` when the whole line is such a run),
- `errors`: messages reported while checking redirected files.

```python
from minishlex.pipeline import ShellSyntaxError, UnclosedQuotesError, prepare

try:
    prepared = prepare('echo "hello world" | grep hello > out.txt')
except UnclosedQuotesError as err:
    print(err)          # minishell: unclosed quotes
except ShellSyntaxError as err:
    print(err)          # minishell: syntax error near unexpected token `...'
    print(err.exit_status)   # 2
```

`UnclosedQuotesError` is raised when a quote is opened and never closed.
`ShellSyntaxError` is raised for the first rejected operator; its `token`
attribute holds the operator's text. The operators `||`, `&&`, `;`, `&` and
a pipe directly after another pipe are rejected.

When a line ends in a pipe followed by an input or output redirection and a
file name, `prepare` does not build a tree. Instead it calls
`check_redirect_files`, which reports each redirected file that does not
exist and creates a missing output file, and returns those messages in
`errors`.

## The stages on their own

### `minishlex.quotes`

- `has_unclosed_quotes(text)`: True when a quote is never closed.
- `count_args(text)`: the number of words and operators the tokenizer will
  find.
- `scan_quoted(text, start)`: the index just past the quoted word starting
  at `start`.
- `remove_quotes(value)`: removes every quote pair and keeps what it
  encloses; an unclosed quote runs to the end of the string.

```python
from minishlex.quotes import has_unclosed_quotes, remove_quotes

has_unclosed_quotes("echo 'hi")   # True
remove_quotes('"a b"c')           # 'a bc'
```

### `minishlex.tokens`

- `TokenType`: the token kinds (`CMD`, `BUILTIN`, `ARG`, `VAR`, `PIPE`,
  `OUT_REDIRECT`, `IN_REDIRECT`, `HEREDOC`, `FILE`, `EXCEPTION`, `EMPTY`,
  `NULL`).
- `Token`: a dataclass with `value`, `type` and `old_value`.
- `TokenClassifier`: `classify(value, prev_type)` returns the type of a word
  from its text and the type of the word before it. It keeps state between
  calls: after a line starts with a redirection, the word following the file
  name is taken as the command. `reset()` clears that state.
- `is_builtin(word)`: True for `echo`, `pwd`, `exit`, `cd`, `env`, `export`
  and `unset`.
- `should_expand(text)`: True when `text` holds a `$` outside single quotes.

### `minishlex.lexer`

- `tokenize(text, n_args=None, classifier=None)`: splits a line into at most
  `n_args` typed tokens; `n_args` defaults to `count_args(text)`.
- `rejoin_segments(value)`: drops empty quote pairs (`''`, `""`) from a word
  and keeps every other part as it is.
- `drop_empty_tokens(tokens, classifier=None)`: removes `EMPTY` tokens and
  classifies the rest again; the list is returned unchanged when it holds
  none.

### `minishlex.nodes`

- `Node`: a tree node with `token`, `left`, `right`, `prev`, `argv` (the
  command's argument list), `file`, `file_unlink` and `heredoc_stops`;
  `is_operator()` is True for pipes, redirections and rejected operators.
- `group_command(tokens, index)`: gathers the command at `index` and its
  arguments into one node; returns the node and the index to continue from.
- `create_command(tokens, index)`: the same for commands and builtins, and a
  plain node for any other token.
- `count_command_words(value)` and `remove_empty_values(args, arg_count)`:
  helpers used while grouping.

### `minishlex.parser`

- `parse(tokens)`: builds the tree and returns its root, or `None` for an
  empty list.

### `minishlex.pipeline`

Besides `prepare`: `find_syntax_error(tokens)`, `check_redirect_files(tokens)`,
`trim_cat_sequence(tokens, in_pipe=False)` (returns the tokens and the
stuck-`cat` count), `simplify_cat_pipes(tokens)` (drops `| cat |` links in the
middle of a pipeline) and `build_prompt(exit_code, cwd=None)`, which formats
the coloured prompt string from an exit code and a directory (the current one
when `cwd` is not given).

## What it does not do

This package stops at the syntax tree. It has no command to start, no
interactive prompt loop, no line editing or history, and no signal handling.
It does not run commands or builtins, open pipes, perform redirections, read
here-documents or expand variables; the only thing it does to the file
system is creating missing output files in `check_redirect_files`.