# minishell

A small interactive command shell. Each line you type is broken into tokens,
parsed into a syntax tree and then run: builtins inside the shell itself,
anything else as an external program found on `PATH` (or given by a path
containing `/`).

## Installing

```
pip install .
```

## Running

```
minishell
```

The prompt is `minishell: `. Press Ctrl-D on an empty prompt to leave; the
shell prints `exit` and stops with status 0. Ctrl-C at the prompt starts a
fresh prompt; Ctrl-C while a command runs stops it with status 130. Empty lines
are ignored.

## What the shell understands

- Words, with single and double quotes. Quotes are removed and may join parts
  of one word (`a'b c'd` is the single word `ab cd`). An unclosed quote is an
  error.
- `$NAME` and `$?`, scanned as their own tokens and passed to commands as
  written.
- Pipelines: `ls -la | grep .c | wc -l`. The status of a pipeline is that of
  its last command.
- `&&` and `||`, which bind more loosely than `|` and are evaluated from left
  to right.
- Redirection operators `<`, `>`, `>>` and `<<` followed by a file name or
  delimiter (see the limits below).

A malformed line, such as a pipe with nothing after it or a lone `&`, prints a
message starting with `mini-shell: Syntax error: ` on standard error and sets
status 258. A command that cannot be found prints
`mini-shell: <name>: Command not found.` and gives status 127.

## Builtins

| Command  | Effect                                                      |
|----------|-------------------------------------------------------------|
| `pwd`    | print the working directory                                 |
| `cd`     | change directory; no argument or one starting with `~` goes to `$HOME`; then prints the new directory |
| `env`    | print every `KEY=value` pair                                |
| `export` | add or replace a variable, given as `KEY=value`             |
| `unset`  | remove a variable                                           |
| `exit`   | leave the shell, with an optional numeric status            |

Inside a pipeline a builtin works on a copy of the environment, so `export`,
`unset` and `exit` there do not change the shell itself.

## What it does not do

- Redirections are parsed and kept on each command, but commands are run
  with the shell's own standard input and output; `<`, `>` and `>>` do not
  open files.
- For `<<`, the lines up to the delimiter are read after a `> ` prompt and
  stored in a file under `/tmp` (`.minishell_hd_<n>`), but that file is not
  connected to the command's input.
- Variables are not expanded: `echo $HOME` prints `$HOME`.
- There is no command history file, globbing, subshells or `;`.

## Using it from Python

The stages are available on their own:

```python
from minishell.lexer import tokenize
from minishell.parser import parse
from minishell.ast import format_ast

tokens = tokenize("ls -la | grep .c && echo 'Build Success' || echo 'Build Fail'")
tree = parse(tokens)
print(format_ast(tree, 0))
```

- `minishell.lexer.tokenize` returns a list of `Token` values ending with an
  EOF token and raises `minishell.errors.LexError` on bad input.
- `minishell.parser.parse` returns an `AstNode` tree and raises
  `minishell.errors.ShellSyntaxError` when the tokens do not form a command.
- `minishell.env.Environment` keeps variables in their original order and
  converts to and from `KEY=value` strings.
- `minishell.executor.execute(tree, env)` runs a tree and returns its status.
- `minishell.shell.Shell` runs single lines with `run_line` or a whole session
  with `loop`; `minishell.shell.main` is the `minishell` command.