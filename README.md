# rcshell

Building blocks of the rc command shell as a Python library, and a small
command-history tool.

## Modules

- `rcshell.lexer` splits shell text into tokens. It provides `Lexer`,
  `CharSource`, `Token`, `TokenKind` and `ScanError`. `quotep(s, dollar)` tells
  whether a word needs quoting. With `dollar` set, it judges the word as a
  variable name.
- `rcshell.match` has `match(pattern, meta, subject)`. The pattern can use `?`,
  `*` and `[...]` classes, and a class that starts with `~` is negated. `meta`
  marks which characters of the pattern are wildcards. With `meta` set to `None`,
  the pattern is compared as a plain string.
- `rcshell.status` keeps exit statuses:
  - `ShellStatus` stores the status of a single command or of a whole pipeline.
  - `strstatus` turns a wait status into a word such as `0`, `sigint` or
    `sigsegv+core`.
  - `status_message` builds the "done (n)" or signal-message line.
- `rcshell.signals` holds the host's signals and their rc names and messages:
  - `signal_table()` returns the whole table.
  - `signal_name`, `signal_message` and `signal_number` look up one signal.
- `rcshell.printfmt` is a small printf-style formatter. It supports the
  `%s %c %d %o %x %%` conversions and the `u l # - . 0` flags and widths.
  - `sprint(fmt, *args)` formats with the default conversions.
  - `Format().install(char, conv)` adds a conversion or replaces one.
- `rcshell.tree` builds parse-tree nodes:
  - `NodeType` and `Node` are the node kinds and the nodes.
  - `mk(kind, *fields)` makes a node. It folds an `if not` that follows an `if`
    into an else branch, and raises `RcError` when no `if` comes before it.
  - `treecpy` makes a deep copy of a tree.
- `rcshell.which` has `CommandFinder`. It searches a list of directories for an
  executable and caches the directory where each command was found.
  - `CommandFinder.verify` removes a command from that cache.
  - `rc_access`, `join` and `protect` are helpers it uses.
- `rcshell.jobs` has `JobTable`. It starts child programs and tracks them:
  - `spawn(argv)` starts a program.
  - `wait(pid)` and `wait_all()` collect exit statuses.
  - `apids()` lists the children that are still running.
- `rcshell.utils` holds the shared helpers `RcError`, `RedirType`, `n2u`, `a2u`,
  `isabsolute`, `listlen` and `rc_open`.

## Installation

```
pip install .
```

## Examples

Tokenize a line:

```python
from rcshell.lexer import CharSource, Lexer

for tok in Lexer(CharSource("echo hi >[2=1] | wc\n")).tokens():
    print(tok.kind, tok.value)
```

Match a pattern:

```python
from rcshell.match import match

match("*.c", [True, False, False], "main.c")   # True
```

Work with exit statuses:

```python
from rcshell.status import ShellStatus

st = ShellStatus()
st.ssetstatus(["0", "1"])
st.istrue()        # False
st.sgetstatus()    # ['0', '1']
```

Format text:

```python
from rcshell.printfmt import sprint

sprint("%5d|%-4s|%#x", 42, "ab", 255)   # '   42|ab  |0xff'
```

## History tool

The `rc-history` command reads the file named by the `history` environment
variable. It works as follows:

1. It takes the newest command that contains every search word given on the
   command line.
2. It applies each `old:new` argument as a substitution. Each extra colon, as in
   `old::new`, repeats the substitution one more time.
3. It appends the result to the history file.
4. It runs the result with `$SHELL`, or with `/bin/sh` when `SHELL` is not set.

The tool's behaviour comes from the name it is started under:

- The first character of the name is the marker. History lines that run the tool
  themselves are skipped: these are lines where the marker starts a command or
  follows one of `` ` @ ( ) { | / ``.
- If the marker is repeated, as in `--`, the command is shown first for editing.
- A `p` after that, as in `-p` or `--p`, prints the command and does not run it.

Under its own name the marker is `r`. The tool is meant to be started through
links named `-`, `--`, `-p` and `--p`:

```
ln -s "$(command -v rc-history)" ~/bin/-
- make
- foo.c:bar.c
```

### Editing

When the tool edits a command, it shows the command and then reads one line of
edit characters from standard input, column by column under the command:

| Character | Effect |
| --- | --- |
| space | keeps the character above it |
| `#` | deletes the character above it |
| `%` | puts a space in its place |
| `$` | cuts the rest of the line |
| `+` | keeps the rest of the line |
| `^` | inserts the characters that follow |
| any other character | replaces the character above it |

After each edit line the command is shown again. An empty line accepts the
command. A line holding only the marker rejects it, and the tool goes on to the
next matching command.

## What this package does not do

This is not a working shell. It has no grammar or parser that builds trees from
tokens, and it does not execute trees. It has no builtins, no variables or
environment handling, no redirection or pipeline plumbing, no signal handlers and
no interactive prompt loop.

## Tests

```
pip install .[test]
pytest
```