# pipekit

`pipekit` runs a chain of commands the way a shell pipeline would, reading
from an input file and writing to an output file:

```
pipekit infile "cmd1" "cmd2" ... "cmdN" outfile
```

behaves like

```
< infile cmd1 | cmd2 | ... | cmdN > outfile
```

At least two commands are required. The same command is available as
`python -m pipekit.runner`.

Each command is split on spaces into a program name and its arguments; empty
words are dropped and no quoting rules apply. A name without a `/` is looked
up in the directories listed by `PATH`; a name with a `/` is used as given
and must be executable.

## Here-documents

When the first argument is `here_doc`, the second is a limiter and input is
read from standard input, line by line, until a line equal to the limiter or
the end of input:

```
pipekit here_doc END "cmd1" "cmd2" outfile
```

behaves like

```
cmd1 << END | cmd2 >> outfile
```

A `> ` prompt is written to standard output before each line, and the output
file is appended to rather than truncated.

## Errors and exit status

Problems are reported on standard error and the pipeline carries on where it
can:

- If the input file cannot be opened (`failed to open infile`), the first
  command is not run and the next one gets empty input.
- If a command is empty or not found (`command not found`), or cannot be
  executed, the next command gets empty input.
- If the output file cannot be opened (`error opening outfile`), the last
  command is not run.

The exit status is that of the last command, or 0 if it was ended by a
signal. If the last command is not started, the status is 1. Too few
arguments is reported as `invalid args count` with status 1.

## Library use

```python
from pipekit.runner import parse_args, run_pipeline

spec = parse_args(["in.txt", "grep a", "wc -l", "out.txt"], allow_heredoc=True)
status = run_pipeline(spec)
```

- `pipekit.runner.parse_args(args, allow_heredoc=False)` builds a
  `PipelineSpec` from arguments given without the program name, raising
  `UsageError` when they do not describe a pipeline. Without
  `allow_heredoc`, exactly `infile cmd1 cmd2 outfile` is accepted.
- `pipekit.runner.PipelineSpec` holds `commands`, `outfile` and either
  `infile` or `limiter`; its `heredoc` property tells which.
- `pipekit.runner.run_pipeline(spec, env=None, stdin=None, prompt=None)`
  runs the pipeline and returns the exit status. `env` is a mapping or a
  sequence of `NAME=value` strings and defaults to the current environment;
  `stdin` and `prompt` are used only to read a here-document.
- `pipekit.paths.resolve_command(name, env)` returns the path of the
  executable for a command name, or `None`; `split_words`, `find_env_path`,
  `command_exists` and `find_command` are the steps it is built from.
- `pipekit.heredoc.read_heredoc(limiter, source=None, prompt=None)` collects
  here-document text from a stream; `is_heredoc` and `iter_lines` support it.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```