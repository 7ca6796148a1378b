"""Run a chain of commands joined by pipes, from a file or here-document into a file."""

from __future__ import annotations

import os
import subprocess
import sys
import tempfile
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import IO, TextIO

from pipekit.heredoc import is_heredoc, read_heredoc
from pipekit.paths import Environment, resolve_command, split_words


class UsageError(ValueError):
    """Raised when the command line does not describe a pipeline."""


@dataclass(frozen=True)
class PipelineSpec:
    """What to run: an input (file or here-document), commands and an output file."""

    commands: tuple[str, ...]
    outfile: str
    infile: str | None = None
    limiter: str | None = None

    def __post_init__(self) -> None:
        if (self.infile is None) == (self.limiter is None):
            raise ValueError("exactly one of infile and limiter must be given")
        object.__setattr__(self, "commands", tuple(self.commands))
        if len(self.commands) < 2:
            raise ValueError("a pipeline needs at least two commands")

    @property
    def heredoc(self) -> bool:
        """True when input comes from a here-document."""
        return self.limiter is not None


def parse_args(args: Sequence[str], allow_heredoc: bool = False) -> PipelineSpec:
    """Build a spec from arguments given without the program name.

    Without ``allow_heredoc`` exactly ``infile cmd1 cmd2 outfile`` is
    accepted. With it, any number of commands (at least two) may stand
    between the input file and the output file, and ``here_doc LIMITER``
    may replace the input file.
    """
    args = list(args)
    if not allow_heredoc:
        if len(args) != 4:
            raise UsageError("invalid args count")
        infile, first, second, outfile = args
        return PipelineSpec(commands=(first, second), outfile=outfile, infile=infile)
    if len(args) < 4:
        raise UsageError("invalid args count")
    if is_heredoc(args[0]):
        if len(args) < 5:
            raise UsageError("invalid args count")
        return PipelineSpec(
            commands=tuple(args[2:-1]), outfile=args[-1], limiter=args[1]
        )
    return PipelineSpec(commands=tuple(args[1:-1]), outfile=args[-1], infile=args[0])


def _warn(message: str, detail: object = None) -> None:
    text = message if detail is None else f"{message}: {detail}"
    print(text, file=sys.stderr)


def _environment(env: Environment | None) -> dict[str, str]:
    if env is None:
        return dict(os.environ)
    if isinstance(env, Mapping):
        return dict(env)
    result: dict[str, str] = {}
    for entry in env:
        name, sep, value = entry.partition("=")
        if sep:
            result.setdefault(name, value)
    return result


def _open_input(
    spec: PipelineSpec, stdin: TextIO | None, prompt: TextIO | None
) -> IO[bytes]:
    if spec.limiter is not None:
        body = read_heredoc(spec.limiter, stdin, prompt)
        buffer = tempfile.TemporaryFile()
        buffer.write(body.encode("utf-8", errors="surrogateescape"))
        buffer.seek(0)
        return buffer
    assert spec.infile is not None
    return open(spec.infile, "rb")


def _launch(
    command: str,
    environ: dict[str, str],
    source: IO[bytes] | None,
    stdout: int,
) -> subprocess.Popen[bytes] | None:
    """Start ``command`` reading from ``source``; ``source`` is always closed.

    A missing source means empty input. Returns None when nothing was started.
    """
    try:
        words = split_words(command, " ")
        if not words:
            _warn("command not found")
            return None
        path = resolve_command(words[0], environ)
        if path is None:
            _warn("command not found", words[0])
            return None
        try:
            return subprocess.Popen(
                words,
                executable=path,
                stdin=source if source is not None else subprocess.DEVNULL,
                stdout=stdout,
                env=environ,
            )
        except OSError as exc:
            _warn("failed to execute", exc)
            return None
    finally:
        if source is not None:
            source.close()


def run_pipeline(
    spec: PipelineSpec,
    env: Environment | None = None,
    stdin: TextIO | None = None,
    prompt: TextIO | None = None,
) -> int:
    """Run the pipeline and return the exit status of its last command.

    ``env`` defaults to the current environment; ``stdin`` and ``prompt``
    are used only to read a here-document. A stage that cannot start passes
    empty input on to the next one. The status is 1 when the output file
    cannot be opened or the last command cannot be started.
    """
    environ = _environment(env)
    processes: list[subprocess.Popen[bytes]] = []
    current: IO[bytes] | None = None
    status = 1
    try:
        for index, command in enumerate(spec.commands[:-1]):
            if index == 0:
                try:
                    current = _open_input(spec, stdin, prompt)
                except OSError as exc:
                    _warn("failed to open infile", exc)
                    current = None
                    continue
            source, current = current, None
            process = _launch(command, environ, source, subprocess.PIPE)
            if process is not None:
                processes.append(process)
                current = process.stdout

        flags = os.O_CREAT | os.O_WRONLY | (os.O_APPEND if spec.heredoc else os.O_TRUNC)
        try:
            out_fd = os.open(spec.outfile, flags, 0o644)
        except OSError as exc:
            _warn("error opening outfile", exc)
        else:
            try:
                source, current = current, None
                last = _launch(spec.commands[-1], environ, source, out_fd)
            finally:
                os.close(out_fd)
            if last is not None:
                processes.append(last)
                code = last.wait()
                # A process ended by a signal reports no exit code of its own.
                status = code if code >= 0 else 0
    finally:
        if current is not None:
            current.close()
        for process in processes:
            process.wait()
    return status


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point; returns the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        spec = parse_args(args, allow_heredoc=True)
    except UsageError as exc:
        _warn(str(exc))
        return 1
    return run_pipeline(spec, stdin=sys.stdin, prompt=sys.stdout)


if __name__ == "__main__":
    sys.exit(main())