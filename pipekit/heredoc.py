"""Here-document input: read lines until a limiter line is seen."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from typing import TextIO

HEREDOC_KEYWORD = "here_doc"
PROMPT = "> "


def is_heredoc(arg: str) -> bool:
    """Tell whether a command-line argument selects here-document mode."""
    return arg == HEREDOC_KEYWORD


def iter_lines(stream: TextIO) -> Iterator[str]:
    """Yield lines from ``stream`` one at a time, newlines included.

    The last line may lack a newline. Lines are read one by one so that an
    interactive stream is not read ahead.
    """
    while True:
        line = stream.readline()
        if not line:
            return
        yield line


def read_heredoc(
    limiter: str,
    source: TextIO | None = None,
    prompt: TextIO | None = None,
) -> str:
    """Collect lines from ``source`` up to a line equal to ``limiter``.

    Before each line ``"> "`` is written to ``prompt`` when one is given;
    reaching end of input writes a newline there instead. The limiter line
    is not part of the result, and every collected line ends with a newline.
    """
    if source is None:
        source = sys.stdin

    def show(text: str) -> None:
        if prompt is not None:
            prompt.write(text)
            prompt.flush()

    body: list[str] = []
    lines = iter_lines(source)
    while True:
        show(PROMPT)
        line = next(lines, None)
        if line is None:
            show("\n")
            break
        content = line[:-1] if line.endswith("\n") else line
        if content == limiter:
            break
        body.append(content + "\n")
    return "".join(body)