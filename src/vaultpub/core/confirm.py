"""Interactive y/n confirmation fed by a background stdin reader"""

import queue
import sys
import threading
from typing import IO, Optional

import typer


def is_affirmative(line: str) -> bool:
    """Only an exact 'y' counts as yes, once a single LF and then a single CR are removed."""
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line == "y"


class ConfirmationGate:
    """Single-consumer gate over a queue of classified input lines.

    The reader thread starts on the first non-forced prompt and pushes one bool
    per line, then None at end of input. Forced prompts never touch the queue,
    so lines typed ahead stay available for later prompts.
    """

    def __init__(self, force: bool = False, stream: Optional[IO[str]] = None):
        self.force = force
        self._stream = stream
        self._answers: "queue.Queue[Optional[bool]]" = queue.Queue()
        self._reader: Optional[threading.Thread] = None
        self._exhausted = False

    def _read(self, stream: IO[str]) -> None:
        for line in stream:
            self._answers.put(is_affirmative(line))
        self._answers.put(None)

    def start(self) -> None:
        if self._reader is not None:
            return
        stream = self._stream if self._stream is not None else sys.stdin
        self._reader = threading.Thread(target=self._read, args=(stream,), name="vaultpub-stdin", daemon=True)
        self._reader.start()

    def confirm(self, prompt: str) -> bool:
        """Print prompt (no newline) and block for the next answer; end of input means no."""
        if self.force:
            return True
        self.start()
        typer.echo(prompt, nl=False)
        answer = None if self._exhausted else self._answers.get()
        if answer is None:
            self._exhausted = True
            typer.echo()
            return False
        return answer
