"""
Interactive input for sclipt.

Single-line prompts plus a multi-line reader that collects lines until a
sentinel line (default END, case-insensitive) or end of input.
"""

import enum
import sys
from typing import IO

from sclipt.config import DEFAULT_SENTINEL


def prompt(question: str, stdin: IO[str] | None = None, stdout: IO[str] | None = None) -> str:
    """Ask one question and return the answer without its newline."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    stdout.write(question)
    stdout.flush()
    line = stdin.readline()
    return line.rstrip("\r\n")


class ReaderState(enum.Enum):
    COLLECTING = "collecting"
    DONE = "done"


class ContentReader:
    """
    Accumulates lines until the sentinel arrives.

    COLLECTING --(sentinel line)--> DONE. The sentinel itself is not kept.
    """

    def __init__(self, sentinel: str = DEFAULT_SENTINEL):
        self.sentinel = sentinel.strip().lower()
        self.state = ReaderState.COLLECTING
        self._lines: list[str] = []

    @property
    def done(self) -> bool:
        return self.state is ReaderState.DONE

    def feed(self, line: str) -> bool:
        """Consume one line. Returns True once collection is finished."""
        if self.done:
            raise RuntimeError("ContentReader already finished")

        line = line.rstrip("\r\n")
        if line.strip().lower() == self.sentinel:
            self.state = ReaderState.DONE
        else:
            self._lines.append(line)
        return self.done

    def finish(self) -> None:
        """End collection without a sentinel (input exhausted)."""
        self.state = ReaderState.DONE

    @property
    def text(self) -> str:
        return "\n".join(self._lines)


def read_until_sentinel(stdin: IO[str] | None = None, sentinel: str = DEFAULT_SENTINEL) -> str:
    """Read lines from stdin until the sentinel line or EOF."""
    stdin = stdin or sys.stdin
    reader = ContentReader(sentinel)

    while not reader.done:
        line = stdin.readline()
        if not line:
            reader.finish()
            break
        reader.feed(line)

    return reader.text


def parse_tags(raw: str) -> list[str]:
    """Split a comma-separated answer into tags (normalized by the store)."""
    if not raw:
        return []
    return raw.split(",")
