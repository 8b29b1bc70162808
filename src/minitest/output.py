"""Output sinks the runner writes progress and reports to."""

from __future__ import annotations

import sys
from typing import Protocol, TextIO, runtime_checkable


@runtime_checkable
class OutputSink(Protocol):
    def write(self, text: str) -> None: ...

    def flush(self) -> None: ...


class StreamSink:
    """Writes straight through to a console-like stream."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdout

    def write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def flush(self) -> None:
        self.stream.flush()


class BufferedSink:
    """Collects text and writes it to the stream in one piece on flush.

    Used where the destination is not an interactive console (pipes, CI log
    capture), so partial progress lines are never interleaved.
    """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdout
        self._chunks: list[str] = []

    def write(self, text: str) -> None:
        self._chunks.append(text)

    def getvalue(self) -> str:
        return "".join(self._chunks)

    def flush(self) -> None:
        if not self._chunks:
            return
        self.stream.write(self.getvalue())
        self.stream.flush()
        self._chunks.clear()


def default_sink(stream: TextIO | None = None) -> OutputSink:
    """Pick a sink for ``stream`` (stdout by default) based on whether it is a tty."""
    stream = stream if stream is not None else sys.stdout
    isatty = getattr(stream, "isatty", None)
    if callable(isatty) and isatty():
        return StreamSink(stream)
    return BufferedSink(stream)
