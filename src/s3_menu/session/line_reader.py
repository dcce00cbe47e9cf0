"""Line-oriented input for the interactive session."""

import sys
from typing import Optional, Protocol, TextIO


class LineReader(Protocol):
    """Protocol for reading one line of user input."""

    def read_line(self) -> Optional[str]:
        """Return the next line, trimmed, or None once input is exhausted."""
        ...


class StreamLineReader(LineReader):
    """Reads whole lines from a text stream (stdin unless told otherwise)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def read_line(self) -> Optional[str]:
        stream = self.stream if self.stream is not None else sys.stdin
        line = stream.readline()
        if line == "":
            return None
        return line.strip()
