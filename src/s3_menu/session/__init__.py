"""Interactive menu session over a bucket."""

from .commands import COMMAND_WORDS, Command, menu_prompt, parse_command
from .line_reader import LineReader, StreamLineReader
from .loop import BucketSession, SessionOutcome, SessionState

__all__ = [
    "COMMAND_WORDS",
    "BucketSession",
    "Command",
    "LineReader",
    "SessionOutcome",
    "SessionState",
    "StreamLineReader",
    "menu_prompt",
    "parse_command",
]
