"""Command parsing for the interactive session.

Command words are looked up in a mapping rather than matched in a chain of
conditionals, so adding a command means adding an entry to COMMAND_WORDS
and a handler to the session's dispatch table.
"""

from collections.abc import Collection
from dataclasses import dataclass
from typing import Optional

from s3_menu.schemas import CommandKind

COMMAND_WORDS: dict[str, CommandKind] = {
    "list": CommandKind.LIST,
    "ls": CommandKind.LIST,
    "download": CommandKind.DOWNLOAD,
    "get": CommandKind.DOWNLOAD,
    "upload": CommandKind.UPLOAD,
    "put": CommandKind.UPLOAD,
    "delete": CommandKind.DELETE,
    "rm": CommandKind.DELETE,
    "exit": CommandKind.EXIT,
    "quit": CommandKind.EXIT,
}

# Commands that need an object key or a file path
ARGUMENT_PROMPTS: dict[CommandKind, str] = {
    CommandKind.DOWNLOAD: "Enter the object key to download:",
    CommandKind.UPLOAD: "Enter the path of the file to upload:",
    CommandKind.DELETE: "Enter the object key to delete:",
}


@dataclass(frozen=True)
class Command:
    """One parsed line of user input."""

    kind: CommandKind
    argument: Optional[str] = None
    raw: str = ""

    @property
    def needs_argument(self) -> bool:
        return self.kind in ARGUMENT_PROMPTS and not self.argument


def parse_command(line: str, enabled: Collection[CommandKind]) -> Command:
    """Parse a line such as ``download a.txt`` into a Command.

    Everything after the command word is taken as the argument, so keys and
    paths containing spaces survive. Unknown or disabled words parse as
    ``CommandKind.INVALID``.
    """
    raw = line.strip()
    word, _, rest = raw.partition(" ")
    kind = COMMAND_WORDS.get(word.lower())

    if kind is None or kind not in enabled:
        return Command(kind=CommandKind.INVALID, raw=raw)

    argument = rest.strip() or None
    if kind not in ARGUMENT_PROMPTS:
        argument = None
    return Command(kind=kind, argument=argument, raw=raw)


def menu_prompt(enabled: Collection[CommandKind]) -> str:
    """Build the prompt naming every enabled command word."""
    choices = []
    if CommandKind.DELETE in enabled:
        choices.append("'delete' to delete an object")
    if CommandKind.DOWNLOAD in enabled:
        choices.append("'download' to download an object")
    if CommandKind.UPLOAD in enabled:
        choices.append("'upload' to upload a file")
    choices.append("'list' to refresh the listing")
    return "Enter " + ", ".join(choices) + ", or 'exit' to exit:"
