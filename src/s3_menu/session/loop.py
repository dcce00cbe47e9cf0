"""Interactive session loop over a single bucket.

The session is a small state machine::

    LISTING -> AWAITING_COMMAND -> DISPATCHING -> LISTING
                     ^      |
                     +------+  (invalid input: no re-listing)

with EXITED as the terminal state. Listing failures are fatal and propagate
out of :meth:`BucketSession.run`; failures of download, upload and delete are
reported and the loop carries on.
"""

from enum import Enum
from typing import Callable, Optional

import typer

from s3_menu.core import get_logger
from s3_menu.core.exceptions import LocalIOError, StoreUnavailable, ValidationError
from s3_menu.objectstorage import (
    S3ClientManager,
    delete_object,
    download_object,
    format_object_line,
    list_bucket_objects,
    upload_object,
)
from s3_menu.schemas import CommandKind, SessionConfig

from .commands import ARGUMENT_PROMPTS, Command, menu_prompt, parse_command
from .line_reader import LineReader

logger = get_logger(__name__)

EMPTY_BUCKET_MESSAGE = "No objects found in the bucket."
INVALID_COMMAND_MESSAGE = "Invalid command. Please try again."

# Errors a single command may raise without ending the session
RECOVERABLE_ERRORS = (StoreUnavailable, LocalIOError, ValidationError)

_GERUNDS = {
    CommandKind.DOWNLOAD: "downloading",
    CommandKind.UPLOAD: "uploading",
    CommandKind.DELETE: "deleting",
}


class SessionState(str, Enum):
    LISTING = "listing"
    AWAITING_COMMAND = "awaiting_command"
    DISPATCHING = "dispatching"
    EXITED = "exited"


class SessionOutcome(str, Enum):
    """How a session ended."""

    EXITED = "exited"
    END_OF_INPUT = "end_of_input"
    EMPTY_BUCKET = "empty_bucket"


class BucketSession:
    """Runs the list / prompt / dispatch loop for one bucket."""

    def __init__(
        self,
        config: SessionConfig,
        manager: S3ClientManager,
        reader: LineReader,
        echo: Callable[[str], None] = typer.echo,
    ):
        self.config = config
        self.manager = manager
        self.reader = reader
        self.echo = echo
        self.state = SessionState.LISTING
        self.outcome: Optional[SessionOutcome] = None
        self._pending: Optional[Command] = None
        self._handlers: dict[CommandKind, Callable[[str], str]] = {
            CommandKind.DOWNLOAD: self._download,
            CommandKind.UPLOAD: self._upload,
            CommandKind.DELETE: self._delete,
        }

    @property
    def bucket(self) -> str:
        return self.config.bucket

    def run(self) -> SessionOutcome:
        """Drive the state machine until it reaches EXITED.

        Raises:
            StoreUnavailable: If listing the bucket fails
        """
        logger.info("Session started", bucket=self.bucket)
        while self.state is not SessionState.EXITED:
            self.step()
        logger.info("Session ended", bucket=self.bucket, outcome=self.outcome.value)
        return self.outcome

    def step(self) -> None:
        """Advance the state machine by one transition."""
        if self.state is SessionState.LISTING:
            self._list()
        elif self.state is SessionState.AWAITING_COMMAND:
            self._await_command()
        elif self.state is SessionState.DISPATCHING:
            self._dispatch()

    def _finish(self, outcome: SessionOutcome) -> None:
        self.outcome = outcome
        self.state = SessionState.EXITED

    def _list(self) -> None:
        listing = list_bucket_objects(self.manager, self.bucket)

        if listing.is_empty:
            self.echo(EMPTY_BUCKET_MESSAGE)
            if self.config.on_empty == "exit":
                self._finish(SessionOutcome.EMPTY_BUCKET)
                return
        else:
            for obj in listing.objects:
                self.echo(format_object_line(obj, self.config.display_unit))

        self.state = SessionState.AWAITING_COMMAND

    def _await_command(self) -> None:
        self.echo(menu_prompt(self.config.commands))
        line = self.reader.read_line()
        if line is None:
            self._finish(SessionOutcome.END_OF_INPUT)
            return

        command = parse_command(line, self.config.commands)
        if command.kind is CommandKind.INVALID:
            logger.debug("Invalid command", raw=command.raw)
            self.echo(INVALID_COMMAND_MESSAGE)
            return

        self._pending = command
        self.state = SessionState.DISPATCHING

    def _dispatch(self) -> None:
        command = self._pending
        self._pending = None

        if command.kind is CommandKind.EXIT:
            self._finish(SessionOutcome.EXITED)
            return

        if command.kind in self._handlers:
            argument = command.argument
            if command.needs_argument:
                self.echo(ARGUMENT_PROMPTS[command.kind])
                argument = self.reader.read_line()
                if argument is None:
                    self._finish(SessionOutcome.END_OF_INPUT)
                    return

            try:
                self.echo(self._handlers[command.kind](argument))
            except RECOVERABLE_ERRORS as e:
                logger.warning(
                    "Command failed",
                    command=command.kind.value,
                    argument=argument,
                    error=str(e),
                )
                self.echo(f"Error {_GERUNDS[command.kind]} object: {e}")

        self.state = SessionState.LISTING

    def _download(self, key: str) -> str:
        download_object(self.manager, self.bucket, key)
        return f"Successfully downloaded object: {key}"

    def _upload(self, path: str) -> str:
        key = upload_object(self.manager, self.bucket, path)
        return f"Successfully uploaded object: {key}"

    def _delete(self, key: str) -> str:
        delete_object(self.manager, self.bucket, key)
        return f"Successfully deleted object: {key}"
