"""Session configuration schemas for s3-menu."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from s3_menu.objectstorage.clients import S3ClientConfig


class CommandKind(str, Enum):
    """Kinds of command the interactive session understands."""

    LIST = "list"
    DOWNLOAD = "download"
    UPLOAD = "upload"
    DELETE = "delete"
    EXIT = "exit"
    INVALID = "invalid"


# Commands that can be switched off; list and exit are always available
OPTIONAL_COMMANDS = (CommandKind.DOWNLOAD, CommandKind.UPLOAD, CommandKind.DELETE)


class SessionConfig(BaseModel):
    """Everything one interactive session needs, resolved once at startup."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    bucket: str = Field(..., min_length=1, description="S3 bucket name")
    client: S3ClientConfig = Field(..., description="S3 client configuration")
    display_unit: Literal["bytes", "mib"] = Field(
        "bytes", description="Unit used to print object sizes"
    )
    on_empty: Literal["continue", "exit"] = Field(
        "continue", description="What to do when the bucket has no objects"
    )
    commands: frozenset[CommandKind] = Field(
        default=frozenset(OPTIONAL_COMMANDS),
        validate_default=True,
        description="Optional commands enabled for this session",
    )

    @field_validator("commands")
    @classmethod
    def _always_enable_list_and_exit(
        cls, value: frozenset[CommandKind]
    ) -> frozenset[CommandKind]:
        if CommandKind.INVALID in value:
            raise ValueError("'invalid' is not a command that can be enabled")
        return value | {CommandKind.LIST, CommandKind.EXIT}
