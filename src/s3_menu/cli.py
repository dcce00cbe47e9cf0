"""Command-line interface for s3-menu.

Starts an interactive session over one bucket: the bucket contents are
listed, a command is read from stdin and run, and the loop repeats until
``exit``.

Credentials come from AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY (optionally
seeded from a .env file) or from an AWS CLI profile.
"""

from enum import Enum
from typing import Annotated, Optional

import typer
from pydantic import ValidationError as PydanticValidationError

from . import __version__
from .core import get_logger, settings
from .core.exceptions import ConfigurationError, StoreUnavailable
from .objectstorage import S3ClientManager, load_client_config
from .schemas import OPTIONAL_COMMANDS, CommandKind, SessionConfig
from .session import BucketSession, StreamLineReader

logger = get_logger(__name__)

USAGE = "Usage: s3-menu <bucket-name>"


class DisplayUnit(str, Enum):
    bytes = "bytes"
    mib = "mib"


class EmptyBucketPolicy(str, Enum):
    continue_ = "continue"
    exit = "exit"


app = typer.Typer(
    name="s3-menu",
    help="Interactive menu to list, download, upload and delete objects in an S3 bucket.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"s3-menu {__version__}")
        raise typer.Exit()


def _enabled_commands(disabled: Optional[list[str]]) -> frozenset[CommandKind]:
    """Resolve --disable-command values into the enabled optional commands."""
    enabled = set(OPTIONAL_COMMANDS)
    for name in disabled or []:
        try:
            kind = CommandKind(name.lower())
        except ValueError:
            kind = None
        if kind not in OPTIONAL_COMMANDS:
            choices = ", ".join(k.value for k in OPTIONAL_COMMANDS)
            raise typer.BadParameter(
                f"cannot disable '{name}'; choose from {choices}",
                param_hint="--disable-command",
            )
        enabled.discard(kind)
    return frozenset(enabled)


def _build_session_config(
    bucket: str,
    region_name: Optional[str],
    endpoint_url: Optional[str],
    aws_profile: Optional[str],
    env_file: Optional[str],
    display_unit: Optional[DisplayUnit],
    on_empty: Optional[EmptyBucketPolicy],
    commands: frozenset[CommandKind],
) -> SessionConfig:
    """Load credentials and assemble the per-run configuration."""
    client_config = load_client_config(
        env_file=env_file,
        region_name=region_name,
        endpoint_url=endpoint_url,
        aws_profile=aws_profile,
    )
    try:
        return SessionConfig(
            bucket=bucket,
            client=client_config,
            display_unit=display_unit.value if display_unit else settings.display_unit,
            on_empty=on_empty.value if on_empty else settings.on_empty,
            commands=commands,
        )
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid session configuration: {e}") from e


@app.command()
def main(
    bucket: Annotated[
        Optional[str], typer.Argument(help="Name of the S3 bucket to work on")
    ] = None,
    region_name: Annotated[
        Optional[str],
        typer.Option("--region", help="AWS region name (default: eu-west-1)"),
    ] = None,
    endpoint_url: Annotated[
        Optional[str], typer.Option("--endpoint-url", help="Custom S3 endpoint URL")
    ] = None,
    aws_profile: Annotated[
        Optional[str],
        typer.Option("--aws-profile", help="AWS CLI profile name to use for credentials"),
    ] = None,
    env_file: Annotated[
        str, typer.Option("--env-file", help="Dotenv file to seed credentials from")
    ] = ".env",
    display_unit: Annotated[
        Optional[DisplayUnit],
        typer.Option("--display-unit", help="Show object sizes in bytes or MiB"),
    ] = None,
    on_empty: Annotated[
        Optional[EmptyBucketPolicy],
        typer.Option(
            "--on-empty", help="Keep prompting or exit when the bucket is empty"
        ),
    ] = None,
    disable_command: Annotated[
        Optional[list[str]],
        typer.Option(
            "--disable-command",
            help="Turn off a command (download, upload or delete); repeatable",
        ),
    ] = None,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version."
        ),
    ] = None,
) -> None:
    """
    Browse an S3 bucket interactively.

    Examples:
        s3-menu my-bucket
        s3-menu my-bucket --display-unit mib --disable-command delete
        s3-menu my-bucket --endpoint-url http://localhost:9000 --on-empty exit
    """
    if not bucket:
        typer.echo(USAGE)
        raise typer.Exit(1)

    commands = _enabled_commands(disable_command)

    try:
        config = _build_session_config(
            bucket=bucket,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
            env_file=env_file,
            display_unit=display_unit,
            on_empty=on_empty,
            commands=commands,
        )
    except ConfigurationError as e:
        logger.error("Failed to initialize S3 client", error=str(e))
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    session = BucketSession(config, S3ClientManager(config.client), StreamLineReader())

    try:
        session.run()
    except (ConfigurationError, StoreUnavailable) as e:
        logger.error("Failed to list bucket contents", bucket=bucket, error=str(e))
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
