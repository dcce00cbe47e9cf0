"""Credential loading for the S3 client.

Credentials and region are read once at startup from the process environment,
optionally seeded from a local ``.env`` file, and returned as an explicit
:class:`S3ClientConfig` that the rest of the program receives as an argument.
"""

from pathlib import Path
from typing import Optional, Union

from pydantic import AliasChoices, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from s3_menu.core import get_logger
from s3_menu.core.exceptions import ConfigurationError

from .s3_client import DEFAULT_REGION, S3ClientConfig

logger = get_logger(__name__)


class AWSEnvironment(BaseSettings):
    """AWS credential variables as found in the environment or ``.env``."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        env_file_encoding="utf-8",
    )

    access_key_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("AWS_ACCESS_KEY_ID")
    )
    secret_access_key: Optional[str] = Field(
        None, validation_alias=AliasChoices("AWS_SECRET_ACCESS_KEY")
    )
    session_token: Optional[str] = Field(
        None, validation_alias=AliasChoices("AWS_SESSION_TOKEN")
    )
    region_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("AWS_REGION", "AWS_DEFAULT_REGION")
    )
    endpoint_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("AWS_ENDPOINT_URL")
    )


def load_client_config(
    env_file: Optional[Union[str, Path]] = ".env",
    region_name: Optional[str] = None,
    endpoint_url: Optional[str] = None,
    aws_profile: Optional[str] = None,
) -> S3ClientConfig:
    """Resolve the S3 client configuration from the environment.

    Explicit arguments win over environment values, which win over values from
    ``env_file``. A missing ``env_file`` is not an error.

    Args:
        env_file: Path to a dotenv file, or None to read the environment only
        region_name: Region override; defaults to eu-west-1
        endpoint_url: Custom S3 endpoint URL override
        aws_profile: AWS CLI profile supplying the credentials

    Returns:
        S3ClientConfig ready to hand to S3ClientManager

    Raises:
        ConfigurationError: If required credentials are absent
    """
    if env_file is not None and not Path(env_file).is_file():
        logger.debug("No env file found, using process environment", env_file=str(env_file))
        env_file = None

    try:
        env = AWSEnvironment(_env_file=env_file)  # type: ignore[call-arg]
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid AWS environment configuration: {e}") from e

    if not aws_profile:
        missing = [
            name
            for name, value in (
                ("AWS_ACCESS_KEY_ID", env.access_key_id),
                ("AWS_SECRET_ACCESS_KEY", env.secret_access_key),
            )
            if not value
        ]
        if missing:
            error_msg = f"Missing required credentials: {', '.join(missing)}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg)

    config = S3ClientConfig(
        access_key_id=env.access_key_id,
        secret_access_key=env.secret_access_key,
        session_token=env.session_token,
        region_name=region_name or env.region_name or DEFAULT_REGION,
        endpoint_url=endpoint_url or env.endpoint_url,
        aws_profile=aws_profile,
    )

    logger.info(
        "S3 client configuration loaded",
        region=config.region_name,
        endpoint_url=config.endpoint_url,
        profile=config.aws_profile,
    )
    return config
