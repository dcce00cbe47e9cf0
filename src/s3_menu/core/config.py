"""Configuration management for s3-menu."""

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "WARNING"
    otel_enabled: bool = False
    otel_service_name: str = "s3-menu"

    display_unit: Literal["bytes", "mib"] = "bytes"
    on_empty: Literal["continue", "exit"] = "continue"

    # botocore timeouts, in seconds
    connect_timeout: int = 10
    read_timeout: int = 60
    addressing_style: Literal["auto", "virtual", "path"] = "auto"

    model_config = {
        "env_prefix": "S3_MENU_",
        "case_sensitive": False,
    }


settings = Settings()
