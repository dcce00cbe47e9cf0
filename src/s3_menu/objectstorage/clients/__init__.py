"""S3 client management and configuration."""

from .credentials import load_client_config
from .s3_client import DEFAULT_REGION, S3ClientConfig, S3ClientManager

__all__ = ["DEFAULT_REGION", "S3ClientConfig", "S3ClientManager", "load_client_config"]
