"""Core utilities and shared components for s3-menu."""

from .config import settings
from .exceptions import (
    ConfigurationError,
    LocalIOError,
    ObjectNotFoundError,
    S3MenuError,
    StoreUnavailable,
    ValidationError,
)
from .observability import get_logger, get_tracer

__all__ = [
    "settings",
    "S3MenuError",
    "ConfigurationError",
    "StoreUnavailable",
    "ObjectNotFoundError",
    "LocalIOError",
    "ValidationError",
    "get_logger",
    "get_tracer",
]
