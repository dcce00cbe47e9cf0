"""Object storage operations for S3-compatible services."""

from .clients import S3ClientConfig, S3ClientManager, load_client_config
from .s3_operations import (
    BucketListing,
    ObjectDescriptor,
    delete_object,
    download_object,
    format_object_line,
    list_bucket_objects,
    upload_object,
)

__all__ = [
    "BucketListing",
    "ObjectDescriptor",
    "S3ClientConfig",
    "S3ClientManager",
    "delete_object",
    "download_object",
    "format_object_line",
    "list_bucket_objects",
    "load_client_config",
    "upload_object",
]
