"""Interactive menu for a single S3 bucket.

Lists the objects in a bucket, then reads commands from stdin to download,
upload or delete objects, re-listing after every command.

Library Usage:
    The operations behind the menu can be used directly:

    >>> from s3_menu import S3ClientManager, list_bucket_objects, load_client_config
    >>> manager = S3ClientManager(load_client_config())
    >>> listing = list_bucket_objects(manager, "my-bucket")
"""

__version__ = "0.1.0"

from .objectstorage import (
    BucketListing,
    ObjectDescriptor,
    S3ClientConfig,
    S3ClientManager,
    delete_object,
    download_object,
    format_object_line,
    list_bucket_objects,
    load_client_config,
    upload_object,
)
from .schemas import CommandKind, SessionConfig
from .session import BucketSession, SessionOutcome, StreamLineReader

__all__ = [
    # Configuration
    "S3ClientConfig",
    "SessionConfig",
    "load_client_config",
    # Operations
    "BucketListing",
    "ObjectDescriptor",
    "S3ClientManager",
    "delete_object",
    "download_object",
    "format_object_line",
    "list_bucket_objects",
    "upload_object",
    # Session
    "BucketSession",
    "CommandKind",
    "SessionOutcome",
    "StreamLineReader",
]
