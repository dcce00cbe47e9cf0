"""S3 operations behind the interactive menu: list, download, upload, delete.

Each operation is a thin adapter between one user command and one S3 call.
Library errors are translated at this boundary into the s3-menu exception
hierarchy so the session loop can tell remote failures (StoreUnavailable)
from local ones (LocalIOError).
"""

import os
import tempfile
from contextlib import closing
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from boto3.exceptions import S3UploadFailedError
from boto3.s3.transfer import TransferConfig
from botocore.exceptions import BotoCoreError, ClientError

from s3_menu.core import get_logger, get_tracer
from s3_menu.core.exceptions import (
    LocalIOError,
    ObjectNotFoundError,
    StoreUnavailable,
    ValidationError,
)
from s3_menu.objectstorage.clients import S3ClientManager

logger = get_logger(__name__)
tracer = get_tracer(__name__)

BYTES_PER_MIB = 1024 * 1024

_NOT_FOUND_CODES = frozenset({"NoSuchKey", "404", "NotFound"})

# Uploads run on the calling thread; one command finishes before the next
_TRANSFER_CONFIG = TransferConfig(use_threads=False)


@dataclass(frozen=True)
class ObjectDescriptor:
    """One object as reported by a bucket listing."""

    key: str
    size_bytes: int


@dataclass(frozen=True)
class BucketListing:
    """Snapshot of a bucket's objects, in the order the server returned them.

    Attributes:
        bucket: S3 bucket name
        objects: Every object in the bucket, across all result pages
    """

    bucket: str
    objects: tuple[ObjectDescriptor, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.objects

    def __len__(self) -> int:
        return len(self.objects)


def format_object_line(obj: ObjectDescriptor, display_unit: str = "bytes") -> str:
    """Render one listing line, with the size in bytes or MiB."""
    if display_unit == "mib":
        return f"Key: {obj.key}, Size: {obj.size_bytes / BYTES_PER_MIB:.2f} MiB"
    return f"Key: {obj.key}, Size: {obj.size_bytes} bytes"


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


def list_bucket_objects(manager: S3ClientManager, bucket: str) -> BucketListing:
    """List every object in a bucket.

    Args:
        manager: S3 client manager for the session
        bucket: S3 bucket name

    Returns:
        BucketListing aggregating all result pages

    Raises:
        StoreUnavailable: If the listing request fails
    """
    logger.info("Listing bucket objects", bucket=bucket)

    with tracer.start_as_current_span("s3.list_objects") as span:
        span.set_attribute("s3.bucket", bucket)
        try:
            objects = []

            # Use paginator to handle buckets with more than one page of keys
            paginator = manager.client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=bucket):
                for obj in page.get("Contents", []):
                    objects.append(
                        ObjectDescriptor(key=obj["Key"], size_bytes=obj.get("Size", 0))
                    )

        except (BotoCoreError, ClientError) as e:
            error_msg = f"Failed to list objects in bucket '{bucket}': {e}"
            logger.error(error_msg, error=str(e))
            raise StoreUnavailable(error_msg) from e

        span.set_attribute("s3.object_count", len(objects))

    logger.info("Bucket objects listed", bucket=bucket, object_count=len(objects))
    return BucketListing(bucket=bucket, objects=tuple(objects))


def _resolve_destination(key: str, destination_dir: Optional[Union[str, Path]]) -> Path:
    """Map an object key to a local path inside destination_dir."""
    base = Path(destination_dir if destination_dir is not None else Path.cwd()).resolve()
    destination = (base / key).resolve()
    # Keys ending in "/" are folder markers, not files
    if key.endswith("/") or destination == base or base not in destination.parents:
        raise LocalIOError(f"Object key '{key}' does not map to a file under {base}")
    return destination


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def _make_parents(directory: Path) -> list[Path]:
    """Create directory and its missing parents, returning those created."""
    missing = []
    for path in (directory, *directory.parents):
        if path.exists():
            break
        missing.append(path)
    directory.mkdir(parents=True, exist_ok=True)
    return missing


def _remove_empty_dirs(created: list[Path]) -> None:
    # created is ordered deepest first
    for path in created:
        try:
            path.rmdir()
        except OSError:
            logger.debug("Left directory in place", path=str(path))
            break


def download_object(
    manager: S3ClientManager,
    bucket: str,
    key: str,
    destination_dir: Optional[Union[str, Path]] = None,
) -> Path:
    """Download an object to a local file named after its key.

    The body is streamed into a temporary file next to the destination and
    renamed into place only once complete, so a failed transfer never leaves
    a partial or clobbered file behind. Directories created for a nested key
    are removed again when the transfer fails. The written file gets the
    usual 0666-minus-umask permissions.

    Args:
        manager: S3 client manager for the session
        bucket: S3 bucket name
        key: Object key to download
        destination_dir: Directory to write into (current directory if None)

    Returns:
        Path of the written file

    Raises:
        ValidationError: If the key is empty
        ObjectNotFoundError: If the key does not exist
        StoreUnavailable: If the request or the transfer fails
        LocalIOError: If the key is a folder marker or escapes destination_dir,
            or the local file cannot be created or written
    """
    if not key:
        raise ValidationError("Object key must not be empty")

    destination = _resolve_destination(key, destination_dir)
    logger.info("Downloading object", bucket=bucket, key=key, destination=str(destination))

    with tracer.start_as_current_span("s3.download_object") as span:
        span.set_attribute("s3.bucket", bucket)
        span.set_attribute("s3.key", key)

        try:
            response = manager.client.get_object(Bucket=bucket, Key=key)
        except ClientError as e:
            if _error_code(e) in _NOT_FOUND_CODES:
                error_msg = f"Object '{key}' not found in bucket '{bucket}'"
                logger.warning(error_msg, error=str(e))
                raise ObjectNotFoundError(error_msg) from e
            error_msg = f"Failed to download object '{key}': {e}"
            logger.error(error_msg, error=str(e))
            raise StoreUnavailable(error_msg) from e
        except BotoCoreError as e:
            error_msg = f"Failed to download object '{key}': {e}"
            logger.error(error_msg, error=str(e))
            raise StoreUnavailable(error_msg) from e

        with closing(response["Body"]) as body:
            created_dirs: list[Path] = []
            try:
                created_dirs = _make_parents(destination.parent)
                fd, temp_name = tempfile.mkstemp(
                    dir=destination.parent, prefix=f".{destination.name}.", suffix=".part"
                )
            except OSError as e:
                _remove_empty_dirs(created_dirs)
                raise LocalIOError(f"Failed to create file '{destination}': {e}") from e

            temp_path = Path(temp_name)
            completed = False
            try:
                written = 0
                with os.fdopen(fd, "wb") as fh:
                    for chunk in body.iter_chunks():
                        fh.write(chunk)
                        written += len(chunk)
                # mkstemp creates 0600; match what a plain open() would give
                os.chmod(temp_path, 0o666 & ~_current_umask())
                os.replace(temp_path, destination)
                completed = True
            except (BotoCoreError, ClientError) as e:
                error_msg = f"Transfer of object '{key}' failed: {e}"
                logger.error(error_msg, error=str(e))
                raise StoreUnavailable(error_msg) from e
            except OSError as e:
                error_msg = f"Failed to save object '{key}' to '{destination}': {e}"
                logger.error(error_msg, error=str(e))
                raise LocalIOError(error_msg) from e
            finally:
                if temp_path.exists():
                    temp_path.unlink()
                    logger.warning("Removed incomplete download", path=str(temp_path))
                if not completed:
                    _remove_empty_dirs(created_dirs)

        span.set_attribute("s3.bytes", written)

    logger.info("Object downloaded", bucket=bucket, key=key, bytes=written)
    return destination


def upload_object(manager: S3ClientManager, bucket: str, path: Union[str, Path]) -> str:
    """Upload a local file under a key equal to its base name.

    Args:
        manager: S3 client manager for the session
        bucket: S3 bucket name
        path: Local file to upload

    Returns:
        The object key the file was stored under

    Raises:
        ValidationError: If the path is empty or has no file name
        LocalIOError: If the file cannot be opened or read
        StoreUnavailable: If the upload fails
    """
    if not str(path):
        raise ValidationError("File path must not be empty")

    source = Path(path).expanduser()
    key = source.name
    if not key:
        raise ValidationError(f"Cannot derive an object key from path '{path}'")

    logger.info("Uploading file", bucket=bucket, key=key, source=str(source))

    with tracer.start_as_current_span("s3.upload_object") as span:
        span.set_attribute("s3.bucket", bucket)
        span.set_attribute("s3.key", key)

        try:
            fh = open(source, "rb")
        except OSError as e:
            raise LocalIOError(f"Failed to open file '{source}': {e}") from e

        with fh:
            try:
                manager.client.upload_fileobj(fh, bucket, key, Config=_TRANSFER_CONFIG)
            except (BotoCoreError, ClientError, S3UploadFailedError) as e:
                error_msg = f"Failed to upload '{source}' as '{key}': {e}"
                logger.error(error_msg, error=str(e))
                raise StoreUnavailable(error_msg) from e
            except OSError as e:
                raise LocalIOError(f"Failed to read file '{source}': {e}") from e

    logger.info("File uploaded", bucket=bucket, key=key)
    return key


def delete_object(manager: S3ClientManager, bucket: str, key: str) -> None:
    """Delete an object.

    Deleting a key that does not exist succeeds like deleting one that does.

    Raises:
        ValidationError: If the key is empty
        StoreUnavailable: If the delete request fails
    """
    if not key:
        raise ValidationError("Object key must not be empty")

    logger.info("Deleting object", bucket=bucket, key=key)

    with tracer.start_as_current_span("s3.delete_object") as span:
        span.set_attribute("s3.bucket", bucket)
        span.set_attribute("s3.key", key)
        try:
            manager.client.delete_object(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            error_msg = f"Failed to delete object '{key}': {e}"
            logger.error(error_msg, error=str(e))
            raise StoreUnavailable(error_msg) from e

    logger.info("Object deleted", bucket=bucket, key=key)
