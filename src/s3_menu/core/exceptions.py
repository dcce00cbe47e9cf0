"""Exception hierarchy for s3-menu."""


class S3MenuError(Exception):
    """Base exception for all s3-menu errors."""

    pass


class ConfigurationError(S3MenuError):
    """Raised when credentials or client settings are missing or unusable."""

    pass


class StoreUnavailable(S3MenuError):
    """Raised when a call against the object store fails."""

    pass


class ObjectNotFoundError(StoreUnavailable):
    """Raised when the requested object key does not exist in the bucket."""

    pass


class LocalIOError(S3MenuError):
    """Raised when a local file cannot be created, written or read."""

    pass


class ValidationError(S3MenuError):
    """Raised when user input fails validation."""

    pass
