"""
Common Error Constants and Exceptions

Centralized error messages to avoid string duplication.
"""

# Snapshot storage errors
ERROR_SNAPSHOT_READ = "Failed to read cart snapshot"
ERROR_SNAPSHOT_WRITE = "Failed to write cart snapshot"
ERROR_SNAPSHOT_DELETE = "Failed to delete cart snapshot"
ERROR_SNAPSHOT_CORRUPT = "Corrupted cart snapshot"
ERROR_SNAPSHOT_ENCODE = "Cart snapshot is not JSON serializable"
ERROR_STORAGE_NOT_CONFIGURED = "UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set"

# Boundary record errors
ERROR_INVALID_CATEGORY = "Invalid category record"
ERROR_INVALID_ATTRIBUTE_VALUE = "Invalid attribute value record"

# Configuration errors
ERROR_UNKNOWN_STORAGE_BACKEND = "Unknown cart storage backend"


class SnapshotStorageError(Exception):
    """Error from a cart snapshot storage backend."""

    def __init__(
        self,
        message: str,
        name: str | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.name = name
        self.retryable = retryable


class SnapshotCorruptedError(SnapshotStorageError):
    """Stored snapshot exists but can't be decoded."""

    def __init__(self, message: str = ERROR_SNAPSHOT_CORRUPT, name: str | None = None) -> None:
        super().__init__(message, name=name, retryable=False)
