"""
Snapshot storage backends for the cart.

A backend is a small key-value store: the cart store reads its snapshot
once at startup and writes it after every mutation. All backends speak
plain dicts and serialize them as JSON; every failure surfaces as
SnapshotStorageError.
"""
import json
import os
import tempfile
from typing import Dict, Optional, Protocol

from storefront.db import RedisKeys, get_redis_sync
from storefront.errors import (
    ERROR_SNAPSHOT_DELETE,
    ERROR_SNAPSHOT_ENCODE,
    ERROR_SNAPSHOT_READ,
    ERROR_SNAPSHOT_CORRUPT,
    ERROR_SNAPSHOT_WRITE,
    SnapshotCorruptedError,
    SnapshotStorageError,
)


class SnapshotStorage(Protocol):
    """Key-value persistence channel for cart snapshots."""

    def read(self, name: str) -> Optional[dict]:
        ...

    def write(self, name: str, payload: dict) -> None:
        ...

    def delete(self, name: str) -> None:
        ...


def _encode(name: str, payload: dict) -> str:
    try:
        return json.dumps(payload, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SnapshotStorageError(f"{ERROR_SNAPSHOT_ENCODE}: {e}", name=name) from e


def _decode(name: str, raw: Optional[str]) -> Optional[dict]:
    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise SnapshotCorruptedError(f"{ERROR_SNAPSHOT_CORRUPT}: {e}", name=name) from e
    if not isinstance(data, dict):
        raise SnapshotCorruptedError(f"{ERROR_SNAPSHOT_CORRUPT}: expected an object", name=name)
    return data


class MemorySnapshotStorage:
    """In-process storage, for tests and throwaway sessions."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def read(self, name: str) -> Optional[dict]:
        return _decode(name, self._data.get(name))

    def write(self, name: str, payload: dict) -> None:
        self._data[name] = _encode(name, payload)

    def delete(self, name: str) -> None:
        self._data.pop(name, None)


class FileSnapshotStorage:
    """One JSON file per store name inside ``directory``."""

    def __init__(self, directory: str):
        self.directory = directory

    def _path(self, name: str) -> str:
        return os.path.join(self.directory, f"{name}.json")

    def read(self, name: str) -> Optional[dict]:
        path = self._path(name)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise SnapshotStorageError(f"{ERROR_SNAPSHOT_READ}: {e}", name=name, retryable=True) from e
        return _decode(name, raw)

    def write(self, name: str, payload: dict) -> None:
        raw = _encode(name, payload)
        try:
            os.makedirs(self.directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(raw)
                os.replace(tmp_path, self._path(name))
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            raise SnapshotStorageError(f"{ERROR_SNAPSHOT_WRITE}: {e}", name=name, retryable=True) from e

    def delete(self, name: str) -> None:
        try:
            os.remove(self._path(name))
        except FileNotFoundError:
            return
        except OSError as e:
            raise SnapshotStorageError(f"{ERROR_SNAPSHOT_DELETE}: {e}", name=name, retryable=True) from e


class RedisSnapshotStorage:
    """Upstash Redis storage under ``cart:{name}``."""

    def __init__(self, redis_client=None, settings=None):
        self._redis = redis_client  # Lazy initialization
        self._settings = settings

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            try:
                self._redis = get_redis_sync(self._settings)
            except ValueError as e:
                raise SnapshotStorageError(f"Redis not available: {e}") from e
        return self._redis

    def read(self, name: str) -> Optional[dict]:
        try:
            raw = self.redis.get(RedisKeys.cart_key(name))
        except SnapshotStorageError:
            raise
        except Exception as e:
            raise SnapshotStorageError(f"{ERROR_SNAPSHOT_READ}: {e}", name=name, retryable=True) from e
        return _decode(name, raw)

    def write(self, name: str, payload: dict) -> None:
        raw = _encode(name, payload)
        try:
            self.redis.set(RedisKeys.cart_key(name), raw)
        except SnapshotStorageError:
            raise
        except Exception as e:
            raise SnapshotStorageError(f"{ERROR_SNAPSHOT_WRITE}: {e}", name=name, retryable=True) from e

    def delete(self, name: str) -> None:
        try:
            self.redis.delete(RedisKeys.cart_key(name))
        except SnapshotStorageError:
            raise
        except Exception as e:
            raise SnapshotStorageError(f"{ERROR_SNAPSHOT_DELETE}: {e}", name=name, retryable=True) from e
