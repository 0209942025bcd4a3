"""Cart package: models, storage, and store."""
from .models import CartLine, CartSnapshot
from .service import CartStore, create_cart_store, create_snapshot_storage
from .storage import (
    SnapshotStorage,
    MemorySnapshotStorage,
    FileSnapshotStorage,
    RedisSnapshotStorage,
)

__all__ = [
    "CartLine",
    "CartSnapshot",
    "CartStore",
    "create_cart_store",
    "create_snapshot_storage",
    "SnapshotStorage",
    "MemorySnapshotStorage",
    "FileSnapshotStorage",
    "RedisSnapshotStorage",
]
