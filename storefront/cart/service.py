"""Cart store: persisted cart lines with merge-on-add and Decimal totals."""
from decimal import Decimal
from typing import Optional, Tuple

from storefront.config import DEFAULT_CART_STORAGE_NAME, Settings, load_settings
from storefront.errors import SnapshotCorruptedError, SnapshotStorageError
from storefront.logging import get_logger, log_safe
from storefront.services.money import format_money, to_float
from .models import CartLine, CartSnapshot
from .storage import (
    FileSnapshotStorage,
    MemorySnapshotStorage,
    RedisSnapshotStorage,
    SnapshotStorage,
)

logger = get_logger(__name__)


class CartStore:
    """
    Shopping cart for one session, persisted as a flat snapshot.

    Features:
    - Merge-on-add by identity key, merged line keeps its position
    - Quantity never below 1; removal is an explicit operation
    - Exact Decimal totals computed on demand
    - Best-effort persistence: a failed write degrades the store to
      in-memory operation instead of failing the call

    Usage:
        store = CartStore(MemorySnapshotStorage())
        store.add_item(CartLine(identity_key="p1", unit_price="10.50", quantity=2))
        store.total()  # Decimal("21.00")
    """

    def __init__(self, storage: SnapshotStorage, name: str = DEFAULT_CART_STORAGE_NAME):
        self.storage = storage
        self.name = name
        self._lines: list[CartLine] = []
        self._persistence_available = True
        self._hydrate()

    # ------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------

    def _hydrate(self) -> None:
        """Read the snapshot once; any problem leaves the cart empty."""
        try:
            data = self.storage.read(self.name)
        except SnapshotCorruptedError as e:
            self._discard_corrupted(e)
            return
        except SnapshotStorageError as e:
            logger.warning(f"Cart snapshot unavailable, running in memory: {log_safe(e)}")
            self._persistence_available = False
            return

        if data is None:
            return

        try:
            items = CartSnapshot.from_dict(data).items
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            self._discard_corrupted(e)
            return

        # Lines are never stored at zero; drop any written by older clients
        self._lines = [line for line in items if line.quantity >= 1]
        dropped = len(items) - len(self._lines)
        if dropped:
            logger.warning(f"Dropped {dropped} cart lines with non-positive quantity from '{self.name}'")

    def _discard_corrupted(self, error: Exception) -> None:
        logger.warning(f"Corrupted cart snapshot '{self.name}': {log_safe(error)}")
        self._lines = []
        try:
            self.storage.delete(self.name)
        except SnapshotStorageError as e:
            logger.warning(f"Failed to clear corrupted cart snapshot: {log_safe(e)}")

    def _persist(self) -> None:
        """Write the current snapshot; never raises."""
        if not self._persistence_available:
            return
        try:
            self.storage.write(self.name, self.snapshot().to_dict())
        except SnapshotStorageError as e:
            self._persistence_available = False
            logger.warning(
                f"Failed to persist cart '{self.name}', continuing in memory: "
                f"{log_safe(e)}"
            )

    @property
    def persistence_available(self) -> bool:
        """False once a storage read or write has failed."""
        return self._persistence_available

    def snapshot(self) -> CartSnapshot:
        """Copy of the current state."""
        return CartSnapshot(items=[line.copy() for line in self._lines])

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    @property
    def lines(self) -> Tuple[CartLine, ...]:
        return tuple(line.copy() for line in self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def _index_of(self, identity_key: str) -> Optional[int]:
        for i, line in enumerate(self._lines):
            if line.identity_key == identity_key:
                return i
        return None

    def get_line(self, identity_key: str) -> Optional[CartLine]:
        index = self._index_of(identity_key)
        if index is None:
            return None
        return self._lines[index].copy()

    def item_count(self) -> int:
        """Total number of units (cart badge)."""
        return sum(line.quantity for line in self._lines)

    def total(self) -> Decimal:
        """Sum of unit price times quantity over all lines, exact."""
        return sum((line.line_total for line in self._lines), Decimal("0"))

    def summary(self, currency: str = "USD") -> dict:
        """Plain dict for the presentation layer."""
        total = self.total()
        return {
            "is_empty": self.is_empty,
            "total_items": self.item_count(),
            "items": [
                {
                    "identity_key": line.identity_key,
                    "name": line.name,
                    "quantity": line.quantity,
                    "unit_price": to_float(line.unit_price),
                    "total": to_float(line.line_total),
                    "selected_options": dict(line.selected_options),
                }
                for line in self._lines
            ],
            "total": to_float(total),
            "total_formatted": format_money(total, currency),
        }

    # ------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------

    def add_item(self, line: CartLine) -> None:
        """
        Add a line, merging into an existing line with the same key.

        A merged line keeps its position and its other fields; only the
        quantity grows. Non-positive quantities are treated as 1.
        """
        quantity = max(1, line.quantity)
        index = self._index_of(line.identity_key)

        if index is None:
            self._lines.append(line.copy(quantity=quantity))
        else:
            existing = self._lines[index]
            self._lines[index] = existing.copy(quantity=existing.quantity + quantity)

        logger.debug(f"Cart add {log_safe(line.identity_key)} x{quantity}")
        self._persist()

    def increment_quantity(self, identity_key: str) -> None:
        """Increase quantity by one; unknown key is a no-op."""
        index = self._index_of(identity_key)
        if index is None:
            return
        line = self._lines[index]
        self._lines[index] = line.copy(quantity=line.quantity + 1)
        self._persist()

    def decrement_quantity(self, identity_key: str) -> None:
        """Decrease quantity by one, never below 1; unknown key is a no-op."""
        index = self._index_of(identity_key)
        if index is None:
            return
        line = self._lines[index]
        if line.quantity <= 1:
            return
        self._lines[index] = line.copy(quantity=line.quantity - 1)
        self._persist()

    def set_quantity(self, identity_key: str, quantity: int) -> None:
        """Set quantity directly; zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(identity_key)
            return
        index = self._index_of(identity_key)
        if index is None:
            return
        self._lines[index] = self._lines[index].copy(quantity=quantity)
        self._persist()

    def remove_item(self, identity_key: str) -> None:
        """Delete the line; unknown key is a no-op."""
        index = self._index_of(identity_key)
        if index is None:
            return
        del self._lines[index]
        logger.debug(f"Cart remove {log_safe(identity_key)}")
        self._persist()

    def clear_cart(self) -> None:
        """Empty the cart (after a successful checkout)."""
        self._lines = []
        self._persist()


def create_snapshot_storage(settings: Settings) -> SnapshotStorage:
    """Storage backend named by ``settings.cart_storage_backend``."""
    if settings.cart_storage_backend == "file":
        return FileSnapshotStorage(settings.cart_storage_dir)
    if settings.cart_storage_backend == "redis":
        return RedisSnapshotStorage(settings=settings)
    return MemorySnapshotStorage()


def create_cart_store(
    settings: Optional[Settings] = None,
    storage: Optional[SnapshotStorage] = None,
) -> CartStore:
    """
    Build a cart store from settings.

    Each call returns a new, independent store; the caller owns it.
    """
    settings = settings or load_settings()
    storage = storage or create_snapshot_storage(settings)
    return CartStore(storage, name=settings.cart_storage_name)
