"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Dict, List

from storefront.services.money import multiply, parse_price, to_decimal


@dataclass
class CartLine:
    """One aggregated entry in the cart, keyed by product/variant identity."""
    identity_key: str
    unit_price: Decimal
    quantity: int = 1
    selected_options: Dict[str, str] = field(default_factory=dict)
    name: str = ""

    def __post_init__(self):
        # Normalize numeric fields
        self.unit_price = to_decimal(self.unit_price)
        self.quantity = int(self.quantity)

    @property
    def line_total(self) -> Decimal:
        """Price for all units of this line."""
        return multiply(self.unit_price, self.quantity)

    def copy(self, **changes) -> "CartLine":
        """Independent copy, options dict included."""
        changes.setdefault("selected_options", dict(self.selected_options))
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Convert to the persisted camelCase shape."""
        return {
            "identityKey": self.identity_key,
            "name": self.name,
            "unitPrice": str(self.unit_price),
            "quantity": self.quantity,
            "selectedOptions": dict(self.selected_options),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLine":
        """Create from the persisted shape."""
        return cls(
            identity_key=str(data["identityKey"]),
            unit_price=parse_price(data["unitPrice"]),
            quantity=int(data["quantity"]),
            selected_options=dict(data.get("selectedOptions") or {}),
            name=data.get("name", ""),
        )


@dataclass
class CartSnapshot:
    """Full ordered state of the cart, as persisted."""
    items: List[CartLine] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for snapshot storage."""
        return {"items": [item.to_dict() for item in self.items]}

    @classmethod
    def from_dict(cls, data: dict) -> "CartSnapshot":
        """
        Create from dictionary.

        Raises:
            KeyError, TypeError, ValueError: If the payload is malformed
        """
        items = data.get("items", [])
        if not isinstance(items, list):
            raise TypeError("items must be a list")
        return cls(items=[CartLine.from_dict(item) for item in items])
