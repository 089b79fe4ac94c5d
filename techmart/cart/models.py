"""Cart models: line items, the ordered cart and addable product descriptors."""
from dataclasses import dataclass, field
from typing import List


def _require_str(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string")
    return value


def _require_int(data: dict, key: str, minimum: int) -> int:
    value = data[key]
    # bool is an int subclass; a stored true/false is not a quantity
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{key} must be an integer")
    if value < minimum:
        raise ValueError(f"{key} must be >= {minimum}")
    return value


@dataclass(frozen=True)
class ProductDescriptor:
    """Normalized product as displayed on a catalog card."""
    name: str
    price: int
    image: str = ""
    category: str = ""


@dataclass
class LineItem:
    """Single product entry in the cart."""
    id: str
    name: str
    category: str
    price: int
    image: str
    quantity: int = 1

    def matches(self, product: ProductDescriptor) -> bool:
        """Deduplication key: same display name at the same price."""
        return self.name == product.name and self.price == product.price

    def to_dict(self) -> dict:
        """Convert to the persisted record layout."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "price": self.price,
            "image": self.image,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        """Create from a persisted record. Raises on malformed records."""
        if not isinstance(data, dict):
            raise TypeError("line item record must be an object")
        return cls(
            id=_require_str(data, "id"),
            name=_require_str(data, "name"),
            category=_require_str(data, "category"),
            price=_require_int(data, "price", 0),
            image=_require_str(data, "image"),
            quantity=_require_int(data, "quantity", 1),
        )


@dataclass
class Cart:
    """Ordered collection of line items; order is insertion order."""
    items: List[LineItem] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total_items(self) -> int:
        """Total quantity across all line items (the count badge value)."""
        return sum(item.quantity for item in self.items)

    def find(self, product: ProductDescriptor) -> LineItem | None:
        return next((item for item in self.items if item.matches(product)), None)

    def to_list(self) -> list:
        """Convert to the persisted array layout."""
        return [item.to_dict() for item in self.items]

    @classmethod
    def from_list(cls, data: list) -> "Cart":
        """Create from the persisted array layout. Raises on malformed data."""
        if not isinstance(data, list):
            raise TypeError("cart must be an array of line items")
        return cls(items=[LineItem.from_dict(record) for record in data])
