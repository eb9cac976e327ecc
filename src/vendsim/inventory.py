"""Item catalog held by the machine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass
class Item:
    """A catalog entry.

    Attributes:
        code: Selection code shown on the machine (e.g. "A1")
        name: Display name
        price: Price in pence
        stock: Remaining dispensable count
    """

    code: str
    name: str
    price: int
    stock: int = 0

    def __post_init__(self) -> None:
        if self.price <= 0:
            raise ValueError("price must be positive")
        if self.stock < 0:
            raise ValueError("stock must not be negative")

    @property
    def in_stock(self) -> bool:
        return self.stock > 0


# Startup catalog: (code, name, price, stock)
DEFAULT_CATALOG: tuple[tuple[str, str, int, int], ...] = (
    ("A1", "Coffee", 150, 5),
    ("A2", "Tea", 120, 5),
    ("B1", "Cola", 130, 6),
    ("B2", "Orange Soda", 120, 6),
    ("C1", "Chocolate Bar", 100, 4),
    ("D1", "Crisps (Salt)", 90, 5),
    ("E1", "Biscuits", 110, 4),
)


class Inventory:
    """
    Ordered collection of items

    Lookup by code ignores case and surrounding whitespace. When two items
    share a code, the first one wins.
    """

    def __init__(self, items: list[Item] | None = None) -> None:
        self._items: list[Item] = list(items) if items else []

    @classmethod
    def default(cls) -> Inventory:
        """Build the startup catalog."""
        return cls([Item(*row) for row in DEFAULT_CATALOG])

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def find(self, code: str) -> Item | None:
        """
        Find an item by code

        Args:
            code: Item code as typed by the user

        Returns:
            The first matching item, or None
        """
        target = code.strip().upper()
        for item in self._items:
            if item.code.upper() == target:
                return item
        return None

    def stock_levels(self) -> dict[str, int]:
        """Return {code: stock} in catalog order."""
        return {item.code: item.stock for item in self._items}
