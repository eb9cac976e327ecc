"""Balance and stock state of one vending session.

The session owns its inventory. Commands mutate it only through the
methods below, each of which either succeeds completely or raises a
``VendingError`` without touching any state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from vendsim.coins import (
    COINS,
    UnsupportedCoinError,
    change_remainder,
    is_accepted_coin,
    make_change,
)
from vendsim.inventory import Inventory, Item
from vendsim.logger import SessionLog


class VendingError(Exception):
    """Base class for recoverable purchase errors."""


class UnknownItemError(VendingError):
    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Unknown item code: {code}")


class OutOfStockError(VendingError):
    def __init__(self, item: Item) -> None:
        self.item = item
        super().__init__(f"{item.name} is out of stock")


class InsufficientFundsError(VendingError):
    """Raised when the balance does not cover the item price.

    Attributes:
        item: The requested item
        shortfall: Pence still needed
    """

    def __init__(self, item: Item, shortfall: int) -> None:
        self.item = item
        self.shortfall = shortfall
        super().__init__(f"Insufficient funds for {item.name}: need {shortfall}p more")


@dataclass
class Refund:
    """Change handed back to the user.

    Attributes:
        amount: Total refunded in pence
        coins: {coin: count} for every coin in the table
    """

    amount: int
    coins: dict[int, int] = field(default_factory=dict)

    @property
    def remainder(self) -> int:
        return change_remainder(self.amount, self.coins)

    def nonzero_coins(self) -> list[tuple[int, int]]:
        """Return (coin, count) pairs with a count above zero, largest first."""
        return [(coin, count) for coin, count in self.coins.items() if count > 0]


class Session:
    """
    One user's session at the machine

    Attributes:
        inventory: Items owned by this session
        balance: Pence inserted and not yet spent or returned
    """

    def __init__(
        self,
        inventory: Inventory | None = None,
        log: SessionLog | None = None,
        denominations: tuple[int, ...] = COINS,
    ) -> None:
        self.inventory = inventory if inventory is not None else Inventory.default()
        self.denominations = denominations
        self.log = log
        self._balance = 0

    @property
    def balance(self) -> int:
        return self._balance

    def insert_coin(self, value: int) -> int:
        """
        Add a coin to the balance

        Args:
            value: Coin value in pence

        Returns:
            The new balance

        Raises:
            UnsupportedCoinError: If value is not an accepted coin
        """
        if not is_accepted_coin(value, self.denominations):
            raise UnsupportedCoinError(value)

        self._balance += value
        if self.log:
            self.log.log_coin_inserted(value, self._balance)
        return self._balance

    def purchase(self, code: str) -> Item:
        """
        Buy one item by code

        Args:
            code: Item code, matched case-insensitively

        Returns:
            The dispensed item (its stock already decremented)

        Raises:
            UnknownItemError: No item has this code
            OutOfStockError: The item's stock is zero
            InsufficientFundsError: The balance is below the price
        """
        item = self.inventory.find(code)
        try:
            if item is None:
                raise UnknownItemError(code.strip())
            if not item.in_stock:
                raise OutOfStockError(item)
            if self._balance < item.price:
                raise InsufficientFundsError(item, item.price - self._balance)
        except VendingError as e:
            if self.log:
                self.log.log_purchase_rejected(code.strip(), type(e).__name__)
            raise

        self._balance -= item.price
        item.stock -= 1
        if self.log:
            self.log.log_item_dispensed(item.code, item.price, self._balance)
        return item

    def return_change(self) -> Refund | None:
        """
        Return the whole balance as coins

        Returns:
            The refund, or None if the balance is already zero
        """
        if self._balance <= 0:
            return None

        amount = self._balance
        refund = Refund(amount=amount, coins=make_change(amount, self.denominations))
        self._balance = 0
        if self.log:
            self.log.log_change_returned(refund.amount, refund.coins)
        return refund
