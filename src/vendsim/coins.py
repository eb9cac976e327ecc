"""Coin table and change calculation.

All money is held in pence. The machine accepts a fixed set of coins and
returns change by greedy reduction: as many of the largest coin as fit,
then the next largest on the remainder, and so on.

Greedy reduction is exact whenever the smallest coin divides every other
coin: any multiple of the smallest coin then decomposes with nothing left
over (``is_greedy_exact``). It is also minimal only for canonical tables.
Ours is canonical; a table such as (11, 5, 1) is not, and greedy gives
11+1+1+1+1 for 15 instead of 5+5+5. ``is_canonical`` detects this;
``make_change`` does not try to repair a table that fails it.
"""

from __future__ import annotations


# Largest to smallest
COINS: tuple[int, ...] = (200, 100, 50, 20, 10, 5)


class InvalidCoinInputError(ValueError):
    """Raised when a coin token is not a decimal integer."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Invalid coin input: {token!r}")


class UnsupportedCoinError(ValueError):
    """Raised when a coin value is not in the coin table."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"Unsupported coin: {value}p")


def is_accepted_coin(value: int, denominations: tuple[int, ...] = COINS) -> bool:
    """Check whether a value is one of the accepted coins."""
    return value in denominations


def parse_coin(token: str, denominations: tuple[int, ...] = COINS) -> int:
    """
    Parse a coin token typed by the user.

    Args:
        token: Raw input token (surrounding whitespace is ignored)
        denominations: Accepted coin values

    Returns:
        The coin value in pence

    Raises:
        InvalidCoinInputError: If the token is empty, not all digits, or has
            more digits than the largest coin
        UnsupportedCoinError: If the value is not an accepted coin
    """
    text = token.strip()
    if not text or not (text.isascii() and text.isdigit()):
        raise InvalidCoinInputError(token)

    # No coin has more digits than the largest one
    if len(text.lstrip("0")) > len(str(max(denominations))):
        raise InvalidCoinInputError(token)

    value = int(text)
    if not is_accepted_coin(value, denominations):
        raise UnsupportedCoinError(value)
    return value


def make_change(amount: int, denominations: tuple[int, ...] = COINS) -> dict[int, int]:
    """
    Break an amount into coin counts, largest coin first.

    Args:
        amount: Amount in pence (non-negative)
        denominations: Coin values sorted largest to smallest

    Returns:
        {coin: count} with one entry per coin, in table order. If the amount
        is not a multiple of the smallest coin, the leftover is simply not
        represented; see ``change_remainder``.

    Raises:
        ValueError: If amount is negative

    Example:
        >>> make_change(95)
        {200: 0, 100: 0, 50: 1, 20: 2, 10: 0, 5: 1}
    """
    if amount < 0:
        raise ValueError("amount must be non-negative")

    counts: dict[int, int] = {}
    remaining = amount
    for coin in denominations:
        take, remaining = divmod(remaining, coin)
        counts[coin] = take
    return counts


def change_remainder(amount: int, counts: dict[int, int]) -> int:
    """Return the part of ``amount`` that ``counts`` does not cover."""
    return amount - sum(coin * count for coin, count in counts.items())


def is_greedy_exact(denominations: tuple[int, ...] = COINS) -> bool:
    """
    Check that greedy change leaves no remainder for this coin table.

    True when the table is strictly largest to smallest and the smallest
    coin divides every other coin. Amounts must still be multiples of the
    smallest coin.
    """
    if not denominations or denominations[-1] <= 0:
        return False
    if any(smaller >= larger for larger, smaller in zip(denominations, denominations[1:])):
        return False
    unit = denominations[-1]
    return all(coin % unit == 0 for coin in denominations)


def is_canonical(denominations: tuple[int, ...] = COINS) -> bool:
    """
    Check that greedy change also uses the fewest coins.

    Compares greedy against an exhaustive minimum for every amount below the
    sum of the two largest coins; a non-canonical table always has its
    smallest counterexample in that range.
    """
    if not is_greedy_exact(denominations):
        return False
    if len(denominations) < 3:
        return True

    unit = denominations[-1]
    limit = (denominations[0] + denominations[1]) // unit
    fewest = [0] * limit
    for step in range(1, limit):
        amount = step * unit
        fewest[step] = 1 + min(
            fewest[(amount - coin) // unit] for coin in denominations if coin <= amount
        )
        if sum(make_change(amount, denominations).values()) > fewest[step]:
            return False
    return True
