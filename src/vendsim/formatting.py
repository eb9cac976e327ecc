"""
Text rendering for the machine display

Menu table, money amounts and change breakdowns. Pure functions returning
strings; printing is left to the caller.
"""

from __future__ import annotations

from typing import Iterable

from vendsim.coins import COINS
from vendsim.inventory import Item

RULE = "-" * 37
BANNER_RULE = "*" * 39

CODE_WIDTH = 6
NAME_WIDTH = 18
PRICE_WIDTH = 8
STOCK_WIDTH = 8

OPTIONS_LINE = "Options: I) Insert money   S) Select item   R) Return change   Q) Quit"


def format_pence(pence: int) -> str:
    """
    Format an amount of pence

    Args:
        pence: Amount in pence

    Returns:
        "150p" style string
    """
    return f"{pence}p"


def truncate_string(s: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    Truncate a string to a maximum length

    Args:
        s: String to truncate
        max_length: Maximum length
        suffix: Suffix added when truncated

    Returns:
        The truncated string
    """
    if len(s) <= max_length:
        return s
    return s[: max_length - len(suffix)] + suffix


def format_item_row(item: Item) -> str:
    """Render one item as a fixed-width table row."""
    return (
        f"{item.code:<{CODE_WIDTH}}"
        f"{truncate_string(item.name, NAME_WIDTH - 1):<{NAME_WIDTH}}"
        f"{format_pence(item.price):>{PRICE_WIDTH}}"
        f"{item.stock:>{STOCK_WIDTH}}"
    )


def format_menu(items: Iterable[Item], balance: int, title: str = "VENDING MACHINE") -> str:
    """
    Render the full menu screen

    Args:
        items: Items in display order
        balance: Current balance in pence
        title: Heading shown between the banner rules

    Returns:
        Multi-line menu text, without a trailing newline
    """
    header = (
        f"{'Code':<{CODE_WIDTH}}"
        f"{'Item':<{NAME_WIDTH}}"
        f"{'Price':>{PRICE_WIDTH}}"
        f"{'Stock':>{STOCK_WIDTH}}"
    )
    lines = [
        "",
        f"========== {title} ==========",
        f"Balance: {format_pence(balance)}",
        RULE,
        header,
        RULE,
    ]
    lines.extend(format_item_row(item) for item in items)
    lines.append(RULE)
    lines.append(OPTIONS_LINE)
    return "\n".join(lines)


def format_coin_list(denominations: tuple[int, ...] = COINS) -> str:
    """
    List coins smallest first

    Returns:
        "5, 10, 20, 50, 100, 200"
    """
    return ", ".join(str(coin) for coin in sorted(denominations))


def format_coin_choices(denominations: tuple[int, ...] = COINS) -> str:
    """
    List coins for an error hint

    Returns:
        "5, 10, 20, 50, 100, or 200"
    """
    values = [str(coin) for coin in sorted(denominations)]
    if len(values) <= 1:
        return "".join(values)
    return ", ".join(values[:-1]) + ", or " + values[-1]


def format_breakdown(counts: Iterable[tuple[int, int]]) -> list[str]:
    """
    Render coin counts, skipping coins with a zero count

    Args:
        counts: (coin, count) pairs, largest coin first

    Returns:
        ["  50p x 1", "  20p x 2", ...]
    """
    return [f"  {format_pence(coin)} x {count}" for coin, count in counts if count > 0]
