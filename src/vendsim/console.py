"""Interactive command loop over a line-based text stream.

Each prompt is written to stdout with click.echo and each answer is one line
read from the input stream. End of input ends the current prompt and, at the
command prompt, the whole loop.
"""

from __future__ import annotations

import sys
from typing import Callable, TextIO

import click

from vendsim.coins import InvalidCoinInputError, UnsupportedCoinError, parse_coin
from vendsim.formatting import (
    BANNER_RULE,
    format_breakdown,
    format_coin_choices,
    format_coin_list,
    format_menu,
    format_pence,
)
from vendsim.session import (
    InsufficientFundsError,
    OutOfStockError,
    Session,
    UnknownItemError,
)

DONE_TOKEN = "DONE"
BACK_TOKEN = "BACK"


class VendingConsole:
    """
    Text front end for a Session

    Commands are the first character of the answer to the menu prompt,
    case-insensitive: I) insert money, S) select item, R) return change,
    Q) quit.
    """

    def __init__(
        self,
        session: Session,
        stdin: TextIO | None = None,
        title: str = "VENDING MACHINE",
    ) -> None:
        self.session = session
        self.stdin = stdin if stdin is not None else sys.stdin
        self.title = title
        self._handlers: dict[str, Callable[[], bool]] = {
            "I": self._command_insert,
            "S": self._command_select,
            "R": self._command_return,
            "Q": self._command_quit,
        }

    def read_line(self, prompt: str) -> str | None:
        """
        Prompt and read one line

        Returns:
            The line without its newline, or None at end of input
        """
        click.echo(prompt, nl=False)
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def show_menu(self) -> None:
        click.echo(format_menu(self.session.inventory, self.session.balance, self.title))

    def insert_money(self) -> None:
        """Read coins until 'done' or end of input."""
        denominations = self.session.denominations
        click.echo(f"\nInsert coins (in pence): {format_coin_list(denominations)}")
        click.echo("Type value in pence (e.g., 50) or 'done' to finish.")

        while True:
            token = self.read_line("Coin (pence) or 'done': ")
            if token is None:
                return
            if token.strip().upper() == DONE_TOKEN:
                return

            try:
                value = parse_coin(token, denominations)
                balance = self.session.insert_coin(value)
            except InvalidCoinInputError:
                self._log_rejected_coin(token, "invalid")
                click.echo(
                    f"  Invalid input. Please enter {format_coin_choices(denominations)}."
                )
                continue
            except UnsupportedCoinError as e:
                self._log_rejected_coin(token, "unsupported")
                click.echo(f"  Unsupported coin: {format_pence(e.value)}")
                continue

            click.echo(f"  Added {format_pence(value)}. New balance {format_pence(balance)}")

    def select_item(self) -> None:
        """Read an item code and try to buy it."""
        click.echo("\nEnter item code (e.g., A1). Type 'back' to cancel.")
        code = self.read_line("Code: ")
        if code is None or code.strip().upper() == BACK_TOKEN:
            return

        try:
            item = self.session.purchase(code)
        except UnknownItemError:
            click.echo("  Unknown code. Please try again.")
            return
        except OutOfStockError as e:
            click.echo(f"  Sorry, {e.item.name} is out of stock.")
            return
        except InsufficientFundsError as e:
            click.echo(f"  Insufficient funds. Need {format_pence(e.shortfall)} more.")
            return

        balance = self.session.balance
        click.echo(f"\n*** DISPENSING: {item.name} ({item.code}) ***")
        click.echo(
            f"Price: {format_pence(item.price)} | Remaining balance: {format_pence(balance)}"
        )

        if balance > 0:
            answer = self.read_line("Return change now? (y/n): ")
            if answer is not None and answer.strip().upper().startswith("Y"):
                self.return_change()

    def return_change(self) -> None:
        refund = self.session.return_change()
        if refund is None:
            click.echo("No change to return.")
            return

        click.echo(f"\n*** RETURNING CHANGE: {format_pence(refund.amount)} ***")
        for line in format_breakdown(refund.nonzero_coins()):
            click.echo(line)
        click.echo(BANNER_RULE)

    def handle_command(self, choice: str) -> bool:
        """
        Dispatch one menu answer

        Args:
            choice: Raw answer to the menu prompt

        Returns:
            False when the loop should stop
        """
        choice = choice.strip()
        if not choice:
            return True

        handler = self._handlers.get(choice[0].upper())
        if handler is None:
            click.echo("Unknown option. Please choose I, S, R or Q.")
            return True
        return handler()

    def run(self) -> None:
        """Run the menu loop until quit or end of input."""
        while True:
            self.show_menu()
            choice = self.read_line("Choose [I/S/R/Q]: ")
            if choice is None:
                break
            if not self.handle_command(choice):
                break

        if self.session.log:
            self.session.log.log_session_end(self.session.balance)

    def _command_insert(self) -> bool:
        self.insert_money()
        return True

    def _command_select(self) -> bool:
        self.select_item()
        return True

    def _command_return(self) -> bool:
        self.return_change()
        return True

    def _command_quit(self) -> bool:
        if self.session.balance > 0:
            click.echo("\nYou have a remaining balance.")
            self.return_change()
        click.echo("Goodbye!")
        return False

    def _log_rejected_coin(self, token: str, reason: str) -> None:
        if self.session.log:
            self.session.log.log_coin_rejected(token.strip(), reason)
