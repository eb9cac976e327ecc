"""vendsim CLI - Console vending machine simulator."""

import json
from pathlib import Path

import click

from vendsim import __version__
from vendsim.coins import change_remainder, make_change
from vendsim.commands.run import run
from vendsim.formatting import format_breakdown, format_menu, format_pence
from vendsim.inventory import Inventory
from vendsim.logger import SessionLog


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="vendsim")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """vendsim - Console vending machine simulator.

    Insert coins, buy items and collect change from a text menu.
    Without a subcommand, starts the machine (same as `vendsim run`).
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


cli.add_command(run)


@cli.command()
@click.argument("amount", type=click.IntRange(min=0))
def change(amount: int) -> None:
    """Show the coins returned for AMOUNT pence.

    Example:
      vendsim change 95
    """
    counts = make_change(amount)
    click.echo(f"Change for {format_pence(amount)}:")
    lines = format_breakdown(counts.items())
    if not lines:
        click.echo("  (no coins)")
    for line in lines:
        click.echo(line)

    remainder = change_remainder(amount, counts)
    if remainder:
        click.echo(f"  Not returnable: {format_pence(remainder)}")


@cli.command()
def menu() -> None:
    """Show the item catalog."""
    click.echo(format_menu(Inventory.default(), 0).lstrip("\n"))


@cli.command()
@click.argument("log_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    default="text",
    type=click.Choice(["text", "json"]),
    help="Output format (default: text)",
)
def summary(log_file: str, output_format: str) -> None:
    """Summarize a recorded session log.

    Example:
      vendsim summary .vendsim/logs/session-20260101-120000.ndjson
    """
    data = SessionLog.open(Path(log_file)).get_session_summary()

    if output_format == "json":
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    click.echo("=" * 50)
    click.echo(f"Session: {data['session_id']}")
    click.echo(f"  Events: {data['total_events']}")
    click.echo(
        f"  Coins inserted: {data['coins_inserted']} ({format_pence(data['total_inserted'])})"
    )
    click.echo(
        f"  Items dispensed: {data['items_dispensed']} ({format_pence(data['total_sales'])})"
    )
    click.echo(f"  Change returned: {format_pence(data['total_refunded'])}")
    click.echo(f"  Rejected purchases: {data['rejected_purchases']}")
    click.echo("=" * 50)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
