"""vendsim run command - Start the interactive vending machine."""

import click


@click.command()
@click.option(
    "--config",
    "config_file",
    default=None,
    type=click.Path(dir_okay=False),
    help="YAML config file (overrides .vendsim/config.yaml and the global config).",
)
@click.option(
    "--log-dir",
    default=None,
    type=click.Path(file_okay=False),
    help="Write an NDJSON session log to this directory.",
)
def run(config_file: str | None, log_dir: str | None) -> None:
    """Start the interactive vending machine.

    Reads commands from standard input, one per line:

      I - insert coins (5, 10, 20, 50, 100, 200 pence; 'done' to finish)

      S - select an item by code ('back' to cancel)

      R - return change

      Q - quit (any remaining balance is returned first)
    """
    from vendsim.commands._run_impl import run_machine

    run_machine(config_file=config_file, log_dir=log_dir)
