"""Implementation of the vendsim run command."""

from pathlib import Path

import click
import yaml

from vendsim.config import load_config, resolve_log_dir
from vendsim.console import VendingConsole
from vendsim.inventory import Inventory
from vendsim.logger import SessionLog
from vendsim.session import Session


def build_session(log_dir: Path | None) -> Session:
    """Create a session with the startup catalog.

    Args:
        log_dir: Session log directory, or None to disable logging.

    Returns:
        A fresh Session with a zero balance.
    """
    log = SessionLog(log_dir=log_dir) if log_dir is not None else None
    return Session(inventory=Inventory.default(), log=log)


def run_machine(config_file: str | None = None, log_dir: str | None = None) -> None:
    """Run the vending machine on stdin/stdout.

    Args:
        config_file: Explicit config file path (None to use the defaults).
        log_dir: Log directory from the command line; enables logging.

    Raises:
        click.ClickException: If the configuration cannot be loaded.
    """
    try:
        config = load_config(Path(config_file) if config_file else None)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Failed to load config: {e}")

    session = build_session(resolve_log_dir(config, Path(log_dir) if log_dir else None))
    title = config.get("display", {}).get("title") or "VENDING MACHINE"

    VendingConsole(session, title=title).run()
