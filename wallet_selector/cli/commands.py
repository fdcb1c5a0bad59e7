"""CLI commands for wallet-selector.

The CLI inspects what a host application persisted: networks, config, the
enabled wallet modules and the selected wallet.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from wallet_selector import __version__, __logo__
from wallet_selector.cli.command_groups.config_commands import register_config_commands
from wallet_selector.cli.command_groups.selection_commands import register_selection_commands
from wallet_selector.cli.shared.logging_utils import configure_console_logging, ensure_rotating_log_file
from wallet_selector.config.schema import NETWORK_PRESETS

app = typer.Typer(
    name="wallet-selector",
    help=f"{__logo__} wallet-selector - NEAR wallet selection",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} wallet-selector v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
    config_path: Path = typer.Option(None, "--config", "-c", help="Config file (default ~/.wallet_selector/config.json)"),
    db_path: Path = typer.Option(None, "--db", help="Selection database (default from config)"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Console log level"),
    log_file: bool = typer.Option(False, "--log-file", help="Also log to ~/.wallet_selector/logs/cli.log"),
):
    """wallet-selector - NEAR wallet selection."""
    configure_console_logging(log_level)
    if log_file:
        ensure_rotating_log_file("cli")
    ctx.obj = {"config_path": config_path, "db_path": db_path}


@app.command()
def networks():
    """List the built-in network presets."""
    table = Table(title="Networks")
    table.add_column("ID", style="cyan")
    table.add_column("RPC")
    table.add_column("Explorer")
    table.add_column("Wallet")
    for network in NETWORK_PRESETS.values():
        table.add_row(network.network_id, network.node_url, network.explorer_url, network.wallet_url)
    console.print(table)


register_config_commands(app=app, console=console)
register_selection_commands(app=app, console=console)


if __name__ == "__main__":
    app()
