"""Config command group (init/show)."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console

from wallet_selector.config.loader import convert_to_camel, get_config_path, load_config, save_config
from wallet_selector.config.schema import SelectorConfig, get_network


def register_config_commands(app: typer.Typer, console: Console) -> None:
    """Register config command group."""
    config_app = typer.Typer(help="Config helpers (init/show)")
    app.add_typer(config_app, name="config")

    @config_app.command("init")
    def config_init(
        ctx: typer.Context,
        network: str = typer.Option("testnet", "--network", "-n", help="mainnet, testnet or betanet"),
        contract_id: str = typer.Option("", "--contract-id", help="Contract to request an access key for"),
        force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
    ) -> None:
        """Write a default config file."""
        path: Path = (ctx.obj or {}).get("config_path") or get_config_path()
        if path.exists() and not force:
            console.print(f"[yellow]Config already exists:[/yellow] {path} (use --force to overwrite)")
            raise typer.Exit(1)
        try:
            config = SelectorConfig(network=get_network(network), contract_id=contract_id)
        except ValueError as e:
            raise typer.BadParameter(str(e))
        save_config(config, path)
        console.print(f"[green]✓[/green] Config written to {path}")

    @config_app.command("show")
    def config_show(ctx: typer.Context) -> None:
        """Print the effective config as JSON."""
        path: Path = (ctx.obj or {}).get("config_path") or get_config_path()
        try:
            config = load_config(path)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)
        data = convert_to_camel(config.model_dump(mode="json", exclude_none=True))
        console.print_json(json.dumps(data))
