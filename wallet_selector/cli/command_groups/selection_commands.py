"""Selection commands: inspect and reset the persisted wallet selection."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from wallet_selector import __logo__
from wallet_selector.config.loader import get_config_path, load_config
from wallet_selector.config.schema import SelectorConfig
from wallet_selector.storage.kv_store import SELECTED_WALLET_ID, JsonStorage, SqliteStore
from wallet_selector.wallets.registry import get_builtin_modules


def _open_storage(ctx: typer.Context, config: SelectorConfig | None = None) -> tuple[JsonStorage, Path]:
    obj = ctx.obj or {}
    if config is None:
        config = load_config(obj.get("config_path") or get_config_path())
    db_path: Path = obj.get("db_path") or config.storage_file
    return JsonStorage(SqliteStore(db_path)), db_path


def register_selection_commands(app: typer.Typer, console: Console) -> None:
    """Register status/reset commands."""

    @app.command("status")
    def status(ctx: typer.Context) -> None:
        """Show config, enabled wallet modules and the persisted selection."""
        obj = ctx.obj or {}
        config_path: Path = obj.get("config_path") or get_config_path()
        try:
            config = load_config(config_path)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)
        storage, db_path = _open_storage(ctx, config)

        console.print(f"{__logo__} wallet-selector status\n")
        console.print(f"Config: {config_path} {'[green]✓[/green]' if config_path.exists() else '[dim](defaults)[/dim]'}")
        console.print(f"Storage: {db_path}")
        console.print(f"Network: {config.network.network_id} ({config.network.node_url})")
        console.print(f"Contract: {config.contract_id or '[dim]not set[/dim]'}")

        selected = storage.get_item(SELECTED_WALLET_ID)
        table = Table(title="Wallet modules")
        table.add_column("ID", style="cyan")
        table.add_column("Name")
        table.add_column("Type")
        table.add_column("Selected")
        for module in get_builtin_modules(config.wallets):
            table.add_row(
                module.id,
                module.name,
                module.type.value,
                "[green]yes[/green]" if module.id == selected else "",
            )
        console.print(table)
        if selected is None:
            console.print("[dim]No wallet selected[/dim]")

    @app.command("reset")
    def reset(ctx: typer.Context) -> None:
        """Forget the persisted wallet selection."""
        storage, _ = _open_storage(ctx)
        selected = storage.get_item(SELECTED_WALLET_ID)
        if selected is None:
            console.print("[dim]No wallet selected[/dim]")
            return
        storage.remove_item(SELECTED_WALLET_ID)
        console.print(f"[green]✓[/green] Cleared selection ({selected})")
