"""Entry point for ``python -m wallet_selector``."""

from wallet_selector.cli.commands import app

if __name__ == "__main__":
    app()
