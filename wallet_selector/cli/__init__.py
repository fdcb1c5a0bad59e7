"""Command-line interface for wallet-selector."""
