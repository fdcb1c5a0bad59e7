"""wallet-selector: one uniform contract over many NEAR wallet providers."""

__version__ = "0.1.0"
__logo__ = "👛"

from wallet_selector.controller import WalletController
from wallet_selector.selector import WalletSelector, setup_wallet_selector

__all__ = ["WalletController", "WalletSelector", "setup_wallet_selector", "__version__"]
