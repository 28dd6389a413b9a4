"""Transfer providers and their components

InfoRegistry - /info normalization
AuthGate - per-asset auth preconditions
FeeCalculator - none/simple/complex fees
TransactionWatcher - polling watch with per-call handles
TransferProvider - orchestration for one direction
"""

from .auth import AuthGate
from .fees import FeeCalculator
from .info_registry import InfoRegistry, parse_info
from .provider import TransferProvider, deposit_provider, withdraw_provider
from .variants import DepositAssets, WithdrawAssets
from .watcher import TransactionWatcher, WatchHandle, WatchState

__all__ = [
    "AuthGate",
    "DepositAssets",
    "FeeCalculator",
    "InfoRegistry",
    "TransactionWatcher",
    "TransferProvider",
    "WatchHandle",
    "WatchState",
    "WithdrawAssets",
    "deposit_provider",
    "parse_info",
    "withdraw_provider",
]
