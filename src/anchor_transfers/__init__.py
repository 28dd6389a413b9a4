"""anchor-transfers - deposit/withdraw client for transfer servers"""

from anchor_transfers.core.config import TransferConfig
from anchor_transfers.domain.models import (
    AssetInfo,
    Direction,
    FeeArgs,
    Info,
    Transaction,
    TransactionArgs,
    TransactionsArgs,
    TransactionStatus,
)
from anchor_transfers.shared.exceptions import (
    AuthRequiredError,
    ConfigurationError,
    InvalidFeeTypeError,
    PreconditionError,
    ServerDataError,
    TransferError,
    TransportError,
    UnsupportedAssetError,
    ValidationError,
)
from anchor_transfers.transfers import (
    TransferProvider,
    WatchHandle,
    deposit_provider,
    withdraw_provider,
)

__all__ = [
    "AssetInfo",
    "AuthRequiredError",
    "ConfigurationError",
    "Direction",
    "FeeArgs",
    "Info",
    "InvalidFeeTypeError",
    "PreconditionError",
    "ServerDataError",
    "Transaction",
    "TransactionArgs",
    "TransactionsArgs",
    "TransactionStatus",
    "TransferConfig",
    "TransferError",
    "TransferProvider",
    "TransportError",
    "UnsupportedAssetError",
    "ValidationError",
    "WatchHandle",
    "deposit_provider",
    "withdraw_provider",
]
