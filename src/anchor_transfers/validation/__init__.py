"""Wire-format validation models"""

from .transfer_server import (
    FeeResponse,
    RawAssetEntry,
    RawEndpointEntry,
    RawFeeObject,
    RawInfoResponse,
    TransactionRecord,
    TransactionsResponse,
)

__all__ = [
    "FeeResponse",
    "RawAssetEntry",
    "RawEndpointEntry",
    "RawFeeObject",
    "RawInfoResponse",
    "TransactionRecord",
    "TransactionsResponse",
]
