"""Domain models for anchor-transfers"""

from .info import (
    AssetInfo,
    ComplexFee,
    Direction,
    EndpointInfo,
    Fee,
    FeeType,
    Info,
    NoFee,
    SimpleFee,
    UnrecognizedFee,
)
from .transaction import (
    FeeArgs,
    Transaction,
    TransactionArgs,
    TransactionsArgs,
    TransactionStatus,
)

__all__ = [
    "AssetInfo",
    "ComplexFee",
    "Direction",
    "EndpointInfo",
    "Fee",
    "FeeArgs",
    "FeeType",
    "Info",
    "NoFee",
    "SimpleFee",
    "Transaction",
    "TransactionArgs",
    "TransactionsArgs",
    "TransactionStatus",
    "UnrecognizedFee",
]
