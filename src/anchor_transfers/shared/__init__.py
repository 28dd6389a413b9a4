"""Shared utilities and exceptions"""

from .exceptions import (
    AuthRequiredError,
    ConfigurationError,
    InvalidFeeTypeError,
    PreconditionError,
    ServerDataError,
    TransferClientError,
    TransferError,
    TransportError,
    UnsupportedAssetError,
    ValidationError,
)

__all__ = [
    "AuthRequiredError",
    "ConfigurationError",
    "InvalidFeeTypeError",
    "PreconditionError",
    "ServerDataError",
    "TransferClientError",
    "TransferError",
    "TransportError",
    "UnsupportedAssetError",
    "ValidationError",
]
