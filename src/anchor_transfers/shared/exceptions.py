"""Consolidated exceptions for anchor-transfers.

All custom exceptions are defined here to provide a single source of truth
for error handling across the package.
"""


class TransferError(Exception):
    """Base exception for anchor-transfers errors"""

    pass


class ValidationError(TransferError, ValueError):
    """Raised when a required constructor or call argument is missing"""

    pass


class PreconditionError(TransferError):
    """Raised when an operation runs before the server info was fetched"""

    pass


class UnsupportedAssetError(TransferError):
    """Raised when an asset is not listed for the provider's direction"""

    pass


class AuthRequiredError(TransferError):
    """Raised when an asset requires authentication and no token is set"""

    pass


class InvalidFeeTypeError(TransferError):
    """Raised when an asset advertises an unknown fee type"""

    def __init__(self, fee_type: str) -> None:
        self.fee_type = fee_type
        super().__init__(
            f"Invalid fee type found! Got '{fee_type}' but expected one of "
            "'none', 'simple', 'complex'"
        )


class TransferClientError(TransferError):
    """Base exception for transfer server communication errors"""

    pass


class TransportError(TransferClientError):
    """Raised when a request fails at the network level or with a non-2xx status"""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ServerDataError(TransferClientError):
    """Raised when the server returns malformed JSON or an unexpected shape"""

    pass


class ConfigurationError(TransferError):
    """Raised when configuration is invalid or missing"""

    pass
