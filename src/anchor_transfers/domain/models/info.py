"""Transfer server info domain model"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar


class Direction(Enum):
    """Direction of a transfer handled by a provider"""

    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"

    @property
    def transaction_kind(self) -> str:
        """Transaction `kind` reported by the server for this direction"""
        return "deposit" if self is Direction.DEPOSIT else "withdrawal"


class FeeType(Enum):
    """Fee models a transfer server can advertise"""

    NONE = "none"
    SIMPLE = "simple"
    COMPLEX = "complex"


@dataclass(frozen=True)
class NoFee:
    """The asset carries no fee"""

    type: ClassVar[str] = FeeType.NONE.value


@dataclass(frozen=True)
class SimpleFee:
    """Fee computed locally from a percentage and a fixed part"""

    type: ClassVar[str] = FeeType.SIMPLE.value
    percent: float | None = None
    fixed: float | None = None


@dataclass(frozen=True)
class ComplexFee:
    """Fee computed remotely by the server's /fee endpoint"""

    type: ClassVar[str] = FeeType.COMPLEX.value


@dataclass(frozen=True)
class UnrecognizedFee:
    """Fee advertised with a tag outside the known fee models"""

    type: str


Fee = NoFee | SimpleFee | ComplexFee | UnrecognizedFee


@dataclass(frozen=True)
class EndpointInfo:
    """Availability of an optional transfer server endpoint"""

    enabled: bool = False
    authentication_required: bool = False


@dataclass(frozen=True)
class AssetInfo:
    """Per-asset metadata for one direction

    Attributes:
        asset_code: Asset code as listed by the server
        enabled: Whether the server currently accepts transfers
        authentication_required: Whether requests need a bearer token
        fee: Fee model for the asset
        min_amount: Minimum transfer amount, if advertised
        max_amount: Maximum transfer amount, if advertised
        fields: Deposit input fields the server asks for
        types: Withdraw types and their input fields
        extra: Any other per-asset fields, passed through untouched
    """

    asset_code: str
    enabled: bool = False
    authentication_required: bool = False
    fee: Fee = field(default_factory=NoFee)
    min_amount: float | None = None
    max_amount: float | None = None
    fields: dict[str, Any] = field(default_factory=dict)
    types: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Info:
    """Normalized /info response, keyed by direction then asset code"""

    deposit: dict[str, AssetInfo] = field(default_factory=dict)
    withdraw: dict[str, AssetInfo] = field(default_factory=dict)
    fee_endpoint: EndpointInfo = field(default_factory=EndpointInfo)
    transactions_endpoint: EndpointInfo = field(default_factory=EndpointInfo)
    transaction_endpoint: EndpointInfo = field(default_factory=EndpointInfo)

    def assets(self, direction: Direction) -> dict[str, AssetInfo]:
        """Return the asset mapping for a direction"""
        if direction is Direction.DEPOSIT:
            return self.deposit
        return self.withdraw

    def lookup(self, direction: Direction, asset_code: str) -> AssetInfo | None:
        """Return the asset's info for a direction, or None if unsupported"""
        return self.assets(direction).get(asset_code)
