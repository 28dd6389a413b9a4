"""Transaction domain model and request arguments"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TransactionStatus(Enum):
    """Transaction statuses reported by transfer servers

    Any status starting with "pending" is non-terminal. "completed" is the
    only successful terminal status; everything else is a failure.
    """

    COMPLETED = "completed"
    PENDING_EXTERNAL = "pending_external"
    PENDING_ANCHOR = "pending_anchor"
    PENDING_STELLAR = "pending_stellar"
    PENDING_TRUST = "pending_trust"
    PENDING_USER = "pending_user"
    PENDING_USER_TRANSFER_START = "pending_user_transfer_start"
    INCOMPLETE = "incomplete"
    NO_MARKET = "no_market"
    TOO_SMALL = "too_small"
    TOO_LARGE = "too_large"
    ERROR = "error"


@dataclass(frozen=True)
class Transaction:
    """A deposit or withdrawal tracked by the transfer server"""

    id: str
    kind: str
    status: str
    status_eta: int | None = None
    amount_in: str | None = None
    amount_out: str | None = None
    amount_fee: str | None = None
    started_at: str | None = None
    completed_at: str | None = None
    stellar_transaction_id: str | None = None
    external_transaction_id: str | None = None
    message: str | None = None
    more_info_url: str | None = None
    refunded: bool | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def is_pending(self) -> bool:
        return self.status.startswith("pending")

    @property
    def is_completed(self) -> bool:
        return self.status == TransactionStatus.COMPLETED.value

    @property
    def is_terminal(self) -> bool:
        return not self.is_pending


def _drop_unset(params: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in params.items() if v is not None}


@dataclass
class TransactionsArgs:
    """Arguments for listing transactions"""

    asset_code: str
    account: str | None = None
    no_older_than: str | None = None
    limit: int | None = None
    kind: str | None = None
    paging_id: str | None = None
    show_all_transactions: bool = False

    def to_params(self) -> dict[str, Any]:
        return _drop_unset(
            {
                "asset_code": self.asset_code,
                "account": self.account,
                "no_older_than": self.no_older_than,
                "limit": self.limit,
                "kind": self.kind,
                "paging_id": self.paging_id,
                "show_all_transactions": self.show_all_transactions or None,
            }
        )


@dataclass
class TransactionArgs:
    """Arguments identifying a single transaction"""

    asset_code: str
    id: str

    def to_params(self) -> dict[str, Any]:
        return {"id": self.id}


@dataclass
class FeeArgs:
    """Arguments for computing a transfer fee"""

    asset_code: str
    amount: float | str
    type: str | None = None
