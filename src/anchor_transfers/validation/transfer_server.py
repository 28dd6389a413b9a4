"""Pydantic models for transfer server responses

These models describe the wire shape of the /info, /transactions,
/transaction and /fee endpoints. They are converted into domain models
before reaching callers.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawFeeObject(BaseModel):
    """Explicit fee object some servers attach to an asset entry"""

    model_config = ConfigDict(extra="allow")

    type: str = Field(..., min_length=1, description="Fee model tag")
    percent: float | None = Field(None, description="Percentage part")
    fixed: float | None = Field(None, description="Fixed part")

    @field_validator("type")
    @classmethod
    def normalize_type(cls, v: str) -> str:
        return v.strip().lower()


class RawAssetEntry(BaseModel):
    """Per-asset entry under "deposit" or "withdraw" in /info"""

    model_config = ConfigDict(extra="allow")

    enabled: bool = False
    authentication_required: bool = False
    fee_fixed: float | None = None
    fee_percent: float | None = None
    fee: RawFeeObject | None = None
    min_amount: float | None = None
    max_amount: float | None = None
    fields: dict[str, Any] = Field(default_factory=dict)
    types: dict[str, Any] = Field(default_factory=dict)


class RawEndpointEntry(BaseModel):
    """Advertisement of an optional endpoint such as /fee"""

    model_config = ConfigDict(extra="allow")

    enabled: bool = False
    authentication_required: bool = False


class RawInfoResponse(BaseModel):
    """/info response"""

    model_config = ConfigDict(extra="allow")

    deposit: dict[str, RawAssetEntry] = Field(default_factory=dict)
    withdraw: dict[str, RawAssetEntry] = Field(default_factory=dict)
    fee: RawEndpointEntry | None = None
    transactions: RawEndpointEntry | None = None
    transaction: RawEndpointEntry | None = None


class TransactionRecord(BaseModel):
    """Single transaction as returned by /transaction and /transactions"""

    model_config = ConfigDict(extra="allow")

    id: str
    kind: str
    status: str = Field(..., min_length=1)
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

    @field_validator(
        "id",
        "amount_in",
        "amount_out",
        "amount_fee",
        "external_transaction_id",
        mode="before",
    )
    @classmethod
    def stringify_numbers(cls, v):
        """Servers are inconsistent about sending ids and amounts as numbers"""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class TransactionsResponse(BaseModel):
    """/transactions response"""

    transactions: list[TransactionRecord]


class FeeResponse(BaseModel):
    """/fee response"""

    fee: float
