"""Protocols for the seams between transfer components.

These protocols let the watcher and the provider variants depend on
capabilities rather than concrete classes.
"""

from typing import Protocol, runtime_checkable

from anchor_transfers.domain.models import (
    AssetInfo,
    Direction,
    Info,
    Transaction,
    TransactionArgs,
)


@runtime_checkable
class TransactionFetcher(Protocol):
    """Protocol for fetching a single transaction."""

    async def fetch_transaction(
        self, args: TransactionArgs, is_watching: bool = False
    ) -> Transaction:
        """Fetch one transaction's current state."""
        ...


@runtime_checkable
class SupportedAssetsSource(Protocol):
    """Protocol for the direction-specific part of a transfer provider."""

    direction: Direction

    def select(self, info: Info) -> dict[str, AssetInfo]:
        """Pick the assets this direction supports out of the server info."""
        ...
