"""TransferProvider - deposit/withdraw operations against a transfer server"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from anchor_transfers.core.config import TransferConfig
from anchor_transfers.domain.models import (
    AssetInfo,
    Direction,
    EndpointInfo,
    FeeArgs,
    Info,
    Transaction,
    TransactionArgs,
    TransactionsArgs,
)
from anchor_transfers.infrastructure.transfer_server import (
    TransferServerRequestClient,
)
from anchor_transfers.shared.exceptions import ServerDataError, ValidationError
from anchor_transfers.validation.transfer_server import (
    TransactionRecord,
    TransactionsResponse,
)

from .auth import AuthGate
from .fees import FeeCalculator
from .info_registry import InfoRegistry
from .variants import DepositAssets, WithdrawAssets, assets_source_for
from .watcher import (
    ErrorCallback,
    TransactionCallback,
    TransactionWatcher,
    WatchHandle,
)

if TYPE_CHECKING:
    from anchor_transfers.infrastructure.protocols import SupportedAssetsSource


def _to_transaction(record: TransactionRecord) -> Transaction:
    return Transaction(
        **record.model_dump(exclude=set(record.model_extra or {})),
        raw=record.model_dump(),
    )


class TransferProvider:
    """Client for one account's transfers in one direction

    Wires AuthGate into every authenticated call, computes fees with
    FeeCalculator and watches transactions with TransactionWatcher. The
    direction-specific part comes from a SupportedAssetsSource variant.

    Satisfies the TransactionFetcher protocol.
    """

    def __init__(
        self,
        transfer_server: str,
        account: str,
        assets_source: SupportedAssetsSource | Direction | str,
        *,
        config: TransferConfig | None = None,
        request_client: TransferServerRequestClient | None = None,
        watcher: TransactionWatcher | None = None,
    ) -> None:
        """Initialize provider

        Args:
            transfer_server: Base URL of the transfer server
            account: Account the transfers belong to
            assets_source: Direction variant, or a direction name
            config: Timeouts and polling interval
            request_client: Preconfigured request client (for testing)
            watcher: Preconfigured watcher (for testing)

        Raises:
            ValidationError: If a required parameter is missing or invalid
        """
        if not transfer_server:
            raise ValidationError("Required parameter `transfer_server` missing!")

        if not account:
            raise ValidationError("Required parameter `account` missing!")

        if not assets_source:
            raise ValidationError("Required parameter `operation` missing!")

        if isinstance(assets_source, (Direction, str)):
            try:
                assets_source = assets_source_for(assets_source)
            except ValueError as e:
                raise ValidationError(
                    f"Invalid operation {assets_source!r}, expected "
                    "'deposit' or 'withdraw'"
                ) from e

        self._transfer_server = transfer_server.rstrip("/")
        self._account = account
        self._assets_source = assets_source
        self._config = config or TransferConfig()
        self._request_client = request_client or TransferServerRequestClient(
            self._transfer_server, self._config
        )
        self._auth_gate = AuthGate(self.direction, self._transfer_server)
        self._fee_calculator = FeeCalculator(self.direction, self._request_client)
        self._watcher = watcher or TransactionWatcher(
            self, poll_interval=self._config.watch_poll_interval_seconds
        )

        self.info: Info | None = None
        self.auth_token: str | None = None

    @property
    def transfer_server(self) -> str:
        return self._transfer_server

    @property
    def account(self) -> str:
        return self._account

    @property
    def direction(self) -> Direction:
        return self._assets_source.direction

    @property
    def operation(self) -> str:
        """Direction as the server spells it ("deposit" or "withdraw")"""
        return self.direction.value

    async def __aenter__(self) -> TransferProvider:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the underlying HTTP client"""
        await self._request_client.aclose()

    def set_auth_token(self, token: str) -> None:
        """Set the bearer token obtained from the server's auth flow

        Raises:
            ValidationError: If token is empty
        """
        if not token:
            raise ValidationError("Auth token cannot be empty")
        self.auth_token = token

    def clear_auth_token(self) -> None:
        self.auth_token = None

    async def fetch_info(self) -> Info:
        """Fetch and store the server's /info, replacing any previous info"""
        raw = await self._request_client.get("/info")
        info = InfoRegistry.parse(raw)
        self.info = info
        logger.info(
            f"Fetched info from {self._transfer_server}: "
            f"{len(info.deposit)} deposit, {len(info.withdraw)} withdraw assets"
        )
        return info

    async def fetch_supported_assets(self) -> dict[str, AssetInfo]:
        """Fetch info and return the assets supported in this direction"""
        info = await self.fetch_info()
        return self._assets_source.select(info)

    def check_auth(self, operation_name: str, asset_code: str) -> bool:
        """Return whether requests for the asset must carry the bearer token

        Raises:
            ValidationError: If asset_code is empty
            PreconditionError: If info has not been fetched yet
            UnsupportedAssetError: If the asset is not listed for the direction
            AuthRequiredError: If auth is required and no token is set
        """
        return self._auth_gate.check(
            operation_name, asset_code, self.info, self.auth_token
        )

    def _token_if(
        self, is_auth_required: bool, endpoint: EndpointInfo
    ) -> str | None:
        # Endpoint-level gating attaches a set token but never demands one
        if is_auth_required or endpoint.authentication_required:
            return self.auth_token
        return None

    async def fetch_transactions(self, args: TransactionsArgs) -> list[Transaction]:
        """Fetch the account's transactions for an asset

        Only transactions of this provider's direction are returned unless
        `args.show_all_transactions` is set.
        """
        is_auth_required = self.check_auth("fetch_transactions", args.asset_code)

        params = args.to_params()
        params.setdefault("account", self._account)

        payload = await self._request_client.get(
            "/transactions",
            params=params,
            auth_token=self._token_if(
                is_auth_required, self.info.transactions_endpoint
            ),
        )

        try:
            response = TransactionsResponse.model_validate(payload)
        except PydanticValidationError as e:
            raise ServerDataError(f"Malformed /transactions response: {e}") from e

        transactions = [_to_transaction(record) for record in response.transactions]
        if args.show_all_transactions:
            return transactions

        kind = self.direction.transaction_kind
        return [t for t in transactions if t.kind == kind]

    async def fetch_transaction(
        self, args: TransactionArgs, is_watching: bool = False
    ) -> Transaction:
        """Fetch a single transaction by id"""
        is_auth_required = self.check_auth(
            "watch_transaction" if is_watching else "fetch_transaction",
            args.asset_code,
        )

        payload = await self._request_client.get(
            "/transaction",
            params=args.to_params(),
            auth_token=self._token_if(
                is_auth_required, self.info.transaction_endpoint
            ),
        )

        # Some servers wrap the record in {"transaction": {...}}
        if isinstance(payload, dict) and isinstance(payload.get("transaction"), dict):
            payload = payload["transaction"]

        try:
            return _to_transaction(TransactionRecord.model_validate(payload))
        except PydanticValidationError as e:
            raise ServerDataError(f"Malformed /transaction response: {e}") from e

    def watch_transaction(
        self,
        asset_code: str,
        transaction_id: str,
        on_message: TransactionCallback,
        on_success: TransactionCallback,
        on_error: ErrorCallback,
        poll_interval: float | None = None,
    ) -> WatchHandle:
        """Watch a transaction until it stops pending

        * on_message - the transaction came back pending
        * on_success - the transaction came back completed
        * on_error - a check failed, or the transaction ended as incomplete,
          no_market, too_small, too_large or error

        Returns a handle owned by the caller; cancel it to stop watching.
        """
        return self._watcher.watch(
            asset_code,
            transaction_id,
            on_message=on_message,
            on_success=on_success,
            on_error=on_error,
            poll_interval=poll_interval,
        )

    async def fetch_final_fee(self, args: FeeArgs) -> float:
        """Compute the fee for a transfer of `args.amount`"""
        return await self._fee_calculator.compute_fee(
            args.asset_code,
            args.amount,
            self.info,
            type=args.type,
            auth_token=self.auth_token,
        )


def deposit_provider(
    transfer_server: str, account: str, **kwargs: Any
) -> TransferProvider:
    """Create a provider for deposits"""
    return TransferProvider(transfer_server, account, DepositAssets(), **kwargs)


def withdraw_provider(
    transfer_server: str, account: str, **kwargs: Any
) -> TransferProvider:
    """Create a provider for withdrawals"""
    return TransferProvider(transfer_server, account, WithdrawAssets(), **kwargs)
