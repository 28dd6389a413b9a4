"""FeeCalculator - transfer fees across the none/simple/complex fee models"""

import math

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from anchor_transfers.domain.models import (
    ComplexFee,
    Direction,
    Info,
    NoFee,
    SimpleFee,
)
from anchor_transfers.infrastructure.transfer_server import (
    TransferServerRequestClient,
)
from anchor_transfers.shared.exceptions import (
    InvalidFeeTypeError,
    ServerDataError,
    ValidationError,
)
from anchor_transfers.validation.transfer_server import FeeResponse

from .auth import require_asset


def _coerce_amount(amount: float | str) -> float:
    if isinstance(amount, bool):
        raise ValidationError(f"Invalid amount: {amount!r}")
    try:
        value = float(amount)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid amount: {amount!r}") from e
    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"Invalid amount: {amount!r}")
    return value


class FeeCalculator:
    """Computes the fee for a transfer of an asset in one direction"""

    def __init__(
        self,
        direction: Direction,
        request_client: TransferServerRequestClient,
    ) -> None:
        self._direction = direction
        self._request_client = request_client

    async def compute_fee(
        self,
        asset_code: str,
        amount: float | str,
        info: Info | None,
        *,
        type: str | None = None,
        auth_token: str | None = None,
    ) -> float:
        """Compute the fee for transferring `amount` of an asset

        None and simple fees are computed locally. Complex fees are asked
        of the server's /fee endpoint and returned as reported.

        Args:
            asset_code: Asset being transferred
            amount: Transfer amount, number or numeric string
            info: Current server info
            type: Optional deposit/withdraw type forwarded to /fee
            auth_token: Token to attach if /fee requires authentication

        Returns:
            Fee amount

        Raises:
            ValidationError: If asset_code or amount is invalid
            PreconditionError: If info has not been fetched yet
            UnsupportedAssetError: If the asset is not listed for the direction
            InvalidFeeTypeError: If the asset's fee type is unknown
            TransportError: If the /fee request fails
            ServerDataError: If the /fee response is malformed
        """
        asset_info = require_asset(
            "fetch_final_fee",
            asset_code,
            info,
            self._direction,
            self._request_client.base_url,
        )
        value = _coerce_amount(amount)
        fee = asset_info.fee

        if isinstance(fee, NoFee):
            return 0

        if isinstance(fee, SimpleFee):
            return ((fee.percent or 0) / 100) * value + (fee.fixed or 0)

        if isinstance(fee, ComplexFee):
            return await self._fetch_remote_fee(
                asset_code, amount, info, type, auth_token
            )

        raise InvalidFeeTypeError(fee.type)

    async def _fetch_remote_fee(
        self,
        asset_code: str,
        amount: float | str,
        info: Info,
        type: str | None,
        auth_token: str | None,
    ) -> float:
        params = {
            "asset_code": asset_code,
            "amount": amount,
            "operation": self._direction.value,
            "type": type,
        }
        token = auth_token if info.fee_endpoint.authentication_required else None

        logger.debug(f"Requesting complex fee for {asset_code} amount={amount}")
        payload = await self._request_client.get(
            "/fee", params=params, auth_token=token
        )

        try:
            return FeeResponse.model_validate(payload).fee
        except PydanticValidationError as e:
            raise ServerDataError(f"Malformed /fee response: {e}") from e
