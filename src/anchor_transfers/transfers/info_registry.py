"""InfoRegistry - normalizes a raw /info response into domain Info"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from anchor_transfers.domain.models import (
    AssetInfo,
    ComplexFee,
    EndpointInfo,
    Fee,
    FeeType,
    Info,
    NoFee,
    SimpleFee,
    UnrecognizedFee,
)
from anchor_transfers.shared.exceptions import ServerDataError
from anchor_transfers.validation.transfer_server import (
    RawAssetEntry,
    RawEndpointEntry,
    RawInfoResponse,
)


class InfoRegistry:
    """Converts the /info wire shape into the Info callers work with"""

    @classmethod
    def parse(cls, raw: Any) -> Info:
        """Parse a decoded /info response

        Args:
            raw: Decoded JSON body of GET /info

        Returns:
            Normalized Info

        Raises:
            ServerDataError: If the body does not have the expected shape
        """
        if not isinstance(raw, dict):
            raise ServerDataError(
                f"Expected /info to return an object, got {type(raw).__name__}"
            )
        try:
            response = RawInfoResponse.model_validate(raw)
        except PydanticValidationError as e:
            raise ServerDataError(f"Malformed /info response: {e}") from e

        fee_endpoint = cls._parse_endpoint(response.fee)

        return Info(
            deposit={
                code: cls._parse_asset(code, entry, fee_endpoint)
                for code, entry in response.deposit.items()
            },
            withdraw={
                code: cls._parse_asset(code, entry, fee_endpoint)
                for code, entry in response.withdraw.items()
            },
            fee_endpoint=fee_endpoint,
            transactions_endpoint=cls._parse_endpoint(response.transactions),
            transaction_endpoint=cls._parse_endpoint(response.transaction),
        )

    @staticmethod
    def _parse_endpoint(entry: RawEndpointEntry | None) -> EndpointInfo:
        if entry is None:
            return EndpointInfo()
        return EndpointInfo(
            enabled=entry.enabled,
            authentication_required=entry.authentication_required,
        )

    @classmethod
    def _parse_asset(
        cls, asset_code: str, entry: RawAssetEntry, fee_endpoint: EndpointInfo
    ) -> AssetInfo:
        return AssetInfo(
            asset_code=asset_code,
            enabled=entry.enabled,
            authentication_required=entry.authentication_required,
            fee=cls._parse_fee(entry, fee_endpoint),
            min_amount=entry.min_amount,
            max_amount=entry.max_amount,
            fields=dict(entry.fields),
            types=dict(entry.types),
            extra=dict(entry.model_extra or {}),
        )

    @staticmethod
    def _parse_fee(entry: RawAssetEntry, fee_endpoint: EndpointInfo) -> Fee:
        """Work out the fee model for an asset entry

        An explicit fee object wins. Otherwise fee_fixed/fee_percent make a
        simple fee, and an enabled /fee endpoint makes a complex one.
        """
        if entry.fee is not None:
            tag = entry.fee.type
            if tag == FeeType.NONE.value:
                return NoFee()
            if tag == FeeType.SIMPLE.value:
                return SimpleFee(percent=entry.fee.percent, fixed=entry.fee.fixed)
            if tag == FeeType.COMPLEX.value:
                return ComplexFee()
            return UnrecognizedFee(type=tag)

        if entry.fee_fixed is not None or entry.fee_percent is not None:
            return SimpleFee(percent=entry.fee_percent, fixed=entry.fee_fixed)

        if fee_endpoint.enabled:
            return ComplexFee()

        return NoFee()


def parse_info(raw: Any) -> Info:
    """Parse a decoded /info response into Info"""
    return InfoRegistry.parse(raw)
