"""AuthGate - per-asset authentication precondition checks"""

from loguru import logger

from anchor_transfers.domain.models import AssetInfo, Direction, Info
from anchor_transfers.shared.exceptions import (
    AuthRequiredError,
    PreconditionError,
    UnsupportedAssetError,
    ValidationError,
)


def require_asset(
    operation_name: str,
    asset_code: str,
    info: Info | None,
    direction: Direction,
    transfer_server: str,
) -> AssetInfo:
    """Return the asset's info or raise the matching precondition error

    Raises:
        ValidationError: If asset_code is empty
        PreconditionError: If info has not been fetched yet
        UnsupportedAssetError: If the asset is not listed for the direction
    """
    if not asset_code:
        raise ValidationError("Required parameter `asset_code` not provided!")

    if info is None:
        raise PreconditionError(
            f"Run fetch_supported_assets before running {operation_name}!"
        )

    asset_info = info.lookup(direction, asset_code)
    if asset_info is None:
        raise UnsupportedAssetError(
            f"Asset {asset_code} is not supported by {transfer_server} "
            f"for {direction.value}"
        )

    return asset_info


class AuthGate:
    """Decides whether a request for an asset must carry a bearer token

    The check runs before the request it gates and raises instead of
    returning when the request cannot be made.
    """

    def __init__(self, direction: Direction, transfer_server: str) -> None:
        self._direction = direction
        self._transfer_server = transfer_server

    def check(
        self,
        operation_name: str,
        asset_code: str,
        info: Info | None,
        auth_token: str | None,
    ) -> bool:
        """Return whether auth is required for the asset

        Args:
            operation_name: Public operation being gated, used in error messages
            asset_code: Asset the request is about
            info: Current server info, or None if not fetched yet
            auth_token: Current bearer token, if any

        Returns:
            True if the request must carry the bearer token, False otherwise

        Raises:
            ValidationError: If asset_code is empty
            PreconditionError: If info has not been fetched yet
            UnsupportedAssetError: If the asset is not listed for the direction
            AuthRequiredError: If auth is required and no token is set
        """
        asset_info = require_asset(
            operation_name,
            asset_code,
            info,
            self._direction,
            self._transfer_server,
        )

        is_auth_required = asset_info.authentication_required

        if is_auth_required and not auth_token:
            raise AuthRequiredError(
                f"Asset {asset_code} requires authentication. Fetch an auth "
                f"token, then call set_auth_token before {operation_name}."
            )

        logger.debug(
            f"{operation_name}: {asset_code} auth "
            f"{'required' if is_auth_required else 'not required'}"
        )
        return is_auth_required
