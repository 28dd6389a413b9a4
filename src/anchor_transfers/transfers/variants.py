"""Direction-specific asset selection for deposit and withdraw providers"""

from dataclasses import dataclass

from anchor_transfers.domain.models import AssetInfo, Direction, Info


@dataclass(frozen=True)
class DepositAssets:
    """Deposit side: assets the server accepts deposits for"""

    direction: Direction = Direction.DEPOSIT

    def select(self, info: Info) -> dict[str, AssetInfo]:
        return dict(info.deposit)


@dataclass(frozen=True)
class WithdrawAssets:
    """Withdraw side: assets the server pays out, with their withdraw types"""

    direction: Direction = Direction.WITHDRAW

    def select(self, info: Info) -> dict[str, AssetInfo]:
        return dict(info.withdraw)


def assets_source_for(direction: Direction | str) -> DepositAssets | WithdrawAssets:
    """Return the variant for a direction

    Raises:
        ValueError: If direction is not "deposit" or "withdraw"
    """
    if Direction(direction) is Direction.DEPOSIT:
        return DepositAssets()
    return WithdrawAssets()
