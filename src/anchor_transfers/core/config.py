"""Configuration management for anchor-transfers"""

import os
from dataclasses import dataclass

from loguru import logger

from anchor_transfers.shared.exceptions import ConfigurationError


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


@dataclass
class TransferConfig:
    """Configuration for transfer server clients"""

    # Per-request HTTP timeout (seconds)
    request_timeout_seconds: float = 30.0

    # Delay between transaction status checks while watching (seconds)
    watch_poll_interval_seconds: float = 1.0

    user_agent: str = "anchor-transfers/1.0"

    def __post_init__(self) -> None:
        if self.request_timeout_seconds <= 0:
            raise ConfigurationError("request_timeout_seconds must be positive")
        if self.watch_poll_interval_seconds < 0:
            raise ConfigurationError(
                "watch_poll_interval_seconds cannot be negative"
            )

    @classmethod
    def from_env(cls) -> "TransferConfig":
        """Load configuration from environment variables

        Environment:
            TRANSFER_REQUEST_TIMEOUT: HTTP timeout in seconds
            TRANSFER_WATCH_POLL_INTERVAL: Watch polling interval in seconds
            TRANSFER_USER_AGENT: User-Agent header sent to transfer servers

        Returns:
            TransferConfig instance with values from environment

        Raises:
            ConfigurationError: If a variable is present but invalid
        """
        config = cls(
            request_timeout_seconds=_read_float(
                "TRANSFER_REQUEST_TIMEOUT", cls.request_timeout_seconds
            ),
            watch_poll_interval_seconds=_read_float(
                "TRANSFER_WATCH_POLL_INTERVAL", cls.watch_poll_interval_seconds
            ),
            user_agent=os.getenv("TRANSFER_USER_AGENT") or cls.user_agent,
        )

        logger.info("Transfer configuration loaded:")
        logger.info(f"  Request Timeout: {config.request_timeout_seconds}s")
        logger.info(
            f"  Watch Poll Interval: {config.watch_poll_interval_seconds}s"
        )
        logger.info(f"  User Agent: {config.user_agent}")

        return config
