"""TransferServerRequestClient - HTTP requests against a transfer server"""

import logging
from typing import Any

import httpx
from loguru import logger

from anchor_transfers.core.config import TransferConfig
from anchor_transfers.shared.exceptions import ServerDataError, TransportError


class _LoguruHandler(logging.Handler):
    """Bridge stdlib logging into loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(
            level, record.getMessage()
        )


_bridged_loggers: set[str] = set()


def install_logging_bridge(names: tuple[str, ...] = ("httpx",)) -> None:
    """Route the named stdlib loggers into loguru.

    Opt-in for applications that log through loguru. Each logger is bridged
    at most once and stops propagating to the root logger.
    """
    for name in names:
        if name in _bridged_loggers:
            continue
        std_logger = logging.getLogger(name)
        std_logger.addHandler(_LoguruHandler())
        std_logger.propagate = False
        _bridged_loggers.add(name)


def _encode_params(params: dict[str, Any] | None) -> dict[str, Any]:
    """Drop unset values and send booleans the way query strings expect."""
    encoded: dict[str, Any] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        encoded[key] = value
    return encoded


class TransferServerRequestClient:
    """Low-level HTTP client for one transfer server

    Responsibilities:
    - HTTP request execution
    - Bearer header attachment
    - Mapping transport and decoding failures onto library errors

    Retries are left to the caller.
    """

    def __init__(
        self,
        transfer_server: str,
        config: TransferConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize request client

        Args:
            transfer_server: Base URL of the transfer server
            config: Timeouts and User-Agent; defaults to TransferConfig()
            transport: Optional httpx transport (used by tests)
        """
        self._base_url = transfer_server.rstrip("/")
        self._config = config or TransferConfig()
        self._transport = transport
        self._http_client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    def _build_http_client(self) -> httpx.AsyncClient:
        """Create an AsyncClient with httpx request/response logging hooks."""
        return httpx.AsyncClient(
            timeout=self._config.request_timeout_seconds,
            transport=self._transport,
            headers={"User-Agent": self._config.user_agent},
            event_hooks={
                "request": [self._log_httpx_request],
                "response": [self._log_httpx_response],
            },
        )

    async def _log_httpx_request(self, request: httpx.Request) -> None:
        """Log outbound httpx requests with headers (auth masked)."""
        headers = {
            k: ("***" if k.lower() == "authorization" else v)
            for k, v in request.headers.items()
        }
        logger.debug(f"HTTPX request: {request.method} {request.url} {headers}")

    async def _log_httpx_response(self, response: httpx.Response) -> None:
        logger.debug(
            f"HTTPX response: status={response.status_code} url={response.url}"
        )

    def set_http_client(self, client: httpx.AsyncClient) -> None:
        """Set the HTTP client (for testing or external management)"""
        self._http_client = client

    async def get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        auth_token: str | None = None,
    ) -> Any:
        """Make a GET request and return the decoded JSON body

        Args:
            endpoint: Path on the transfer server (e.g. "/info")
            params: Query parameters; None values are omitted
            auth_token: Bearer token to attach, or None for no Authorization header

        Returns:
            Decoded JSON body

        Raises:
            TransportError: On network failure or non-2xx status
            ServerDataError: If the body is not valid JSON
        """
        if self._http_client is None:
            self._http_client = self._build_http_client()

        url = f"{self._base_url}{endpoint}"
        headers = {"Authorization": f"Bearer {auth_token}"} if auth_token else {}

        try:
            response = await self._http_client.get(
                url, params=_encode_params(params), headers=headers
            )
        except httpx.RequestError as e:
            logger.warning(f"Network error calling {url}: {e}")
            raise TransportError(f"Request to {url} failed: {e}") from e

        if not response.is_success:
            logger.error(
                f"Transfer server error {response.status_code} from {url}"
            )
            raise TransportError(
                self._format_error(response), status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise ServerDataError(
                f"Transfer server returned invalid JSON from {url}"
            ) from e

    def _format_error(self, response: httpx.Response) -> str:
        """Return a safe string describing an HTTP error without assuming keys."""
        try:
            body = str(response.json())
        except ValueError:
            body = response.text
        return f"Request failed: {response.status_code} - {body}"

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
