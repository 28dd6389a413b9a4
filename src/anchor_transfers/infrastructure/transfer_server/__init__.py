"""Transfer server infrastructure module

TransferServerRequestClient - HTTP GET requests with bearer auth and error mapping
"""

from .requests import TransferServerRequestClient, install_logging_bridge

__all__ = [
    "TransferServerRequestClient",
    "install_logging_bridge",
]
