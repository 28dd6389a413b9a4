"""Core configuration"""

from .config import TransferConfig

__all__ = ["TransferConfig"]
