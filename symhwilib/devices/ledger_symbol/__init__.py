"""Ledger Nano Symbol app client"""

from .client import SymbolClient, MIN_SUPPORTED_VERSION
from .client_base import ApduTransport, TransportClient

__all__ = ["SymbolClient", "ApduTransport", "TransportClient", "MIN_SUPPORTED_VERSION"]
