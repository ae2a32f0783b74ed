"""
Devices
*******

This module contains the device implementations.
Each device implementation is a subclass of :class:`~symhwilib.hwwclient.HardwareWalletClient`.
"""

from .ledger import LedgerClient

__all__ = [
    'ledger',
]
